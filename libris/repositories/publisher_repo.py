from libris.models.publisher import Publisher


class PublisherRepo:
    def __init__(self, session):
        self.session = session

    def get(self, publisher_id: str):
        return self.session.get(Publisher, publisher_id)

    def get_active(self, publisher_id: str):
        publisher = self.get(publisher_id) if publisher_id else None
        if publisher is None or publisher.is_deleted:
            return None
        return publisher

    def list_active(self):
        return (
            self.session.query(Publisher)
            .filter(Publisher.is_deleted.is_(False))
            .order_by(Publisher.name.asc())
            .all()
        )

    def search(self, keyword: str):
        return (
            self.session.query(Publisher)
            .filter(Publisher.is_deleted.is_(False), Publisher.name.contains(keyword, autoescape=True))
            .order_by(Publisher.name.asc())
            .all()
        )

    def create(self, publisher: Publisher):
        self.session.add(publisher)
        self.session.commit()
        return publisher
