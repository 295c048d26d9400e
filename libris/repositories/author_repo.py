from libris.models.author import Author


class AuthorRepo:
    def __init__(self, session):
        self.session = session

    def get(self, author_id: str):
        return self.session.get(Author, author_id)

    def get_active(self, author_id: str):
        author = self.get(author_id) if author_id else None
        if author is None or author.is_deleted:
            return None
        return author

    def list_active(self):
        return (
            self.session.query(Author)
            .filter(Author.is_deleted.is_(False))
            .order_by(Author.name.asc())
            .all()
        )

    def search(self, keyword: str):
        return (
            self.session.query(Author)
            .filter(Author.is_deleted.is_(False), Author.name.contains(keyword, autoescape=True))
            .order_by(Author.name.asc())
            .all()
        )

    def create(self, author: Author):
        self.session.add(author)
        self.session.commit()
        return author
