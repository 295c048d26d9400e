from libris.models.book import MAX_STORED_ISBN, Book


class BookRepo:
    def __init__(self, session):
        self.session = session

    def _active(self):
        return self.session.query(Book).filter(Book.is_deleted.is_(False))

    @staticmethod
    def _newest_first(query):
        return query.order_by(
            Book.publication_year.desc(),
            Book.publication_month.desc(),
            Book.created_at.asc(),
        )

    def get(self, isbn: int):
        # larger values cannot exist in a signed BIGINT column
        if isbn > MAX_STORED_ISBN:
            return None
        return self.session.get(Book, isbn)

    def get_active(self, isbn: int):
        book = self.get(isbn)
        if book is None or book.is_deleted:
            return None
        return book

    def count_active(self) -> int:
        return self._active().count()

    def list_active(self):
        return self._newest_first(self._active()).all()

    def page(self, offset: int, limit: int):
        return self._newest_first(self._active()).offset(offset).limit(limit).all()

    def create(self, book: Book):
        self.session.add(book)
        self.session.commit()
        return book
