from __future__ import annotations

import math
from dataclasses import dataclass, field

from libris.errors import NotFound, ValidationError
from libris.utils.parsing import parse_isbn

UNKNOWN_AUTHOR = "Unknown author"
UNKNOWN = "Unknown"


@dataclass
class BookPage:
    current: int
    last_page: int
    books: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"current": self.current, "last_page": self.last_page, "books": self.books}


def last_page_for(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))


def clamp_page(page: int, last_page: int) -> int:
    return min(max(page, 1), last_page)


class CatalogService:
    def __init__(self, gateway, page_size: int = 5):
        self.gw = gateway
        self.page_size = page_size

    def _author_name(self, author_id, fallback: str) -> str:
        author = self.gw.authors.get(author_id)
        return author.name if author else fallback

    def _publisher_name(self, publisher_id, fallback: str) -> str:
        publisher = self.gw.publishers.get(publisher_id)
        return publisher.name if publisher else fallback

    def list_books(self, page: int) -> BookPage:
        total = self.gw.books.count_active()
        last_page = last_page_for(total, self.page_size)
        current = clamp_page(page, last_page)

        rows = self.gw.books.page((current - 1) * self.page_size, self.page_size)
        books = [
            {
                "isbn": str(b.isbn),
                "title": b.title,
                "author": {"name": self._author_name(b.author_id, UNKNOWN_AUTHOR)},
                "publication_year_month": b.publication_year_month,
            }
            for b in rows
        ]
        return BookPage(current=current, last_page=last_page, books=books)

    def get_book_detail(self, raw_isbn) -> dict:
        try:
            isbn = parse_isbn(raw_isbn)
        except ValidationError:
            raise NotFound("Malformed ISBN")

        book = self.gw.books.get_active(isbn)
        if book is None:
            raise NotFound("Book not found")

        return {
            "isbn": str(book.isbn),
            "title": book.title,
            "author": {"name": self._author_name(book.author_id, UNKNOWN)},
            "publisher": {"name": self._publisher_name(book.publisher_id, UNKNOWN)},
            "publication_year_month": book.publication_year_month,
            "is_rental": self.gw.rentals.find_active(isbn) is not None,
        }

    def search_authors(self, keyword) -> list[dict]:
        return [{"id": a.id, "name": a.name} for a in self.gw.authors.search(str(keyword or ""))]

    def search_publishers(self, keyword) -> list[dict]:
        return [{"id": p.id, "name": p.name} for p in self.gw.publishers.search(str(keyword or ""))]
