from __future__ import annotations

from flask import current_app

from libris.errors import Conflict, Forbidden, NotFound, ValidationError
from libris.models.author import Author
from libris.models.book import MAX_STORED_ISBN, Book
from libris.models.publisher import Publisher
from libris.utils.auth import AuthContext
from libris.utils.parsing import parse_int, parse_isbn, parse_key, require_text

UNKNOWN = "Unknown"


def _require_admin(ctx: AuthContext):
    if not ctx.is_authenticated:
        raise Forbidden("Not logged in")
    if not ctx.is_admin:
        raise Forbidden("Administrator privileges required")


class DirectoryService:
    """Admin CRUD for authors, publishers and books. Deletes are soft."""

    def __init__(self, gateway):
        self.gw = gateway

    # -----------------------------
    # Authors / publishers (same shape: id + name)
    # -----------------------------
    def _list_named(self, ctx, repo) -> list[dict]:
        _require_admin(ctx)
        return [{"id": x.id, "name": x.name} for x in repo.list_active()]

    def _create_named(self, ctx, repo, model, fields: dict, label: str) -> dict:
        _require_admin(ctx)
        name = require_text(fields.get("name"), f"{label} name")
        row = repo.create(model(name=name))
        current_app.logger.info(f"[directory] Created {label} {row.id}")
        return {"id": row.id, "name": row.name}

    def _update_named(self, ctx, repo, row_id, fields: dict, label: str) -> dict:
        _require_admin(ctx)
        row = repo.get_active(parse_key(row_id, f"{label} id"))
        if row is None:
            raise NotFound(f"{label.capitalize()} not found")
        row.name = require_text(fields.get("name"), f"{label} name")
        self.gw.commit()
        return {"id": row.id, "name": row.name}

    def _delete_named(self, ctx, repo, row_id, label: str) -> dict:
        _require_admin(ctx)
        row = repo.get_active(parse_key(row_id, f"{label} id"))
        if row is None:
            raise NotFound(f"{label.capitalize()} not found")
        row.is_deleted = True
        self.gw.commit()
        current_app.logger.info(f"[directory] Soft-deleted {label} {row.id}")
        return {"message": "Deleted"}

    def list_authors(self, ctx: AuthContext) -> list[dict]:
        return self._list_named(ctx, self.gw.authors)

    def create_author(self, ctx: AuthContext, fields: dict) -> dict:
        return self._create_named(ctx, self.gw.authors, Author, fields, "author")

    def update_author(self, ctx: AuthContext, author_id, fields: dict) -> dict:
        return self._update_named(ctx, self.gw.authors, author_id, fields, "author")

    def delete_author(self, ctx: AuthContext, author_id) -> dict:
        return self._delete_named(ctx, self.gw.authors, author_id, "author")

    def list_publishers(self, ctx: AuthContext) -> list[dict]:
        return self._list_named(ctx, self.gw.publishers)

    def create_publisher(self, ctx: AuthContext, fields: dict) -> dict:
        return self._create_named(ctx, self.gw.publishers, Publisher, fields, "publisher")

    def update_publisher(self, ctx: AuthContext, publisher_id, fields: dict) -> dict:
        return self._update_named(ctx, self.gw.publishers, publisher_id, fields, "publisher")

    def delete_publisher(self, ctx: AuthContext, publisher_id) -> dict:
        return self._delete_named(ctx, self.gw.publishers, publisher_id, "publisher")

    # -----------------------------
    # Books
    # -----------------------------
    def _author_id(self, raw) -> str:
        author_id = parse_key(raw, "author_id")
        if self.gw.authors.get_active(author_id) is None:
            raise ValidationError("Unknown author")
        return author_id

    def _publisher_id(self, raw) -> str:
        publisher_id = parse_key(raw, "publisher_id")
        if self.gw.publishers.get_active(publisher_id) is None:
            raise ValidationError("Unknown publisher")
        return publisher_id

    @staticmethod
    def _parse_isbn(raw) -> int:
        isbn = parse_isbn(raw)
        if isbn > MAX_STORED_ISBN:
            raise ValidationError("ISBN is out of range")
        return isbn

    def list_books(self, ctx: AuthContext) -> list[dict]:
        _require_admin(ctx)
        books = []
        for b in self.gw.books.list_active():
            author = self.gw.authors.get(b.author_id)
            publisher = self.gw.publishers.get(b.publisher_id)
            books.append({
                "isbn": str(b.isbn),
                "title": b.title,
                "authorName": author.name if author else UNKNOWN,
                "publisherName": publisher.name if publisher else UNKNOWN,
                "publication_year_month": b.publication_year_month,
                "author_id": b.author_id,
                "publisher_id": b.publisher_id,
                "year": b.publication_year,
                "month": b.publication_month,
            })
        return books

    def create_book(self, ctx: AuthContext, fields: dict) -> dict:
        _require_admin(ctx)
        if fields.get("isbn") in (None, ""):
            raise ValidationError("isbn is required")
        isbn = self._parse_isbn(fields.get("isbn"))
        title = require_text(fields.get("title"), "title")
        author_id = self._author_id(fields.get("author_id"))
        publisher_id = self._publisher_id(fields.get("publisher_id"))
        year = parse_int(fields.get("publication_year"), "publication_year", minimum=0)
        month = parse_int(fields.get("publication_month"), "publication_month", minimum=1, maximum=12)

        existing = self.gw.books.get(isbn)
        if existing is not None and not existing.is_deleted:
            raise Conflict("ISBN is already registered")

        if existing is not None:
            # isbn is the primary key: bring the soft-deleted row back
            existing.title = title
            existing.author_id = author_id
            existing.publisher_id = publisher_id
            existing.publication_year = year
            existing.publication_month = month
            existing.is_deleted = False
            self.gw.commit()
            current_app.logger.info(f"[directory] Revived book {isbn}")
        else:
            self.gw.books.create(Book(
                isbn=isbn,
                title=title,
                author_id=author_id,
                publisher_id=publisher_id,
                publication_year=year,
                publication_month=month,
            ))
            current_app.logger.info(f"[directory] Created book {isbn}")
        return {"message": "Registered", "isbn": str(isbn)}

    def update_book(self, ctx: AuthContext, raw_isbn, fields: dict) -> dict:
        _require_admin(ctx)
        isbn = parse_isbn(raw_isbn)
        book = self.gw.books.get_active(isbn)
        if book is None:
            raise NotFound("Book not found")

        if "title" in fields:
            book.title = require_text(fields["title"], "title")
        if "author_id" in fields:
            book.author_id = self._author_id(fields["author_id"])
        if "publisher_id" in fields:
            book.publisher_id = self._publisher_id(fields["publisher_id"])
        if "publication_year" in fields:
            book.publication_year = parse_int(fields["publication_year"], "publication_year", minimum=0)
        if "publication_month" in fields:
            book.publication_month = parse_int(
                fields["publication_month"], "publication_month", minimum=1, maximum=12)

        self.gw.commit()
        return {"message": "Updated", "isbn": str(book.isbn)}

    def delete_book(self, ctx: AuthContext, raw_isbn) -> dict:
        _require_admin(ctx)
        isbn = parse_isbn(raw_isbn)
        book = self.gw.books.get_active(isbn)
        if book is None:
            raise NotFound("Book not found")
        book.is_deleted = True
        self.gw.commit()
        current_app.logger.info(f"[directory] Soft-deleted book {isbn}")
        return {"message": "Deleted"}
