from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

from flask import current_app
from sqlalchemy.exc import IntegrityError

from libris.errors import Conflict, Forbidden, NotFound, Unauthenticated
from libris.models._helpers import utcnow
from libris.models.rental_log import RentalLog
from libris.utils.auth import AuthContext
from libris.utils.parsing import parse_isbn, parse_key

RENTAL_DAYS = 7
UNKNOWN_BOOK = "Unknown book"


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class RentalService:
    """Checkout/return workflow.

    A book's state (available or checked out) is never stored; it is derived
    from whether a rental_log row with a NULL returned_date exists.
    """

    def __init__(self, gateway, rental_days: int = RENTAL_DAYS,
                 clock: Callable[[], datetime] = utcnow):
        self.gw = gateway
        self.rental_days = rental_days
        self.clock = clock

    @staticmethod
    def _require_user(ctx: AuthContext) -> str:
        if not ctx.is_authenticated:
            raise Unauthenticated("Please log in")
        return ctx.user_id

    def checkout(self, ctx: AuthContext, raw_isbn) -> dict:
        user_id = self._require_user(ctx)
        isbn = parse_isbn(raw_isbn)

        if self.gw.books.get_active(isbn) is None:
            raise NotFound("Book not found")

        if self.gw.rentals.find_active(isbn) is not None:
            raise Conflict("Book is already checked out")

        now = self.clock()
        rental = RentalLog(
            book_isbn=isbn,
            user_id=user_id,
            checkout_date=now,
            due_date=now + timedelta(days=self.rental_days),
            returned_date=None,
        )
        try:
            self.gw.rentals.create(rental)
        except IntegrityError:
            # another checkout won the race for the active-rental index
            self.gw.rollback()
            current_app.logger.info(f"[rental] Concurrent checkout rejected for isbn={isbn}")
            raise Conflict("Book is already checked out")

        current_app.logger.info(f"[rental] isbn={isbn} checked out by user={user_id} rental={rental.id}")
        return {
            "id": rental.id,
            "checkout_date": _iso(rental.checkout_date),
            "due_date": _iso(rental.due_date),
        }

    def return_book(self, ctx: AuthContext, rental_id) -> dict:
        user_id = self._require_user(ctx)
        rental_id = parse_key(rental_id, "Rental id")

        rental = self.gw.rentals.get(rental_id)
        if rental is None:
            raise NotFound("Rental record not found")
        if rental.user_id != user_id:
            raise Forbidden("This rental belongs to another user")
        if rental.returned_date is not None:
            raise Conflict("Book has already been returned")

        if not self.gw.rentals.mark_returned(rental_id, self.clock()):
            raise Conflict("Book has already been returned")

        rental = self.gw.rentals.get(rental_id)
        current_app.logger.info(f"[rental] rental={rental_id} returned by user={user_id}")
        return {"id": rental.id, "returned_date": _iso(rental.returned_date)}

    def _book_ref(self, isbn) -> dict:
        book = self.gw.books.get(isbn)
        return {"isbn": str(isbn), "name": book.title if book else UNKNOWN_BOOK}

    def history(self, ctx: AuthContext) -> list[dict]:
        user_id = self._require_user(ctx)
        return [
            {
                "id": r.id,
                "book": self._book_ref(r.book_isbn),
                "checkout_date": _iso(r.checkout_date),
                "due_date": _iso(r.due_date),
                "returned_date": _iso(r.returned_date),
            }
            for r in self.gw.rentals.list_by_user(user_id)
        ]

    def pending_returns(self, ctx: AuthContext) -> list[dict]:
        user_id = self._require_user(ctx)
        return [
            {
                "id": r.id,
                "book": self._book_ref(r.book_isbn),
                "checkout_date": _iso(r.checkout_date),
                "due_date": _iso(r.due_date),
            }
            for r in self.gw.rentals.list_active_by_user(user_id)
        ]

    def overdue(self, now: datetime | None = None) -> list[RentalLog]:
        return self.gw.rentals.find_overdue(now or self.clock())
