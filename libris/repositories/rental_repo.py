from datetime import datetime

from libris.models.rental_log import RentalLog


class RentalRepo:
    def __init__(self, session):
        self.session = session

    def get(self, rental_id: str):
        return self.session.get(RentalLog, rental_id)

    def find_active(self, isbn: int):
        return (
            self.session.query(RentalLog)
            .filter(RentalLog.book_isbn == isbn, RentalLog.returned_date.is_(None))
            .first()
        )

    def list_by_user(self, user_id: str):
        return (
            self.session.query(RentalLog)
            .filter_by(user_id=user_id)
            .order_by(RentalLog.checkout_date.desc())
            .all()
        )

    def list_active_by_user(self, user_id: str):
        return (
            self.session.query(RentalLog)
            .filter(RentalLog.user_id == user_id, RentalLog.returned_date.is_(None))
            .order_by(RentalLog.checkout_date.asc())
            .all()
        )

    def find_overdue(self, now: datetime):
        return (
            self.session.query(RentalLog)
            .filter(RentalLog.returned_date.is_(None), RentalLog.due_date < now)
            .order_by(RentalLog.due_date.asc())
            .all()
        )

    def create(self, rental: RentalLog):
        """Insert and commit; IntegrityError from the active-rental index propagates."""
        self.session.add(rental)
        self.session.commit()
        return rental

    def mark_returned(self, rental_id: str, when: datetime) -> bool:
        """Set returned_date only while the rental is still open. Returns False if nothing changed."""
        updated = (
            self.session.query(RentalLog)
            .filter(RentalLog.id == rental_id, RentalLog.returned_date.is_(None))
            .update({RentalLog.returned_date: when}, synchronize_session=False)
        )
        self.session.commit()
        return updated == 1
