from __future__ import annotations

from flask import current_app
from flask_mail import Message

from libris.extensions import mail
from libris.models._helpers import utcnow
from libris.models.reminder_log import ReminderLog
from libris.services.rental_service import UNKNOWN_BOOK, RentalService


class ReminderService:
    """Mails users whose rentals are past due. One successful mail per rental."""

    def __init__(self, gateway):
        self.gw = gateway

    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        try:
            mail.send(Message(subject=subject, recipients=[to_email], body=body))
            return True, None
        except (OSError, ValueError) as e:
            current_app.logger.warning(f"[reminder] Mail could not be sent to {to_email}: {e}")
            return False, str(e)

    def _labels(self, rental):
        user = self.gw.users.get_by_id(rental.user_id)
        book = self.gw.books.get(rental.book_isbn)
        to_email = user.email if user and not user.is_deleted else None
        name = user.name if user else "reader"
        title = book.title if book else UNKNOWN_BOOK
        return to_email, name, title

    def send_overdue_reminders(self, now=None) -> dict:
        now = now or utcnow()
        overdue = RentalService(self.gw).overdue(now)

        sent = skipped = failed = 0
        for rental in overdue:
            if self.gw.reminders.already_sent(rental.id):
                skipped += 1
                continue

            to_email, name, title = self._labels(rental)
            if not to_email:
                self.gw.reminders.log(ReminderLog(
                    rental_id=rental.id, email=None, success=False, error_message="missing_email"))
                failed += 1
                continue

            body = (
                f"Hello {name},\n\n"
                f"'{title}' was due back on {rental.due_date:%Y-%m-%d}.\n"
                "Please return it as soon as possible.\n"
            )
            ok, err = self.send_email(to_email, "Library: overdue book", body)
            self.gw.reminders.log(ReminderLog(
                rental_id=rental.id, email=to_email, success=ok, error_message=err))
            if ok:
                sent += 1
            else:
                failed += 1

        self.gw.commit()
        summary = {"overdue": len(overdue), "sent": sent, "skipped": skipped, "failed": failed}
        current_app.logger.info(
            f"[reminder] overdue={summary['overdue']} sent={sent} skipped={skipped} failed={failed}")
        return summary
