from libris.repositories.author_repo import AuthorRepo
from libris.repositories.book_repo import BookRepo
from libris.repositories.publisher_repo import PublisherRepo
from libris.repositories.reminder_repo import ReminderRepo
from libris.repositories.rental_repo import RentalRepo
from libris.repositories.user_repo import UserRepo


class Gateway:
    """All repositories bound to one SQLAlchemy session.

    Services receive a Gateway instead of reaching for ``db.session``, so a
    test can hand them any session (or any object with the same repos).
    """

    def __init__(self, session):
        self.session = session
        self.users = UserRepo(session)
        self.authors = AuthorRepo(session)
        self.publishers = PublisherRepo(session)
        self.books = BookRepo(session)
        self.rentals = RentalRepo(session)
        self.reminders = ReminderRepo(session)

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()


def current_gateway() -> Gateway:
    from libris.extensions import db

    return Gateway(db.session)
