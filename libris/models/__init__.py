from libris.models.author import Author
from libris.models.book import Book
from libris.models.publisher import Publisher
from libris.models.reminder_log import ReminderLog
from libris.models.rental_log import RentalLog
from libris.models.user import User

__all__ = ["Author", "Book", "Publisher", "ReminderLog", "RentalLog", "User"]
