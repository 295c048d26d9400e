from sqlalchemy import DDL, event

from libris.extensions import db
from libris.models._helpers import new_id
from libris.models.book import IsbnType


class RentalLog(db.Model):
    __tablename__ = "rental_log"

    id = db.Column(db.String(36), primary_key=True, default=new_id)

    # not unique: a book is rented many times over its life
    book_isbn = db.Column(IsbnType, nullable=False, index=True)
    user_id = db.Column(db.String(36), nullable=False, index=True)

    checkout_date = db.Column(db.DateTime, nullable=False)
    due_date = db.Column(db.DateTime, nullable=False)
    returned_date = db.Column(db.DateTime, nullable=True)

    __table_args__ = (
        # at most one open rental per book
        db.Index(
            "uq_rental_log_active_book",
            "book_isbn",
            unique=True,
            sqlite_where=db.text("returned_date IS NULL"),
            postgresql_where=db.text("returned_date IS NULL"),
            mssql_where=db.text("returned_date IS NULL"),
        ).ddl_if(dialect=("sqlite", "postgresql", "mssql")),
    )

    @property
    def is_active(self) -> bool:
        return self.returned_date is None


# MySQL has no partial indexes: one open rental per book is enforced by a
# unique index over a generated column that is NULL once returned
MYSQL_ACTIVE_BOOK_GUARD = DDL(
    "ALTER TABLE rental_log "
    "ADD COLUMN active_book_isbn BIGINT UNSIGNED "
    "GENERATED ALWAYS AS (IF(returned_date IS NULL, book_isbn, NULL)) VIRTUAL, "
    "ADD UNIQUE INDEX uq_rental_log_active_book (active_book_isbn)"
).execute_if(dialect="mysql")

event.listen(RentalLog.__table__, "after_create", MYSQL_ACTIVE_BOOK_GUARD)
