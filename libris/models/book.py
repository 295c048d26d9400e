from sqlalchemy.dialects import mysql

from libris.extensions import db
from libris.models._helpers import utcnow

# unsigned on MySQL, plain (signed) BIGINT elsewhere
MAX_STORED_ISBN = 2**63 - 1
IsbnType = db.BigInteger().with_variant(mysql.BIGINT(unsigned=True), "mysql")


class Book(db.Model):
    __tablename__ = "book"

    isbn = db.Column(IsbnType, primary_key=True, autoincrement=False)
    title = db.Column(db.String(512), nullable=False, index=True)

    # plain ids, no FK: soft-deleted authors/publishers stay referenceable
    author_id = db.Column(db.String(36), nullable=False, index=True)
    publisher_id = db.Column(db.String(36), nullable=False, index=True)

    publication_year = db.Column(db.Integer, nullable=False)
    publication_month = db.Column(db.SmallInteger, nullable=False)

    is_deleted = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    @property
    def publication_year_month(self) -> str:
        return f"{self.publication_year}.{self.publication_month}"
