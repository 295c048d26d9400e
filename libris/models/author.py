from libris.extensions import db
from libris.models._helpers import new_id


class Author(db.Model):
    __tablename__ = "author"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(128), nullable=False, index=True)
    is_deleted = db.Column(db.Boolean, nullable=False, default=False)
