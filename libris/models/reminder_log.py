from libris.extensions import db
from libris.models._helpers import utcnow


class ReminderLog(db.Model):
    __tablename__ = "reminder_log"

    id = db.Column(db.Integer, primary_key=True)
    rental_id = db.Column(db.String(36), nullable=False, index=True)

    email = db.Column(db.String(254), nullable=True)
    success = db.Column(db.Boolean, nullable=False, default=False)
    error_message = db.Column(db.String(500), nullable=True)

    sent_at = db.Column(db.DateTime, nullable=False, default=utcnow)
