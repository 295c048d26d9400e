from flask import current_app

from libris.extensions import db
from libris.repositories.gateway import current_gateway
from libris.services.reminder_service import ReminderService


def run_overdue_check_job(app):
    """Mail reminders for overdue rentals. Safe to call from a scheduler thread."""
    with app.app_context():
        try:
            return ReminderService(current_gateway()).send_overdue_reminders()
        except Exception as e:
            # keep the scheduler alive; the next run retries
            db.session.rollback()
            current_app.logger.exception(f"[overdue_check] Job failed: {e}")
            return None
