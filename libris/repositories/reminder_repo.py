from libris.models.reminder_log import ReminderLog


class ReminderRepo:
    def __init__(self, session):
        self.session = session

    def already_sent(self, rental_id: str) -> bool:
        return (
            self.session.query(ReminderLog)
            .filter_by(rental_id=rental_id, success=True)
            .first()
            is not None
        )

    def log(self, entry: ReminderLog):
        # committed together with the rest of the job
        self.session.add(entry)
        return entry
