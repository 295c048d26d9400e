from libris.models.user import User


class UserRepo:
    def __init__(self, session):
        self.session = session

    def get_by_id(self, user_id: str):
        return self.session.get(User, user_id)

    def get_by_email(self, email: str):
        return self.session.query(User).filter_by(email=email).first()

    def create(self, user: User):
        self.session.add(user)
        self.session.commit()
        return user
