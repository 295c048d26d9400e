from flask import current_app
from werkzeug.security import check_password_hash, generate_password_hash

from libris.errors import Conflict, Unauthenticated, ValidationError
from libris.models.user import User
from libris.utils.auth import AuthContext
from libris.utils.parsing import require_text


class AuthService:
    def __init__(self, gateway):
        self.gw = gateway

    def register(self, name, email, password, is_admin: bool = False) -> User:
        name = require_text(name, "name")
        email = require_text(email, "email")
        if not password:
            raise ValidationError("password is required")

        if self.gw.users.get_by_email(email):
            raise Conflict("Email address is already registered")

        user = User(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            is_admin=is_admin,
        )
        self.gw.users.create(user)
        current_app.logger.info(f"[auth] Registered user {user.id}")
        return user

    def authenticate(self, email, password) -> User:
        user = self.gw.users.get_by_email((email or "").strip())
        if not user or user.is_deleted or not check_password_hash(user.password_hash, password or ""):
            raise Unauthenticated("Invalid email or password")
        return user

    def rename(self, ctx: AuthContext, name) -> User:
        if not ctx.is_authenticated:
            raise Unauthenticated("Please log in")
        name = require_text(name, "name")

        user = self.gw.users.get_by_id(ctx.user_id)
        if user is None or user.is_deleted:
            raise Unauthenticated("Please log in")
        user.name = name
        self.gw.commit()
        return user

    def resolve_context(self, user_id) -> AuthContext:
        if not user_id:
            return AuthContext.anonymous()
        user = self.gw.users.get_by_id(str(user_id))
        if user is None or user.is_deleted:
            return AuthContext.anonymous()
        return AuthContext(user_id=user.id, is_admin=bool(user.is_admin), name=user.name)
