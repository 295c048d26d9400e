from __future__ import annotations

from dataclasses import dataclass

from flask import current_app, g, session
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import InvalidTokenError


@dataclass(frozen=True)
class AuthContext:
    """Who is calling. Passed explicitly into every service call."""

    user_id: str | None = None
    is_admin: bool = False
    name: str | None = None

    @classmethod
    def anonymous(cls) -> "AuthContext":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


def _request_user_id() -> str | None:
    # browser session first, then bearer token for API clients
    user_id = session.get("user_id")
    if user_id:
        return str(user_id)

    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, InvalidTokenError) as e:
        current_app.logger.info(f"[auth] Ignoring invalid bearer token: {e}")
        return None
    identity = get_jwt_identity()
    return str(identity) if identity else None


def current_context() -> AuthContext:
    """Resolve (once per request) the AuthContext of the caller."""
    if "auth_context" not in g:
        from libris.repositories.gateway import current_gateway
        from libris.services.auth_service import AuthService

        user_id = _request_user_id()
        g.auth_context = AuthService(current_gateway()).resolve_context(user_id)
    return g.auth_context
