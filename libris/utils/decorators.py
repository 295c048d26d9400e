from functools import wraps

from libris.errors import Forbidden, Unauthenticated
from libris.utils.auth import current_context


def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_context().is_authenticated:
            raise Unauthenticated("Please log in")
        return view(*args, **kwargs)
    return wrapped


def admin_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        ctx = current_context()
        # anonymous callers are Forbidden here too, not Unauthenticated
        if not ctx.is_authenticated:
            raise Forbidden("Not logged in")
        if not ctx.is_admin:
            raise Forbidden("Administrator privileges required")
        return view(*args, **kwargs)
    return wrapped
