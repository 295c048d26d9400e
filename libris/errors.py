"""Error taxonomy shared by the services and the HTTP layer.

Services raise these; ``libris.utils.responses`` turns them into a status
code plus a JSON body or an HTML page, depending on what the caller asked for.
"""


class ServiceError(ValueError):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid request"


class Unauthenticated(ServiceError):
    status_code = 401
    default_message = "Login required"


class Forbidden(ServiceError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(ServiceError):
    status_code = 404
    default_message = "Not found"


class Conflict(ServiceError):
    status_code = 409
    default_message = "Conflict"


class Internal(ServiceError):
    status_code = 500
    default_message = "Internal server error"
