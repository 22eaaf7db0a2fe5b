"""Error taxonomy shared by services and routes.

Every class maps to one HTTP status; ``field`` is set on conflicts so callers
can tell which unique value collided.
"""

GENERIC_FAILURE = "An unexpected error occurred. Please try again later."


class ServiceError(Exception):
    status_code = 500
    default_message = GENERIC_FAILURE

    def __init__(self, message=None, field=None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Validation error"


class UnauthorizedError(ServiceError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(ServiceError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Not found"


class ConflictError(ServiceError):
    status_code = 409
    default_message = "Duplicate constraint failed"


class TransientStoreError(ServiceError):
    status_code = 500
