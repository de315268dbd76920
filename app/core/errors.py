"""Domain error taxonomy mapped onto HTTP status codes."""


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message: str = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Request data is missing or malformed."""

    status_code = 400
    default_message = "Invalid request"


class MissingRiderIdError(ValidationError):
    default_message = "riderId required"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Not found"


class AuthorizationError(ServiceError):
    status_code = 403
    default_message = "Forbidden"


class StateError(ServiceError):
    """Operation is not allowed in the resource's current state."""

    status_code = 400
    default_message = "Operation not allowed in current state"


class InvalidStatusError(StateError):
    default_message = "Invalid status"


class InvalidTransitionError(StateError):
    default_message = "Status transition not allowed"


class AlreadyRatedError(StateError):
    default_message = "Order already rated"


class ConflictError(ServiceError):
    status_code = 409
    default_message = "Already exists"


class InfrastructureError(ServiceError):
    """Storage backend failure; details are logged, never returned."""

    status_code = 500
    default_message = "Internal server error"
