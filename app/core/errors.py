"""Application error taxonomy. Each error carries the HTTP status it maps to."""


class AppError(Exception):
    """Base class for errors translated to an HTTP response by the app's exception handlers."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthenticationError(AppError):
    """Missing, malformed, invalid or expired token; wrong registration code or master password."""

    status_code = 401


class AuthorizationError(AppError):
    """Valid identity, but the role or resource ownership does not permit the operation."""

    status_code = 403


class ValidationError(AppError):
    """Malformed or missing request input."""

    status_code = 400


class NotFoundError(AppError):
    """Referenced entity does not exist."""

    status_code = 404

    @classmethod
    def for_entity(cls, entity: str, entity_id: object) -> "NotFoundError":
        return cls(f"{entity} with ID {entity_id} not found")


class ConflictError(AppError):
    """Uniqueness or state conflict (duplicate email, duplicate collaborator, owned projects)."""

    status_code = 409


class StoreError(AppError):
    """Underlying persistence failure. The message is generic; the cause is only logged."""

    status_code = 500

    def __init__(self, message: str = "An internal error occurred") -> None:
        super().__init__(message)
