"""Domain errors raised by the store, services and catalog client.

Each error carries the HTTP status the gateway answers with; the exception
handler in app.main renders them as {"detail": message}.
"""


class GatewayError(Exception):
    """Base class for errors reported to API callers."""

    status_code = 500

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class ValidationError(GatewayError):
    """Missing or malformed input; the caller can correct it."""

    status_code = 400


class AuthError(GatewayError):
    """Bad credentials, or a bearer token that cannot be verified."""

    status_code = 401


class ForbiddenError(GatewayError):
    """Authenticated, but not allowed to touch this record."""

    status_code = 403


class NotFoundError(GatewayError):
    status_code = 404


class ConflictError(GatewayError):
    """A unique field (username, email) is already taken."""

    status_code = 409


class StoreError(GatewayError):
    """A table could not be written."""

    status_code = 500


class CatalogError(GatewayError):
    """Raised when the upstream catalog is unreachable or returns an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.upstream_status = status_code
        # Unreachable upstream -> 503; upstream answered with an error -> 502.
        self.status_code = 503 if status_code is None else 502
