"""Domain errors raised by services and mapped to HTTP responses in ``app.main``."""

from fastapi import status


class CatalogError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class AuthRequiredError(CatalogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Login required"

    def __init__(self, message: str | None = None, *, admin: bool = False) -> None:
        super().__init__(message or ("Unauthorized. Admin password required." if admin else None))
        self.admin = admin
        if admin:
            self.status_code = status.HTTP_403_FORBIDDEN


class InvalidCredentialsError(CatalogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid password"


class ValidationError(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class UpstreamError(CatalogError):
    default_message = "Upstream service failed"


class AuthError(UpstreamError):
    default_message = "Authentication failed"


class PayloadTooLargeError(CatalogError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    default_message = "File exceeds max size"
