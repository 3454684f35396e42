"""Domain exceptions.

Every error raised by the registries, the document store and the resolver
inherits from ``TenantApiError`` and carries the HTTP status the API layer
answers with. Messages are safe to show to callers.
"""


class TenantApiError(Exception):
    """Base exception for all application errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TenantApiError):
    """Bad input: shape, charset, length or pagination bounds."""

    status_code = 400


class NoTenantError(ValidationError):
    """The request host does not carry a tenant subdomain."""

    def __init__(self, message: str = "Could not determine subdomain from request"):
        super().__init__(message)


class NotFoundError(TenantApiError):
    """Tenant, collection or document is absent."""

    status_code = 404


class ConflictError(TenantApiError):
    """A tenant with the same name already exists."""

    status_code = 409


class StorageError(TenantApiError):
    """Connectivity or query failure in the database.

    The message is always generic; the underlying error is logged where it
    is caught and chained as ``__cause__``.
    """

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
