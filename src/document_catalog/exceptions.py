"""Error taxonomy for catalog operations.

Every error carries a stable ``code`` next to its human-readable message so
the HTTP boundary can report both while keeping the ``success`` flag.
"""


class CatalogError(Exception):
    """Base class for all catalog errors."""

    code = "internal_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class Unauthenticated(CatalogError):
    """No signed-in identity on the request."""

    code = "unauthenticated"
    status_code = 401

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class ValidationError(CatalogError):
    """A required field is missing or malformed."""

    code = "validation_error"
    status_code = 422


class DuplicateURL(CatalogError):
    code = "duplicate_url"
    status_code = 409

    def __init__(self, url: str):
        super().__init__("A document with this URL already exists")
        self.url = url


class DuplicateName(CatalogError):
    code = "duplicate_name"
    status_code = 409

    def __init__(self, kind: str, name: str):
        super().__init__(f"{kind} already exists")
        self.kind = kind
        self.name = name


class NotFound(CatalogError):
    code = "not_found"
    status_code = 404


class StoreUnavailable(CatalogError):
    """The backing table is missing, i.e. the database is not initialized."""

    code = "store_unavailable"
    status_code = 503

    def __init__(self, table: str):
        super().__init__(f"Database not initialized: table '{table}' is unavailable")
        self.table = table


class InternalError(CatalogError):
    """Unexpected fault, e.g. a store access failure."""
