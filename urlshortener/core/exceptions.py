"""Error taxonomy of the mapping service.

Every failure leaving ``MappingService`` is one of the four ``MappingError``
kinds below. ``DuplicateKeyError`` is raised by the store only and never
crosses the service boundary.
"""
from typing import Optional


class MappingError(Exception):
    """Base class for the closed set of service errors."""

    kind = "mapping_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(MappingError):
    """Input is missing or malformed; the caller must fix and resubmit."""

    kind = "validation"

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class NotFoundError(MappingError):
    """No mapping exists for the queried short code."""

    kind = "not_found"

    def __init__(self, url: str, message: str = "Short code not found"):
        super().__init__(message)
        self.url = url


class ConflictError(MappingError):
    """A uniqueness race could not be settled on create."""

    kind = "conflict"

    def __init__(self, field: str, value: Optional[str], message: str):
        super().__init__(message)
        self.field = field
        self.value = value


class StorageError(MappingError):
    """The store failed or rejected an operation; ``__cause__`` holds the original error."""

    kind = "storage"


class DuplicateKeyError(Exception):
    """Raised by a store when an insert violates a uniqueness constraint."""

    def __init__(self, field: str, value: Optional[str]):
        super().__init__(f"Duplicate value for {field}: {value}")
        self.field = field
        self.value = value
