"""Domain errors raised by the city directory."""
from typing import Optional


class CityDirectoryError(Exception):
    """Base class for every error the city directory reports."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidCityError(CityDirectoryError):
    """Request carried an unusable city id or payload."""

    kind = "invalid_request"


class CityNotFoundError(CityDirectoryError):
    """No record is stored under the requested city id."""

    kind = "not_found"

    def __init__(self, city_id: str, message: Optional[str] = None):
        super().__init__(message or f"City '{city_id}' not found")
        self.city_id = city_id


class MissingFieldError(CityDirectoryError):
    """Record exists but lacks a field the operation needs."""

    kind = "missing_field"

    def __init__(self, city_id: str, field: str):
        super().__init__(f"City '{city_id}' has no '{field}' set")
        self.city_id = city_id
        self.field = field


class TypeMismatchError(CityDirectoryError):
    """Stored document does not match the city record shape."""

    kind = "type_mismatch"

    def __init__(self, city_id: str, field: str, detail: str):
        super().__init__(f"City '{city_id}' has an invalid '{field}': {detail}")
        self.city_id = city_id
        self.field = field


class RevisionConflictError(CityDirectoryError):
    """Conditional write lost against a concurrent writer."""

    kind = "conflict"

    def __init__(self, collection: str, doc_id: str, expected_revision: Optional[int] = None):
        super().__init__(
            f"Document '{collection}/{doc_id}' changed concurrently "
            f"(expected revision {expected_revision})"
        )
        self.collection = collection
        self.doc_id = doc_id
        self.expected_revision = expected_revision


class StoreUnavailableError(CityDirectoryError):
    """Document store could not be reached or failed the request."""

    kind = "store_unavailable"
