from __future__ import annotations

from typing import Dict, List, Optional


class EventHubError(Exception):
    """Base class for every error raised by eventhub."""


class ValidationError(EventHubError):
    """
    A write was rejected. `errors` lists every violated rule as
    {"field": ..., "message": ...}; `code` lets callers tell apart
    rejections that share this type (e.g. event_not_found vs
    invalid_event_reference).
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[Dict[str, str]]] = None,
        code: str = "validation_error",
    ):
        super().__init__(message)
        self.message = message
        self.errors = errors or []
        self.code = code

    def to_dict(self) -> Dict:
        return {"message": self.message, "code": self.code, "errors": self.errors}


class DuplicateSlugError(ValidationError):
    def __init__(self, slug: str):
        super().__init__(
            f"An event with slug '{slug}' already exists",
            errors=[{"field": "slug", "message": f"Slug '{slug}' is already taken"}],
            code="duplicate_slug",
        )
        self.slug = slug


class InvalidFormat(EventHubError):
    """Raised by the normalizers when a date or time string cannot be parsed."""


class NotFound(EventHubError):
    pass


class StorageError(EventHubError):
    """Infrastructure failure talking to MongoDB."""


class DatabaseConnectionError(StorageError):
    """MONGODB_URI missing or the server could not be reached."""
