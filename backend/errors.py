"""Errors raised by the contact store."""

from __future__ import annotations

from typing import Any


class StoreError(Exception):
    """Base class for store failures; ``payload`` is sent back as JSON."""

    def __init__(self, message: str, payload: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload or {"name": type(self).__name__, "message": message}


class ValidationError(StoreError):
    """A required contact field is missing or blank."""

    def __init__(self, missing: list[str]) -> None:
        errors = {field: f"Path `{field}` is required." for field in missing}
        message = "Contact validation failed: " + ", ".join(
            f"{field}: {text}" for field, text in errors.items()
        )
        super().__init__(
            message,
            {"name": "ValidationError", "message": message, "errors": errors},
        )
        self.missing = missing


class NotFoundError(StoreError):
    def __init__(self, contact_id: str) -> None:
        super().__init__(f"contact {contact_id} not found")
        self.contact_id = contact_id


class StoreUnavailable(StoreError):
    """The database could not be reached or the query failed."""
