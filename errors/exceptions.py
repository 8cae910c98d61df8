"""Domain-specific exceptions for the classroom dashboard.

These exceptions let the API layer distinguish a store that is unreachable
(retryable banner) from a record that no longer exists (operation failure)
and from a write the caller should never have sent.
"""

from __future__ import annotations


class StoreError(Exception):
    """The record store could not be reached or answered with an error."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        url: str = "",
        retryable: bool = True,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.url = url
        self.retryable = retryable
        super().__init__(f"Record store {status_code}: {detail} ({url})")


class NotFoundError(StoreError):
    """A referenced record is absent on update or delete."""

    def __init__(self, table: str, entity_id: str, url: str = "") -> None:
        self.table = table
        self.entity_id = entity_id
        super().__init__(
            status_code=404,
            detail=f"{table} '{entity_id}' not found",
            url=url,
            retryable=False,
        )


class RecordValidationError(ValueError):
    """A write was rejected before reaching the store."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")
