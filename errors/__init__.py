"""Custom exception hierarchy for the classroom dashboard."""

from errors.exceptions import NotFoundError, RecordValidationError, StoreError

__all__ = ["NotFoundError", "RecordValidationError", "StoreError"]
