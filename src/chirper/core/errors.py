# src/chirper/core/errors.py
"""
Domain errors raised by the chirp core and its adapters.

The web layer translates these into HTTP responses (see api/responses.py);
the core itself never deals in status codes.
"""

from typing import Any, Optional


class ChirperError(Exception):
    """Base class for all Chirper domain errors."""


class ValidationError(ChirperError):
    """A field failed its validation rule."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class NotFoundError(ChirperError):
    """A referenced record does not exist."""

    def __init__(self, resource: str, identifier: Any = None):
        self.resource = resource
        self.identifier = identifier
        if identifier is None:
            super().__init__(f"{resource} not found")
        else:
            super().__init__(f"{resource} {identifier} not found")


class ForbiddenError(ChirperError):
    """The acting user may not perform the operation."""

    def __init__(self, message: str = "This action is unauthorized."):
        self.message = message
        super().__init__(message)


class StoreError(ChirperError):
    """The backing store failed or is unavailable."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class DeliveryError(ChirperError):
    """A notification could not be delivered to one recipient."""

    def __init__(self, recipient_id: int, message: str = "delivery failed"):
        self.recipient_id = recipient_id
        super().__init__(f"recipient {recipient_id}: {message}")
