from __future__ import annotations


class InvalidArgument(ValueError):
    """Raised when caller-supplied input violates a precondition."""


class RecordNotFound(LookupError):
    """Raised when a store has no record for the requested id."""
