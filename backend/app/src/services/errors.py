"""Errors raised by the CRM service layer.

Every error carries the HTTP status it is surfaced with and a human readable
message; the API turns them into ``{"error": message}`` bodies.
"""

from __future__ import annotations


class CRMError(Exception):
    """Base class for errors that reach the API caller."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CRMError):
    """A required field is missing or a value is not acceptable."""

    status_code = 400


class NotFoundError(CRMError):
    """A referenced customer, note, task or proposal does not exist."""

    status_code = 404


class ConflictError(CRMError):
    """A unique key (e.g. customer email) is already taken."""

    status_code = 400


class ConfigurationError(CRMError):
    """An external provider is needed but has no credentials."""

    status_code = 400


class ProviderError(CRMError):
    """An external provider failed or returned something unusable."""

    status_code = 500


class AnnotationError(RuntimeError):
    """Raised by the annotation engine; callers downgrade it to "no annotation"."""
