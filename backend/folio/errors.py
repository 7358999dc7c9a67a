"""
Exception classes for the Folio store.

Every storage operation either returns a value or raises one of these.
They carry a JSON-friendly context so the HTTP layer can report them as-is.
"""

from typing import Any, Dict, Optional


class FolioError(Exception):
    """Base exception for all storage errors."""

    code = "storage_error"

    def __init__(self, message: str, **context):
        """
        Initialize the error with a message and optional context.

        :param message: Human-readable error message
        :type message: str
        :param context: Additional debugging context (JSON-serializable values)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to JSON-serializable dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context
        }


class NotFoundError(FolioError, LookupError):
    """Requested identity has no slot on disk and no cache entry."""

    code = "not_found"


class CorruptionError(FolioError):
    """A slot exists but its bytes do not decode into a valid record."""

    code = "corrupted_record"

    def __init__(self, message: str, identifier: str, path: Optional[str] = None, **context):
        super().__init__(message, identifier=identifier, path=path, **context)
        self.identifier = identifier
        self.path = path


class IOFailure(FolioError):
    """An underlying filesystem read, write, rename or remove failed."""

    code = "io_failure"


class IntegrityViolation(FolioError, ValueError):
    """The operation would break a structural invariant and was rejected."""

    code = "integrity_violation"
