"""
Errors reported by SnapshotClient when fetching a snapshot.

Invalid options and missing credentials are programmer errors and raise
ConfigurationError (see config.py) while the URL is built. The errors here
only ever come out of a fetch.
"""

from typing import Optional


class SnapshotError(Exception):
    """A snapshot could not be fetched or decoded."""

    def __init__(
        self,
        message: str,
        failure_reason: Optional[str] = None,
        recovery_suggestion: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.failure_reason = failure_reason
        self.recovery_suggestion = recovery_suggestion
        self.status_code = status_code

    def to_dict(self) -> dict:
        """Serializable form used by the snapshot service."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "failure_reason": self.failure_reason,
            "recovery_suggestion": self.recovery_suggestion,
            "status_code": self.status_code,
        }


class TransportError(SnapshotError):
    """DNS, connection, TLS, timeout, redirect-loop or content-decoding failure; no usable response arrived."""
    pass


class ServiceError(SnapshotError):
    """The service answered with an error status or a JSON error message."""
    pass


class DecodeError(ServiceError):
    """The response body was neither an image nor a recognizable error."""
    pass
