"""API clients for the Mapbox Static API."""

from .snapshot import SnapshotClient, SnapshotTask, redact_access_token
from .responses import classify_response, rate_limit_error
from .user_agent import user_agent

__all__ = [
    "SnapshotClient",
    "SnapshotTask",
    "redact_access_token",
    "classify_response",
    "rate_limit_error",
    "user_agent",
]
