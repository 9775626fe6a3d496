"""
Static API response classification.

A response is either a decodable image or an error:
- JSON bodies are service-reported errors carrying a "message"
- 429 responses get a rate-limit explanation from the X-Rate-Limit-* headers
- other error statuses are service errors
- anything Pillow cannot decode is a decode error
"""

import logging
from datetime import datetime, timezone
from io import BytesIO
from typing import Optional

import httpx
from PIL import Image

from ..errors import DecodeError, ServiceError

logger = logging.getLogger(__name__)

_INTERVAL_UNITS = (
    ("day", 86_400),
    ("hour", 3_600),
    ("minute", 60),
    ("second", 1),
)


def format_interval(seconds: float) -> str:
    """Human-readable duration, e.g. 60 -> "1 minute", 90 -> "1 minute, 30 seconds"."""
    remaining = int(seconds)
    parts = []
    for name, size in _INTERVAL_UNITS:
        count, remaining = divmod(remaining, size)
        if count:
            parts.append(f"{count} {name}{'' if count == 1 else 's'}")
    return ", ".join(parts) if parts else "0 seconds"


def format_reset_time(timestamp: float) -> str:
    """Format a Unix timestamp for display, in UTC."""
    reset = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return reset.strftime("%Y-%m-%d %H:%M:%S UTC")


def _numeric_header(headers: httpx.Headers, name: str) -> Optional[float]:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring malformed {name} header: {value!r}")
        return None


def _is_json(response: httpx.Response) -> bool:
    content_type = response.headers.get("content-type", "")
    media_type = content_type.split(";")[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def _json_message(response: httpx.Response) -> Optional[str]:
    """The "message" field of a JSON error body, if there is one."""
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict) and payload.get("message") is not None:
        return str(payload["message"])
    return None


def rate_limit_error(response: httpx.Response, message: Optional[str] = None) -> ServiceError:
    """Build the error for a 429 response."""
    interval = _numeric_header(response.headers, "X-Rate-Limit-Interval")
    limit = _numeric_header(response.headers, "X-Rate-Limit-Limit")
    reset = _numeric_header(response.headers, "X-Rate-Limit-Reset")

    failure_reason = message or "Too many requests have been made with this access token."
    if interval is not None and limit is not None:
        failure_reason = (
            f"More than {int(limit)} requests have been made with this access token "
            f"within a period of {format_interval(interval)}."
        )

    recovery_suggestion = None
    if reset is not None:
        recovery_suggestion = f"Wait until {format_reset_time(reset)} before retrying."

    return ServiceError(
        message or "Rate limit exceeded",
        failure_reason=failure_reason,
        recovery_suggestion=recovery_suggestion,
        status_code=response.status_code,
    )


def decode_image(content: bytes) -> Image.Image:
    """Decode image bytes with Pillow; the image is fully loaded."""
    image = Image.open(BytesIO(content))
    image.load()
    return image


def classify_response(response: httpx.Response) -> Image.Image:
    """
    Turn a Static API response into an image.

    Raises:
        ServiceError: Error status or JSON error body
        DecodeError: Body is not a decodable image
    """
    is_json = _is_json(response)
    message = _json_message(response) if is_json else None

    if response.status_code == 429:
        raise rate_limit_error(response, message)

    if not response.is_success:
        reason = message or response.reason_phrase or f"HTTP {response.status_code}"
        raise ServiceError(
            message or f"The Static API returned HTTP {response.status_code}",
            failure_reason=reason,
            status_code=response.status_code,
        )

    if is_json:
        raise ServiceError(
            message or "The Static API returned JSON instead of an image",
            failure_reason=message,
            status_code=response.status_code,
        )

    try:
        return decode_image(response.content)
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise DecodeError(
            "The server returned an image that could not be decoded",
            failure_reason=str(e),
            status_code=response.status_code,
        ) from e
