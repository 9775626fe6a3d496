"""
Request path building for the Static API.

Endpoint shapes:
    classic: /v4/{map ids}[/{overlays}]/{viewpoint}/{w}x{h}[@2x].{format}
    style:   /styles/v1/{owner}/{style}/static[/{overlays}]/{viewpoint}/{w}x{h}[@2x]
    marker:  /v4/marker/pin-{size}[-{label}]+{color}[@2x].png

All validation happens here, before any network activity; invalid options
raise ConfigurationError instead of being clamped.
"""

import logging
from typing import Sequence, Union
from urllib.parse import urlsplit

from ..config import ConfigurationError
from ..models.options import ClassicSnapshotOptions, MarkerOptions, SnapshotOptions
from ..models.geometry import Size
from ..models.overlays import Overlay
from .overlay_renderer import render_overlays, render_pin
from .viewpoint import render_viewpoint

logger = logging.getLogger(__name__)

MAX_OVERLAYS = 100
MAX_PIXELS = 1_280


def effective_scale(scale: float) -> int:
    """Only 1x and 2x images exist; anything above 1 is served at 2x."""
    if scale <= 0:
        raise ConfigurationError(f"Scale must be positive, got {scale}")
    return 2 if scale > 1 else 1


def _scale_suffix(scale: float) -> str:
    return "@2x" if effective_scale(scale) > 1 else ""


def _check_size(size: Size, scale: float) -> None:
    factor = effective_scale(scale)
    if size.width <= 0 or size.height <= 0:
        raise ConfigurationError(f"Width and height must be positive, got {size.width}x{size.height}")
    if size.width * factor > MAX_PIXELS:
        raise ConfigurationError(
            f"Maximum width is {MAX_PIXELS:,} pixels ({MAX_PIXELS // factor} points @{factor}x), "
            f"got {size.width} points"
        )
    if size.height * factor > MAX_PIXELS:
        raise ConfigurationError(
            f"Maximum height is {MAX_PIXELS:,} pixels ({MAX_PIXELS // factor} points @{factor}x), "
            f"got {size.height} points"
        )


def _overlays_component(overlays: Sequence[Overlay]) -> str:
    if len(overlays) > MAX_OVERLAYS:
        raise ConfigurationError(
            f"Maximum number of overlays is {MAX_OVERLAYS}, got {len(overlays)}"
        )
    if not overlays:
        return ""
    return "/" + render_overlays(overlays)


def parse_style_url(style_url: str) -> tuple[str, str]:
    """
    Split a style URL into (owner, style id).

    Accepts "mapbox://styles/owner/id" or "owner/id".
    """
    parts = urlsplit(style_url)
    if parts.scheme:
        if parts.scheme != "mapbox" or parts.netloc != "styles":
            raise ConfigurationError(
                f"Only mapbox://styles/ URLs are supported, got {style_url!r}. "
                "See https://www.mapbox.com/help/define-style-url/"
            )
        path = parts.path
    else:
        path = style_url

    segments = path.strip("/").split("/")
    if len(segments) != 2 or not all(segments):
        raise ConfigurationError(
            f"Invalid style URL {style_url!r}; expected mapbox://styles/owner/id"
        )
    owner, style_id = segments
    return owner, style_id


def build_classic_path(options: ClassicSnapshotOptions) -> str:
    """Path for a classic tileset snapshot."""
    if not options.map_identifiers or not all(options.map_identifiers):
        raise ConfigurationError("At least one map identifier must be specified.")
    _check_size(options.size, options.scale)

    tileset_component = ",".join(options.map_identifiers)
    overlays_component = _overlays_component(options.overlays)
    position = render_viewpoint(options.viewpoint, options.size.height)

    return (
        f"/v4/{tileset_component}{overlays_component}/{position}"
        f"/{options.size.width}x{options.size.height}{_scale_suffix(options.scale)}"
        f".{options.format.value}"
    )


def build_style_path(options: SnapshotOptions) -> str:
    """Path for a style snapshot (always PNG, so no extension)."""
    owner, style_id = parse_style_url(options.style_url)
    _check_size(options.size, options.scale)

    overlays_component = _overlays_component(options.overlays)
    position = render_viewpoint(options.viewpoint, options.size.height)

    return (
        f"/styles/v1/{owner}/{style_id}/static{overlays_component}/{position}"
        f"/{options.size.width}x{options.size.height}{_scale_suffix(options.scale)}"
    )


def build_marker_path(options: MarkerOptions) -> str:
    """Path for a standalone marker image."""
    pin = render_pin(options.size, options.label, options.color)
    return f"/v4/marker/{pin}{_scale_suffix(options.scale)}.png"


def build_path(options: Union[ClassicSnapshotOptions, SnapshotOptions, MarkerOptions]) -> str:
    """Build the request path for any supported options object."""
    if isinstance(options, ClassicSnapshotOptions):
        path = build_classic_path(options)
    elif isinstance(options, SnapshotOptions):
        path = build_style_path(options)
    elif isinstance(options, MarkerOptions):
        path = build_marker_path(options)
    else:
        raise TypeError(f"Unsupported snapshot options: {type(options).__name__}")

    logger.debug(f"Built request path: {path}")
    return path
