"""Viewpoint validation and rendering."""

from ..config import ConfigurationError
from ..models.camera import AutoFit, Camera, CenterZoom, Viewpoint
from ..utils.numbers import format_number

MIN_ZOOM = 0
MAX_ZOOM = 20
MAX_PITCH = 60


def _check_zoom(zoom: float) -> None:
    if not MIN_ZOOM <= zoom <= MAX_ZOOM:
        raise ConfigurationError(f"Zoom level must be between {MIN_ZOOM} and {MAX_ZOOM}, got {zoom}")


def render_viewpoint(viewpoint: Viewpoint, height: float) -> str:
    """
    Render the viewpoint path segment.

    Args:
        viewpoint: CenterZoom, Camera or AutoFit
        height: Output image height in points (used to turn altitude into zoom)

    Returns:
        "lon,lat,zoom[,heading[,pitch]]" or "auto"
    """
    if isinstance(viewpoint, AutoFit):
        return "auto"

    if isinstance(viewpoint, CenterZoom):
        _check_zoom(viewpoint.zoom)
        center = viewpoint.center
        return ",".join(
            format_number(v) for v in (center.lon, center.lat, viewpoint.zoom)
        )

    if isinstance(viewpoint, Camera):
        # Pitch feeds the altitude conversion, so it is checked first
        if not 0 <= viewpoint.pitch <= MAX_PITCH:
            raise ConfigurationError(f"Pitch must be between 0° and {MAX_PITCH}°, got {viewpoint.pitch}")
        if not 0 <= viewpoint.heading < 360:
            raise ConfigurationError(f"Heading must be in [0°, 360°), got {viewpoint.heading}")
        zoom = round(viewpoint.resolve_zoom(height), 2)
        _check_zoom(zoom)

        components = [viewpoint.center.lon, viewpoint.center.lat, zoom]
        # Heading and pitch are positional, so a pitched camera needs a heading
        if viewpoint.heading > 0 or viewpoint.pitch > 0:
            components.append(viewpoint.heading)
        if viewpoint.pitch > 0:
            components.append(viewpoint.pitch)
        return ",".join(format_number(v) for v in components)

    raise TypeError(f"Unknown viewpoint: {viewpoint!r}")
