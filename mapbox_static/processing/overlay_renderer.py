"""
Overlay rendering.

Each overlay becomes one token; tokens are joined with "," into a single
path segment. Rendering is a pure function of the overlay.
"""

from typing import Optional, Sequence

from ..config import ConfigurationError
from ..models.geometry import Color, Coordinate
from ..models.overlays import (
    CustomMarker,
    GeoJSON,
    Icon,
    Label,
    Letter,
    Marker,
    MarkerSize,
    Number,
    Overlay,
    Path,
)
from ..utils.numbers import format_number
from ..utils.percent import PATH_SAFE, percent_encode
from ..utils.polyline import encode_polyline


def render_label(label: Label) -> str:
    """Render a marker label; letters are lowercased."""
    if isinstance(label, Letter):
        letter = label.value.lower()
        if not ("a" <= letter <= "z"):
            raise ConfigurationError(f"Marker letter must be between A and Z, got {label.value!r}")
        return letter
    if isinstance(label, Number):
        if not 0 <= label.value <= 99:
            raise ConfigurationError(f"Marker number must be between 0 and 99, got {label.value}")
        return str(label.value)
    if isinstance(label, Icon):
        return label.name
    raise TypeError(f"Unknown marker label: {label!r}")


def render_pin(size: MarkerSize, label: Optional[Label], color: Color) -> str:
    """Pin prefix shared by map markers and standalone marker images."""
    label_component = f"-{render_label(label)}" if label is not None else ""
    return f"pin-{size.value}{label_component}+{color.to_hex()}"


def _position(coordinate: Coordinate) -> str:
    return f"({format_number(coordinate.lon)},{format_number(coordinate.lat)})"


def render_overlay(overlay: Overlay) -> str:
    """Render one overlay to its path token."""
    if isinstance(overlay, Marker):
        return render_pin(overlay.size, overlay.label, overlay.color) + _position(overlay.coordinate)

    if isinstance(overlay, CustomMarker):
        return f"url-{percent_encode(overlay.url, PATH_SAFE)}{_position(overlay.coordinate)}"

    if isinstance(overlay, GeoJSON):
        return f"geojson({percent_encode(overlay.object_string, PATH_SAFE)})"

    if isinstance(overlay, Path):
        polyline = percent_encode(encode_polyline(overlay.coordinates), PATH_SAFE)
        stroke = (
            f"path-{overlay.stroke_width}"
            f"+{overlay.stroke_color.to_hex()}-{format_number(overlay.stroke_opacity)}"
        )
        if overlay.omit_transparent_fill and overlay.fill_opacity == 0:
            return f"{stroke}({polyline})"
        fill = f"+{overlay.fill_color.to_hex()}-{format_number(overlay.fill_opacity)}"
        return f"{stroke}{fill}({polyline})"

    raise TypeError(f"Unknown overlay: {overlay!r}")


def render_overlays(overlays: Sequence[Overlay]) -> str:
    """Join overlay tokens in list order (later overlays draw on top)."""
    return ",".join(render_overlay(overlay) for overlay in overlays)
