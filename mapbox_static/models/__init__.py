"""Pydantic models for snapshot requests."""

from .geometry import (
    Coordinate,
    Size,
    Color,
    BLACK,
    WHITE,
    RED,
    BROWN,
    DAVYS_GRAY,
)
from .overlays import (
    MarkerSize,
    Letter,
    Number,
    Icon,
    Label,
    Marker,
    CustomMarker,
    GeoJSON,
    Path,
    Overlay,
)
from .camera import (
    CenterZoom,
    Camera,
    AutoFit,
    Viewpoint,
    zoom_level_for_altitude,
)
from .options import (
    ImageFormat,
    ClassicSnapshotOptions,
    SnapshotOptions,
    MarkerOptions,
    SnapshotRequest,
)
from .requests import SnapshotBody

__all__ = [
    # Geometry
    "Coordinate",
    "Size",
    "Color",
    "BLACK",
    "WHITE",
    "RED",
    "BROWN",
    "DAVYS_GRAY",
    # Overlays
    "MarkerSize",
    "Letter",
    "Number",
    "Icon",
    "Label",
    "Marker",
    "CustomMarker",
    "GeoJSON",
    "Path",
    "Overlay",
    # Viewpoints
    "CenterZoom",
    "Camera",
    "AutoFit",
    "Viewpoint",
    "zoom_level_for_altitude",
    # Options
    "ImageFormat",
    "ClassicSnapshotOptions",
    "SnapshotOptions",
    "MarkerOptions",
    "SnapshotRequest",
    # API bodies
    "SnapshotBody",
]
