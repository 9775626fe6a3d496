"""Request-URL builder and client for the Mapbox Static API."""

__version__ = "1.0.0"

from .config import Config, ConfigurationError, load_config
from .errors import SnapshotError, TransportError, ServiceError, DecodeError
from .models import (
    Coordinate,
    Size,
    Color,
    MarkerSize,
    Letter,
    Number,
    Icon,
    Marker,
    CustomMarker,
    GeoJSON,
    Path,
    CenterZoom,
    Camera,
    AutoFit,
    ImageFormat,
    ClassicSnapshotOptions,
    SnapshotOptions,
    MarkerOptions,
)
from .clients import SnapshotClient, SnapshotTask

__all__ = [
    "__version__",
    "Config",
    "ConfigurationError",
    "load_config",
    "SnapshotError",
    "TransportError",
    "ServiceError",
    "DecodeError",
    "Coordinate",
    "Size",
    "Color",
    "MarkerSize",
    "Letter",
    "Number",
    "Icon",
    "Marker",
    "CustomMarker",
    "GeoJSON",
    "Path",
    "CenterZoom",
    "Camera",
    "AutoFit",
    "ImageFormat",
    "ClassicSnapshotOptions",
    "SnapshotOptions",
    "MarkerOptions",
    "SnapshotClient",
    "SnapshotTask",
]
