"""
Viewpoint models.

A snapshot is framed by exactly one of:
- CenterZoom: a center coordinate and zoom level
- Camera: a center plus zoom or altitude, with optional pitch and heading
- AutoFit: the server picks center and zoom to fit the overlays
"""

import math
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .geometry import Coordinate

EARTH_RADIUS_M = 6_378_137.0
FIELD_OF_VIEW_DEG = 30.0
TILE_SIZE = 512


def zoom_level_for_altitude(
    altitude: float, pitch: float, latitude: float, height: float
) -> float:
    """
    Convert a camera altitude to the zoom level that shows the same area.

    The viewer is assumed to look through a fixed 30° vertical field of view
    onto a Web Mercator map made of 512-point tiles.

    Args:
        altitude: Height above the ground at the center coordinate, in meters
        pitch: Tilt toward the horizon in degrees (0 looks straight down)
        latitude: Latitude of the center coordinate
        height: Output image height in points

    Returns:
        Fractional zoom level
    """
    eye_altitude = altitude / math.sin(math.pi / 2 - math.radians(pitch)) * math.sin(math.pi / 2)
    meters_tall = 2 * eye_altitude * math.tan(math.radians(FIELD_OF_VIEW_DEG) / 2)
    meters_per_pixel = meters_tall / height
    map_pixel_width_at_zoom0 = (
        math.cos(math.radians(latitude)) * 2 * math.pi * EARTH_RADIUS_M / meters_per_pixel
    )
    return math.log2(map_pixel_width_at_zoom0 / TILE_SIZE)


class CenterZoom(BaseModel):
    """A center coordinate and explicit zoom level."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["center_zoom"] = "center_zoom"
    center: Coordinate
    zoom: float


class Camera(BaseModel):
    """
    The viewpoint from which a style snapshot is taken.

    Either zoom or altitude must be given; altitude is converted to a zoom
    level using the output height when the request is built.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["camera"] = "camera"
    center: Coordinate
    zoom: Optional[float] = None
    altitude: Optional[float] = Field(default=None, gt=0, description="Meters above the center")
    pitch: float = Field(default=0.0, description="Degrees toward the horizon")
    heading: float = Field(default=0.0, description="Degrees clockwise from true north")

    @model_validator(mode="after")
    def _zoom_or_altitude(self) -> "Camera":
        if self.zoom is None and self.altitude is None:
            raise ValueError("Camera requires either zoom or altitude")
        return self

    def resolve_zoom(self, height: float) -> float:
        """Zoom level for an image of the given height in points."""
        if self.zoom is not None:
            return self.zoom
        return zoom_level_for_altitude(self.altitude, self.pitch, self.center.lat, height)


class AutoFit(BaseModel):
    """Let the server fit center and zoom to the overlays."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["auto"] = "auto"


Viewpoint = Annotated[
    Union[CenterZoom, Camera, AutoFit],
    Field(discriminator="kind"),
]
