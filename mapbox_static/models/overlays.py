"""Overlay models - features composited atop the map by the Static API."""

import json
from enum import Enum
from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .geometry import Color, Coordinate, DAVYS_GRAY, RED


class MarkerSize(str, Enum):
    """Pin marker sizes and their path abbreviations."""
    SMALL = "s"
    MEDIUM = "m"
    LARGE = "l"


class Letter(BaseModel):
    """An English letter from A through Z; rendered lowercase."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["letter"] = "letter"
    value: str = Field(min_length=1, max_length=1)


class Number(BaseModel):
    """A number from 0 through 99."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["number"] = "number"
    value: int


class Icon(BaseModel):
    """The name of a Maki icon."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["icon"] = "icon"
    name: str = Field(min_length=1)


Label = Annotated[Union[Letter, Number, Icon], Field(discriminator="kind")]


class Marker(BaseModel):
    """A pin-shaped marker placed at a specific point on the map."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["marker"] = "marker"
    coordinate: Coordinate
    size: MarkerSize = MarkerSize.SMALL
    label: Optional[Label] = None
    color: Color = RED


class CustomMarker(BaseModel):
    """
    A custom, online image placed at a specific point on the map.

    The image is always centered on the coordinate.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["custom_marker"] = "custom_marker"
    coordinate: Coordinate
    url: str = Field(min_length=1, description="HTTP or HTTPS URL of the image")


class GeoJSON(BaseModel):
    """
    A GeoJSON object, styled with simplestyle-spec properties.

    The text is not validated as GeoJSON; invalid input makes the request fail
    on the server.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["geojson"] = "geojson"
    object_string: str = Field(min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _serialize_object(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "object" in data and "object_string" not in data:
            data = dict(data)
            data["object_string"] = _compact_json(data.pop("object"))
        return data

    @classmethod
    def from_object(cls, geojson: Mapping[str, Any]) -> "GeoJSON":
        """Serialize a JSON object to compact text first."""
        return cls(object_string=_compact_json(geojson))


def _compact_json(value: Any) -> str:
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise ValueError(f"GeoJSON object is not serializable: {e}") from e


class Path(BaseModel):
    """
    A polyline or polygon placed along a path atop the map.

    Close the path (same first and last coordinate) and set fill_opacity above
    zero to draw a filled polygon.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["path"] = "path"
    coordinates: list[Coordinate] = Field(min_length=1)
    stroke_width: int = Field(default=1, ge=0, description="Stroke width in points")
    stroke_color: Color = DAVYS_GRAY
    stroke_opacity: float = Field(default=1.0, ge=0, le=1)
    fill_color: Color = DAVYS_GRAY
    fill_opacity: float = Field(default=0.0, ge=0, le=1)
    # Older service revisions expect no fill component for unfilled paths
    omit_transparent_fill: bool = False


Overlay = Annotated[
    Union[Marker, CustomMarker, GeoJSON, Path],
    Field(discriminator="kind"),
]
