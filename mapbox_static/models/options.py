"""
Snapshot option models - what a snapshot depicts and how it is formatted.

Three request shapes are supported:
- ClassicSnapshotOptions: tilesets composited by the classic (v4) Static API
- SnapshotOptions: a Mapbox-hosted style rendered by the Static API (always PNG)
- MarkerOptions: a standalone pin marker image
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .camera import AutoFit, Viewpoint
from .geometry import Color, RED, Size
from .overlays import Label, MarkerSize, Overlay


class ImageFormat(str, Enum):
    """Image formats supported by the classic Static API (value = path extension)."""
    PNG = "png"
    PNG32 = "png32"
    PNG64 = "png64"
    PNG128 = "png128"
    PNG256 = "png256"
    JPEG = "jpg"
    JPEG70 = "jpg70"
    JPEG80 = "jpg80"
    JPEG90 = "jpg90"


class ClassicSnapshotOptions(BaseModel):
    """
    Options for a classic snapshot of one or more tilesets.

    map_identifiers are of the form "owner.id"; the first one is the backmost
    tileset. Overlays are drawn in list order.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["classic"] = "classic"
    map_identifiers: list[str]
    size: Size
    scale: float = Field(default=1.0, description="1 for standard, >1 for @2x")
    format: ImageFormat = ImageFormat.PNG
    overlays: list[Overlay] = Field(default_factory=list)
    viewpoint: Viewpoint = Field(default_factory=AutoFit)


class SnapshotOptions(BaseModel):
    """
    Options for a snapshot of a Mapbox-hosted style.

    style_url may be "mapbox://styles/owner/id" or just "owner/id".
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["style"] = "style"
    style_url: str
    size: Size
    scale: float = Field(default=1.0, description="1 for standard, >1 for @2x")
    overlays: list[Overlay] = Field(default_factory=list)
    viewpoint: Viewpoint = Field(default_factory=AutoFit)
    shows_logo: bool = True
    shows_attribution: bool = True
    # Identifier of the style layer that overlays are inserted below
    before_layer: Optional[str] = None


class MarkerOptions(BaseModel):
    """Options for a standalone pin marker image."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["marker"] = "marker"
    size: MarkerSize = MarkerSize.SMALL
    label: Optional[Label] = None
    color: Color = RED
    scale: float = 1.0


SnapshotRequest = Annotated[
    Union[ClassicSnapshotOptions, SnapshotOptions, MarkerOptions],
    Field(discriminator="kind"),
]
