"""Geometry primitives: coordinates, colors and image sizes."""

import string
from typing import Any

from PIL import ImageColor
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Coordinate(BaseModel):
    """Latitude/longitude coordinate pair."""
    model_config = ConfigDict(frozen=True)

    lat: float = Field(description="Latitude in decimal degrees", ge=-90, le=90)
    lon: float = Field(description="Longitude in decimal degrees", ge=-180, le=180)


class Size(BaseModel):
    """Logical image size in points."""
    model_config = ConfigDict(frozen=True)

    width: int = Field(description="Width in points")
    height: int = Field(description="Height in points")


class Color(BaseModel):
    """
    An RGB color with a separately tracked alpha.

    Only the RGB channels take part in the hex encoding; overlays that need
    opacity render it as a separate number.
    """
    model_config = ConfigDict(frozen=True)

    red: int = Field(ge=0, le=255)
    green: int = Field(ge=0, le=255)
    blue: int = Field(ge=0, le=255)
    alpha: float = Field(default=1.0, ge=0, le=1)

    @model_validator(mode="before")
    @classmethod
    def _accept_hex(cls, data: Any) -> Any:
        if isinstance(data, str):
            color = cls.from_hex(data)
            return {"red": color.red, "green": color.green, "blue": color.blue}
        return data

    @classmethod
    def from_floats(cls, red: float, green: float, blue: float, alpha: float = 1.0) -> "Color":
        """Build a color from channels in [0, 1]; each is scaled to 255 and truncated."""
        return cls(
            red=int(red * 255),
            green=int(green * 255),
            blue=int(blue * 255),
            alpha=alpha,
        )

    @classmethod
    def from_hex(cls, hex_string: str) -> "Color":
        """
        Parse "rgb" or "rrggbb" (case-insensitive, optional leading "#").

        Anything else gives opaque black. The result is always opaque.
        """
        digits = hex_string.strip().removeprefix("#")
        if len(digits) not in (3, 6) or any(c not in string.hexdigits for c in digits):
            return cls(red=0, green=0, blue=0)
        red, green, blue = ImageColor.getrgb(f"#{digits}")[:3]
        return cls(red=red, green=green, blue=blue)

    def to_hex(self) -> str:
        """Lowercase "rrggbb"; alpha is dropped."""
        return f"{self.red:02x}{self.green:02x}{self.blue:02x}"

    def with_alpha(self, alpha: float) -> "Color":
        return Color(red=self.red, green=self.green, blue=self.blue, alpha=alpha)


BLACK = Color(red=0, green=0, blue=0)
WHITE = Color(red=255, green=255, blue=255)
RED = Color(red=255, green=0, blue=0)
BROWN = Color(red=0x99, green=0x66, blue=0x33)
# Davy's gray (33% white), the default path color
DAVYS_GRAY = Color.from_hex("555")
