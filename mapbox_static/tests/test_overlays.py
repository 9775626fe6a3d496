"""
Test overlay models and their rendering into path tokens.
"""

import json
from urllib.parse import unquote

from pydantic import TypeAdapter, ValidationError

from ..config import ConfigurationError
from ..models.geometry import Color, Coordinate, BLACK, BROWN, RED
from ..models.overlays import (
    CustomMarker,
    GeoJSON,
    Icon,
    Letter,
    Marker,
    MarkerSize,
    Number,
    Overlay,
    Path,
)
from ..processing.overlay_renderer import render_label, render_overlay, render_overlays
from .test_codecs import PORTLAND_POLYGON

PORTLAND_POLYLINE = "upztG%60jxkVn@al@bo@nFWzuAaTcAyZen@"


def test_marker_rendering():
    """Test pin marker tokens."""
    print("\n=== Testing Marker Rendering ===")

    marker = Marker(
        coordinate=Coordinate(lat=45.52, lon=-122.681944),
        size=MarkerSize.MEDIUM,
        label=Icon(name="cafe"),
        color=BROWN,
    )
    assert render_overlay(marker) == "pin-m-cafe+996633(-122.681944,45.52)"

    # Defaults: small, unlabeled, red
    plain = Marker(coordinate=Coordinate(lat=0, lon=0))
    assert render_overlay(plain) == "pin-s+ff0000(0,0)"

    lettered = Marker(
        coordinate=Coordinate(lat=1.5, lon=2),
        size=MarkerSize.LARGE,
        label=Letter(value="Q"),
        color=BLACK,
    )
    assert render_overlay(lettered) == "pin-l-q+000000(2,1.5)"

    numbered = Marker(coordinate=Coordinate(lat=0, lon=0), label=Number(value=7))
    assert render_overlay(numbered) == "pin-s-7+ff0000(0,0)"

    near_origin = Marker(coordinate=Coordinate(lat=0.00001, lon=0.00005))
    assert render_overlay(near_origin) == "pin-s+ff0000(0.00005,0.00001)"

    print("✓ Marker tokens are correct")


def test_label_bounds():
    """Out-of-range labels fail at render time."""
    print("\n=== Testing Label Bounds ===")

    assert render_label(Letter(value="a")) == "a"
    assert render_label(Letter(value="Z")) == "z"
    assert render_label(Number(value=0)) == "0"
    assert render_label(Number(value=99)) == "99"
    assert render_label(Icon(name="rocket")) == "rocket"

    for label in (Number(value=100), Number(value=-1), Letter(value="1"), Letter(value="é")):
        try:
            render_label(label)
            assert False, f"{label!r} should be rejected"
        except ConfigurationError:
            pass

    # Multi-character letters never get past the model
    try:
        Letter(value="ab")
        assert False, "Two-character letter should be rejected"
    except ValidationError:
        pass

    print("✓ Label bounds enforced")


def test_custom_marker_rendering():
    """Test custom marker tokens; the URL is percent-encoded."""
    print("\n=== Testing Custom Marker Rendering ===")

    marker = CustomMarker(
        coordinate=Coordinate(lat=45.522717, lon=-122.69352),
        url="https://mapbox.com/guides/img/rocket.png",
    )
    assert render_overlay(marker) == (
        "url-https:%2F%2Fmapbox.com%2Fguides%2Fimg%2Frocket.png(-122.69352,45.522717)"
    )

    # A ")" in the URL must not close the token
    tricky = CustomMarker(coordinate=Coordinate(lat=0, lon=0), url="http://a.b/pin(1).png")
    assert render_overlay(tricky) == "url-http:%2F%2Fa.b%2Fpin(1%29.png(0,0)"

    print("✓ Custom marker tokens are correct")


def test_geojson_rendering():
    """Test GeoJSON tokens from text and from objects."""
    print("\n=== Testing GeoJSON Rendering ===")

    point = {"type": "Point", "coordinates": [-122.69, 45.52]}
    overlay = GeoJSON.from_object(point)
    assert overlay.object_string == '{"type":"Point","coordinates":[-122.69,45.52]}'

    token = render_overlay(overlay)
    assert token == "geojson(%7B%22type%22:%22Point%22,%22coordinates%22:%5B-122.69,45.52%5D%7D)"
    assert json.loads(unquote(token[len("geojson("):-1])) == point

    # Raw text is passed through as-is
    raw = GeoJSON(object_string='{"type":"Point"}')
    assert render_overlay(raw) == "geojson(%7B%22type%22:%22Point%22%7D)"

    # Deserialized from an "object" field
    from_body = TypeAdapter(Overlay).validate_python({"kind": "geojson", "object": point})
    assert isinstance(from_body, GeoJSON)
    assert from_body.object_string == overlay.object_string

    print("✓ GeoJSON tokens are correct")


def test_path_rendering():
    """Test path tokens with stroke and fill."""
    print("\n=== Testing Path Rendering ===")

    path = Path(
        coordinates=PORTLAND_POLYGON,
        stroke_width=2,
        stroke_color=BLACK,
        stroke_opacity=0.75,
        fill_color=RED,
        fill_opacity=0.25,
    )
    assert render_overlay(path) == f"path-2+000000-0.75+ff0000-0.25({PORTLAND_POLYLINE})"

    # Defaults: 1pt Davy's gray, opaque stroke, transparent fill
    default = Path(coordinates=PORTLAND_POLYGON)
    assert render_overlay(default) == f"path-1+555555-1+555555-0({PORTLAND_POLYLINE})"

    print("✓ Path tokens are correct")


def test_path_fill_omission():
    """The fill component can be dropped for unfilled paths."""
    print("\n=== Testing Path Fill Omission ===")

    unfilled = Path(coordinates=PORTLAND_POLYGON, omit_transparent_fill=True)
    assert render_overlay(unfilled) == f"path-1+555555-1({PORTLAND_POLYLINE})"

    # Only a zero opacity fill is omitted
    filled = Path(
        coordinates=PORTLAND_POLYGON,
        fill_opacity=0.5,
        omit_transparent_fill=True,
    )
    assert render_overlay(filled) == f"path-1+555555-1+555555-0.5({PORTLAND_POLYLINE})"

    print("✓ Fill omission works")


def test_path_validation():
    """Path fields are range-checked by the model."""
    print("\n=== Testing Path Validation ===")

    for kwargs in (
        {"coordinates": []},
        {"coordinates": PORTLAND_POLYGON, "stroke_width": -1},
        {"coordinates": PORTLAND_POLYGON, "stroke_opacity": 1.5},
        {"coordinates": PORTLAND_POLYGON, "fill_opacity": -0.1},
    ):
        try:
            Path(**kwargs)
            assert False, f"{kwargs} should be rejected"
        except ValidationError:
            pass

    try:
        Coordinate(lat=91, lon=0)
        assert False, "Latitude 91 should be rejected"
    except ValidationError:
        pass

    print("✓ Path validation works")


def test_overlay_order():
    """Tokens keep list order, joined by commas."""
    print("\n=== Testing Overlay Order ===")

    first = Marker(coordinate=Coordinate(lat=1, lon=1))
    second = Marker(coordinate=Coordinate(lat=2, lon=2), color=Color(red=0, green=0, blue=255))
    assert render_overlays([first, second]) == "pin-s+ff0000(1,1),pin-s+0000ff(2,2)"
    assert render_overlays([second, first]) == "pin-s+0000ff(2,2),pin-s+ff0000(1,1)"
    assert render_overlays([]) == ""

    print("✓ Overlay order preserved")


def run_all_tests():
    """Run all overlay tests."""
    print("\n" + "=" * 60)
    print("OVERLAYS - COMPREHENSIVE TEST SUITE")
    print("=" * 60)

    test_marker_rendering()
    test_label_bounds()
    test_custom_marker_rendering()
    test_geojson_rendering()
    test_path_rendering()
    test_path_fill_omission()
    test_path_validation()
    test_overlay_order()

    print("\n" + "=" * 60)
    print("✅ ALL OVERLAY TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    run_all_tests()
