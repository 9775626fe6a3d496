"""
Test the low-level codecs: colors, polylines, percent-encoding and numbers.
"""

import random

from ..models.geometry import Color, Coordinate, BLACK, BROWN
from ..utils.numbers import format_number, round_half_away_from_zero
from ..utils.percent import LEGACY_QUERY_SAFE, PATH_SAFE, percent_encode
from ..utils.polyline import decode_polyline, encode_polyline

# Closed polygon around downtown Portland, Oregon
PORTLAND_POLYGON = [
    Coordinate(lat=45.52475063103141, lon=-122.68209457397461),
    Coordinate(lat=45.52451009822193, lon=-122.67488479614258),
    Coordinate(lat=45.51681250530043, lon=-122.67608642578126),
    Coordinate(lat=45.51693278828882, lon=-122.68999099731445),
    Coordinate(lat=45.520300607576864, lon=-122.68964767456055),
    Coordinate(lat=45.52475063103141, lon=-122.68209457397461),
]


def test_color_to_hex():
    """Test hex encoding of colors."""
    print("\n=== Testing Color.to_hex ===")

    assert BROWN.to_hex() == "996633"
    assert BLACK.to_hex() == "000000"
    assert Color(red=255, green=0, blue=170).to_hex() == "ff00aa"

    # Alpha never reaches the hex triplet
    assert Color(red=255, green=0, blue=0, alpha=0.25).to_hex() == "ff0000"

    # Float channels are scaled and truncated
    assert Color.from_floats(0.5, 0.0, 1.0).to_hex() == "7f00ff"

    print("✓ Colors encode to lowercase rrggbb")


def test_color_from_hex():
    """Test hex parsing, including the opaque-black fallback."""
    print("\n=== Testing Color.from_hex ===")

    assert Color.from_hex("996633") == BROWN
    assert Color.from_hex("#996633") == BROWN
    assert Color.from_hex("#F0a") == Color(red=255, green=0, blue=170)
    assert Color.from_hex("555") == Color(red=0x55, green=0x55, blue=0x55)
    assert Color.from_hex("ABCDEF").to_hex() == "abcdef"

    for bad in ("", "12345", "1234567", "zzzzzz", "#12", "red"):
        assert Color.from_hex(bad) == BLACK, bad

    assert Color.from_hex("ff0000").alpha == 1.0

    # pydantic accepts hex strings wherever a Color is expected
    assert Color.model_validate("#ff0000").red == 255

    print("✓ Hex parsing works with fallback to black")


def test_color_round_trip():
    """Every 8-bit color survives to_hex/from_hex; alpha resets to 1."""
    print("\n=== Testing Color Round Trip ===")

    for red in range(0, 256, 15):
        for green in range(0, 256, 17):
            for blue in (0, 1, 127, 128, 254, 255):
                color = Color(red=red, green=green, blue=blue, alpha=0.3)
                decoded = Color.from_hex(color.to_hex())
                assert (decoded.red, decoded.green, decoded.blue) == (red, green, blue)
                assert decoded.alpha == 1.0

    print("✓ Hex round trip is exact")


def test_polyline_known_encoding():
    """Test the polyline encoder against a known path."""
    print("\n=== Testing Polyline Encoding ===")

    assert encode_polyline(PORTLAND_POLYGON) == "upztG`jxkVn@al@bo@nFWzuAaTcAyZen@"

    # Reference example from the algorithm documentation
    points = [
        Coordinate(lat=38.5, lon=-120.2),
        Coordinate(lat=40.7, lon=-120.95),
        Coordinate(lat=43.252, lon=-126.453),
    ]
    assert encode_polyline(points) == "_p~iF~ps|U_ulLnnqC_mqNvxq`@"

    print("✓ Polyline encoding matches")


def test_polyline_single_point():
    """A single coordinate encodes only the absolute position."""
    print("\n=== Testing Single-Point Polyline ===")

    assert encode_polyline([Coordinate(lat=38.5, lon=-120.2)]) == "_p~iF~ps|U"
    assert encode_polyline([Coordinate(lat=0, lon=0)]) == "??"

    try:
        encode_polyline([])
        assert False, "Empty polyline should be rejected"
    except ValueError:
        pass

    print("✓ Single-point polylines work")


def test_polyline_round_trip():
    """Decoding an encoded polyline reproduces coordinates rounded to 1e-5."""
    print("\n=== Testing Polyline Round Trip ===")

    rng = random.Random(20161118)
    for _ in range(50):
        count = rng.randint(1, 40)
        points = [
            Coordinate(
                lat=round(rng.uniform(-90, 90), 5),
                lon=round(rng.uniform(-180, 180), 5),
            )
            for _ in range(count)
        ]
        decoded = decode_polyline(encode_polyline(points))
        assert len(decoded) == len(points)
        for original, result in zip(points, decoded):
            assert result.lat == original.lat
            assert result.lon == original.lon

    print("✓ Polyline round trip is exact")


def test_percent_encoding():
    """Test both allowed character sets."""
    print("\n=== Testing Percent Encoding ===")

    # Non-ASCII is encoded byte-wise from UTF-8 with uppercase hex
    assert percent_encode("café", PATH_SAFE) == "caf%C3%A9"
    assert percent_encode("東京", PATH_SAFE) == "%E6%9D%B1%E4%BA%AC"

    # "/" and ")" are always escaped inside overlay tokens; "(" is kept
    assert percent_encode("a/b(c)d", PATH_SAFE) == "a%2Fb(c%29d"
    assert (
        percent_encode("https://mapbox.com/guides/img/rocket.png", PATH_SAFE)
        == "https:%2F%2Fmapbox.com%2Fguides%2Fimg%2Frocket.png"
    )
    assert percent_encode('{"a": [1]}', PATH_SAFE) == "%7B%22a%22:%20%5B1%5D%7D"
    assert percent_encode("#?`", PATH_SAFE) == "%23%3F%60"

    # Legacy query set keeps ")" and "?" but still escapes "/"
    assert percent_encode("a/b(c)d?e", LEGACY_QUERY_SAFE) == "a%2Fb(c)d?e"

    print("✓ Percent encoding matches")


def test_percent_encoding_safe_strings_unchanged():
    """Strings made only of allowed characters pass through unchanged."""
    print("\n=== Testing Percent Encoding of Safe Strings ===")

    safe = "AZaz09-._~!$&'(*+,;=:@"
    assert percent_encode(safe, PATH_SAFE) == safe
    assert percent_encode("upztG", PATH_SAFE) == "upztG"

    legacy_safe = "AZaz09-._~!$&'()*+,;=:@?"
    assert percent_encode(legacy_safe, LEGACY_QUERY_SAFE) == legacy_safe

    print("✓ Safe strings are untouched")


def test_number_formatting():
    """Test number rendering in path components."""
    print("\n=== Testing Number Formatting ===")

    assert format_number(0) == "0"
    assert format_number(0.0) == "0"
    assert format_number(-0.0) == "0"
    assert format_number(6.0) == "6"
    assert format_number(45.52) == "45.52"
    assert format_number(-122.681944) == "-122.681944"
    assert format_number(0.75) == "0.75"

    # Small magnitudes stay in positional notation
    assert format_number(0.00005) == "0.00005"
    assert format_number(-1e-07) == "-0.0000001"
    assert format_number(1.23e-05) == "0.0000123"
    assert "e" not in format_number(-122.00000001)

    assert round_half_away_from_zero(2.5) == 3
    assert round_half_away_from_zero(-2.5) == -3
    assert round_half_away_from_zero(-24.05) == -24

    print("✓ Numbers format correctly")


def run_all_tests():
    """Run all codec tests."""
    print("\n" + "=" * 60)
    print("CODECS - COMPREHENSIVE TEST SUITE")
    print("=" * 60)

    test_color_to_hex()
    test_color_from_hex()
    test_color_round_trip()
    test_polyline_known_encoding()
    test_polyline_single_point()
    test_polyline_round_trip()
    test_percent_encoding()
    test_percent_encoding_safe_strings_unchanged()
    test_number_formatting()

    print("\n" + "=" * 60)
    print("✅ ALL CODEC TESTS PASSED!")
    print("=" * 60)


if __name__ == "__main__":
    run_all_tests()
