"""
Google encoded polyline algorithm at precision 1e5.

See https://developers.google.com/maps/documentation/utilities/polylinealgorithm
The output must match the service bit for bit, so the first point is encoded
as absolute latitude/longitude and every later point as the difference from
its predecessor, rounded after scaling.
"""

from typing import Iterable, Sequence

from ..models.geometry import Coordinate
from .numbers import round_half_away_from_zero

PRECISION = 1e5


def _encode_value(value: float) -> str:
    """Encode one scalar (in degrees)."""
    c = round_half_away_from_zero(value * PRECISION)
    c = c << 1
    if c < 0:
        c = ~c

    chunks = []
    while c >= 0x20:
        chunks.append(chr((0x20 | (c & 0x1F)) + 63))
        c >>= 5
    chunks.append(chr(c + 63))
    return "".join(chunks)


def encode_polyline(coordinates: Sequence[Coordinate]) -> str:
    """
    Encode an ordered sequence of coordinates.

    Args:
        coordinates: At least one coordinate

    Returns:
        ASCII polyline string (not yet percent-encoded)
    """
    if not coordinates:
        raise ValueError("At least one coordinate is required to encode a polyline")

    first = coordinates[0]
    output = [_encode_value(first.lat), _encode_value(first.lon)]

    for previous, current in zip(coordinates, coordinates[1:]):
        output.append(_encode_value(current.lat - previous.lat))
        output.append(_encode_value(current.lon - previous.lon))

    return "".join(output)


def _decode_values(encoded: str) -> Iterable[int]:
    """Yield the scaled integer values stored in an encoded polyline."""
    index = 0
    length = len(encoded)
    while index < length:
        result = 0
        shift = 0
        while True:
            if index >= length:
                raise ValueError("Truncated polyline")
            b = ord(encoded[index]) - 63
            index += 1
            result |= (b & 0x1F) << shift
            shift += 5
            if b < 0x20:
                break
        yield ~(result >> 1) if result & 1 else result >> 1


def decode_polyline(encoded: str) -> list[Coordinate]:
    """Decode a polyline produced by encode_polyline."""
    values = list(_decode_values(encoded))
    if len(values) % 2:
        raise ValueError("Polyline has an odd number of values")

    coordinates = []
    lat = lon = 0
    for i in range(0, len(values), 2):
        lat += values[i]
        lon += values[i + 1]
        coordinates.append(Coordinate(lat=lat / PRECISION, lon=lon / PRECISION))
    return coordinates
