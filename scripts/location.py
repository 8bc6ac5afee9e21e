# Derive the capture location from GPS tags

import math
from typing import NamedTuple

from scripts.config import COORDINATE_DECIMALS

LATITUDE_TAG = "GPSLatitude"
LONGITUDE_TAG = "GPSLongitude"


class Coordinate(NamedTuple):
    latitude: float
    longitude: float


def _parse_degrees(record, limit):
    if record is None or not record.description:
        return None
    try:
        value = float(record.description)
    except ValueError:
        return None
    if not math.isfinite(value) or abs(value) > limit:
        return None
    return value


def resolve_location(snapshot):
    """Return the capture coordinate, or None when either axis is missing or unparseable."""
    if snapshot is None:
        return None
    lat = _parse_degrees(snapshot.get(LATITUDE_TAG), 90.0)
    lon = _parse_degrees(snapshot.get(LONGITUDE_TAG), 180.0)
    if lat is None or lon is None:
        return None
    return Coordinate(lat, lon)


def format_coordinate(coord):
    return f"{coord.latitude:.{COORDINATE_DECIMALS}f}, {coord.longitude:.{COORDINATE_DECIMALS}f}"
