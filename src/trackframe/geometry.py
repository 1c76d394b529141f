"""
Geographic value types and small coordinate helpers.

This module provides the canonical point type used throughout trackframe,
range checks for raw coordinate values, and a bounding box helper built on
Shapely.
"""

from typing import Any, List, NamedTuple, Optional, Sequence, Tuple
import math
from shapely.geometry import MultiPoint


class GeoPoint(NamedTuple):
    """Represents a geographic position with latitude and longitude."""

    latitude: float
    longitude: float


Path = List[GeoPoint]

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0


def coerce_number(value: Any) -> Optional[float]:
    """
    Convert a raw numeric value to a finite float.

    Numbers and numeric strings are accepted. Booleans, containers and
    anything else that does not read as a finite number yield None.

    Args:
        value: Raw value taken from an input record

    Returns:
        The value as a float, or None if it is not a usable number
    """
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None

    if not math.isfinite(number):
        return None
    return number


def make_point(latitude: Any, longitude: Any) -> Optional[GeoPoint]:
    """
    Build a GeoPoint from raw values, or None if either value is unusable.

    Args:
        latitude: Raw latitude value in decimal degrees
        longitude: Raw longitude value in decimal degrees

    Returns:
        GeoPoint if both values are finite numbers within range, otherwise None
    """
    lat = coerce_number(latitude)
    lon = coerce_number(longitude)
    if lat is None or lon is None:
        return None
    if not MIN_LATITUDE <= lat <= MAX_LATITUDE:
        return None
    if not MIN_LONGITUDE <= lon <= MAX_LONGITUDE:
        return None
    return GeoPoint(latitude=lat, longitude=lon)


def offset_point(point: GeoPoint, d_lat: float, d_lon: float) -> GeoPoint:
    """
    Shift a point by the given degree offsets, clamped to valid ranges.

    Args:
        point: Point to shift
        d_lat: Latitude offset in degrees
        d_lon: Longitude offset in degrees

    Returns:
        The shifted GeoPoint
    """
    latitude = min(MAX_LATITUDE, max(MIN_LATITUDE, point.latitude + d_lat))
    longitude = min(MAX_LONGITUDE, max(MIN_LONGITUDE, point.longitude + d_lon))
    return GeoPoint(latitude=latitude, longitude=longitude)


def midpoint(start: GeoPoint, end: GeoPoint) -> GeoPoint:
    """Arithmetic midpoint of two points in degree space."""
    return GeoPoint(
        latitude=(start.latitude + end.latitude) / 2,
        longitude=(start.longitude + end.longitude) / 2,
    )


def calculate_bbox(points: Sequence[GeoPoint]) -> Tuple[float, float, float, float]:
    """
    Calculate the axis-aligned bounding box of a sequence of points.

    Args:
        points: Non-empty sequence of GeoPoint objects

    Returns:
        Tuple of (south, west, north, east) in decimal degrees

    Raises:
        ValueError: If points is empty
    """
    if not points:
        raise ValueError("Cannot calculate a bounding box without points")

    # Shapely works in (x, y) order, i.e. (longitude, latitude)
    min_lon, min_lat, max_lon, max_lat = MultiPoint(
        [(pos.longitude, pos.latitude) for pos in points]
    ).bounds
    return (min_lat, min_lon, max_lat, max_lon)
