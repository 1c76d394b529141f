"""
Normalization of location-like fields into GeoPoint values.

Track records carry locations as GeoJSON points, loose objects exposing
some spelling of latitude/longitude, raw [longitude, latitude] pairs, or not
at all. Every function here resolves one such value to a GeoPoint or None
and never raises on malformed input.
"""

from collections.abc import Mapping
from typing import Any, Optional, Tuple
import logging

from .geometry import GeoPoint, make_point

logger = logging.getLogger(__name__)

LATITUDE_FIELDS: Tuple[str, ...] = ("latitude", "lat")
LONGITUDE_FIELDS: Tuple[str, ...] = ("longitude", "lng", "long")

_PRIMITIVES = (str, bytes, bytearray, int, float, complex)


def get_field(raw: Any, name: str) -> Any:
    """Read a named field from a mapping or an attribute-bearing object."""
    if isinstance(raw, Mapping):
        return raw.get(name)
    return getattr(raw, name, None)


def first_present(raw: Any, names: Tuple[str, ...]) -> Any:
    """Return the first field among names whose value is not None."""
    for name in names:
        value = get_field(raw, name)
        if value is not None:
            return value
    return None


def is_pair(raw: Any) -> bool:
    """Check whether raw is a coordinate pair (list or tuple of length >= 2)."""
    # Named tuples such as GeoPoint carry their own field names
    if hasattr(raw, "_fields"):
        return False
    return isinstance(raw, (list, tuple)) and len(raw) >= 2


def is_geojson_point(raw: Any) -> bool:
    """Check whether raw is a GeoJSON Point with at least two coordinates."""
    if raw is None or isinstance(raw, _PRIMITIVES):
        return False
    return get_field(raw, "type") == "Point" and is_pair(
        get_field(raw, "coordinates")
    )


def extract_pair(pair: Any) -> Optional[GeoPoint]:
    """
    Resolve a GeoJSON-order [longitude, latitude] pair.

    Args:
        pair: List or tuple whose first two items are longitude and latitude

    Returns:
        GeoPoint with the axes swapped into (latitude, longitude) order, or
        None if the pair is malformed
    """
    if not is_pair(pair):
        return None
    return make_point(latitude=pair[1], longitude=pair[0])


def extract_point(raw: Any) -> Optional[GeoPoint]:
    """
    Normalize a single location-like value into a GeoPoint.

    Resolution order, first match wins:

    1. GeoJSON Point: ``{"type": "Point", "coordinates": [lon, lat, ...]}``.
       GeoJSON stores longitude first, so the axes are swapped.
    2. Any other object: latitude from ``latitude`` then ``lat``, longitude
       from ``longitude`` then ``lng`` then ``long``. A missing field
       defaults to 0, so an object without any location fields resolves to
       (0, 0).
    3. None and primitives resolve to None.

    A value that is present but not a finite, in-range number makes the
    input malformed and yields None.

    Args:
        raw: The raw location value

    Returns:
        GeoPoint or None
    """
    if raw is None or isinstance(raw, _PRIMITIVES):
        return None

    if is_geojson_point(raw):
        return extract_pair(get_field(raw, "coordinates"))

    latitude = first_present(raw, LATITUDE_FIELDS)
    longitude = first_present(raw, LONGITUDE_FIELDS)
    point = make_point(
        latitude=0 if latitude is None else latitude,
        longitude=0 if longitude is None else longitude,
    )
    if point is None:
        logger.debug(f"Discarding malformed location: {raw!r}")
    return point


def extract_route_point(entry: Any) -> Optional[GeoPoint]:
    """
    Resolve a recorded route entry of the form ``{"lat": ..., "lng": ...}``.

    Route entries are already in (latitude, longitude) order. Unlike
    extract_point, missing coordinates are not defaulted to 0.
    """
    if entry is None or isinstance(entry, _PRIMITIVES):
        return None
    return make_point(
        latitude=get_field(entry, "lat"), longitude=get_field(entry, "lng")
    )
