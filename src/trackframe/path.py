#!/usr/bin/env python3
"""
Path resolution for tracks.

A track's drawable path comes from the first source that yields one:

1. the recorded ``route`` ({lat, lng} samples),
2. the recorded ``coordinates`` (GeoJSON-order pairs or location objects),
3. a path synthesized from the start/end anchors.

The synthesized path only gives the map something plausible to frame and
draw; it says nothing about the way actually travelled.
"""

from enum import Enum
from typing import Any, List, NamedTuple, Optional
import logging

from .config import TrackframeConfig
from .geometry import GeoPoint, Path, midpoint, offset_point
from .location import extract_pair, extract_point, extract_route_point
from .models import Track

logger = logging.getLogger(__name__)


class PathSource(Enum):
    """Enumeration of the rules a path can be resolved from."""

    ROUTE = "route"
    COORDINATES = "coordinates"
    ANCHORS = "anchors"
    START_LOOP = "start_loop"
    NONE = "none"

    def __str__(self) -> str:
        return self.value

    @property
    def is_synthesized(self) -> bool:
        return self in (PathSource.ANCHORS, PathSource.START_LOOP)


class ResolvedPath(NamedTuple):
    """A resolved path together with the rule that produced it."""

    points: Path
    source: PathSource


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and not hasattr(value, "_fields")


def _entries(trajectory: Any) -> List[Any]:
    if _is_array(trajectory):
        return list(trajectory)
    return []


def path_from_route(route: Any) -> Optional[Path]:
    """
    Map recorded {lat, lng} entries to points, preserving order.

    Entries without a usable position are dropped.

    Returns:
        The path, or None if fewer than two entries resolve
    """
    entries = _entries(route)
    if len(entries) < 2:
        return None

    points = [
        p for p in (extract_route_point(entry) for entry in entries) if p is not None
    ]
    if len(points) < 2:
        logger.debug(
            f"Route has {len(entries)} entries but only {len(points)} usable positions"
        )
        return None
    return points


def path_from_coordinates(coordinates: Any) -> Optional[Path]:
    """
    Map a recorded coordinates field to points, preserving order.

    Arrays are read as GeoJSON-order [longitude, latitude] pairs; a short or
    malformed array is dropped, never read as a location object. Anything
    else goes through extract_point. Entries that do not resolve are dropped.

    Returns:
        The path, or None if there are fewer than two entries or none resolve
    """
    entries = _entries(coordinates)
    if len(entries) < 2:
        return None

    points = []
    for entry in entries:
        point = extract_pair(entry) if _is_array(entry) else extract_point(entry)
        if point is not None:
            points.append(point)

    if not points:
        logger.debug(f"None of {len(entries)} coordinate entries resolved")
        return None
    return points


def path_between(
    start: GeoPoint, end: GeoPoint, config: Optional[TrackframeConfig] = None
) -> Path:
    """
    Synthesize a three-point path from start to end.

    The middle point is the midpoint shifted north by the configured offset,
    so the line renders visibly curved.
    """
    config = config or TrackframeConfig()
    bend = offset_point(midpoint(start, end), config.midpoint_offset, 0.0)
    return [start, bend, end]


def loop_around(start: GeoPoint, config: Optional[TrackframeConfig] = None) -> Path:
    """
    Synthesize a closed loop through the four cardinal offsets of start.

    Returns:
        Six points: start, north, east, south, west, start
    """
    config = config or TrackframeConfig()
    r = config.loop_radius
    return [
        start,
        offset_point(start, r, 0.0),
        offset_point(start, 0.0, r),
        offset_point(start, -r, 0.0),
        offset_point(start, 0.0, -r),
        start,
    ]


def resolve_path(
    track: Any, config: Optional[TrackframeConfig] = None
) -> ResolvedPath:
    """
    Resolve a track's path and report which rule produced it.

    Args:
        track: Track object or a raw track mapping
        config: Offsets used when synthesizing from anchors

    Returns:
        ResolvedPath with the ordered points and their PathSource
    """
    track = Track.from_dict(track)

    points = path_from_route(track.route)
    if points is not None:
        logger.debug(f"Using recorded route with {len(points)} points")
        return ResolvedPath(points, PathSource.ROUTE)

    points = path_from_coordinates(track.coordinates)
    if points is not None:
        logger.debug(f"Using recorded coordinates with {len(points)} points")
        return ResolvedPath(points, PathSource.COORDINATES)

    start = extract_point(track.start_anchor)
    end = extract_point(track.end_location)

    if start is not None and end is not None:
        logger.debug(f"Synthesizing path between anchors {start} and {end}")
        return ResolvedPath(path_between(start, end, config), PathSource.ANCHORS)

    if start is not None:
        logger.debug(f"Synthesizing loop around start anchor {start}")
        return ResolvedPath(loop_around(start, config), PathSource.START_LOOP)

    logger.debug("No path could be resolved for track")
    return ResolvedPath([], PathSource.NONE)


def synthesize_path(track: Any, config: Optional[TrackframeConfig] = None) -> Path:
    """Return the canonical ordered path for a track."""
    return resolve_path(track, config).points
