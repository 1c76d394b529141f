#!/usr/bin/env python3
"""
Track data model as delivered by the track API, plus GPX and JSON loaders.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, NamedTuple, Optional, TextIO
import json
import logging
import gpxpy
import gpxpy.gpx

from .geometry import GeoPoint, coerce_number
from .location import extract_route_point, get_field

logger = logging.getLogger(__name__)


class RoutePoint(NamedTuple):
    """A recorded route sample: its position and optional sensor readings."""

    position: GeoPoint
    speed: Optional[float] = None  # m/s
    altitude: Optional[float] = None  # meters
    timestamp: Any = None


def _field(record: Mapping, camel: str, snake: str) -> Any:
    value = record.get(camel)
    if value is None:
        value = record.get(snake)
    return value


@dataclass(frozen=True)
class Track:
    """
    A read-only track record.

    Location and trajectory fields hold the raw values exactly as the API
    delivered them; they are resolved lazily by the path and viewport code.
    """

    start_location: Any = None
    location: Any = None
    end_location: Any = None
    route: Any = None
    coordinates: Any = None
    city: Optional[str] = None

    @property
    def start_anchor(self) -> Any:
        """Raw start location, falling back to the generic location field."""
        if self.start_location is not None:
            return self.start_location
        return self.location

    def route_points(self) -> List[RoutePoint]:
        """
        Resolve the recorded route entries that carry a usable position.

        Returns:
            List of RoutePoint objects in recorded order; empty if the track
            has no route or the route is not a list
        """
        if not isinstance(self.route, (list, tuple)):
            return []

        points = []
        for entry in self.route:
            position = extract_route_point(entry)
            if position is None:
                continue
            points.append(
                RoutePoint(
                    position=position,
                    speed=coerce_number(get_field(entry, "speed")),
                    altitude=coerce_number(get_field(entry, "altitude")),
                    timestamp=get_field(entry, "timestamp"),
                )
            )
        return points

    @classmethod
    def from_dict(cls, record: Any) -> "Track":
        """
        Build a Track from an API record.

        Both the API's camelCase keys and snake_case keys are accepted.
        Unknown keys are ignored and a record that is not a mapping yields an
        empty Track.

        Args:
            record: Decoded JSON object describing a track

        Returns:
            Track object
        """
        if isinstance(record, Track):
            return record
        if not isinstance(record, Mapping):
            logger.debug(f"Ignoring non-mapping track record of type {type(record)}")
            return cls()

        city = record.get("city")
        return cls(
            start_location=_field(record, "startLocation", "start_location"),
            location=record.get("location"),
            end_location=_field(record, "endLocation", "end_location"),
            route=record.get("route"),
            coordinates=record.get("coordinates"),
            city=city if isinstance(city, str) else None,
        )

    @classmethod
    def from_json_file(cls, filename: str) -> "Track":
        """
        Load a track record saved as a JSON document.

        Args:
            filename: Path to the JSON file

        Returns:
            Track object

        Raises:
            FileNotFoundError: If file doesn't exist.
            PermissionError: If file can't be read.
            json.JSONDecodeError: If the file is not valid JSON.
            ValueError: If the document is not a JSON object.
        """
        logger.debug(f"Reading track record: {filename}")
        with open(filename, "r", encoding="utf-8") as f:
            record = json.load(f)
        if not isinstance(record, dict):
            raise ValueError(
                f"Track file must contain a JSON object, got {type(record).__name__}"
            )
        return cls.from_dict(record)

    @classmethod
    def from_gpx(cls, file_input: TextIO) -> "Track":
        """
        Parse a GPX file and concatenate all tracks/segments into one route.

        Start and end locations are set from the first and last points as
        GeoJSON points, the way the track API stores them.

        Args:
            file_input: File-like object containing GPX data

        Returns:
            Track object

        Raises:
            gpxpy.gpx.GPXException: If GPX file is malformed.
        """
        gpx_data = gpxpy.parse(file_input)

        route = []
        for gpx_track in gpx_data.tracks:
            for segment in gpx_track.segments:
                for point in segment.points:
                    route.append(
                        {
                            "lat": point.latitude,
                            "lng": point.longitude,
                            "speed": point.speed,
                            "altitude": point.elevation,
                            "timestamp": _isoformat(point.time),
                        }
                    )

        logger.debug(f"Parsed {len(route)} track points from GPX file")

        if not route:
            return cls()

        return cls(
            start_location={
                "type": "Point",
                "coordinates": [route[0]["lng"], route[0]["lat"]],
            },
            end_location={
                "type": "Point",
                "coordinates": [route[-1]["lng"], route[-1]["lat"]],
            },
            route=route,
        )

    @classmethod
    def from_gpx_file(cls, filename: str) -> "Track":
        """
        Load and parse a GPX file into a track.

        Raises:
            FileNotFoundError: If file doesn't exist.
            PermissionError: If file can't be read.
            gpxpy.gpx.GPXException: If GPX file is malformed.
        """
        logger.debug(f"Reading GPX file: {filename}")
        with open(filename, "r", encoding="utf-8") as f:
            return cls.from_gpx(f)

    @classmethod
    def from_file(cls, filename: str) -> "Track":
        """Load a track from a GPX file or, for any other extension, JSON."""
        if filename.lower().endswith(".gpx"):
            return cls.from_gpx_file(filename)
        return cls.from_json_file(filename)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None
