#!/usr/bin/env python3
"""
Viewport fitting: frame a path with padding and zoom clamps.
"""

from typing import NamedTuple, Optional, Sequence, Tuple
import logging

from .config import TrackframeConfig
from .geometry import (
    GeoPoint,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    calculate_bbox,
)

logger = logging.getLogger(__name__)


class Viewport(NamedTuple):
    """A map camera: center point plus latitude/longitude spans in degrees."""

    center: GeoPoint
    latitude_span: float
    longitude_span: float

    def bounds(self) -> Tuple[float, float, float, float]:
        """
        Get the region covered by this viewport.

        Returns:
            Tuple of (south, west, north, east) in decimal degrees, clamped
            to valid coordinate ranges
        """
        half_lat = self.latitude_span / 2
        half_lon = self.longitude_span / 2
        south = max(MIN_LATITUDE, self.center.latitude - half_lat)
        north = min(MAX_LATITUDE, self.center.latitude + half_lat)
        west = max(MIN_LONGITUDE, self.center.longitude - half_lon)
        east = min(MAX_LONGITUDE, self.center.longitude + half_lon)
        return (south, west, north, east)


def fit_span(extent: float, config: TrackframeConfig) -> float:
    """
    Pad one axis extent and clamp it to the configured zoom range.

    A zero extent (all points share the coordinate) is replaced by the
    degenerate span before clamping.
    """
    span = extent * (1 + config.padding_factor)
    if span == 0:
        span = config.degenerate_span
    return min(config.max_span, max(config.min_span, span))


def fit_viewport(
    path: Sequence[GeoPoint],
    single_point_fallback: Optional[GeoPoint] = None,
    config: Optional[TrackframeConfig] = None,
) -> Optional[Viewport]:
    """
    Compute a viewport framing a path.

    Args:
        path: Ordered points to frame; may be empty
        single_point_fallback: Point to center on when path is empty
        config: Padding and span limits (defaults: 15% padding, spans
            clamped to [0.005, 0.1], 0.01 for degenerate and fallback spans)

    Returns:
        Viewport, or None if there is neither a path nor a fallback point
    """
    config = config or TrackframeConfig()

    if path:
        south, west, north, east = calculate_bbox(path)
        center = GeoPoint(latitude=(south + north) / 2, longitude=(west + east) / 2)
        viewport = Viewport(
            center=center,
            latitude_span=fit_span(north - south, config),
            longitude_span=fit_span(east - west, config),
        )
        logger.debug(
            f"Fitted viewport centered at ({center.latitude:.5f}, {center.longitude:.5f}) "
            f"with spans ({viewport.latitude_span:.5f}, {viewport.longitude_span:.5f})"
        )
        return viewport

    if single_point_fallback is not None:
        logger.debug(f"Empty path, centering on fallback point {single_point_fallback}")
        return Viewport(
            center=single_point_fallback,
            latitude_span=config.fallback_span,
            longitude_span=config.fallback_span,
        )

    return None
