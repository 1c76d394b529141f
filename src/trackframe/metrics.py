"""
Module for collecting and logging metrics about a framed track.
"""

from typing import Dict, NamedTuple
import logging

from .config import TrackframeConfig
from .frame import TrackFrame
from .models import Track

logger = logging.getLogger(__name__)


class FrameMetrics(NamedTuple):
    """Container for track framing metrics data."""

    path_source: str
    path_points: int
    route_entries: int
    speed_samples: int
    anchors: Dict[str, bool]
    latitude_span: float
    longitude_span: float


def collect_metrics(track: Track, frame: TrackFrame) -> FrameMetrics:
    """
    Collect metrics from a track and its frame before creating the map.

    Args:
        track: The input Track
        frame: The TrackFrame computed for it

    Returns:
        FrameMetrics containing all collected metrics
    """
    route_points = track.route_points()
    route = track.route if isinstance(track.route, (list, tuple)) else []
    viewport = frame.viewport

    return FrameMetrics(
        path_source=str(frame.source),
        path_points=len(frame.path),
        route_entries=len(route),
        speed_samples=sum(1 for p in route_points if p.speed is not None),
        anchors={"start": frame.start is not None, "end": frame.end is not None},
        latitude_span=viewport.latitude_span if viewport else 0.0,
        longitude_span=viewport.longitude_span if viewport else 0.0,
    )


def log_metrics(metrics: FrameMetrics, config: TrackframeConfig) -> None:
    """
    Log detailed metrics after creating the map.

    Args:
        metrics: FrameMetrics containing collected metrics
        config: TrackframeConfig holding the metrics flag
    """
    if not config.metrics:
        return

    logger.debug("=== TRACKFRAME_METRICS ===")
    logger.debug(f"path_source={metrics.path_source}")
    logger.debug(f"path_points={metrics.path_points}")
    logger.debug(f"route_entries={metrics.route_entries}")
    logger.debug(f"speed_samples={metrics.speed_samples}")
    for name, present in metrics.anchors.items():
        logger.debug(f"anchor[{name}]={int(present)}")
    logger.debug(f"latitude_span={metrics.latitude_span:.6f}")
    logger.debug(f"longitude_span={metrics.longitude_span:.6f}")
    logger.debug("=== END_TRACKFRAME_METRICS ===")
