"""
End-to-end framing of a track: anchors, path and viewport in one pass.
"""

from typing import Any, NamedTuple, Optional
import logging

from .config import TrackframeConfig
from .geometry import GeoPoint, Path
from .location import extract_point
from .models import Track
from .path import PathSource, resolve_path
from .viewport import Viewport, fit_viewport

logger = logging.getLogger(__name__)


class TrackFrame(NamedTuple):
    """Everything a map surface needs to render one track."""

    start: Optional[GeoPoint]
    end: Optional[GeoPoint]
    path: Path
    source: PathSource
    viewport: Optional[Viewport]
    placeholder: Optional[str]

    @property
    def has_map(self) -> bool:
        return self.viewport is not None


def frame_track(track: Any, config: Optional[TrackframeConfig] = None) -> TrackFrame:
    """
    Run the location, path and viewport stages for one track.

    When the path is empty the viewport centers on whichever anchor
    resolved. When nothing resolves the viewport is None and the track's
    city is returned as the placeholder label.

    Args:
        track: Track object or a raw track mapping
        config: Optional configuration

    Returns:
        TrackFrame
    """
    track = Track.from_dict(track)

    start = extract_point(track.start_anchor)
    end = extract_point(track.end_location)
    points, source = resolve_path(track, config)

    fallback = start if start is not None else end
    viewport = fit_viewport(points, fallback, config)

    if viewport is None:
        logger.debug(f"No location for track, falling back to label {track.city!r}")

    return TrackFrame(
        start=start,
        end=end,
        path=points,
        source=source,
        viewport=viewport,
        placeholder=track.city,
    )
