#!/usr/bin/env python3
"""
Trackframe - path normalization and map viewport fitting for recorded tracks.

This package turns track records whose locations arrive in inconsistent
shapes into a canonical path of points and a map viewport that frames it.
"""
import importlib.metadata

__version__ = importlib.metadata.version("trackframe")

# Import main classes for public API
from .config import TrackframeConfig
from .frame import TrackFrame, frame_track
from .geometry import GeoPoint, Path
from .location import extract_point
from .models import RoutePoint, Track
from .path import PathSource, ResolvedPath, resolve_path, synthesize_path
from .viewport import Viewport, fit_viewport

__all__ = [
    "GeoPoint",
    "Path",
    "PathSource",
    "ResolvedPath",
    "RoutePoint",
    "Track",
    "TrackFrame",
    "TrackframeConfig",
    "Viewport",
    "extract_point",
    "fit_viewport",
    "frame_track",
    "resolve_path",
    "synthesize_path",
]
