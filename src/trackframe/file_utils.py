#!/usr/bin/env python3
"""
Naming of the HTML map written next to a track file.

A track ``ride.gpx`` or ``ride.json`` gets ``ride map.html`` in the same
directory. When that name is taken the map becomes ``ride map (1).html``,
``ride map (2).html`` and so on. The chosen name is claimed by creating an
empty file, so two runs over the same track never write the same map.
"""

from typing import Iterator
import os
import logging

logger = logging.getLogger(__name__)

TRACK_EXTENSIONS = (".gpx", ".json")
MAX_NUMBERED_MAPS = 100


def map_stem(track_filename: str) -> str:
    """Return the map name for a track file, without directory or extension."""
    name = os.path.basename(track_filename)
    lowered = name.lower()
    for extension in TRACK_EXTENSIONS:
        if lowered.endswith(extension):
            name = name[: -len(extension)]
            break
    return f"{name} map"


def map_candidates(track_filename: str) -> Iterator[str]:
    """Yield the plain map path first, then the numbered ones."""
    directory = os.path.dirname(track_filename)
    stem = map_stem(track_filename)
    yield os.path.join(directory, f"{stem}.html")
    for number in range(1, MAX_NUMBERED_MAPS + 1):
        yield os.path.join(directory, f"{stem} ({number}).html")


def generate_output_filename(track_filename: str) -> str:
    """
    Claim a free map filename beside a track file.

    Args:
        track_filename: Path to the GPX file or JSON track record

    Returns:
        Path of the newly created, empty map file

    Raises:
        RuntimeError: If every numbered map name is already in use
        ValueError: If the track's directory does not accept new files
    """
    for candidate in map_candidates(track_filename):
        try:
            # Exclusive create claims the name atomically
            with open(candidate, "x", encoding="utf-8"):
                pass
        except FileExistsError:
            logger.debug(f"Map file {candidate} already exists")
            continue
        except OSError as e:
            logger.error(f"Cannot write a map beside {track_filename}: {e}")
            raise ValueError(f"Cannot create map file {candidate}: {e}") from e
        return candidate

    logger.error(
        f"All {MAX_NUMBERED_MAPS + 1} map names for {track_filename} are taken; "
        f"remove old maps or pass --output"
    )
    raise RuntimeError(f"No free map filename for {track_filename}")
