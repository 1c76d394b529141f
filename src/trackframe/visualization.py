#!/usr/bin/env python3
"""
Track visualization using folium maps.
"""

from typing import List, Optional, Tuple
import html
import logging
import folium
from folium.template import Template

from .frame import TrackFrame
from .geometry import GeoPoint
from .models import RoutePoint
from .path import PathSource

logger = logging.getLogger(__name__)

ROUTE_COLOR = "#2E86AB"
SLOW_COLOR = "#4CAF50"
MEDIUM_COLOR = "#FFC107"
FAST_COLOR = "#FF5722"


class TrackLegend(folium.MacroElement):
    """Legend describing the path source and, for recorded routes, speed colours."""

    def __init__(self, frame: TrackFrame, speed_colored: bool):
        super().__init__()
        self.source = str(frame.source)
        self.synthesized = frame.source.is_synthesized
        self.point_count = len(frame.path)
        self.speed_colored = speed_colored
        self.route_color = ROUTE_COLOR
        self.slow_color = SLOW_COLOR
        self.medium_color = MEDIUM_COLOR
        self.fast_color = FAST_COLOR

        self._template = Template(
            """
        {% macro html(this, kwargs) %}
        <div id="track-legend" style="
            position: fixed;
            bottom: 50px;
            left: 50px;
            width: 230px;
            background-color: white;
            border: 2px solid grey;
            z-index: 9999;
            font-size: 13px;
            padding: 12px;
            font-family: Arial, sans-serif;
            border-radius: 5px;
            box-shadow: 0 2px 5px rgba(0,0,0,0.2);
            box-sizing: border-box;
        ">
            <b>Legend</b><br>
            {% if this.speed_colored %}
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: {{ this.slow_color }}; font-weight: bold; font-size: 18px;">&mdash;</span>
                up to 30 km/h
            </div>
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: {{ this.medium_color }}; font-weight: bold; font-size: 18px;">&mdash;</span>
                30-60 km/h
            </div>
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: {{ this.fast_color }}; font-weight: bold; font-size: 18px;">&mdash;</span>
                over 60 km/h
            </div>
            {% else %}
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: {{ this.route_color }}; font-weight: bold; font-size: 18px;">&mdash;</span>
                {% if this.synthesized %}Approximate path{% else %}Recorded path{% endif %}
                ({{ this.point_count }} points)
            </div>
            {% endif %}
            <div style="margin: 4px 0; line-height: 1.3; color: grey;">
                Source: {{ this.source }}
            </div>
        </div>
        {% endmacro %}
        """
        )


def speed_color(speed: Optional[float]) -> str:
    """
    Pick the segment colour for a speed in m/s.

    Args:
        speed: Speed in meters per second, or None if unknown

    Returns:
        Hex colour string; unknown speeds use the plain route colour
    """
    if speed is None:
        return ROUTE_COLOR
    speed_kmh = speed * 3.6
    if speed_kmh <= 30:
        return SLOW_COLOR
    if speed_kmh <= 60:
        return MEDIUM_COLOR
    return FAST_COLOR


def speed_segments(
    route_points: List[RoutePoint],
) -> List[Tuple[List[List[float]], str]]:
    """
    Split a recorded route into two-point segments coloured by speed.

    Each segment takes the colour of its end sample.

    Returns:
        List of (coordinates, colour) tuples in route order
    """
    segments = []
    for prev, point in zip(route_points, route_points[1:]):
        coords = [
            [prev.position.latitude, prev.position.longitude],
            [point.position.latitude, point.position.longitude],
        ]
        segments.append((coords, speed_color(point.speed)))
    return segments


def _marker_points(frame: TrackFrame) -> Tuple[Optional[GeoPoint], Optional[GeoPoint]]:
    if frame.path:
        return frame.path[0], frame.path[-1]
    return frame.start, frame.end


def create_track_map(
    frame: TrackFrame,
    output_filename: str,
    route_points: Optional[List[RoutePoint]] = None,
) -> None:
    """
    Create an interactive map showing a framed track, save as HTML.

    Args:
        frame: TrackFrame to draw
        output_filename: Path where HTML map file should be saved
        route_points: Recorded route samples; when the path came from the
            route and speeds are known, segments are coloured by speed
    """
    if frame.viewport is None:
        _create_placeholder_map(frame, output_filename)
        return

    south, west, north, east = frame.viewport.bounds()
    center = frame.viewport.center

    logger.debug(
        f"Creating map centered at ({center.latitude:.4f}, {center.longitude:.4f})"
    )

    track_map = folium.Map(location=[center.latitude, center.longitude], tiles=None)

    folium.TileLayer(
        tiles="CartoDB positron",
        attr=(
            "&copy; <a href='https://www.openstreetmap.org/copyright'>OpenStreetMap</a> "
            "contributors &copy; <a href='https://carto.com/attributions'>CARTO</a>"
        ),
        name="Standard",
        control=True,
        show=True,
    ).add_to(track_map)

    folium.TileLayer(
        tiles="https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        attr=(
            "Tiles &copy; Esri &mdash; Source: Esri, i-cubed, USDA, USGS, AEX, GeoEye, "
            "Getmapping, Aerogrid, IGN, IGP, UPR-EGP, and the GIS User Community"
        ),
        name="Satellite",
        control=True,
        show=False,
    ).add_to(track_map)

    folium.LayerControl().add_to(track_map)

    speed_colored = (
        frame.source == PathSource.ROUTE
        and bool(route_points)
        and any(p.speed is not None for p in route_points)
    )

    if speed_colored:
        for coords, color in speed_segments(route_points):
            folium.PolyLine(coords, color=color, weight=4, opacity=0.9).add_to(
                track_map
            )
    elif len(frame.path) > 1:
        coordinates = [[pos.latitude, pos.longitude] for pos in frame.path]
        line_style = {"dash_array": "6 8"} if frame.source.is_synthesized else {}
        folium.PolyLine(
            coordinates,
            color=ROUTE_COLOR,
            weight=3,
            opacity=0.7,
            popup=f"Path ({frame.source})",
            **line_style,
        ).add_to(track_map)

    start, end = _marker_points(frame)
    if start is not None:
        folium.Marker(
            [start.latitude, start.longitude],
            popup="Start",
            icon=folium.Icon(color="green", icon="play"),
        ).add_to(track_map)
    if end is not None and end != start:
        folium.Marker(
            [end.latitude, end.longitude],
            popup="End",
            icon=folium.Icon(color="red", icon="stop"),
        ).add_to(track_map)

    track_map.add_child(TrackLegend(frame, speed_colored))

    track_map.fit_bounds([[south, west], [north, east]])

    track_map.save(output_filename)

    logger.debug(
        f"Map saved to {output_filename} with {len(frame.path)} path points from {frame.source}"
    )


def _create_placeholder_map(frame: TrackFrame, output_filename: str) -> None:
    """Write a world map carrying only the placeholder label."""
    label = frame.placeholder or "Unknown location"
    track_map = folium.Map(location=[0.0, 0.0], zoom_start=2, tiles="CartoDB positron")
    track_map.get_root().html.add_child(
        folium.Element(
            f'<div id="track-placeholder" style="position: fixed; top: 20px; '
            f"left: 50%; transform: translateX(-50%); z-index: 9999; "
            f"background-color: white; padding: 8px 16px; border-radius: 5px; "
            f'font-family: Arial, sans-serif;">{html.escape(label)}</div>'
        )
    )
    track_map.save(output_filename)
    logger.debug(f"No viewport for track, placeholder map saved to {output_filename}")
