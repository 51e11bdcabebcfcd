"""
Hjälpfunktioner för ruttritaren: avstånd, formatering och GPX-export
"""

import logging
import math
import gpxpy
import gpxpy.gpx
from typing import List, Sequence, Tuple

from config import (
    EARTH_RADIUS_M,
    METERS_PER_MILE,
    DISTANCE_HINT_STEP,
    GPX_CREATOR,
    GPX_TRACK_NAME,
)
from models import Coordinate, RouteTooShort

logger = logging.getLogger(__name__)


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """
    Storcirkelavstånd mellan två punkter (Haversine formula)

    Args:
        a: Första punkten
        b: Andra punkten

    Returns:
        Avstånd i meter
    """
    lat1, lon1 = math.radians(a.lat), math.radians(a.lon)
    lat2, lon2 = math.radians(b.lat), math.radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = math.sin(dlat/2)**2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon/2)**2
    # Avrundningsfel kan ge h strax över 1 för antipodala punkter
    c = 2 * math.asin(math.sqrt(min(1.0, h)))

    return EARTH_RADIUS_M * c


def calculate_distance_from_points(points: Sequence[Coordinate]) -> float:
    """
    Beräkna total distans längs en lista av punkter

    Args:
        points: Punkter i ruttordning

    Returns:
        Total distans i meter
    """
    if len(points) < 2:
        return 0.0

    total_distance = 0.0
    for i in range(len(points) - 1):
        total_distance += haversine_distance(points[i], points[i+1])

    return total_distance


def format_distance(meters: float) -> Tuple[str, str]:
    """Formatera distans som (km, mi) med två decimaler"""
    return f"{meters / 1000:.2f}", f"{meters / METERS_PER_MILE:.2f}"


def distance_hint(meters: float) -> int:
    """Distans avrundad till närmaste DISTANCE_HINT_STEP meter, för länken"""
    return int(round(meters / DISTANCE_HINT_STEP) * DISTANCE_HINT_STEP)


def calculate_bounds(points: Sequence[Coordinate]) -> List[List[float]]:
    """
    Beräkna [[syd, väst], [nord, öst]] för att anpassa kartans zoom

    Args:
        points: Ruttens punkter (minst en)

    Returns:
        Bounds i folium-format
    """
    if not points:
        raise ValueError("Kan inte beräkna bounds utan punkter")
    return [[min(p.lat for p in points), min(p.lon for p in points)],
            [max(p.lat for p in points), max(p.lon for p in points)]]


def _gpx_number(value: float):
    # Heltal skrivs utan ".0" (lat="0" i stället för lat="0.0")
    if float(value).is_integer():
        return int(value)
    return value


def create_gpx(points: Sequence[Coordinate], name: str = GPX_TRACK_NAME) -> str:
    """
    Skapa GPX 1.1-fil från ruttens punkter

    Koordinaterna skrivs med full precision och utan tidsstämplar så att
    samma rutt alltid ger exakt samma dokument.

    Args:
        points: Ruttens punkter i ordning
        name: Namn på spåret

    Returns:
        GPX som sträng

    Raises:
        RouteTooShort: om rutten har färre än två punkter
    """
    if len(points) < 2:
        raise RouteTooShort(f"GPX kräver minst två punkter, rutten har {len(points)}")

    gpx = gpxpy.gpx.GPX()
    gpx.creator = GPX_CREATOR

    # Skapa track
    gpx_track = gpxpy.gpx.GPXTrack()
    gpx_track.name = name
    gpx.tracks.append(gpx_track)

    # Skapa segment
    gpx_segment = gpxpy.gpx.GPXTrackSegment()
    gpx_track.segments.append(gpx_segment)

    # Lägg till punkter, höjd alltid 0
    for point in points:
        gpx_point = gpxpy.gpx.GPXTrackPoint(
            _gpx_number(point.lat),
            _gpx_number(point.lon),
            elevation=0
        )
        gpx_segment.points.append(gpx_point)

    logger.debug("GPX skapad med %d punkter", len(points))
    return gpx.to_xml(version="1.1")
