"""
Kartfunktioner för visualisering och kartahändelser
"""

import folium
from typing import List, Optional, Sequence, Tuple

from config import DEFAULT_ZOOM, FIT_BOUNDS_PADDING
from models import Coordinate, InvalidCoordinate, PointAdded
from utils import calculate_bounds, format_distance


def create_map(
    center: List[float],
    points: Sequence[Coordinate] = (),
    total_distance: float = 0.0
) -> folium.Map:
    """
    Skapa Folium-karta med rutt och flyttbara markörer

    Args:
        center: Kartans centrum [lat, lon]
        points: Ruttens punkter i ordning
        total_distance: Ruttens distans i meter

    Returns:
        Folium Map-objekt
    """
    m = folium.Map(
        location=center,
        zoom_start=DEFAULT_ZOOM,
        control_scale=True,
        tiles="OpenStreetMap"
    )

    route_coords = [p.as_list() for p in points]

    # Rita rutt
    if route_coords:
        km, mi = format_distance(total_distance)
        folium.PolyLine(
            route_coords,
            color="#2563eb",
            weight=5,
            opacity=0.9,
            tooltip=f"{km} km · {mi} mi"
        ).add_to(m)

    # Markörer, numrerade från 1. st_folium rapporterar inte dragningar,
    # så punkter flyttas via formuläret i sidopanelen
    for i, point in enumerate(points):
        folium.Marker(
            point.as_list(),
            popup=f"Waypoint #{i + 1}<br>{point.lat:.6f}, {point.lon:.6f}<br>Flytta via 'Flytta waypoint'",
            tooltip=f"#{i + 1}",
            draggable=False,
            icon=folium.Icon(color="blue", icon="circle", prefix="fa")
        ).add_to(m)

    # Anpassa zoom för att visa hela rutten
    if route_coords:
        m.fit_bounds(calculate_bounds(points), padding=FIT_BOUNDS_PADDING)

    return m


def click_event(
    map_state: Optional[dict],
    last_handled: Optional[Tuple[float, float]]
) -> Tuple[Optional[PointAdded], Optional[Tuple[float, float]]]:
    """
    Översätt st_folium-resultatet till en PointAdded-händelse

    st_folium returnerar samma last_clicked vid varje omritning, så samma
    klick får bara ge en punkt en gång.

    Args:
        map_state: Returvärdet från st_folium
        last_handled: Senast hanterade klick (lat, lng)

    Returns:
        (händelse eller None, klick att spara som senast hanterat)
    """
    clicked = (map_state or {}).get("last_clicked")
    if not clicked:
        return None, last_handled

    key = (clicked.get("lat"), clicked.get("lng"))
    if key == last_handled:
        return None, last_handled

    try:
        return PointAdded(Coordinate.of(clicked)), key
    except InvalidCoordinate:
        # Klick utanför kartans världsbild (t.ex. lng > 180 efter panorering)
        return None, key
