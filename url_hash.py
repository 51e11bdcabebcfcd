"""
Kodning och avkodning av rutten i URL-fragmentet (#wps=lat,lon|lat,lon&k=v)
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Union
from urllib.parse import parse_qs, urlencode

from config import HASH_PRECISION
from models import Coordinate, InvalidCoordinate, MalformedFragment

logger = logging.getLogger(__name__)

WPS_KEY = "wps"

# "," och "|" lämnas okodade så att länken går att läsa
_SAFE_CHARS = ",|"


def _strip_fragment(fragment: str) -> str:
    """Plocka ut frågedelen ur '#...', '?...', '...' eller en hel URL"""
    if not fragment:
        return ""
    if "#" in fragment:
        fragment = fragment.split("#", 1)[1]
    elif "?" in fragment:
        fragment = fragment.split("?", 1)[1]
    return fragment.strip()


def params_to_fragment(params: Mapping[str, str]) -> str:
    """
    Bygg ett fragment av redan avkodade parametrar (t.ex. sidans query params)

    Args:
        params: Nyckel -> värde

    Returns:
        "#wps=...&td=..." eller "" om params är tom
    """
    if not params:
        return ""
    return "#" + urlencode(list(params.items()), safe=_SAFE_CHARS)


def query_link(fragment: str) -> str:
    """
    Gör om ett fragment till query-form ("?wps=...")

    Servern ser aldrig webbläsarens #-del, så en länk som ska gå att
    öppna i appen måste bära rutten i frågesträngen.
    """
    query = _strip_fragment(fragment)
    return f"?{query}" if query else ""


def _format_point(point: Coordinate) -> str:
    return f"{point.lat:.{HASH_PRECISION}f},{point.lon:.{HASH_PRECISION}f}"


def encode_route_hash(
    points: Sequence[Coordinate],
    extra: Optional[Mapping[str, Union[str, int, float]]] = None
) -> str:
    """
    Bygg ett URL-fragment för rutten

    Args:
        points: Ruttens punkter
        extra: Metadata som läggs till som vanliga parametrar (t.ex. td)

    Returns:
        Fragment som "#wps=41.88674,-87.63139|...&td=5230"
    """
    params = [(WPS_KEY, "|".join(_format_point(p) for p in points))]

    # Sorterade nycklar ger samma fragment för samma indata
    for key in sorted(extra or {}):
        if key == WPS_KEY:
            continue
        value = extra[key]
        if value is None:
            continue
        params.append((key, str(value)))

    return "#" + urlencode(params, safe=_SAFE_CHARS)


def _parse_point(entry: str) -> Coordinate:
    parts = entry.split(",")
    if len(parts) != 2:
        raise MalformedFragment(f"Fel antal värden i {entry!r}")
    # float() godtar "1_0" som 10.0, det gör inte länkformatet
    if "_" in entry:
        raise MalformedFragment(f"Inte numeriskt: {entry!r}")
    try:
        lat = float(parts[0])
        lon = float(parts[1])
    except ValueError:
        raise MalformedFragment(f"Inte numeriskt: {entry!r}")
    try:
        return Coordinate(lat, lon)
    except InvalidCoordinate as e:
        raise MalformedFragment(str(e))


def parse_hash_params(fragment: str) -> Dict[str, str]:
    """
    Läs alla parametrar i fragmentet (första värdet per nyckel)

    Args:
        fragment: URL-fragment, med eller utan '#'

    Returns:
        Dictionary nyckel -> värde
    """
    query = _strip_fragment(fragment)
    if not query:
        return {}
    parsed = parse_qs(query, keep_blank_values=True)
    return {key: values[0] for key, values in parsed.items()}


def parse_route_hash(fragment: str) -> List[Coordinate]:
    """
    Läs waypoints ur wps-parametern

    Felaktiga element hoppas över så att ett delvis giltigt fragment
    ger en delvis rutt.

    Args:
        fragment: URL-fragment, med eller utan '#', eller en hel URL

    Returns:
        Lista med Coordinate (tom om wps saknas)
    """
    wps = parse_hash_params(fragment).get(WPS_KEY, "")
    if not wps:
        return []

    points = []
    for entry in wps.split("|"):
        entry = entry.strip()
        if not entry:
            continue
        try:
            points.append(_parse_point(entry))
        except MalformedFragment as e:
            logger.debug("Hoppar över waypoint: %s", e)

    return points
