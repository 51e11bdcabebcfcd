"""
Geokodning: fritextsökning efter platser via Nominatim
"""

import logging
import streamlit as st
import requests
from typing import List

from config import (
    NOMINATIM_BASE_URL,
    GEOCODE_LIMIT,
    GEOCODE_TIMEOUT,
    USER_AGENT,
    CACHE_TTL,
)
from models import Coordinate, GeocodeCandidate, GeocodeFailure, InvalidCoordinate

logger = logging.getLogger(__name__)


@st.cache_data(ttl=CACHE_TTL)
def search_places(query: str, limit: int = GEOCODE_LIMIT) -> List[GeocodeCandidate]:
    """
    Sök efter en plats eller adress

    Args:
        query: Fritext, t.ex. "Willis Tower, Chicago"
        limit: Max antal träffar

    Returns:
        Träffar i den ordning tjänsten rankar dem (tom lista för tom fråga)

    Raises:
        GeocodeFailure: vid nätverksfel, felstatus eller inga träffar
    """
    query = query.strip()
    if not query:
        return []

    url = f"{NOMINATIM_BASE_URL}/search"
    params = {
        "q": query,
        "format": "jsonv2",
        "addressdetails": 1,
        "limit": limit
    }
    headers = {"Accept": "application/json", "User-Agent": USER_AGENT}

    try:
        response = requests.get(url, params=params, headers=headers, timeout=GEOCODE_TIMEOUT)
    except requests.RequestException as e:
        logger.warning("Geokodning av %r misslyckades: %s", query, e)
        raise GeocodeFailure("Sökningen misslyckades. Försök igen.")

    if response.status_code != 200:
        logger.warning("Geokodning av %r gav HTTP %s", query, response.status_code)
        raise GeocodeFailure(f"Sökningen misslyckades (HTTP {response.status_code}). Försök igen.")

    try:
        data = response.json()
    except ValueError:
        raise GeocodeFailure("Ogiltigt svar från söktjänsten. Försök igen.")

    candidates = []
    for item in data if isinstance(data, list) else []:
        try:
            coordinate = Coordinate(float(item["lat"]), float(item["lon"]))
        except (KeyError, TypeError, ValueError, InvalidCoordinate):
            continue
        label = item.get("display_name") or f"{coordinate.lat:.5f}, {coordinate.lon:.5f}"
        candidates.append(GeocodeCandidate(coordinate=coordinate, label=label))

    if not candidates:
        raise GeocodeFailure(f"Inga träffar för \"{query}\"")

    return candidates


def candidate_title(candidate: GeocodeCandidate) -> str:
    """Första delen av etiketten, t.ex. 'Willis Tower'"""
    return candidate.label.split(",")[0].strip() or "Träff"
