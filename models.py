"""
Datamodeller och fel för ruttritaren
"""

import math
from dataclasses import dataclass
from typing import Optional


class RouteError(Exception):
    """Basklass för alla fel i ruttkärnan"""


class InvalidCoordinate(RouteError, ValueError):
    """Latitud/longitud utanför giltigt intervall"""


class IndexOutOfRange(RouteError, IndexError):
    """Index pekar inte på någon waypoint"""


class MalformedFragment(RouteError, ValueError):
    """Ett #wps-element gick inte att tolka (släpps vid avkodning)"""


class RouteTooShort(RouteError):
    """Rutten har för få punkter för att exporteras"""


class GeocodeFailure(RouteError):
    """Platssökningen misslyckades eller gav inga träffar"""


def validate_coordinates(lat: float, lon: float) -> bool:
    """
    Validera att koordinater är giltiga

    Args:
        lat: Latitud
        lon: Longitud

    Returns:
        True om koordinaterna är ändliga och inom giltigt intervall
    """
    try:
        lat, lon = float(lat), float(lon)
    except (TypeError, ValueError):
        return False
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90 <= lat <= 90 and -180 <= lon <= 180


@dataclass(frozen=True)
class Coordinate:
    """En geografisk punkt i decimalgrader"""
    lat: float
    lon: float

    def __post_init__(self):
        try:
            lat = float(self.lat)
            lon = float(self.lon)
        except (TypeError, ValueError):
            raise InvalidCoordinate(f"Ogiltig koordinat: {self.lat!r}, {self.lon!r}")
        if not validate_coordinates(lat, lon):
            raise InvalidCoordinate(
                f"Koordinaten {lat}, {lon} ligger utanför [-90, 90] / [-180, 180]"
            )
        object.__setattr__(self, "lat", lat)
        object.__setattr__(self, "lon", lon)

    @classmethod
    def of(cls, value) -> "Coordinate":
        """Skapa från Coordinate, (lat, lon)-par eller dict med lat/lng"""
        if isinstance(value, Coordinate):
            return value
        if isinstance(value, dict):
            lon = value.get("lon", value.get("lng"))
            return cls(value.get("lat"), lon)
        try:
            lat, lon = value
        except (TypeError, ValueError):
            raise InvalidCoordinate(f"Ogiltig koordinat: {value!r}")
        return cls(lat, lon)

    def as_list(self) -> list:
        return [self.lat, self.lon]


@dataclass(frozen=True)
class Waypoint:
    """En punkt i rutten med stabilt id; positionen härleds ur rutten"""
    id: str
    coordinate: Coordinate


@dataclass(frozen=True)
class GeocodeCandidate:
    """En träff från platssökningen"""
    coordinate: Coordinate
    label: str


# Händelser från kartan
@dataclass(frozen=True)
class PointAdded:
    coordinate: Coordinate


@dataclass(frozen=True)
class PointMoved:
    index: int
    coordinate: Coordinate
    waypoint_id: Optional[str] = None


@dataclass(frozen=True)
class PointRemoved:
    index: int
    waypoint_id: Optional[str] = None
