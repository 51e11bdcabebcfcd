"""
Ruttmodell: ordnad lista av waypoints med redigeringsoperationer
"""

import itertools
import logging
from typing import Iterable, List, Optional, Tuple

from models import (
    Coordinate,
    Waypoint,
    IndexOutOfRange,
    PointAdded,
    PointMoved,
    PointRemoved,
)
from utils import calculate_distance_from_points

logger = logging.getLogger(__name__)


class RouteModel:
    """
    Den aktiva rutten i en redigeringssession

    Varje waypoint får ett stabilt id när den skapas. Index är bara en
    härledd vy, så en händelse som bär ett id träffar rätt punkt även om
    listan hunnit ändras. Distansen lagras aldrig utan räknas om vid läsning.
    """

    def __init__(self, points: Optional[Iterable] = None):
        self._ids = itertools.count(1)
        self._waypoints: List[Waypoint] = []
        if points:
            self.load(points)

    def __len__(self) -> int:
        return len(self._waypoints)

    def _new_waypoint(self, coordinate: Coordinate) -> Waypoint:
        return Waypoint(id=f"wp-{next(self._ids)}", coordinate=coordinate)

    def _check_index(self, index: int) -> int:
        size = len(self._waypoints)
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < size:
            raise IndexOutOfRange(f"Index {index!r} finns inte i en rutt med {size} punkter")
        return index

    def add(self, coordinate) -> str:
        """
        Lägg till en waypoint sist i rutten

        Returns:
            Den nya punktens id
        """
        waypoint = self._new_waypoint(Coordinate.of(coordinate))
        self._waypoints.append(waypoint)
        logger.debug("Lade till %s på %s", waypoint.id, waypoint.coordinate)
        return waypoint.id

    def update(self, index: int, coordinate) -> None:
        """Flytta waypointen på index till en ny position, ordningen behålls"""
        new_coordinate = Coordinate.of(coordinate)
        index = self._check_index(index)
        old = self._waypoints[index]
        self._waypoints[index] = Waypoint(id=old.id, coordinate=new_coordinate)
        logger.debug("Flyttade %s till %s", old.id, new_coordinate)

    def remove(self, index: int) -> None:
        """Ta bort waypointen på index, efterföljande index minskar med ett"""
        index = self._check_index(index)
        removed = self._waypoints.pop(index)
        logger.debug("Tog bort %s", removed.id)

    def undo(self) -> None:
        """Ta bort senaste waypointen (ett steg, ingen redo)"""
        if self._waypoints:
            removed = self._waypoints.pop()
            logger.debug("Ångrade %s", removed.id)

    def clear(self) -> None:
        self._waypoints = []
        logger.debug("Rutten tömd")

    def load(self, points: Iterable) -> None:
        """
        Ersätt hela rutten, t.ex. från en delningslänk

        Alla punkter valideras innan något ändras.
        """
        coordinates = [Coordinate.of(p) for p in points]
        self._waypoints = [self._new_waypoint(c) for c in coordinates]
        logger.debug("Laddade rutt med %d punkter", len(coordinates))

    def snapshot(self) -> Tuple[Coordinate, ...]:
        """Skrivskyddad vy av ruttens koordinater i ordning"""
        return tuple(w.coordinate for w in self._waypoints)

    def waypoints(self) -> Tuple[Waypoint, ...]:
        return tuple(self._waypoints)

    def index_of(self, waypoint_id: str) -> int:
        for i, waypoint in enumerate(self._waypoints):
            if waypoint.id == waypoint_id:
                return i
        raise IndexOutOfRange(f"Waypoint {waypoint_id!r} finns inte längre")

    def update_by_id(self, waypoint_id: str, coordinate) -> None:
        self.update(self.index_of(waypoint_id), coordinate)

    def remove_by_id(self, waypoint_id: str) -> None:
        self.remove(self.index_of(waypoint_id))

    @property
    def total_distance(self) -> float:
        """Total distans i meter, räknas om från aktuell rutt"""
        return calculate_distance_from_points(self.snapshot())

    def apply_event(self, event) -> Optional[str]:
        """
        Skicka en kartahändelse till rätt operation

        Args:
            event: PointAdded, PointMoved eller PointRemoved

        Returns:
            Id för en ny punkt vid PointAdded, annars None
        """
        if isinstance(event, PointAdded):
            return self.add(event.coordinate)
        if isinstance(event, PointMoved):
            if event.waypoint_id is not None:
                self.update_by_id(event.waypoint_id, event.coordinate)
            else:
                self.update(event.index, event.coordinate)
            return None
        if isinstance(event, PointRemoved):
            if event.waypoint_id is not None:
                self.remove_by_id(event.waypoint_id)
            else:
                self.remove(event.index)
            return None
        raise TypeError(f"Okänd kartahändelse: {event!r}")
