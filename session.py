"""
Redigeringssession: kopplar ihop rutten, delningslänken och platssökningen
"""

import logging
from typing import List, Optional, Sequence

from config import DEFAULT_WAYPOINTS
from models import Coordinate, GeocodeCandidate
from route_model import RouteModel
from url_hash import encode_route_hash, parse_route_hash
from utils import distance_hint

logger = logging.getLogger(__name__)


class PersistedState:
    """Port mot platsen där fragmentet sparas (adressfältet, query params...)"""

    def get(self) -> str:
        raise NotImplementedError

    def set(self, fragment: str) -> None:
        raise NotImplementedError

    def link(self, fragment: str) -> str:
        """Den form av fragmentet som en delad länk ska bära"""
        return fragment


class InMemoryState(PersistedState):
    """Fragment i minnet, används i tester och utan webbläsare"""

    def __init__(self, fragment: str = ""):
        self.fragment = fragment
        self.writes = 0

    def get(self) -> str:
        return self.fragment

    def set(self, fragment: str) -> None:
        self.fragment = fragment
        self.writes += 1


class RouteSession:
    """
    En användares aktiva rutt

    Rutten läses från det sparade fragmentet vid start; saknas waypoints
    används standardrutten.
    """

    def __init__(
        self,
        state: PersistedState,
        default_points: Optional[Sequence] = None,
        auto_link: bool = True
    ):
        self.state = state
        self.auto_link = auto_link
        self.snapping = False  # Platshållare, ingen snappning görs
        self.route = RouteModel()

        points = parse_route_hash(state.get())
        if points:
            logger.info("Läste %d waypoints från länken", len(points))
            self.route.load(points)
        else:
            self.route.load(DEFAULT_WAYPOINTS if default_points is None else default_points)

    @property
    def total_distance(self) -> float:
        return self.route.total_distance

    def current_fragment(self) -> str:
        """Fragment med distanstips, det som skrivs till adressfältet"""
        return encode_route_hash(
            self.route.snapshot(),
            {"td": distance_hint(self.route.total_distance)}
        )

    def share_fragment(self) -> str:
        """Fragment utan metadata för 'Kopiera länk'"""
        return encode_route_hash(self.route.snapshot())

    def share_link(self) -> str:
        """Länksuffix för 'Kopiera länk', i den form lagringen kan läsa tillbaka"""
        return self.state.link(self.share_fragment())

    def sync(self) -> bool:
        """
        Skriv fragmentet om auto-länk är på och det har ändrats

        Returns:
            True om något skrevs
        """
        if not self.auto_link:
            return False
        fragment = self.current_fragment()
        if self.state.get() == fragment:
            return False
        self.state.set(fragment)
        return True

    def import_link(self, text: str) -> int:
        """
        Ladda waypoints från en inklistrad länk eller ett fragment

        Returns:
            Antal inlästa punkter; 0 betyder att rutten lämnades orörd
        """
        points = parse_route_hash(text)
        if not points:
            return 0
        self.route.load(points)
        return len(points)


class SearchTracker:
    """
    Håller reda på den senaste platssökningen

    Endast en sökning räknas åt gången. En ny sökning ersätter den förra,
    och svar som kommer in för en gammal biljett kastas.
    """

    def __init__(self, route: RouteModel):
        self.route = route
        self._latest = 0
        self.query = ""
        self.results: List[GeocodeCandidate] = []
        self.error = ""

    def begin(self, query: str) -> int:
        self._latest += 1
        self.query = query
        self.error = ""
        return self._latest

    def _is_current(self, ticket: int) -> bool:
        if ticket != self._latest:
            logger.debug("Kastar inaktuellt sökresultat (biljett %d, senaste %d)", ticket, self._latest)
            return False
        return True

    def complete(self, ticket: int, candidates: Sequence[GeocodeCandidate]) -> bool:
        """Spara resultatet om biljetten fortfarande är den senaste"""
        if not self._is_current(ticket):
            return False
        self.results = list(candidates)
        self.error = ""
        return True

    def fail(self, ticket: int, error: Exception) -> bool:
        """Spara ett felmeddelande; rutten påverkas inte"""
        if not self._is_current(ticket):
            return False
        self.results = []
        self.error = str(error) or "Sökningen misslyckades. Försök igen."
        logger.warning("Platssökning misslyckades: %s", self.error)
        return True

    def select(self, candidate: GeocodeCandidate) -> Coordinate:
        """Lägg till vald träff som waypoint och töm träfflistan"""
        self.route.add(candidate.coordinate)
        self.results = []
        return candidate.coordinate
