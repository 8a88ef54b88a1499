"""CSV route catalog adapter.

This adapter serves candidate routes from the packaged CSV data and adds:
- Configuration injection (paths from config)
- Cached loading
- Schedule filtering by weekday and time of day
- Budget-aware pre-sorting
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Dict, List, Optional, Tuple

from ...config import CatalogConfig, get_config
from ...domain.errors import CatalogError
from ...domain.models import (
    BudgetPreference,
    Route,
    Schedule,
    TimePreference,
    TravelMode,
)

_ALL_DAYS = (1, 2, 3, 4, 5, 6, 7)


@dataclass(frozen=True)
class _CatalogEntry:
    origin_city: str
    destination_city: str
    route: Route


def _parse_clock(value: str) -> time:
    return datetime.strptime(value.strip(), "%H:%M").time()


def _parse_days(value: str) -> Tuple[int, ...]:
    """Parse a run-days field such as '1234567' (ISO weekdays)."""
    digits = tuple(sorted({int(ch) for ch in value.strip() if ch.isdigit()}))
    if not digits:
        return _ALL_DAYS
    if digits[0] < 1 or digits[-1] > 7:
        raise ValueError(f"Invalid run days: {value!r}")
    return digits


@dataclass
class CSVRouteCatalog:
    """Route catalog that loads from CSV files.

    This adapter implements RouteLookupPort.

    Attributes:
        config: Catalog configuration (paths, file names)
    """

    config: CatalogConfig = field(default_factory=lambda: get_config().catalog)
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _entries: Optional[List[_CatalogEntry]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> List[_CatalogEntry]:
        """Load routes and schedules from CSV files.

        Returns:
            The catalog entries in file order.

        Raises:
            CatalogError: If the catalog cannot be loaded.
        """
        if self._entries is not None:
            return self._entries

        self._logger.debug(
            "Loading route catalog",
            extra={
                "routes_path": str(self.config.routes_path),
                "schedules_path": str(self.config.schedules_path),
            },
        )

        try:
            schedules = self._load_schedules()
            entries = self._load_routes(schedules)
        except OSError as e:
            raise CatalogError(
                f"Failed to read route catalog: {e}",
                file_path=str(e.filename or self.config.routes_path),
                cause=e,
            )
        except (KeyError, ValueError) as e:
            raise CatalogError(
                f"Malformed route catalog: {e}",
                file_path=str(self.config.routes_path),
                cause=e,
            )

        self._entries = entries
        self._logger.info("Route catalog loaded", extra={"routes": len(entries)})
        return entries

    def _load_schedules(self) -> Dict[str, List[Schedule]]:
        """Internal method to load schedules grouped by route id."""
        schedules: Dict[str, List[Schedule]] = {}

        with self.config.schedules_path.open(encoding="utf-8", newline="") as f:
            for row in csv.DictReader(f):
                route_id = row["route_id"].strip()
                if not route_id:
                    continue
                platform = (row.get("platform") or "").strip()
                schedules.setdefault(route_id, []).append(
                    Schedule(
                        departure=_parse_clock(row["departure"]),
                        arrival=_parse_clock(row["arrival"]),
                        platform=platform or None,
                        days=_parse_days(row.get("days") or ""),
                    )
                )

        for route_schedules in schedules.values():
            route_schedules.sort(key=lambda s: s.departure)
        return schedules

    def _load_routes(self, schedules: Dict[str, List[Schedule]]) -> List[_CatalogEntry]:
        """Internal method to load routes and attach their schedules."""
        entries: List[_CatalogEntry] = []

        with self.config.routes_path.open(encoding="utf-8", newline="") as f:
            for row in csv.DictReader(f):
                route_id = row["route_id"].strip()
                if not route_id:
                    continue

                distance = (row.get("distance_km") or "").strip()
                route = Route(
                    route_id=route_id,
                    name=row["name"].strip(),
                    mode=TravelMode(row["mode"].strip().lower()),
                    operator=row["operator"].strip(),
                    origin_station=row["origin_station"].strip(),
                    destination_station=row["destination_station"].strip(),
                    price=float(row["price"]),
                    duration_minutes=int(row["duration_minutes"]),
                    distance_km=float(distance) if distance else None,
                    schedules=tuple(schedules.get(route_id, ())),
                )
                entries.append(
                    _CatalogEntry(
                        origin_city=row["origin_city"].strip(),
                        destination_city=row["destination_city"].strip(),
                        route=route,
                    )
                )

        return entries

    def lookup_routes(
        self,
        origin: str,
        destination: str,
        mode: TravelMode,
        *,
        date: Optional[date] = None,
        time_preference: Optional[TimePreference] = None,
        budget_preference: Optional[BudgetPreference] = None,
    ) -> List[Route]:
        """Find candidate routes between two cities.

        Cities match case-insensitively. Routes whose schedules are all
        filtered out are still returned, with no departures.

        Raises:
            CatalogError: If the catalog cannot be loaded.
        """
        origin_key = origin.strip().lower()
        destination_key = destination.strip().lower()

        routes: List[Route] = []
        for entry in self.load():
            if entry.origin_city.lower() != origin_key:
                continue
            if entry.destination_city.lower() != destination_key:
                continue
            if mode is not TravelMode.ANY and entry.route.mode is not mode:
                continue
            routes.append(self._filter_schedules(entry.route, date, time_preference))

        descending = budget_preference is BudgetPreference.PREMIUM
        routes.sort(key=lambda r: r.price, reverse=descending)

        self._logger.debug(
            "Routes looked up",
            extra={
                "origin": origin,
                "destination": destination,
                "mode": mode.value,
                "count": len(routes),
            },
        )
        return routes

    @staticmethod
    def _filter_schedules(
        route: Route,
        day: Optional[date],
        time_preference: Optional[TimePreference],
    ) -> Route:
        kept = tuple(
            s
            for s in route.schedules
            if (time_preference is None or time_preference.contains(s.departure))
            and (day is None or s.runs_on(day))
        )
        if len(kept) == len(route.schedules):
            return route
        return replace(route, schedules=kept)

    def list_cities(self) -> List[str]:
        """List the cities served by at least one route.

        Returns:
            Sorted list of city names.
        """
        cities = set()
        for entry in self.load():
            cities.add(entry.origin_city)
            cities.add(entry.destination_city)
        return sorted(cities)

    def clear_cache(self) -> None:
        """Clear cached catalog data."""
        self._entries = None
        self._logger.debug("Route catalog cache cleared")
