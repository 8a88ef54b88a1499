"""Route lookup port - Abstraction over the transport catalog.

The dialogue pipeline never reads transport data directly; it asks this
collaborator for candidate routes that are already filtered by city,
mode, day and time of day.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import BudgetPreference, Route, TimePreference, TravelMode


class RouteLookupPort(Protocol):
    """Port for candidate route lookup.

    Implementation: adapters/catalog/csv_catalog.py
    """

    def lookup_routes(
        self,
        origin: str,
        destination: str,
        mode: TravelMode,
        *,
        date: Optional[date] = None,
        time_preference: Optional[TimePreference] = None,
        budget_preference: Optional[BudgetPreference] = None,
    ) -> Sequence[Route]:
        """Find candidate routes between two cities.

        Args:
            origin: Canonical origin city name.
            destination: Canonical destination city name.
            mode: Requested transport mode (ANY for no filter).
            date: Travel date; schedules not running that day are dropped.
            time_preference: Schedules outside the window are dropped.
            budget_preference: May influence the order of the candidates.

        Returns:
            Candidate routes with their schedules attached.
        """
        ...

    def list_cities(self) -> Sequence[str]:
        """List the cities known to the catalog.

        Returns:
            Sorted sequence of city names.
        """
        ...
