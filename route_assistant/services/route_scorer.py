"""Route scoring service - Multi-factor ranking and recommendations.

Each candidate route is scored on four normalized factors:
- price (cheaper is better, min-max normalized across the set)
- duration (shorter is better, min-max normalized across the set)
- schedule convenience (more departures is better, capped at 5)
- operator reputation (static table)

The factor weights depend on the user's budget preference. The scorer
is stateless; the same inputs always produce the same ranking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence, Tuple

from ..domain.models import (
    BudgetPreference,
    Entities,
    RankedRoutes,
    Recommendation,
    RecommendationKind,
    Route,
    RouteTag,
    ScoreWeights,
)

MAX_COUNTED_DEPARTURES = 5
FREQUENT_DEPARTURES = 4
DEFAULT_OPERATOR_SCORE = 0.5

BALANCED_WEIGHTS = ScoreWeights(price=0.3, duration=0.3, schedule=0.2, operator=0.2)

WEIGHT_PROFILES: Dict[BudgetPreference, ScoreWeights] = {
    BudgetPreference.BALANCED: BALANCED_WEIGHTS,
    BudgetPreference.BUDGET: ScoreWeights(price=0.5, duration=0.25, schedule=0.15, operator=0.1),
    BudgetPreference.PREMIUM: ScoreWeights(price=0.1, duration=0.3, schedule=0.2, operator=0.4),
}

OPERATOR_REPUTATION: Dict[str, float] = {
    "Indian Railways": 0.85,
    "MSRTC": 0.7,
    "RSRTC": 0.65,
    "KSRTC": 0.75,
    "APSRTC": 0.7,
    "UPSRTC": 0.6,
    "Neeta Travels": 0.8,
    "Paulo Travels": 0.85,
    "VRL Travels": 0.8,
    "Eagle Travels": 0.7,
    "Orange Travels": 0.75,
}


def _normalized_inverse(value: float, low: float, high: float) -> float:
    """Map value in [low, high] to [1, 0]; a degenerate range scores 1."""
    if high == low:
        return 1.0
    return 1.0 - (value - low) / (high - low)


@dataclass
class RouteScorer:
    """Scores, tags and ranks candidate routes.

    Attributes:
        weight_profiles: Weights per budget preference
        operator_reputation: Operator name to reputation in [0, 1]
    """

    weight_profiles: Mapping[BudgetPreference, ScoreWeights] = field(
        default_factory=lambda: dict(WEIGHT_PROFILES)
    )
    operator_reputation: Mapping[str, float] = field(
        default_factory=lambda: dict(OPERATOR_REPUTATION)
    )

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def weights_for(self, preference: Optional[BudgetPreference]) -> ScoreWeights:
        """Return the weight profile for a budget preference (balanced by default)."""
        if preference is None:
            preference = BudgetPreference.BALANCED
        return self.weight_profiles.get(preference, BALANCED_WEIGHTS)

    def operator_score(self, operator: str) -> float:
        return self.operator_reputation.get(operator, DEFAULT_OPERATOR_SCORE)

    def score(self, routes: Sequence[Route], entities: Entities) -> Tuple[Route, ...]:
        """Score and tag routes, sorted by descending score.

        The sort is stable: routes with equal scores keep their input order.

        Args:
            routes: Candidate routes from the lookup.
            entities: Merged entities; only budget_preference is used.

        Returns:
            Scored copies of the routes, best first.
        """
        if not routes:
            return tuple(routes)

        weights = self.weights_for(entities.budget_preference)
        prices = [r.price for r in routes]
        durations = [r.duration_minutes for r in routes]
        min_price, max_price = min(prices), max(prices)
        min_duration, max_duration = min(durations), max(durations)

        scored = []
        for route in routes:
            price_score = _normalized_inverse(route.price, min_price, max_price)
            duration_score = _normalized_inverse(
                route.duration_minutes, min_duration, max_duration
            )
            schedule_score = min(route.departure_count / MAX_COUNTED_DEPARTURES, 1.0)

            total = (
                weights.price * price_score
                + weights.duration * duration_score
                + weights.schedule * schedule_score
                + weights.operator * self.operator_score(route.operator)
            )

            tags = []
            if route.price == min_price:
                tags.append(RouteTag.CHEAPEST)
            if route.duration_minutes == min_duration:
                tags.append(RouteTag.FASTEST)
            if route.departure_count >= FREQUENT_DEPARTURES:
                tags.append(RouteTag.FREQUENT)

            scored.append(route.with_score(total, tuple(tags)))

        ranked = tuple(sorted(scored, key=lambda r: r.score, reverse=True))

        self._logger.debug(
            "Routes scored",
            extra={
                "count": len(ranked),
                "top_route": ranked[0].route_id,
                "top_score": ranked[0].score,
            },
        )
        return ranked

    def recommend(
        self, ranked: Sequence[Route], entities: Entities
    ) -> Tuple[Recommendation, ...]:
        """Build callouts for a ranked route list.

        Args:
            ranked: Routes sorted by score, best first.
            entities: Merged entities; time_preference enables the time note.

        Returns:
            Recommendations in order: cheapest, fastest, best value, time match.
        """
        if not ranked:
            return ()

        cheapest = ranked[0]
        fastest = ranked[0]
        for route in ranked[1:]:
            if route.price < cheapest.price:
                cheapest = route
            if route.duration_minutes < fastest.duration_minutes:
                fastest = route
        best = ranked[0]

        recommendations = []
        if cheapest is not fastest:
            recommendations.append(
                Recommendation(
                    kind=RecommendationKind.CHEAPEST,
                    route_id=cheapest.route_id,
                    route_name=cheapest.name,
                    price=cheapest.price,
                )
            )
            recommendations.append(
                Recommendation(
                    kind=RecommendationKind.FASTEST,
                    route_id=fastest.route_id,
                    route_name=fastest.name,
                    duration_minutes=fastest.duration_minutes,
                )
            )

        if best is not cheapest and best is not fastest:
            recommendations.append(
                Recommendation(
                    kind=RecommendationKind.BEST_VALUE,
                    route_id=best.route_id,
                    route_name=best.name,
                )
            )

        if entities.time_preference is not None:
            matching = sum(1 for route in ranked if route.schedules)
            if matching > 0:
                recommendations.append(
                    Recommendation(
                        kind=RecommendationKind.TIME_MATCH,
                        count=matching,
                        label=entities.time_preference.label,
                    )
                )

        return tuple(recommendations)

    def rank(self, routes: Sequence[Route], entities: Entities) -> RankedRoutes:
        """Score routes and derive their recommendations in one call."""
        ranked = self.score(routes, entities)
        return RankedRoutes(routes=ranked, recommendations=self.recommend(ranked, entities))
