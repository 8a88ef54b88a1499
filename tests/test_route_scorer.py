"""Tests for the multi-factor route scorer."""

from datetime import time

import pytest

from route_assistant.domain.models import (
    BudgetPreference,
    Entities,
    RecommendationKind,
    RouteTag,
    ScoreWeights,
    TimePreference,
)
from route_assistant.services import RouteScorer


@pytest.fixture
def scorer():
    return RouteScorer()


@pytest.fixture
def routes(make_route):
    return [
        make_route("A", price=100, duration_minutes=120, operator="Indian Railways", departures=5),
        make_route("B", price=200, duration_minutes=60, operator="MSRTC", departures=1),
        make_route("C", price=150, duration_minutes=90, operator="Nobody Travels", departures=0),
    ]


class TestScore:
    def test_balanced_scores(self, scorer, routes):
        ranked = scorer.score(routes, Entities())
        assert [r.route_id for r in ranked] == ["A", "B", "C"]
        assert [r.score for r in ranked] == pytest.approx([0.67, 0.48, 0.40])

    def test_tags(self, scorer, routes):
        tags = {r.route_id: r.tags for r in scorer.score(routes, Entities())}
        assert tags["A"] == (RouteTag.CHEAPEST, RouteTag.FREQUENT)
        assert tags["B"] == (RouteTag.FASTEST,)
        assert tags["C"] == ()

    def test_budget_profile_reorders(self, scorer, routes):
        ranked = scorer.score(routes, Entities(budget_preference=BudgetPreference.BUDGET))
        assert [r.route_id for r in ranked] == ["A", "C", "B"]
        assert ranked[0].score == pytest.approx(0.735)

    def test_premium_profile(self, scorer, routes):
        ranked = scorer.score(routes, Entities(budget_preference=BudgetPreference.PREMIUM))
        assert [r.route_id for r in ranked] == ["A", "B", "C"]
        assert [r.score for r in ranked] == pytest.approx([0.64, 0.62, 0.40])

    def test_input_is_not_mutated(self, scorer, routes):
        scorer.score(routes, Entities())
        assert all(r.score is None for r in routes)

    def test_single_route_degenerate_ranges(self, scorer, make_route):
        (only,) = scorer.score([make_route(departures=0, operator="Nobody")], Entities())
        assert only.score == pytest.approx(0.3 + 0.3 + 0.0 + 0.2 * 0.5)
        assert only.tags == (RouteTag.CHEAPEST, RouteTag.FASTEST)

    def test_empty(self, scorer):
        assert scorer.score([], Entities()) == ()

    def test_ties_keep_input_order(self, scorer, make_route):
        first = make_route("X", price=100, duration_minutes=200, operator="Nobody", departures=0)
        second = make_route("Y", price=300, duration_minutes=100, operator="Nobody", departures=0)
        best = make_route("Z", price=150, duration_minutes=120, departures=5)
        ranked = scorer.score([first, second, best], Entities())
        assert [r.route_id for r in ranked] == ["Z", "X", "Y"]
        assert ranked[0].score == pytest.approx(0.835)
        assert ranked[1].score == ranked[2].score

    def test_shared_price_gives_every_route_full_price_credit(self, scorer, make_route):
        same_price = [
            make_route("A", price=100, duration_minutes=60),
            make_route("B", price=100, duration_minutes=90),
            make_route("C", price=100, duration_minutes=120),
        ]
        ranked = scorer.score(same_price, Entities())
        # price 0.3 + schedule 0.2 * 1/5 + operator 0.2 * 0.85, plus the duration share
        assert [r.score for r in ranked] == pytest.approx([0.81, 0.66, 0.51])
        assert all(RouteTag.CHEAPEST in r.tags for r in ranked)

    def test_cheaper_and_faster_route_scores_strictly_higher(self, scorer, make_route):
        ranked = scorer.score(
            [
                make_route("B", price=450, duration_minutes=210),
                make_route("A", price=350, duration_minutes=195),
            ],
            Entities(),
        )
        assert [r.route_id for r in ranked] == ["A", "B"]
        assert ranked[0].score > ranked[1].score
        assert [r.score for r in ranked] == pytest.approx([0.81, 0.21])

    @pytest.mark.parametrize(
        "preference",
        [None, BudgetPreference.BALANCED, BudgetPreference.BUDGET, BudgetPreference.PREMIUM],
    )
    def test_scores_stay_within_unit_range(self, scorer, routes, make_route, preference):
        candidates = routes + [
            make_route("D", price=80, duration_minutes=45, operator="Paulo Travels", departures=9),
            make_route("E", price=900, duration_minutes=600, operator="Nobody", departures=0),
        ]
        ranked = scorer.score(candidates, Entities(budget_preference=preference))
        assert len(ranked) == 5
        assert all(0.0 <= r.score <= 1.0 for r in ranked)


class TestRecommend:
    def test_cheapest_and_fastest(self, scorer, routes):
        ranked = scorer.rank(routes, Entities())
        kinds = [(r.kind, r.route_id) for r in ranked.recommendations]
        assert kinds == [
            (RecommendationKind.CHEAPEST, "A"),
            (RecommendationKind.FASTEST, "B"),
        ]
        assert ranked.recommendations[0].price == 100
        assert ranked.recommendations[1].duration_minutes == 60

    def test_best_value_when_top_route_is_neither(self, scorer, make_route):
        routes = [
            make_route("X", price=100, duration_minutes=200, operator="Nobody", departures=0),
            make_route("Y", price=300, duration_minutes=100, operator="Nobody", departures=0),
            make_route("Z", price=150, duration_minutes=120, departures=5),
        ]
        recs = scorer.rank(routes, Entities()).recommendations
        assert [(r.kind, r.route_id) for r in recs] == [
            (RecommendationKind.CHEAPEST, "X"),
            (RecommendationKind.FASTEST, "Y"),
            (RecommendationKind.BEST_VALUE, "Z"),
        ]

    def test_same_route_cheapest_and_fastest(self, scorer, make_route):
        routes = [
            make_route("A", price=100, duration_minutes=60),
            make_route("B", price=200, duration_minutes=90),
        ]
        assert scorer.rank(routes, Entities()).recommendations == ()

    def test_time_match_counts_routes_with_departures(self, scorer, routes):
        entities = Entities(time_preference=TimePreference(time(6, 0), time(12, 0), "morning"))
        recs = scorer.rank(routes, entities).recommendations
        assert recs[-1].kind == RecommendationKind.TIME_MATCH
        assert recs[-1].count == 2
        assert recs[-1].label == "morning"

    def test_no_time_match_without_departures(self, scorer, make_route):
        entities = Entities(time_preference=TimePreference(time(21, 0), time(6, 0), "night"))
        ranked = scorer.rank([make_route(departures=0)], entities)
        assert ranked.recommendations == ()

    def test_empty(self, scorer):
        ranked = scorer.rank([], Entities())
        assert ranked.is_empty
        assert ranked.recommendations == ()


def test_unknown_operator_gets_default_reputation(scorer):
    assert scorer.operator_score("Indian Railways") == 0.85
    assert scorer.operator_score("Nobody") == 0.5


def test_weights_default_to_balanced(scorer):
    assert scorer.weights_for(None) == scorer.weights_for(BudgetPreference.BALANCED)


@pytest.mark.parametrize(
    "weights",
    [
        dict(price=0.5, duration=0.5, schedule=0.5, operator=0.0),
        dict(price=-0.1, duration=0.5, schedule=0.3, operator=0.3),
    ],
)
def test_invalid_weights_rejected(weights):
    with pytest.raises(ValueError):
        ScoreWeights(**weights)
