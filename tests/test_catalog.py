"""Tests for the CSV route catalog."""

from datetime import date, time

import pytest

from route_assistant.adapters.catalog import CSVRouteCatalog
from route_assistant.config import CatalogConfig
from route_assistant.domain.errors import CatalogError
from route_assistant.domain.models import BudgetPreference, TimePreference, TravelMode
from route_assistant.nlp import known_cities

MORNING = TimePreference(time(6, 0), time(12, 0), "morning")
NIGHT = TimePreference(time(21, 0), time(6, 0), "night")


def _departures(routes):
    return {r.name: len(r.schedules) for r in routes}


class TestLookup:
    def test_all_modes_sorted_by_price(self, catalog):
        routes = catalog.lookup_routes("Mumbai", "Pune", TravelMode.ANY)
        assert [r.price for r in routes] == [350, 450, 650, 700]
        assert routes[0].route_id == "MUM-PUN-01"

    def test_cities_match_case_insensitively(self, catalog):
        assert len(catalog.lookup_routes("mumbai", " PUNE ", TravelMode.ANY)) == 4

    def test_mode_filter(self, catalog):
        routes = catalog.lookup_routes("Mumbai", "Pune", TravelMode.TRAIN)
        assert {r.route_id for r in routes} == {"MUM-PUN-01", "MUM-PUN-02"}
        assert all(r.mode is TravelMode.TRAIN for r in routes)

    def test_premium_sorts_descending(self, catalog):
        routes = catalog.lookup_routes(
            "Mumbai", "Pune", TravelMode.ANY, budget_preference=BudgetPreference.PREMIUM
        )
        assert [r.price for r in routes] == [700, 650, 450, 350]

    def test_direction_matters(self, catalog):
        assert catalog.lookup_routes("Pune", "Mumbai", TravelMode.ANY) == []

    def test_unknown_pair(self, catalog):
        assert catalog.lookup_routes("Goa", "Lucknow", TravelMode.ANY) == []

    def test_schedules_sorted_by_departure(self, catalog):
        routes = catalog.lookup_routes("Mumbai", "Pune", TravelMode.BUS)
        for route in routes:
            departures = [s.departure for s in route.schedules]
            assert departures == sorted(departures)


class TestScheduleFilters:
    def test_morning_window(self, catalog):
        routes = catalog.lookup_routes("Mumbai", "Pune", TravelMode.ANY, time_preference=MORNING)
        assert _departures(routes) == {
            "Deccan Express": 1,
            "Shivneri AC": 3,
            "Shatabdi Express": 1,
            "Volvo AC Sleeper": 0,
        }

    def test_night_window_wraps_midnight(self, catalog):
        routes = catalog.lookup_routes("Mumbai", "Pune", TravelMode.BUS, time_preference=NIGHT)
        assert _departures(routes) == {"Shivneri AC": 1, "Volvo AC Sleeper": 2}

    def test_anchor_time(self, catalog):
        anchor = TimePreference(time(17, 0), label="around 17:00")
        routes = catalog.lookup_routes("Mumbai", "Pune", TravelMode.TRAIN, time_preference=anchor)
        assert _departures(routes) == {"Deccan Express": 1, "Shatabdi Express": 0}

    def test_weekday_filter(self, catalog):
        sunday = catalog.lookup_routes("Mumbai", "Pune", TravelMode.TRAIN, date=date(2024, 1, 14))
        monday = catalog.lookup_routes("Mumbai", "Pune", TravelMode.TRAIN, date=date(2024, 1, 15))
        assert _departures(sunday)["Shatabdi Express"] == 1
        assert _departures(monday)["Shatabdi Express"] == 2

    def test_filtering_does_not_touch_cached_routes(self, catalog):
        catalog.lookup_routes("Mumbai", "Pune", TravelMode.ANY, time_preference=NIGHT)
        routes = catalog.lookup_routes("Mumbai", "Pune", TravelMode.ANY)
        assert _departures(routes)["Deccan Express"] == 3


def test_list_cities_covers_known_cities(catalog):
    assert catalog.list_cities() == sorted(known_cities())


def test_load_is_cached(catalog):
    assert catalog.load() is catalog.load()
    catalog.clear_cache()
    assert catalog._entries is None


class TestErrors:
    def test_missing_files(self, tmp_path):
        catalog = CSVRouteCatalog(CatalogConfig(data_dir=tmp_path))
        with pytest.raises(CatalogError) as exc_info:
            catalog.load()
        assert "schedules.csv" in exc_info.value.file_path
        assert isinstance(exc_info.value.cause, OSError)

    def test_malformed_row(self, tmp_path):
        (tmp_path / "schedules.csv").write_text(
            "route_id,departure,arrival,platform,days\nR1,07:00,09:00,1,1234567\n",
            encoding="utf-8",
        )
        (tmp_path / "routes.csv").write_text(
            "route_id,origin_city,destination_city,origin_station,destination_station,"
            "mode,operator,name,price,duration_minutes,distance_km\n"
            "R1,Mumbai,Pune,A,B,train,Indian Railways,Test,not-a-price,100,10\n",
            encoding="utf-8",
        )
        catalog = CSVRouteCatalog(CatalogConfig(data_dir=tmp_path))
        with pytest.raises(CatalogError, match="Malformed"):
            catalog.lookup_routes("Mumbai", "Pune", TravelMode.ANY)

    def test_invalid_run_days(self, tmp_path):
        (tmp_path / "schedules.csv").write_text(
            "route_id,departure,arrival,platform,days\nR1,07:00,09:00,1,089\n",
            encoding="utf-8",
        )
        catalog = CSVRouteCatalog(CatalogConfig(data_dir=tmp_path))
        with pytest.raises(CatalogError, match="Malformed"):
            catalog.load()
