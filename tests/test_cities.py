import pytest

from route_assistant.nlp.cities import CITY_ALIASES, known_cities, resolve_city


@pytest.mark.parametrize(
    "phrase, city",
    [
        ("mumbai", "Mumbai"),
        ("Bombay", "Mumbai"),
        ("Bengaluru", "Bangalore"),
        ("madras", "Chennai"),
        ("Chennai!", "Chennai"),
        ("new delhi station", "Delhi"),
        ("pune junction", "Pune"),
        ("pun", "Pune"),
        ("Mumbaí", "Mumbai"),
    ],
)
def test_resolves_aliases(phrase, city):
    assert resolve_city(phrase) == city


@pytest.mark.parametrize("phrase", [None, "", "   ", "gotham", "go", "42"])
def test_unresolved(phrase):
    assert resolve_city(phrase) is None


def test_known_cities_are_unique_and_ordered():
    cities = known_cities()
    assert len(cities) == 11
    assert len(set(cities)) == len(cities)
    assert cities[0] == "Mumbai"
    assert "Lucknow" in cities


@pytest.mark.parametrize("alias", [alias for alias, _ in CITY_ALIASES])
def test_resolution_is_idempotent(alias):
    city = resolve_city(alias)
    assert city is not None
    assert resolve_city(city) == city
