from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from src import app
from src.films.routes import get_film_services
from src.config import Settings
from src.films.services import FilmServices, MOST_RENTED_MAX_LIMIT
from src.utils.validation import Invalid
from tests.fakes import FakeFilmRepository, film

INT32_MIN = -2**31
INT32_MAX = 2**31 - 1


@pytest.fixture
def repository():
    return FakeFilmRepository(
        films=[film(1, "Academy Dinosaur"), film(2, "Ace Goldfinger"), film(3, "Adaptation Holes")],
        most_rented=[
            SimpleNamespace(film_id=1, title="Academy Dinosaur", rental_count=3),
            SimpleNamespace(film_id=2, title="Ace Goldfinger", rental_count=2),
        ],
        categories=[SimpleNamespace(category_id=3, name="Drama", rental_count=3)],
        stats=SimpleNamespace(total_rentals=3, returned_rentals=2, last_rented=datetime(2024, 3, 2, 9, 0)),
        revenue=Decimal("8.97"),
        copies=2,
    )


@pytest.fixture
def use_repository(client, repository):
    app.dependency_overrides[get_film_services] = lambda: FilmServices(repository)
    return repository


async def test_get_film_includes_categories(repository):
    result = await FilmServices(repository).get_film(1)

    assert result.id == 1
    assert result.categories == ["Drama"]


async def test_get_films_filters_before_paginating(repository):
    result = await FilmServices(repository).get_films(1, 1, "ad")

    # "Academy Dinosaur" and "Adaptation Holes" match, one per page
    assert result.total == 2
    assert [f.id for f in result.items] == [1]


async def test_most_rented_films_passes_parsed_window(repository):
    result = await FilmServices(repository).get_most_rented_films(1, "2024-01-01", "2024-03-31")

    assert [f.film_id for f in result] == [1]
    assert repository.windows[0].date_from == date(2024, 1, 1)
    assert repository.windows[0].date_to == date(2024, 3, 31)


async def test_most_rented_films_rejects_zero_limit_without_querying(repository):
    result = await FilmServices(repository).get_most_rented_films(0, "2024-01-01", "2024-01-01")

    assert isinstance(result, Invalid)
    assert repository.calls == []


async def test_most_rented_films_reports_limit_and_dates_together(repository):
    result = await FilmServices(repository).get_most_rented_films(101, "Date", "2024-01-01")

    assert result.fields == ["limit", "from"]


async def test_most_rented_cap_is_fixed_at_one_hundred(repository, monkeypatch):
    monkeypatch.setenv("MOST_RENTED_MAX_LIMIT", "500")
    services = FilmServices(repository)

    assert MOST_RENTED_MAX_LIMIT == 100
    assert not hasattr(Settings(), "MOST_RENTED_MAX_LIMIT")
    assert not isinstance(await services.get_most_rented_films(100, "2024-01-01", "2024-01-31"), Invalid)

    rejected = await services.get_most_rented_films(500, "2024-01-01", "2024-01-31")
    assert rejected.fields == ["limit"]


async def test_reversed_window_is_empty_and_skips_persistence(repository):
    services = FilmServices(repository)

    assert await services.get_most_rented_films(10, "2024-02-01", "2024-01-01") == []
    assert await services.get_most_watched_categories(10, "2024-02-01", "2024-01-01") == []
    assert repository.calls == []


async def test_film_summary(repository):
    summary = await FilmServices(repository).get_film_summary(1)

    assert summary.total_rentals == 3
    assert summary.open_rentals == 1
    assert summary.total_revenue == Decimal("8.97")
    assert summary.inventory_copies == 2


async def test_film_summary_of_unknown_film_is_none(repository):
    assert await FilmServices(repository).get_film_summary(99) is None


def test_get_film_returns_ok_when_found(client, use_repository):
    response = client.get("/api/films/1")

    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Academy Dinosaur"


def test_get_film_returns_not_found_when_missing(client, use_repository):
    response = client.get("/api/films/99")

    assert response.status_code == 404


def test_get_all_films_returns_ok(client, use_repository):
    response = client.get("/api/films/", params={"page": 1, "limit": 10, "name": ""})

    assert response.status_code == 200
    assert response.json()["data"]["total"] == 3


@pytest.mark.parametrize("page, limit", [
    (0, 10), (10, 0), (0, 0),
    (INT32_MIN, 10), (10, INT32_MIN), (INT32_MIN, INT32_MIN),
])
def test_get_all_films_returns_bad_request_when_page_or_limit_not_positive(client, use_repository, page, limit):
    response = client.get("/api/films/", params={"page": page, "limit": limit, "name": ""})

    assert response.status_code == 400


def test_get_most_rented_films_returns_ok(client, use_repository):
    response = client.get("/api/films/most-rented", params={"limit": 10, "from": "2024-01-01", "to": "2024-01-01"})

    assert response.status_code == 200
    assert response.json()["data"][0] == {"film_id": 1, "title": "Academy Dinosaur", "rental_count": 3}


@pytest.mark.parametrize("limit", [0, -10, 101, INT32_MIN, INT32_MAX])
def test_get_most_rented_films_returns_bad_request_when_limit_not_between_1_and_100(client, use_repository, limit):
    response = client.get("/api/films/most-rented", params={"limit": limit, "from": "2024-01-01", "to": "2024-01-01"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "limit"


@pytest.mark.parametrize("from_raw, to_raw", [
    ("2024-01-01", "Date"),
    ("Date", "2024-01-01"),
    ("Date", "Date"),
])
def test_get_most_rented_films_returns_bad_request_when_dates_have_wrong_format(client, use_repository, from_raw, to_raw):
    response = client.get("/api/films/most-rented", params={"limit": 10, "from": from_raw, "to": to_raw})

    assert response.status_code == 400


def test_get_most_rented_films_requires_dates(client, use_repository):
    response = client.get("/api/films/most-rented", params={"limit": 10})

    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["from", "to"]


def test_get_most_watched_categories_returns_ok(client, use_repository):
    response = client.get("/api/films/most-watched-categories", params={"limit": 10, "from": "2024-01-01", "to": "2024-01-01"})

    assert response.status_code == 200


@pytest.mark.parametrize("limit", [0, -10, INT32_MIN])
def test_get_most_watched_categories_returns_bad_request_when_limit_not_positive(client, use_repository, limit):
    response = client.get("/api/films/most-watched-categories", params={"limit": limit, "from": "2024-01-01", "to": "2024-01-01"})

    assert response.status_code == 400


@pytest.mark.parametrize("limit", [101, 1000, INT32_MAX])
def test_get_most_watched_categories_has_no_upper_limit(client, use_repository, limit):
    response = client.get("/api/films/most-watched-categories", params={"limit": limit, "from": "2024-01-01", "to": "2024-01-01"})

    assert response.status_code == 200


@pytest.mark.parametrize("from_raw, to_raw", [
    ("2024-01-01", "Date"),
    ("Date", "2024-01-01"),
    ("Date", "Date"),
])
def test_get_most_watched_categories_returns_bad_request_when_dates_have_wrong_format(client, use_repository, from_raw, to_raw):
    response = client.get("/api/films/most-watched-categories", params={"limit": 10, "from": from_raw, "to": to_raw})

    assert response.status_code == 400


def test_get_film_summary_returns_ok(client, use_repository):
    response = client.get("/api/films/1/summary")

    assert response.status_code == 200
    assert response.json()["data"]["inventory_copies"] == 2


def test_get_film_summary_returns_not_found(client, use_repository):
    response = client.get("/api/films/99/summary")

    assert response.status_code == 404
