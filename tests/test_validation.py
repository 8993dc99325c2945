"""Tests for film/user validation rules and their fixed check order."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from filmorate_api.core.result import FailureKind
from filmorate_api.models.films import FilmIn
from filmorate_api.services.validation import (
    FIRST_FILM_DATE,
    normalize_user_name,
    validate_film,
    validate_film_references,
    validate_user,
)
from tests.helpers import film_in, user_in


def test_valid_film_passes():
    assert validate_film(film_in()) is None


def test_release_date_boundary_is_inclusive():
    assert validate_film(film_in(releaseDate="1895-12-28")) is None


def test_release_date_day_before_boundary_fails():
    failure = validate_film(film_in(releaseDate="1895-12-27"))
    assert failure.kind is FailureKind.VALIDATION
    assert failure.message == "release date before 1895-12-28"
    assert failure.field == "releaseDate"


@pytest.mark.parametrize("days", [1, 30, 365 * 10])
def test_any_release_date_before_boundary_fails(days):
    d = FIRST_FILM_DATE - timedelta(days=days)
    failure = validate_film(film_in(releaseDate=d.isoformat()))
    assert failure is not None and failure.field == "releaseDate"


def test_description_of_200_chars_passes():
    assert validate_film(film_in(description="A" * 200)) is None


def test_description_of_201_chars_fails():
    failure = validate_film(film_in(description="A" * 201))
    assert failure.kind is FailureKind.VALIDATION
    assert failure.field == "description"


def test_missing_description_is_allowed():
    assert validate_film(film_in(description=None)) is None


@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_film_name_fails(name):
    assert validate_film(film_in(name=name)).field == "name"


def test_missing_release_date_fails():
    failure = validate_film(film_in(releaseDate=None))
    assert failure.message == "release date is required"


@pytest.mark.parametrize("duration", [0, -1, None])
def test_non_positive_duration_fails(duration):
    assert validate_film(film_in(duration=duration)).field == "duration"


def test_film_checks_fail_fast_in_fixed_order():
    # всё сломано сразу — первой срабатывает проверка имени
    bad = film_in(name="", description="A" * 201,
                  releaseDate="1800-01-01", duration=-5)
    assert validate_film(bad).field == "name"

    bad = film_in(description="A" * 201, releaseDate="1800-01-01",
                  duration=-5)
    assert validate_film(bad).field == "description"

    bad = film_in(releaseDate="1800-01-01", duration=-5)
    assert validate_film(bad).field == "releaseDate"


def test_unknown_mpa_is_reported_as_not_found(reference):
    failure = validate_film_references(
        film_in(mpa={"id": 99}), reference)
    assert failure.kind is FailureKind.NOT_FOUND
    assert failure.field == "mpa"


def test_unknown_genre_is_reported_as_not_found(reference):
    failure = validate_film_references(
        film_in(genres=[{"id": 1}, {"id": 42}]), reference)
    assert failure.kind is FailureKind.NOT_FOUND
    assert "42" in failure.message


def test_known_references_pass(reference):
    payload = film_in(mpa={"id": 3}, genres=[{"id": 1}, {"id": 2}])
    assert validate_film_references(payload, reference) is None


def test_film_accepts_snake_case_release_date():
    payload = FilmIn.model_validate({
        "name": "M", "release_date": "2001-02-03", "duration": 1})
    assert payload.release_date == date(2001, 2, 3)


# ---------------------------------------------------------------------------


def test_valid_user_passes():
    assert validate_user(user_in()) is None


@pytest.mark.parametrize("email", ["", "  ", None, "no-at-sign.com"])
def test_bad_email_fails(email):
    assert validate_user(user_in(email=email)).field == "email"


@pytest.mark.parametrize("login", ["", None, "bob smith", "bob\tsmith"])
def test_bad_login_fails(login):
    assert validate_user(user_in(login, email="bob@example.com")) \
        .field == "login"


def test_missing_birthday_fails():
    assert validate_user(user_in(birthday=None)).field == "birthday"


def test_birthday_today_passes_and_tomorrow_fails():
    today = date(2024, 5, 1)
    assert validate_user(user_in(birthday="2024-05-01"), today=today) is None
    failure = validate_user(user_in(birthday="2024-05-02"), today=today)
    assert failure.message == "birthday must not be in the future"


def test_user_checks_fail_fast_in_fixed_order():
    bad = user_in("a b", email="x", birthday="2999-01-01")
    assert validate_user(bad).field == "email"
    bad = user_in("a b", birthday="2999-01-01")
    assert validate_user(bad).field == "login"


@pytest.mark.parametrize("name", [None, "", "   "])
def test_blank_name_falls_back_to_login(name):
    assert normalize_user_name(user_in("bob", name=name)) == "bob"


def test_present_name_is_kept():
    assert normalize_user_name(user_in("bob", name="Robert")) == "Robert"
