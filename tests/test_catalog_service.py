"""Tests for admin catalog edits."""

import pytest

from videoclub.core.clock import Clock
from videoclub.core.exceptions import DurationBelowProgress, FilmNotFound
from videoclub.schemas.film import FilmUpdate
from videoclub.services.catalog_service import CatalogService
from videoclub.services.progress_service import ProgressService
from videoclub.services.rental_service import RentalService
from tests.conftest import auth_headers


@pytest.fixture
def watched_film(db, clock, make_user, make_film):
    user = make_user(credits=10)
    film = make_film(price=1, duration=3600)
    RentalService(db, clock).rent_film(user.id, film.id)
    ProgressService(db, clock).update_progress(user.id, film.id, 3000)
    return user, film


class TestUpdateFilm:

    def test_duration_below_recorded_progress_is_rejected(self, db, clock, watched_film):
        _, film = watched_film
        service = CatalogService(db, clock)

        with pytest.raises(DurationBelowProgress) as exc_info:
            service.update_film(film.external_id, FilmUpdate(duration=1000, price=5))

        assert exc_info.value.progress == 3000
        unchanged = service.get_film_by_external_id(film.external_id)
        assert (unchanged.duration, unchanged.price) == (3600, 1)

    def test_duration_down_to_recorded_progress_is_accepted(self, db, clock, watched_film):
        user, film = watched_film

        updated = CatalogService(db, clock).update_film(
            film.external_id, FilmUpdate(duration=3000)
        )

        assert updated.duration == 3000
        status = RentalService(db, clock).get_film_rental_status(user.id, film.id)
        assert status.rental.progress <= status.rental.film.duration

    def test_progress_after_shortening_is_clamped_to_new_duration(self, db, clock, watched_film):
        user, film = watched_film
        CatalogService(db, clock).update_film(film.external_id, FilmUpdate(duration=3200))

        rental = ProgressService(db, clock).update_progress(user.id, film.id, 9999)

        assert rental.progress == 3200

    def test_duration_of_unrented_film_is_free(self, db, clock, make_film):
        film = make_film(duration=3600)

        updated = CatalogService(db, clock).update_film(film.external_id, FilmUpdate(duration=60))

        assert updated.duration == 60

    def test_empty_update_returns_film(self, db, clock, make_film):
        film = make_film(title="Alien")

        assert CatalogService(db, clock).update_film(film.external_id, FilmUpdate()).title == "Alien"

    def test_unknown_film(self, db, clock):
        with pytest.raises(FilmNotFound):
            CatalogService(db, clock).update_film(424242, FilmUpdate(price=2))


def test_admin_shortening_watched_film_gets_conflict(client, watched_film, make_user):
    admin = make_user(is_admin=True)
    _, film = watched_film

    response = client.patch(
        f"/api/videoclub/v1/admin/films/{film.external_id}",
        json={"duration": 1000},
        headers=auth_headers(admin),
    )

    assert response.status_code == 409
    assert response.json()["code"] == "duration_below_progress"


def test_clock_cannot_be_used_without_a_time_source():
    with pytest.raises(TypeError):
        Clock()
