"""HTTP tests for the videoclub API."""

from tests.conftest import auth_headers, make_token

API = "/api/videoclub/v1"


def _rent(client, user, external_id):
    return client.post(f"{API}/rentals/{external_id}", headers=auth_headers(user))


def _progress(client, user, external_id, value):
    return client.patch(
        f"{API}/rentals/{external_id}/progress",
        json={"progress": value},
        headers=auth_headers(user),
    )


class TestRentalScenario:
    """Rent, watch and review a film end to end."""

    def test_full_scenario(self, client, make_user, make_film, monkeypatch):
        monkeypatch.setattr("videoclub.core.config.settings.REVIEW_THRESHOLD_RATIO", 0.5)
        user = make_user(credits=10)
        film = make_film(price=10, duration=3600)

        response = _rent(client, user, film.external_id)
        assert response.status_code == 201
        body = response.json()
        assert body["credits_spent"] == 10
        assert body["is_active"] is True
        assert body["time_remaining_minutes"] == 48 * 60
        assert client.get(f"{API}/me", headers=auth_headers(user)).json()["credits"] == 0

        response = _rent(client, user, film.external_id)
        assert response.status_code == 409
        assert response.json()["code"] == "already_rented"

        assert _progress(client, user, film.external_id, 1500).status_code == 200
        eligibility = client.get(
            f"{API}/reviews/{film.external_id}/eligibility", headers=auth_headers(user)
        ).json()
        assert eligibility["allowed"] is False
        assert eligibility["reason"] == "keep watching"

        response = client.put(
            f"{API}/reviews/{film.external_id}", json={"rating": 4}, headers=auth_headers(user)
        )
        assert response.status_code == 403
        assert response.json()["code"] == "review_not_allowed"

        progress = _progress(client, user, film.external_id, 1900).json()
        assert progress["progress"] == 1900
        eligibility = client.get(
            f"{API}/reviews/{film.external_id}/eligibility", headers=auth_headers(user)
        ).json()
        assert eligibility["allowed"] is True

        response = client.put(
            f"{API}/reviews/{film.external_id}",
            json={"rating": 4, "content": "A tense, well-paced thriller."},
            headers=auth_headers(user),
        )
        assert response.status_code == 200
        assert response.json()["rating"] == 4

        detail = client.get(f"{API}/films/{film.external_id}").json()
        assert detail["ratings"] == {"average": 4.0, "count": 1}

    def test_insufficient_credits(self, client, make_user, make_film):
        user = make_user(credits=1)
        film = make_film(price=2)

        response = _rent(client, user, film.external_id)

        assert response.status_code == 402
        assert response.json()["code"] == "insufficient_credits"
        assert "2 required, 1 available" in response.json()["detail"]

    def test_unknown_film(self, client, make_user):
        user = make_user()

        response = _rent(client, user, 424242)

        assert response.status_code == 404
        assert response.json()["code"] == "film_not_found"

    def test_expired_rental_progress_is_gone(self, client, clock, make_user, make_film):
        user = make_user(credits=10)
        film = make_film(price=1)
        _rent(client, user, film.external_id)

        clock.advance(hours=49)
        response = _progress(client, user, film.external_id, 100)

        assert response.status_code == 410
        assert response.json()["code"] == "rental_expired"

        status = client.get(f"{API}/rentals/{film.external_id}", headers=auth_headers(user)).json()
        assert status["rented"] is False
        history = client.get(f"{API}/me/rentals/history", headers=auth_headers(user)).json()
        assert len(history) == 1
        assert history[0]["is_active"] is False
        assert client.get(f"{API}/me/rentals", headers=auth_headers(user)).json() == []

    def test_invalid_progress_payloads(self, client, make_user, make_film):
        user = make_user(credits=10)
        film = make_film(price=1)
        _rent(client, user, film.external_id)

        assert _progress(client, user, film.external_id, -5).status_code == 422
        assert _progress(client, user, film.external_id, "abc").status_code == 422
        assert _progress(client, user, film.external_id, "120").status_code == 422
        assert _progress(client, user, film.external_id, True).status_code == 422
        response = client.patch(
            f"{API}/rentals/{film.external_id}/progress",
            content='{"progress": NaN}',
            headers={**auth_headers(user), "Content-Type": "application/json"},
        )
        assert response.status_code == 422

        status = client.get(f"{API}/rentals/{film.external_id}", headers=auth_headers(user)).json()
        assert status["rental"]["progress"] == 0

    def test_progress_without_rental(self, client, make_user, make_film):
        user = make_user()
        film = make_film()

        response = _progress(client, user, film.external_id, 10)

        assert response.status_code == 404
        assert response.json()["code"] == "rental_not_found"


class TestAuthentication:

    def test_missing_token(self, client, make_film):
        film = make_film()

        response = client.post(f"{API}/rentals/{film.external_id}")

        assert response.status_code == 401

    def test_invalid_token(self, client, make_film):
        film = make_film()

        response = client.post(
            f"{API}/rentals/{film.external_id}",
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Could not validate credentials"

    def test_token_for_unknown_user(self, client, make_film):
        film = make_film()

        response = client.post(
            f"{API}/rentals/{film.external_id}",
            headers={"Authorization": f"Bearer {make_token(987654)}"},
        )

        assert response.status_code == 404
        assert response.json()["code"] == "user_not_found"


class TestCatalogAdmin:

    def test_member_cannot_curate(self, client, make_user):
        member = make_user()

        response = client.post(
            f"{API}/admin/films",
            json={"external_id": 603, "title": "The Matrix", "duration": 8160},
            headers=auth_headers(member),
        )

        assert response.status_code == 403

    def test_admin_curates_catalog(self, client, make_user):
        admin = make_user(is_admin=True)
        headers = auth_headers(admin)

        response = client.post(
            f"{API}/admin/films",
            json={"external_id": 603, "title": "The Matrix", "duration": 8160},
            headers=headers,
        )
        assert response.status_code == 201
        created = response.json()
        assert created["price"] == 1
        assert created["is_available"] is False

        duplicate = client.post(
            f"{API}/admin/films",
            json={"external_id": 603, "title": "The Matrix", "duration": 8160},
            headers=headers,
        )
        assert duplicate.status_code == 409

        assert client.get(f"{API}/films/").json() == []

        updated = client.patch(
            f"{API}/admin/films/603",
            json={"is_available": True, "price": 2},
            headers=headers,
        ).json()
        assert updated["is_available"] is True
        assert updated["price"] == 2

        assert [film["external_id"] for film in client.get(f"{API}/films/").json()] == [603]
        assert len(client.get(f"{API}/admin/films", headers=headers).json()) == 1

    def test_rent_unavailable_film(self, client, make_user, make_film):
        user = make_user()
        film = make_film(is_available=False)

        response = _rent(client, user, film.external_id)

        assert response.status_code == 409
        assert response.json()["code"] == "film_unavailable"

    def test_stats(self, client, make_user, make_film):
        admin = make_user(is_admin=True)
        member = make_user(credits=5)
        film = make_film(price=1)
        make_film(is_available=False)
        _rent(client, member, film.external_id)

        stats = client.get(f"{API}/admin/stats", headers=auth_headers(admin)).json()

        assert stats == {
            "users": 2,
            "films": 2,
            "available_films": 1,
            "active_rentals": 1,
            "reviews": 0,
        }


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy", "service": "videoclub"}
