"""Tests for the review eligibility gate."""

from datetime import timedelta

from videoclub.models.rental import Rental
from videoclub.schemas.review import EligibilityReason
from videoclub.services.eligibility_service import EligibilityService, evaluate_eligibility
from videoclub.services.progress_service import ProgressService
from videoclub.services.rental_service import RentalService

from tests.conftest import START


def _rental(progress: float, expires_in_hours: float) -> Rental:
    return Rental(
        progress=progress,
        created_at=START,
        expires_at=START + timedelta(hours=expires_in_hours),
        credits_spent=1,
    )


class TestEvaluateEligibility:
    """The decision is a pure function of rentals, duration and time."""

    def test_never_rented(self):
        decision = evaluate_eligibility([], 3600, START, 0.5)

        assert decision.allowed is False
        assert decision.reason == EligibilityReason.NEVER_RENTED
        assert decision.reason.value == "never rented"

    def test_keep_watching_while_active(self):
        decision = evaluate_eligibility([_rental(1500, 48)], 3600, START, 0.5)

        assert decision.allowed is False
        assert decision.reason == EligibilityReason.KEEP_WATCHING
        assert decision.threshold_seconds == 1800
        assert decision.furthest_progress == 1500

    def test_expired_without_sufficient_viewing(self):
        decision = evaluate_eligibility([_rental(1500, -1)], 3600, START, 0.5)

        assert decision.allowed is False
        assert decision.reason == EligibilityReason.EXPIRED_UNWATCHED

    def test_threshold_reached_is_allowed_active_or_expired(self):
        for expires_in in (48, -1):
            decision = evaluate_eligibility([_rental(1800, expires_in)], 3600, START, 0.5)
            assert decision.allowed is True
            assert decision.reason == EligibilityReason.ELIGIBLE

    def test_furthest_progress_across_rentals(self):
        rentals = [_rental(2000, -72), _rental(10, 24)]

        decision = evaluate_eligibility(rentals, 3600, START, 0.5)

        assert decision.allowed is True
        assert decision.furthest_progress == 2000

    def test_new_active_rental_after_unwatched_expiry(self):
        rentals = [_rental(100, -72), _rental(10, 24)]

        decision = evaluate_eligibility(rentals, 3600, START, 0.5)

        assert decision.reason == EligibilityReason.KEEP_WATCHING


class TestCanReview:

    def test_eligibility_survives_expiry(self, db, clock, make_user, make_film):
        user = make_user(credits=10)
        film = make_film(price=1, duration=3600)
        RentalService(db, clock).rent_film(user.id, film.id)
        ProgressService(db, clock).update_progress(user.id, film.id, 3000)
        gate = EligibilityService(db, clock)

        assert gate.can_review(user.id, film.id).allowed is True

        clock.advance(days=30)
        assert gate.can_review(user.id, film.id).allowed is True

    def test_threshold_boundary(self, db, clock, make_user, make_film):
        user = make_user(credits=10)
        film = make_film(price=1, duration=1000)
        RentalService(db, clock).rent_film(user.id, film.id)
        ProgressService(db, clock).update_progress(user.id, film.id, 799)
        gate = EligibilityService(db, clock, threshold_ratio=0.8)

        assert gate.can_review(user.id, film.id).reason == EligibilityReason.KEEP_WATCHING

        ProgressService(db, clock).update_progress(user.id, film.id, 800)
        assert gate.can_review(user.id, film.id).allowed is True

    def test_expired_short_of_threshold(self, db, clock, make_user, make_film):
        user = make_user(credits=10)
        film = make_film(price=1, duration=3600)
        RentalService(db, clock).rent_film(user.id, film.id)
        ProgressService(db, clock).update_progress(user.id, film.id, 60)

        clock.advance(hours=49)
        decision = EligibilityService(db, clock, threshold_ratio=0.5).can_review(user.id, film.id)

        assert decision.allowed is False
        assert decision.reason.value == "rental expired without sufficient viewing"
