"""Tests for Review aggregate creation and payload validation."""

from datetime import date

import pytest
from protean.exceptions import ValidationError
from parks.review.events import ReviewSubmitted
from parks.review.review import Review, ReviewStatus, review_key
from parks.shared.errors import InvalidRatingError, MissingBodyError


def _submit(**overrides):
    defaults = {
        "park_id": "park-001",
        "user_id": "rider-001",
        "overall_rating": 4,
        "terrain_rating": 5,
        "facilities_rating": 3,
        "difficulty_rating": 4,
        "body": "Rocky climbs on the north loop and a good wash station.",
    }
    defaults.update(overrides)
    return Review.submit(**defaults)


class TestReviewSubmission:
    def test_submit_creates_review(self):
        review = _submit()
        assert review.id is not None
        assert str(review.park_id) == "park-001"
        assert str(review.user_id) == "rider-001"

    def test_submit_sets_pending_status(self):
        review = _submit()
        assert review.status == ReviewStatus.PENDING.value
        assert review.is_approved is False

    def test_submit_sets_all_four_ratings(self):
        review = _submit()
        assert review.overall_rating == 4
        assert review.terrain_rating == 5
        assert review.facilities_rating == 3
        assert review.difficulty_rating == 4

    def test_submit_sets_review_key(self):
        review = _submit()
        assert review.review_key == review_key("park-001", "rider-001") == "park-001:rider-001"

    def test_submit_sets_timestamps(self):
        review = _submit()
        assert review.created_at is not None
        assert review.updated_at == review.created_at

    def test_submit_with_visit_details(self):
        review = _submit(
            title="Muddy fun",
            visit_date=date(2026, 5, 2),
            vehicle_type="sxs",
            visit_condition="muddy",
            recommended_duration="fullDay",
            recommended_for="Riders with winches",
        )
        assert review.title == "Muddy fun"
        assert review.visit_date == date(2026, 5, 2)
        assert review.vehicle_type == "sxs"
        assert review.visit_condition == "muddy"
        assert review.recommended_duration == "fullDay"
        assert review.recommended_for == "Riders with winches"

    def test_body_is_trimmed(self):
        review = _submit(body="   Great trails.  ")
        assert review.body == "Great trails."

    def test_blank_optional_strings_stored_as_none(self):
        review = _submit(title="  ", vehicle_type="", recommended_for=" ")
        assert review.title is None
        assert review.vehicle_type is None
        assert review.recommended_for is None

    def test_submit_raises_review_submitted_event(self):
        review = _submit()
        assert len(review._events) == 1
        event = review._events[0]
        assert isinstance(event, ReviewSubmitted)
        assert event.review_id == str(review.id)
        assert event.park_id == "park-001"
        assert event.overall_rating == 4


class TestRatingValidation:
    @pytest.mark.parametrize("bad", [0, 6, -1, None, 3.5, "4", True])
    def test_out_of_range_or_non_integer_rating_rejected(self, bad):
        with pytest.raises(InvalidRatingError):
            _submit(terrain_rating=bad)

    def test_each_rating_dimension_is_checked(self):
        for name in ("overall_rating", "terrain_rating", "facilities_rating", "difficulty_rating"):
            with pytest.raises(InvalidRatingError):
                _submit(**{name: 9})

    def test_boundary_ratings_accepted(self):
        review = _submit(overall_rating=1, terrain_rating=5, facilities_rating=1, difficulty_rating=5)
        assert review.overall_rating == 1
        assert review.terrain_rating == 5

    def test_invalid_rating_error_kind(self):
        with pytest.raises(InvalidRatingError) as exc:
            _submit(overall_rating=0)
        assert exc.value.kind == "invalid_rating"
        assert exc.value.status_code == 400


class TestBodyValidation:
    @pytest.mark.parametrize("body", [None, "", "   ", "\n\t"])
    def test_missing_or_blank_body_rejected(self, body):
        with pytest.raises(MissingBodyError):
            _submit(body=body)


class TestEnumeratedFields:
    def test_unknown_vehicle_type_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _submit(vehicle_type="tank")
        assert "vehicle_type" in exc.value.messages

    def test_unknown_recommended_duration_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _submit(recommended_duration="weekend")
        assert "recommended_duration" in exc.value.messages
