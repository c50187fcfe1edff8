"""Tests for the Park aggregate and its rating summary fields."""

import pytest
from protean.exceptions import ValidationError
from parks.park.events import ParkApproved, ParkRatingsRecomputed, ParkRejected, ParkSubmitted
from parks.park.park import Park, ParkStatus, slugify
from parks.park.ratings import RatingSummary
from parks.shared.errors import InvalidTransitionError


def _park(**overrides):
    defaults = {"name": "Hatfield-McCoy Trails", "slug": "hatfield-mccoy-trails", "submitted_by": "rider-001"}
    defaults.update(overrides)
    return Park.submit(**defaults)


class TestSlugify:
    def test_lowercases_and_dashes(self):
        assert slugify("Hatfield-McCoy Trails") == "hatfield-mccoy-trails"

    def test_strips_punctuation(self):
        assert slugify("  Rausch Creek O.R.V. Park!! ") == "rausch-creek-o-r-v-park"

    def test_falls_back_when_nothing_left(self):
        assert slugify("!!!") == "park"


class TestParkSubmission:
    def test_submit_starts_pending_with_empty_summary(self):
        park = _park()
        assert park.status == ParkStatus.PENDING.value
        assert park.is_listed is False
        assert park.review_count == 0
        assert park.average_rating is None
        assert park.average_recommended_stay is None

    def test_submit_raises_event(self):
        park = _park()
        assert isinstance(park._events[-1], ParkSubmitted)
        assert park._events[-1].slug == "hatfield-mccoy-trails"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            _park(name="   ")


class TestParkModeration:
    def test_approve_lists_park(self):
        park = _park()
        park.approve("admin-001")
        assert park.status == ParkStatus.APPROVED.value
        assert park.is_listed
        assert isinstance(park._events[-1], ParkApproved)

    def test_reject(self):
        park = _park()
        park.reject("admin-001")
        assert park.status == ParkStatus.REJECTED.value
        assert isinstance(park._events[-1], ParkRejected)

    def test_cannot_approve_twice(self):
        park = _park()
        park.approve("admin-001")
        with pytest.raises(InvalidTransitionError):
            park.approve("admin-001")

    def test_cannot_approve_rejected_park(self):
        park = _park()
        park.reject("admin-001")
        with pytest.raises(InvalidTransitionError):
            park.approve("admin-001")


class TestApplyRatingSummary:
    def test_overwrites_every_summary_field(self):
        park = _park()
        park.apply_rating_summary(
            RatingSummary(
                average_rating=4.5,
                average_difficulty=3.0,
                average_terrain=4.0,
                average_facilities=2.5,
                review_count=2,
                average_recommended_stay="fullDay",
            )
        )
        assert park.average_rating == 4.5
        assert park.average_difficulty == 3.0
        assert park.average_terrain == 4.0
        assert park.average_facilities == 2.5
        assert park.review_count == 2
        assert park.average_recommended_stay == "fullDay"
        assert park.ratings_updated_at is not None
        assert isinstance(park._events[-1], ParkRatingsRecomputed)

    def test_empty_summary_clears_previous_values(self):
        park = _park()
        park.apply_rating_summary(RatingSummary(average_rating=4.0, review_count=1, average_recommended_stay="halfDay"))
        park.apply_rating_summary(RatingSummary())
        assert park.review_count == 0
        assert park.average_rating is None
        assert park.average_recommended_stay is None
