"""Shared BDD fixtures and step definitions for the Parks domain."""

import json

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from parks.park.moderation import ModeratePark
from parks.park.park import Park
from parks.park.submission import SubmitPark
from parks.review.moderation import SetReviewStatus
from parks.review.review import Review
from parks.review.submission import SubmitReview
from parks.shared.errors import ParkDirectoryError

ADMIN = {"actor_id": "admin-bdd", "actor_role": "ADMIN"}


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def reviews():
    """Review ids keyed by author."""
    return {}


def process(command):
    return current_domain.process(command, asynchronous=False)


@pytest.fixture()
def attempt(error):
    """Process a command, capturing any domain error instead of raising it."""

    def _attempt(command):
        try:
            return process(command)
        except ParkDirectoryError as exc:
            error["exc"] = exc
            return None

    return _attempt


def submit_review(park_id, user_id, rating):
    return process(
        SubmitReview(
            park_id=park_id,
            ratings=json.dumps(
                {"overall_rating": rating, "terrain_rating": 3, "facilities_rating": 3, "difficulty_rating": 3}
            ),
            body=f"Trail report from {user_id}.",
            actor_id=user_id,
        )
    )


def set_status(review_id, status):
    return process(SetReviewStatus(review_id=review_id, status=status, **ADMIN))


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an approved park", target_fixture="park_id")
def approved_park():
    park_id = process(SubmitPark(name="BDD Trails", actor_id="rider-bdd"))
    process(ModeratePark(park_id=park_id, action="approve", **ADMIN))
    return park_id


@given(parsers.cfparse('"{user_id}" has an approved review rated {rating:d}'))
def approved_review(park_id, reviews, user_id, rating):
    reviews[user_id] = submit_review(park_id, user_id, rating)
    set_status(reviews[user_id], "APPROVED")


@given(parsers.cfparse('"{user_id}" has a pending review rated {rating:d}'))
def pending_review(park_id, reviews, user_id, rating):
    reviews[user_id] = submit_review(park_id, user_id, rating)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the request fails with "{kind}"'))
def request_fails(error, kind):
    assert error["exc"] is not None, "Expected a domain error but none was raised"
    assert error["exc"].kind == kind


@then(parsers.cfparse("the park average rating is {average:f} over {count:d} reviews"))
def park_average(park_id, average, count):
    park = current_domain.repository_for(Park).get(park_id)
    assert park.average_rating == average
    assert park.review_count == count


@then("the park has no rating")
def park_has_no_rating(park_id):
    park = current_domain.repository_for(Park).get(park_id)
    assert park.review_count == 0
    assert park.average_rating is None
    assert park.average_recommended_stay is None


@then(parsers.cfparse('the review by "{user_id}" is "{status}"'))
def review_status_is(reviews, user_id, status):
    assert current_domain.repository_for(Review).get(reviews[user_id]).status == status
