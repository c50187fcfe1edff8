"""Command helpers shared by the application tests."""

import json

import pytest
from protean import current_domain
from parks.park.moderation import ModeratePark
from parks.park.submission import SubmitPark
from parks.review.moderation import SetReviewStatus
from parks.review.submission import SubmitReview

ADMIN = {"actor_id": "admin-001", "actor_role": "ADMIN"}


def _as_user(user_id):
    return {"actor_id": user_id, "actor_role": "USER"}


@pytest.fixture()
def approved_park():
    """Submit a park and approve it; returns the park id."""

    def _create(name="Windrock Park"):
        park_id = current_domain.process(
            SubmitPark(name=name, state="TN", **_as_user("rider-park")),
            asynchronous=False,
        )
        current_domain.process(ModeratePark(park_id=park_id, action="approve", **ADMIN), asynchronous=False)
        return park_id

    return _create


@pytest.fixture()
def submit_review():
    def _submit(park_id, user_id, overall=4, ratings=None, **overrides):
        scores = {"overall_rating": overall, "terrain_rating": 4, "facilities_rating": 3, "difficulty_rating": 3}
        scores.update(ratings or {})
        payload = {
            "park_id": park_id,
            "ratings": json.dumps(scores),
            "body": f"Trail report from {user_id}.",
            **_as_user(user_id),
        }
        payload.update(overrides)
        return current_domain.process(SubmitReview(**payload), asynchronous=False)

    return _submit


@pytest.fixture()
def set_status():
    def _set(review_id, status):
        return current_domain.process(
            SetReviewStatus(review_id=review_id, status=status, **ADMIN),
            asynchronous=False,
        )

    return _set
