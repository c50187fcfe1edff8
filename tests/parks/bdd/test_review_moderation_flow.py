"""BDD tests for review moderation and rating aggregation."""

import json

from pytest_bdd import parsers, scenarios, when
from parks.review.editing import EditReview
from parks.review.moderation import SetReviewStatus
from parks.review.review import RATING_FIELDS
from parks.review.submission import SubmitReview

ADMIN = {"actor_id": "admin-bdd", "actor_role": "ADMIN"}

scenarios("features/review_moderation.feature")


@when(parsers.cfparse('the administrator approves the review by "{user_id}"'))
def admin_approves(reviews, user_id, attempt):
    attempt(SetReviewStatus(review_id=reviews[user_id], status="APPROVED", **ADMIN))


@when(parsers.cfparse('the administrator hides the review by "{user_id}"'))
def admin_hides(reviews, user_id, attempt):
    attempt(SetReviewStatus(review_id=reviews[user_id], status="HIDDEN", **ADMIN))


@when(parsers.cfparse('"{user_id}" edits the review with rating {rating:d}'))
def author_edits(reviews, user_id, rating, attempt):
    attempt(
        EditReview(
            review_id=reviews[user_id],
            ratings=json.dumps(dict.fromkeys(RATING_FIELDS, rating)),
            body="Revised after another visit.",
            actor_id=user_id,
        ),
    )


@when(parsers.cfparse('"{user_id}" submits another review'))
def submits_again(park_id, user_id, attempt):
    attempt(
        SubmitReview(
            park_id=park_id,
            ratings=json.dumps(dict.fromkeys(RATING_FIELDS, 2)),
            body="Second opinion.",
            actor_id=user_id,
        ),
    )
