"""SubmitReview — a signed-in user reviews a listed park.

One review per user per park. The application check gives a clean error;
the unique ``review_key`` column is what closes the race between two
concurrent submissions. New reviews are PENDING, so the park's rating
summary is untouched until an administrator approves.
"""

import structlog
from protean.exceptions import ValidationError
from protean.fields import Date, Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from parks.domain import parks
from parks.park.park import load_park
from parks.review.review import Review, decode_ratings, review_key
from parks.shared.access import actor_from, require_authenticated
from parks.shared.errors import DuplicateReviewError, NotFoundError

logger = structlog.get_logger(__name__)


def already_reviewed(key) -> bool:
    return bool(current_domain.repository_for(Review)._dao.query.filter(review_key=key).all().total)


@parks.command(part_of="Review")
class SubmitReview:
    park_id = Identifier(required=True)
    actor_id = Identifier()
    actor_role = String()
    ratings = Text()  # JSON object: overall_rating, terrain_rating, facilities_rating, difficulty_rating
    title = String(max_length=200)
    body = Text()
    visit_date = Date()
    vehicle_type = String()
    visit_condition = String()
    recommended_duration = String()
    recommended_for = Text()


@parks.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        actor = require_authenticated(actor_from(command.actor_id, command.actor_role))

        park = load_park(command.park_id)
        if not park.is_listed:
            raise NotFoundError("Park not found")

        repo = current_domain.repository_for(Review)
        key = review_key(park.id, actor.user_id)
        if already_reviewed(key):
            raise DuplicateReviewError()

        review = Review.submit(
            park_id=park.id,
            user_id=actor.user_id,
            **decode_ratings(command.ratings),
            body=command.body,
            title=command.title,
            visit_date=command.visit_date,
            vehicle_type=command.vehicle_type,
            visit_condition=command.visit_condition,
            recommended_duration=command.recommended_duration,
            recommended_for=command.recommended_for,
        )

        try:
            repo.add(review)
        except ValidationError as exc:
            if "review_key" in (exc.messages or {}):
                raise DuplicateReviewError() from exc
            raise

        logger.info("Review submitted", review_id=str(review.id), park_id=str(park.id), user_id=actor.user_id)
        return str(review.id)
