"""EditReview — the author replaces their review's content.

Only the author may edit. Any edit sends the review back to PENDING, so an
approved review drops out of the park's rating summary until re-approved.
"""

import structlog
from protean.fields import Date, Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from parks.domain import parks
from parks.park.ratings import recompute_park_ratings
from parks.review.review import Review, decode_ratings, load_review
from parks.shared.access import actor_from, require_authenticated, require_owner

logger = structlog.get_logger(__name__)


@parks.command(part_of="Review")
class EditReview:
    review_id = Identifier(required=True)
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
class EditReviewHandler:
    @handle(EditReview)
    def edit_review(self, command):
        actor = require_authenticated(actor_from(command.actor_id, command.actor_role))
        review = load_review(command.review_id)
        require_owner(actor, review.user_id)

        previous_status = review.status
        review.edit(
            **decode_ratings(command.ratings),
            body=command.body,
            title=command.title,
            visit_date=command.visit_date,
            vehicle_type=command.vehicle_type,
            visit_condition=command.visit_condition,
            recommended_duration=command.recommended_duration,
            recommended_for=command.recommended_for,
        )
        current_domain.repository_for(Review).add(review)

        recompute_park_ratings(review.park_id)

        logger.info(
            "Review edited",
            review_id=str(review.id),
            park_id=str(review.park_id),
            previous_status=previous_status,
        )
