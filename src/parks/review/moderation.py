"""SetReviewStatus — an administrator approves, rejects, hides or restores a review.

The target status is APPROVED or HIDDEN; the concrete action follows from
the review's current status (PENDING→APPROVED approves, HIDDEN→APPROVED
restores, APPROVED→HIDDEN hides, PENDING→HIDDEN rejects). Anything else is
refused. The park's rating summary is recomputed in the same unit of work.
"""

import structlog
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from parks.domain import parks
from parks.park.ratings import recompute_park_ratings
from parks.review.review import Review, load_review
from parks.shared.access import actor_from, require_admin

logger = structlog.get_logger(__name__)


@parks.command(part_of="Review")
class SetReviewStatus:
    review_id = Identifier(required=True)
    status = String(required=True)  # "APPROVED" or "HIDDEN"
    actor_id = Identifier()
    actor_role = String()


@parks.command_handler(part_of=Review)
class SetReviewStatusHandler:
    @handle(SetReviewStatus)
    def set_review_status(self, command):
        admin = require_admin(actor_from(command.actor_id, command.actor_role))
        review = load_review(command.review_id)

        action = review.set_status(str(command.status).upper(), moderator_id=admin.user_id)
        current_domain.repository_for(Review).add(review)

        recompute_park_ratings(review.park_id)

        logger.info(
            "Review moderated",
            review_id=str(review.id),
            park_id=str(review.park_id),
            action=action.value,
            status=review.status,
            admin_id=admin.user_id,
        )
        return action.value
