"""DeleteReview — hard delete by the author or an administrator.

Any status may be deleted. The review's helpful votes go with it, and the
park's rating summary is recomputed afterwards.
"""

import structlog
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from parks.domain import parks
from parks.park.ratings import recompute_park_ratings
from parks.review.review import Review, load_review
from parks.shared.access import actor_from, require_authenticated, require_owner_or_admin
from parks.vote.vote import delete_votes_for

logger = structlog.get_logger(__name__)


@parks.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    actor_id = Identifier()
    actor_role = String()


@parks.command_handler(part_of=Review)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        actor = require_authenticated(actor_from(command.actor_id, command.actor_role))
        review = load_review(command.review_id)
        require_owner_or_admin(actor, review.user_id)

        park_id = str(review.park_id)
        prior_status = review.status

        removed_votes = delete_votes_for(review.id)
        current_domain.repository_for(Review)._dao.delete(review)

        recompute_park_ratings(park_id)

        logger.info(
            "Review deleted",
            review_id=str(command.review_id),
            park_id=park_id,
            prior_status=prior_status,
            removed_votes=removed_votes,
            deleted_by=actor.user_id,
        )
