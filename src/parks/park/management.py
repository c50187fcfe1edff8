"""Park management — administrators correct or remove listed parks.

Removing a park removes everything hanging off it: its reviews and the
helpful votes on those reviews.
"""

import structlog
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from parks.domain import parks
from parks.park.park import Park, load_park
from parks.review.review import Review
from parks.shared.access import actor_from, require_admin
from parks.shared.paging import fetch_all
from parks.vote.vote import delete_votes_for

logger = structlog.get_logger(__name__)


@parks.command(part_of="Park")
class UpdatePark:
    park_id = Identifier(required=True)
    name = String(max_length=200)
    state = String(max_length=50)
    description = Text()
    actor_id = Identifier()
    actor_role = String()


@parks.command(part_of="Park")
class DeletePark:
    park_id = Identifier(required=True)
    actor_id = Identifier()
    actor_role = String()


@parks.command_handler(part_of=Park)
class ManageParkHandler:
    @handle(UpdatePark)
    def update_park(self, command):
        admin = require_admin(actor_from(command.actor_id, command.actor_role))
        park = load_park(command.park_id)

        park.update_details(
            admin.user_id,
            name=command.name,
            state=command.state,
            description=command.description,
        )
        current_domain.repository_for(Park).add(park)

        logger.info("Park updated", park_id=str(park.id), admin_id=admin.user_id)

    @handle(DeletePark)
    def delete_park(self, command):
        admin = require_admin(actor_from(command.actor_id, command.actor_role))
        park = load_park(command.park_id)

        review_dao = current_domain.repository_for(Review)._dao
        reviews = fetch_all(review_dao.query.filter(park_id=str(park.id)))
        removed_votes = 0
        for review in reviews:
            removed_votes += delete_votes_for(review.id)
            review_dao.delete(review)

        current_domain.repository_for(Park)._dao.delete(park)

        logger.info(
            "Park deleted",
            park_id=str(park.id),
            slug=park.slug,
            removed_reviews=len(reviews),
            removed_votes=removed_votes,
            admin_id=admin.user_id,
        )
