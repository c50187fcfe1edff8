"""SubmitPark — a signed-in user proposes a new park for the directory.

The park starts PENDING and is not reviewable until approved. The slug is
derived from the name; a numeric suffix keeps it unique.
"""

import structlog
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from parks.domain import parks
from parks.park.park import Park, slugify
from parks.shared.access import actor_from, require_authenticated

logger = structlog.get_logger(__name__)


@parks.command(part_of="Park")
class SubmitPark:
    name = String(required=True, max_length=200)
    state = String(max_length=50)
    description = Text()
    actor_id = Identifier()
    actor_role = String()


def _unique_slug(name) -> str:
    dao = current_domain.repository_for(Park)._dao
    base = slugify(name)
    slug, suffix = base, 2
    while dao.query.filter(slug=slug).all().total:
        slug = f"{base}-{suffix}"
        suffix += 1
    return slug


@parks.command_handler(part_of=Park)
class SubmitParkHandler:
    @handle(SubmitPark)
    def submit_park(self, command):
        actor = require_authenticated(actor_from(command.actor_id, command.actor_role))

        park = Park.submit(
            name=command.name,
            slug=_unique_slug(command.name),
            submitted_by=actor.user_id,
            state=command.state,
            description=command.description,
        )
        current_domain.repository_for(Park).add(park)

        logger.info("Park submitted", park_id=str(park.id), slug=park.slug, user_id=actor.user_id)
        return str(park.id)
