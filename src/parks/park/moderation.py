"""ModeratePark — an administrator approves or rejects a submitted park."""

from enum import Enum

import structlog
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from parks.domain import parks
from parks.park.park import Park, load_park
from parks.shared.access import actor_from, require_admin

logger = structlog.get_logger(__name__)


class ParkModerationAction(Enum):
    APPROVE = "approve"
    REJECT = "reject"


@parks.command(part_of="Park")
class ModeratePark:
    park_id = Identifier(required=True)
    action = String(required=True)  # "approve" or "reject"
    actor_id = Identifier()
    actor_role = String()


@parks.command_handler(part_of=Park)
class ModerateParkHandler:
    @handle(ModeratePark)
    def moderate_park(self, command):
        admin = require_admin(actor_from(command.actor_id, command.actor_role))

        try:
            action = ParkModerationAction(str(command.action).lower())
        except ValueError:
            raise ValidationError({"action": ["Action must be 'approve' or 'reject'"]}) from None

        park = load_park(command.park_id)
        if action == ParkModerationAction.APPROVE:
            park.approve(admin.user_id)
        else:
            park.reject(admin.user_id)
        current_domain.repository_for(Park).add(park)

        logger.info("Park moderated", park_id=str(park.id), action=action.value, admin_id=admin.user_id)
