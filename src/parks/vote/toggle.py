"""ToggleHelpfulVote — mark a review helpful, or take the mark back.

Idempotent in pairs: toggling twice leaves no vote and the original count.
"""

from dataclasses import dataclass

import structlog
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from parks.domain import parks
from parks.review.review import load_review
from parks.shared.access import actor_from, require_authenticated
from parks.vote.vote import HelpfulVote, count_helpful_votes, ensure_not_author, find_vote

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class VoteState:
    has_voted: bool
    helpful_count: int


@parks.command(part_of="HelpfulVote")
class ToggleHelpfulVote:
    review_id = Identifier(required=True)
    actor_id = Identifier()
    actor_role = String()


@parks.command_handler(part_of=HelpfulVote)
class ToggleHelpfulVoteHandler:
    @handle(ToggleHelpfulVote)
    def toggle_helpful_vote(self, command):
        actor = require_authenticated(actor_from(command.actor_id, command.actor_role))
        review = load_review(command.review_id)
        ensure_not_author(review, actor.user_id)

        repo = current_domain.repository_for(HelpfulVote)
        existing = find_vote(review.id, actor.user_id)
        if existing is not None:
            repo._dao.delete(existing)
            voted = False
        else:
            try:
                repo.add(HelpfulVote.cast(review, actor.user_id))
            except ValidationError as exc:
                if "vote_key" not in (exc.messages or {}):
                    raise
                # A concurrent toggle got there first; the vote exists either way.
                logger.info("Helpful vote already recorded", review_id=str(review.id), user_id=actor.user_id)
            voted = True

        state = VoteState(has_voted=voted, helpful_count=count_helpful_votes(review.id))
        logger.info(
            "Helpful vote toggled",
            review_id=str(review.id),
            user_id=actor.user_id,
            has_voted=state.has_voted,
            helpful_count=state.helpful_count,
        )
        return state
