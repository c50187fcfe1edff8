"""Domain events for the HelpfulVote aggregate."""

from protean.fields import DateTime, Identifier

from parks.domain import parks


@parks.event(part_of="HelpfulVote")
class HelpfulVoteCast:
    __version__ = 1

    vote_id = Identifier(required=True)
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    cast_at = DateTime(required=True)
