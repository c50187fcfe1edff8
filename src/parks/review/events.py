"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from parks.domain import parks


@parks.event(part_of="Review")
class ReviewSubmitted:
    """A user submitted a review; it awaits moderation."""

    __version__ = 1

    review_id = Identifier(required=True)
    park_id = Identifier(required=True)
    user_id = Identifier(required=True)
    overall_rating = Integer(required=True)
    submitted_at = DateTime(required=True)


@parks.event(part_of="Review")
class ReviewEdited:
    """The author replaced the review content; it went back to moderation."""

    __version__ = 1

    review_id = Identifier(required=True)
    park_id = Identifier(required=True)
    previous_status = String(required=True)
    overall_rating = Integer(required=True)
    edited_at = DateTime(required=True)


@parks.event(part_of="Review")
class ReviewModerated:
    """An administrator moved the review between moderation states."""

    __version__ = 1

    review_id = Identifier(required=True)
    park_id = Identifier(required=True)
    moderator_id = Identifier(required=True)
    action = String(required=True)
    from_status = String(required=True)
    to_status = String(required=True)
    moderated_at = DateTime(required=True)
