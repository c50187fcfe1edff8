"""Review aggregate — a user's rated critique of an off-road park.

One review per user per park. Content changes come only from the author;
status changes come from the author (an edit sends the review back to
moderation) or from an administrator.

State Machine (3 states, plus hard delete from any state):
    PENDING  → APPROVED (approve) | HIDDEN (reject)
    APPROVED → HIDDEN (hide)
    HIDDEN   → APPROVED (restore)
    any      → PENDING (author edit)

Only APPROVED reviews count toward the park's rating summary.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Date, DateTime, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from parks.domain import parks
from parks.review.events import ReviewEdited, ReviewModerated, ReviewSubmitted
from parks.shared.errors import (
    InvalidRatingError,
    InvalidTransitionError,
    MissingBodyError,
    NotFoundError,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ReviewStatus(Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    HIDDEN = "HIDDEN"


class ModerationAction(Enum):
    APPROVE = "approve"
    REJECT = "reject"
    HIDE = "hide"
    RESTORE = "restore"


class VehicleType(Enum):
    MOTORCYCLE = "motorcycle"
    ATV = "atv"
    SXS = "sxs"
    FULL_SIZE = "fullSize"


class VisitCondition(Enum):
    DRY = "dry"
    MUDDY = "muddy"
    SNOW = "snow"
    WET = "wet"
    MIXED = "mixed"


class RecommendedDuration(Enum):
    QUICK_RIDE = "quickRide"
    HALF_DAY = "halfDay"
    FULL_DAY = "fullDay"
    OVERNIGHT = "overnight"


# ---------------------------------------------------------------------------
# State Machine
# ---------------------------------------------------------------------------
# action -> (required current status, resulting status)
_MODERATION_TRANSITIONS = {
    ModerationAction.APPROVE: (ReviewStatus.PENDING, ReviewStatus.APPROVED),
    ModerationAction.REJECT: (ReviewStatus.PENDING, ReviewStatus.HIDDEN),
    ModerationAction.HIDE: (ReviewStatus.APPROVED, ReviewStatus.HIDDEN),
    ModerationAction.RESTORE: (ReviewStatus.HIDDEN, ReviewStatus.APPROVED),
}

RATING_FIELDS = ("overall_rating", "terrain_rating", "facilities_rating", "difficulty_rating")


def action_for(current: ReviewStatus, target: ReviewStatus) -> ModerationAction | None:
    """The moderation action that moves a review from ``current`` to ``target``, if any."""
    for action, (source, result) in _MODERATION_TRANSITIONS.items():
        if source == current and result == target:
            return action
    return None


# ---------------------------------------------------------------------------
# Payload validation
# ---------------------------------------------------------------------------
def validate_ratings(ratings: dict) -> dict:
    """All four ratings present, whole numbers, 1 through 5."""
    for name in RATING_FIELDS:
        value = ratings.get(name)
        if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 5:
            raise InvalidRatingError()
    return {name: ratings[name] for name in RATING_FIELDS}


def decode_ratings(raw) -> dict:
    """The four ratings from a command's JSON ``ratings`` payload, values untouched.

    Anything that is not a JSON object counts as missing ratings.
    """
    ratings = {}
    if raw:
        try:
            ratings = json.loads(raw)
        except (TypeError, ValueError):
            raise InvalidRatingError() from None
        if not isinstance(ratings, dict):
            raise InvalidRatingError()
    return {name: ratings.get(name) for name in RATING_FIELDS}


def clean_body(body) -> str:
    if body is None or not str(body).strip():
        raise MissingBodyError()
    return str(body).strip()


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _content(ratings, body, title, visit_date, vehicle_type, visit_condition, recommended_duration, recommended_for):
    return {
        **validate_ratings(ratings),
        "body": clean_body(body),
        "title": _blank_to_none(title),
        "visit_date": visit_date or None,
        "vehicle_type": _blank_to_none(vehicle_type),
        "visit_condition": _blank_to_none(visit_condition),
        "recommended_duration": _blank_to_none(recommended_duration),
        "recommended_for": _blank_to_none(recommended_for),
    }


def review_key(park_id, user_id) -> str:
    """Store-level uniqueness key: one review per (park, user)."""
    return f"{park_id}:{user_id}"


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@parks.aggregate
class Review:
    """A user's review of a park: four star ratings, a body, and visit details."""

    park_id = Identifier(required=True)
    user_id = Identifier(required=True)
    review_key = String(required=True, max_length=255, unique=True)

    # Ratings
    overall_rating = Integer(required=True, min_value=1, max_value=5)
    terrain_rating = Integer(required=True, min_value=1, max_value=5)
    facilities_rating = Integer(required=True, min_value=1, max_value=5)
    difficulty_rating = Integer(required=True, min_value=1, max_value=5)

    # Content
    title = String(max_length=200)
    body = Text(required=True)

    # Visit details
    visit_date = Date()
    vehicle_type = String(choices=VehicleType)
    visit_condition = String(choices=VisitCondition)
    recommended_duration = String(choices=RecommendedDuration)
    recommended_for = Text()

    status = String(choices=ReviewStatus, default=ReviewStatus.PENDING.value)

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def body_must_not_be_blank(self):
        if self.body is not None and not self.body.strip():
            raise ValidationError({"body": ["Review body cannot be empty"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(
        cls,
        park_id,
        user_id,
        overall_rating,
        terrain_rating,
        facilities_rating,
        difficulty_rating,
        body,
        title=None,
        visit_date=None,
        vehicle_type=None,
        visit_condition=None,
        recommended_duration=None,
        recommended_for=None,
    ):
        """Submit a new review. It starts PENDING and is invisible until approved."""
        content = _content(
            {
                "overall_rating": overall_rating,
                "terrain_rating": terrain_rating,
                "facilities_rating": facilities_rating,
                "difficulty_rating": difficulty_rating,
            },
            body,
            title,
            visit_date,
            vehicle_type,
            visit_condition,
            recommended_duration,
            recommended_for,
        )
        now = datetime.now(UTC)

        review = cls(
            park_id=str(park_id),
            user_id=str(user_id),
            review_key=review_key(park_id, user_id),
            status=ReviewStatus.PENDING.value,
            created_at=now,
            updated_at=now,
            **content,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                park_id=str(park_id),
                user_id=str(user_id),
                overall_rating=review.overall_rating,
                submitted_at=now,
            )
        )
        return review

    # -------------------------------------------------------------------
    # Edit
    # -------------------------------------------------------------------
    def edit(
        self,
        overall_rating,
        terrain_rating,
        facilities_rating,
        difficulty_rating,
        body,
        title=None,
        visit_date=None,
        vehicle_type=None,
        visit_condition=None,
        recommended_duration=None,
        recommended_for=None,
    ):
        """Replace the review content. Allowed from any status; always returns to PENDING."""
        content = _content(
            {
                "overall_rating": overall_rating,
                "terrain_rating": terrain_rating,
                "facilities_rating": facilities_rating,
                "difficulty_rating": difficulty_rating,
            },
            body,
            title,
            visit_date,
            vehicle_type,
            visit_condition,
            recommended_duration,
            recommended_for,
        )
        previous_status = self.status
        now = datetime.now(UTC)

        with atomic_change(self):
            for field_name, value in content.items():
                setattr(self, field_name, value)
            self.status = ReviewStatus.PENDING.value
            self.updated_at = now

        self.raise_(
            ReviewEdited(
                review_id=str(self.id),
                park_id=str(self.park_id),
                previous_status=previous_status,
                overall_rating=self.overall_rating,
                edited_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------
    def approve(self, moderator_id):
        self._moderate(ModerationAction.APPROVE, moderator_id)

    def reject(self, moderator_id):
        self._moderate(ModerationAction.REJECT, moderator_id)

    def hide(self, moderator_id):
        self._moderate(ModerationAction.HIDE, moderator_id)

    def restore(self, moderator_id):
        self._moderate(ModerationAction.RESTORE, moderator_id)

    def set_status(self, target_status, moderator_id) -> ModerationAction:
        """Move to APPROVED or HIDDEN, picking the action from the current status."""
        current = ReviewStatus(self.status)
        try:
            target = ReviewStatus(target_status)
        except ValueError:
            raise InvalidTransitionError(f"Unknown review status {target_status!r}") from None

        action = action_for(current, target)
        if action is None:
            raise InvalidTransitionError(f"Cannot transition from {current.value} to {target.value}")

        self._moderate(action, moderator_id)
        return action

    def _moderate(self, action, moderator_id):
        source, result = _MODERATION_TRANSITIONS[action]
        current = ReviewStatus(self.status)
        if current != source:
            raise InvalidTransitionError(f"Cannot {action.value} a review in {current.value} status")

        now = datetime.now(UTC)
        self.status = result.value
        self.updated_at = now

        self.raise_(
            ReviewModerated(
                review_id=str(self.id),
                park_id=str(self.park_id),
                moderator_id=str(moderator_id),
                action=action.value,
                from_status=current.value,
                to_status=result.value,
                moderated_at=now,
            )
        )

    @property
    def is_approved(self) -> bool:
        return self.status == ReviewStatus.APPROVED.value


def load_review(review_id) -> Review:
    try:
        return current_domain.repository_for(Review).get(str(review_id))
    except ObjectNotFoundError:
        raise NotFoundError("Review not found") from None
