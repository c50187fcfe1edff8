"""Park aggregate — an off-road recreation site listed in the directory.

Parks are submitted by users and go live once an administrator approves
them. The rating summary fields (averages, review count, recommended stay)
are derived state: they are only ever written by ``apply_rating_summary``,
which the rating engine in ``parks.park.ratings`` calls after recomputing
from the approved reviews.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from parks.domain import parks
from parks.park.events import (
    ParkApproved,
    ParkDetailsUpdated,
    ParkRatingsRecomputed,
    ParkRejected,
    ParkSubmitted,
)
from parks.review.review import RecommendedDuration
from parks.shared.errors import InvalidTransitionError, NotFoundError


class ParkStatus(Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
    return slug or "park"


@parks.aggregate
class Park:
    """A listed off-road park and its denormalized review statistics."""

    name = String(required=True, max_length=200)
    slug = String(required=True, max_length=220, unique=True)
    state = String(max_length=50)
    description = Text()
    submitted_by = Identifier()
    status = String(choices=ParkStatus, default=ParkStatus.PENDING.value)

    # Rating summary (derived from APPROVED reviews only)
    average_rating = Float()
    average_difficulty = Float()
    average_terrain = Float()
    average_facilities = Float()
    review_count = Integer(default=0)
    average_recommended_stay = String(choices=RecommendedDuration)
    ratings_updated_at = DateTime()

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def name_must_not_be_blank(self):
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": ["Park name cannot be empty"]})

    @classmethod
    def submit(cls, name, slug, submitted_by=None, state=None, description=None):
        now = datetime.now(UTC)
        park = cls(
            name=name.strip() if name else name,
            slug=slug,
            state=state,
            description=description,
            submitted_by=str(submitted_by) if submitted_by else None,
            status=ParkStatus.PENDING.value,
            review_count=0,
            created_at=now,
            updated_at=now,
        )
        park.raise_(
            ParkSubmitted(
                park_id=str(park.id),
                name=park.name,
                slug=slug,
                submitted_by=park.submitted_by,
                submitted_at=now,
            )
        )
        return park

    def approve(self, admin_id):
        self._assert_pending("approve")
        now = datetime.now(UTC)
        self.status = ParkStatus.APPROVED.value
        self.updated_at = now
        self.raise_(ParkApproved(park_id=str(self.id), approved_by=str(admin_id), approved_at=now))

    def reject(self, admin_id):
        self._assert_pending("reject")
        now = datetime.now(UTC)
        self.status = ParkStatus.REJECTED.value
        self.updated_at = now
        self.raise_(ParkRejected(park_id=str(self.id), rejected_by=str(admin_id), rejected_at=now))

    def _assert_pending(self, verb):
        if self.status != ParkStatus.PENDING.value:
            raise InvalidTransitionError(f"Cannot {verb} a park in {self.status} status")

    def update_details(self, admin_id, name=None, state=None, description=None):
        """Replace the given details. The slug does not change."""
        now = datetime.now(UTC)
        if name is not None:
            self.name = name.strip()
        if state is not None:
            self.state = state or None
        if description is not None:
            self.description = description or None
        self.updated_at = now

        self.raise_(ParkDetailsUpdated(park_id=str(self.id), updated_by=str(admin_id), updated_at=now))

    @property
    def is_listed(self) -> bool:
        return self.status == ParkStatus.APPROVED.value

    def apply_rating_summary(self, summary):
        """Overwrite every summary field with a freshly computed snapshot."""
        now = datetime.now(UTC)
        self.average_rating = summary.average_rating
        self.average_difficulty = summary.average_difficulty
        self.average_terrain = summary.average_terrain
        self.average_facilities = summary.average_facilities
        self.review_count = summary.review_count
        self.average_recommended_stay = summary.average_recommended_stay
        self.ratings_updated_at = now

        self.raise_(
            ParkRatingsRecomputed(
                park_id=str(self.id),
                average_rating=summary.average_rating,
                review_count=summary.review_count,
                recomputed_at=now,
            )
        )


def load_park(park_id) -> Park:
    try:
        return current_domain.repository_for(Park).get(str(park_id))
    except ObjectNotFoundError:
        raise NotFoundError("Park not found") from None


def find_park_by_slug(slug) -> Park:
    parks_found = current_domain.repository_for(Park)._dao.query.filter(slug=slug).all().items
    if not parks_found:
        raise NotFoundError("Park not found")
    return parks_found[0]
