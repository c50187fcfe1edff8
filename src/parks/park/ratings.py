"""Rating engine — rebuilds a park's rating summary from its approved reviews.

The summary is always recomputed from scratch and written as a full
snapshot, never adjusted incrementally. Recomputing twice without an
intervening change yields the same summary, and any recompute repairs
whatever an earlier racing recompute left behind.
"""

from collections import Counter
from dataclasses import dataclass

import structlog
from protean.utils.globals import current_domain

from parks.park.park import Park, load_park
from parks.review.review import Review, ReviewStatus
from parks.shared.paging import fetch_all

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RatingSummary:
    """Averages over approved reviews; every average is None when there are none."""

    average_rating: float | None = None
    average_difficulty: float | None = None
    average_terrain: float | None = None
    average_facilities: float | None = None
    review_count: int = 0
    average_recommended_stay: str | None = None


def _mean(values):
    return sum(values) / len(values) if values else None


def _most_common(values):
    counts = Counter(v for v in values if v is not None)
    if not counts:
        return None
    return counts.most_common(1)[0][0]


def summarize_reviews(reviews) -> RatingSummary:
    """Pure summary of a review collection. Reviews not APPROVED are ignored."""
    approved = [r for r in reviews if r.status == ReviewStatus.APPROVED.value]
    if not approved:
        return RatingSummary()

    return RatingSummary(
        average_rating=_mean([r.overall_rating for r in approved]),
        average_difficulty=_mean([r.difficulty_rating for r in approved]),
        average_terrain=_mean([r.terrain_rating for r in approved]),
        average_facilities=_mean([r.facilities_rating for r in approved]),
        review_count=len(approved),
        average_recommended_stay=_most_common([r.recommended_duration for r in approved]),
    )


def approved_reviews_for(park_id) -> list:
    """Every APPROVED review of the park, oldest first."""
    query = current_domain.repository_for(Review)._dao.query.filter(
        park_id=str(park_id), status=ReviewStatus.APPROVED.value
    )
    return sorted(fetch_all(query), key=lambda review: (review.created_at, str(review.id)))


def recompute_park_ratings(park_id) -> RatingSummary:
    """Recompute and store the rating summary of one park."""
    park = load_park(park_id)
    summary = summarize_reviews(approved_reviews_for(park_id))

    park.apply_rating_summary(summary)
    current_domain.repository_for(Park).add(park)

    logger.info(
        "Park ratings recomputed",
        park_id=str(park_id),
        review_count=summary.review_count,
        average_rating=summary.average_rating,
    )
    return summary


def recompute_all_park_ratings() -> int:
    """Recompute every park's summary. Returns the number of parks processed."""
    parks_found = fetch_all(current_domain.repository_for(Park)._dao.query)
    for park in parks_found:
        recompute_park_ratings(park.id)

    logger.info("All park ratings recomputed", parks=len(parks_found))
    return len(parks_found)
