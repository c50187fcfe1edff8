"""Review listings — paged, newest-first reads with per-viewer vote flags.

Used by the park page (approved reviews of one park), the recent feed
(approved reviews everywhere), "my reviews" (all statuses of one author) and
the admin queue (any status).
"""

from dataclasses import dataclass

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from parks.review.review import Review, ReviewStatus
from parks.shared.paging import DEFAULT_LIMIT, Page, clamp, fetch_page
from parks.vote.vote import count_helpful_votes, has_voted


@dataclass(frozen=True)
class ReviewListing:
    review: Review
    helpful_count: int
    has_voted: bool


def list_reviews(
    park_id=None,
    status=None,
    user_id=None,
    page=1,
    limit=DEFAULT_LIMIT,
    viewer_id=None,
) -> Page:
    """One page of reviews matching the filters, newest first."""
    page, limit = clamp(page, limit)

    filters = {}
    if park_id is not None:
        filters["park_id"] = str(park_id)
    if user_id is not None:
        filters["user_id"] = str(user_id)
    if status is not None:
        try:
            filters["status"] = ReviewStatus(str(status).upper()).value
        except ValueError:
            raise ValidationError({"status": [f"Unknown review status {status!r}"]}) from None

    query = current_domain.repository_for(Review)._dao.query
    if filters:
        query = query.filter(**filters)

    reviews, total = fetch_page(query.order_by("-created_at"), page, limit)

    items = [
        ReviewListing(
            review=review,
            helpful_count=count_helpful_votes(review.id),
            has_voted=has_voted(review.id, viewer_id),
        )
        for review in reviews
    ]
    return Page(items=items, page=page, limit=limit, total=total)
