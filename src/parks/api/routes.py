"""FastAPI endpoints for the Parks domain.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts). The caller's identity is passed
into every command so the handlers can apply the access policy.
"""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from parks.api.identity import current_actor
from parks.api.schemas import (
    HelpfulVoteResponse,
    ModerateParkRequest,
    ParkPageResponse,
    PaginationResponse,
    ParkIdResponse,
    ParkResponse,
    ReviewContentRequest,
    ReviewIdResponse,
    ReviewPageResponse,
    ReviewResponse,
    SetReviewStatusRequest,
    StatusResponse,
    SubmitParkRequest,
    UpdateParkRequest,
)
from parks.park.listing import list_parks
from parks.park.management import DeletePark, UpdatePark
from parks.park.moderation import ModeratePark
from parks.park.park import find_park_by_slug
from parks.park.submission import SubmitPark
from parks.review.editing import EditReview
from parks.review.listing import list_reviews
from parks.review.moderation import SetReviewStatus
from parks.review.removal import DeleteReview
from parks.review.review import RATING_FIELDS, ReviewStatus
from parks.review.submission import SubmitReview
from parks.shared.access import require_admin, require_authenticated
from parks.shared.errors import NotFoundError
from parks.shared.paging import DEFAULT_LIMIT
from parks.vote.toggle import ToggleHelpfulVote

park_router = APIRouter(prefix="/parks", tags=["parks"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])
admin_router = APIRouter(prefix="/admin", tags=["admin"])


def _actor_fields(actor):
    if actor is None:
        return {"actor_id": None, "actor_role": None}
    return {"actor_id": actor.user_id, "actor_role": actor.role}


def _content_fields(body: ReviewContentRequest) -> dict:
    content = body.model_dump(exclude=set(RATING_FIELDS))
    content["ratings"] = json.dumps({name: getattr(body, name) for name in RATING_FIELDS})
    return content


def _listed_park(slug, actor):
    park = find_park_by_slug(slug)
    if not park.is_listed and not (actor is not None and actor.is_admin):
        raise NotFoundError("Park not found")
    return park


def _park_response(park) -> ParkResponse:
    return ParkResponse(
        id=str(park.id),
        name=park.name,
        slug=park.slug,
        state=park.state,
        description=park.description,
        status=park.status,
        average_rating=park.average_rating,
        average_difficulty=park.average_difficulty,
        average_terrain=park.average_terrain,
        average_facilities=park.average_facilities,
        review_count=park.review_count or 0,
        average_recommended_stay=park.average_recommended_stay,
    )


def _pagination(result) -> PaginationResponse:
    return PaginationResponse(
        page=result.page,
        limit=result.limit,
        total=result.total,
        total_pages=result.total_pages,
    )


def _page_response(result) -> ReviewPageResponse:
    reviews = []
    for listing in result.items:
        review = listing.review
        reviews.append(
            ReviewResponse(
                id=str(review.id),
                park_id=str(review.park_id),
                user_id=str(review.user_id),
                overall_rating=review.overall_rating,
                terrain_rating=review.terrain_rating,
                facilities_rating=review.facilities_rating,
                difficulty_rating=review.difficulty_rating,
                title=review.title,
                body=review.body,
                visit_date=review.visit_date,
                vehicle_type=review.vehicle_type,
                visit_condition=review.visit_condition,
                recommended_duration=review.recommended_duration,
                recommended_for=review.recommended_for,
                status=review.status,
                created_at=review.created_at,
                updated_at=review.updated_at,
                helpful_count=listing.helpful_count,
                has_voted=listing.has_voted,
            )
        )
    return ReviewPageResponse(
        reviews=reviews,
        pagination=_pagination(result),
    )


# --- Park endpoints ---


@park_router.get("", response_model=ParkPageResponse)
async def park_directory(page: int = Query(1), limit: int = Query(DEFAULT_LIMIT)) -> ParkPageResponse:
    """Approved parks with their rating summaries, by name."""
    result = list_parks(page=page, limit=limit)
    return ParkPageResponse(
        parks=[_park_response(park) for park in result.items],
        pagination=_pagination(result),
    )


@park_router.post("", status_code=201, response_model=ParkIdResponse)
async def submit_park(body: SubmitParkRequest, actor=Depends(current_actor)) -> ParkIdResponse:
    command = SubmitPark(
        name=body.name,
        state=body.state,
        description=body.description,
        **_actor_fields(actor),
    )
    park_id = current_domain.process(command, asynchronous=False)
    return ParkIdResponse(park_id=park_id)


@park_router.put("/{park_id}/moderate", response_model=StatusResponse)
async def moderate_park(park_id: str, body: ModerateParkRequest, actor=Depends(current_actor)) -> StatusResponse:
    command = ModeratePark(park_id=park_id, action=body.action, **_actor_fields(actor))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@park_router.get("/{slug}", response_model=ParkResponse)
async def get_park(slug: str, actor=Depends(current_actor)) -> ParkResponse:
    return _park_response(_listed_park(slug, actor))


@park_router.get("/{slug}/reviews", response_model=ReviewPageResponse)
async def park_reviews(
    slug: str,
    page: int = Query(1),
    limit: int = Query(DEFAULT_LIMIT),
    actor=Depends(current_actor),
) -> ReviewPageResponse:
    park = _listed_park(slug, actor)
    result = list_reviews(
        park_id=park.id,
        status=ReviewStatus.APPROVED.value,
        page=page,
        limit=limit,
        viewer_id=actor.user_id if actor else None,
    )
    return _page_response(result)


@park_router.post("/{slug}/reviews", status_code=201, response_model=ReviewIdResponse)
async def submit_review(
    slug: str, body: ReviewContentRequest, actor=Depends(current_actor)
) -> ReviewIdResponse:
    require_authenticated(actor)
    park = find_park_by_slug(slug)
    command = SubmitReview(park_id=park.id, **_content_fields(body), **_actor_fields(actor))
    review_id = current_domain.process(command, asynchronous=False)
    return ReviewIdResponse(review_id=review_id)


# --- Review endpoints ---


@review_router.get("/recent", response_model=ReviewPageResponse)
async def recent_reviews(
    page: int = Query(1),
    limit: int = Query(DEFAULT_LIMIT),
    actor=Depends(current_actor),
) -> ReviewPageResponse:
    result = list_reviews(
        status=ReviewStatus.APPROVED.value,
        page=page,
        limit=limit,
        viewer_id=actor.user_id if actor else None,
    )
    return _page_response(result)


@review_router.get("/mine", response_model=ReviewPageResponse)
async def my_reviews(
    page: int = Query(1),
    limit: int = Query(DEFAULT_LIMIT),
    actor=Depends(current_actor),
) -> ReviewPageResponse:
    actor = require_authenticated(actor)
    result = list_reviews(user_id=actor.user_id, page=page, limit=limit, viewer_id=actor.user_id)
    return _page_response(result)


@review_router.put("/{review_id}", response_model=StatusResponse)
async def edit_review(
    review_id: str, body: ReviewContentRequest, actor=Depends(current_actor)
) -> StatusResponse:
    command = EditReview(review_id=review_id, **_content_fields(body), **_actor_fields(actor))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, actor=Depends(current_actor)) -> StatusResponse:
    command = DeleteReview(review_id=review_id, **_actor_fields(actor))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@review_router.post("/{review_id}/helpful", response_model=HelpfulVoteResponse)
async def toggle_helpful(review_id: str, actor=Depends(current_actor)) -> HelpfulVoteResponse:
    command = ToggleHelpfulVote(review_id=review_id, **_actor_fields(actor))
    state = current_domain.process(command, asynchronous=False)
    return HelpfulVoteResponse(has_voted=state.has_voted, helpful_count=state.helpful_count)


# --- Admin endpoints ---


@admin_router.get("/reviews", response_model=ReviewPageResponse)
async def admin_reviews(
    status: str | None = Query(None),
    page: int = Query(1),
    limit: int = Query(DEFAULT_LIMIT),
    actor=Depends(current_actor),
) -> ReviewPageResponse:
    admin = require_admin(actor)
    result = list_reviews(status=status, page=page, limit=limit, viewer_id=admin.user_id)
    return _page_response(result)


@admin_router.put("/reviews/{review_id}/status", response_model=StatusResponse)
async def set_review_status(
    review_id: str, body: SetReviewStatusRequest, actor=Depends(current_actor)
) -> StatusResponse:
    command = SetReviewStatus(review_id=review_id, status=body.status, **_actor_fields(actor))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.delete("/reviews/{review_id}", response_model=StatusResponse)
async def admin_delete_review(review_id: str, actor=Depends(current_actor)) -> StatusResponse:
    require_admin(actor)
    command = DeleteReview(review_id=review_id, **_actor_fields(actor))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.patch("/parks/{park_id}", response_model=StatusResponse)
async def update_park(park_id: str, body: UpdateParkRequest, actor=Depends(current_actor)) -> StatusResponse:
    command = UpdatePark(
        park_id=park_id,
        name=body.name,
        state=body.state,
        description=body.description,
        **_actor_fields(actor),
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.delete("/parks/{park_id}", response_model=StatusResponse)
async def delete_park(park_id: str, actor=Depends(current_actor)) -> StatusResponse:
    command = DeletePark(park_id=park_id, **_actor_fields(actor))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
