"""Pydantic request/response schemas for the Parks API.

Separate from the Protean commands: the API layer is the external contract,
commands are the internal domain concepts. Ratings pass through as sent;
the domain checks type and range and answers ``invalid_rating``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

# --- Park Request Schemas ---


class SubmitParkRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Hatfield-McCoy Trails",
                    "state": "WV",
                    "description": "Over 700 miles of trails across southern West Virginia.",
                }
            ]
        }
    }

    name: str = Field(..., max_length=200)
    state: str | None = Field(None, max_length=50)
    description: str | None = None


class ModerateParkRequest(BaseModel):
    action: str  # "approve" or "reject"


class UpdateParkRequest(BaseModel):
    name: str | None = Field(None, max_length=200)
    state: str | None = Field(None, max_length=50)
    description: str | None = None


# --- Review Request Schemas ---


class ReviewContentRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "overall_rating": 5,
                    "terrain_rating": 4,
                    "facilities_rating": 3,
                    "difficulty_rating": 4,
                    "title": "Great mud after the rain",
                    "body": "Rocky climbs on the north loop, deep mud holes near the creek.",
                    "visit_date": "2026-05-02",
                    "vehicle_type": "sxs",
                    "visit_condition": "muddy",
                    "recommended_duration": "fullDay",
                    "recommended_for": "Intermediate riders with winches",
                }
            ]
        }
    }

    overall_rating: Any = None
    terrain_rating: Any = None
    facilities_rating: Any = None
    difficulty_rating: Any = None
    title: str | None = Field(None, max_length=200)
    body: str | None = None
    visit_date: date | None = None
    vehicle_type: str | None = None
    visit_condition: str | None = None
    recommended_duration: str | None = None
    recommended_for: str | None = None


class SetReviewStatusRequest(BaseModel):
    status: str  # "APPROVED" or "HIDDEN"


# --- Response Schemas ---


class ParkIdResponse(BaseModel):
    park_id: str


class ReviewIdResponse(BaseModel):
    review_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ParkResponse(BaseModel):
    id: str
    name: str
    slug: str
    state: str | None = None
    description: str | None = None
    status: str
    average_rating: float | None = None
    average_difficulty: float | None = None
    average_terrain: float | None = None
    average_facilities: float | None = None
    review_count: int = 0
    average_recommended_stay: str | None = None


class ReviewResponse(BaseModel):
    id: str
    park_id: str
    user_id: str
    overall_rating: int
    terrain_rating: int
    facilities_rating: int
    difficulty_rating: int
    title: str | None = None
    body: str
    visit_date: date | None = None
    vehicle_type: str | None = None
    visit_condition: str | None = None
    recommended_duration: str | None = None
    recommended_for: str | None = None
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    helpful_count: int = 0
    has_voted: bool = False


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ParkPageResponse(BaseModel):
    parks: list[ParkResponse]
    pagination: PaginationResponse


class ReviewPageResponse(BaseModel):
    reviews: list[ReviewResponse]
    pagination: PaginationResponse


class HelpfulVoteResponse(BaseModel):
    has_voted: bool
    helpful_count: int
