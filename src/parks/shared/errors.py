"""Error taxonomy for the parks domain.

Every error carries a stable machine-readable ``kind`` and the HTTP status the
API layer answers with. All of them are raised before the store is mutated
(or inside the command's unit of work, which rolls back) and none are retried.
"""


class ParkDirectoryError(Exception):
    kind = "error"
    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class UnauthenticatedError(ParkDirectoryError):
    kind = "unauthenticated"
    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(ParkDirectoryError):
    kind = "forbidden"
    status_code = 403
    default_message = "You are not allowed to perform this action"


class NotFoundError(ParkDirectoryError):
    kind = "not_found"
    status_code = 404
    default_message = "Resource not found"


class DuplicateReviewError(ParkDirectoryError):
    kind = "duplicate_review"
    status_code = 409
    default_message = "You have already reviewed this park"


class InvalidRatingError(ParkDirectoryError):
    kind = "invalid_rating"
    status_code = 400
    default_message = "All ratings are required and must be whole numbers between 1 and 5"


class MissingBodyError(ParkDirectoryError):
    kind = "missing_body"
    status_code = 400
    default_message = "Review body is required"


class SelfVoteError(ParkDirectoryError):
    kind = "self_vote"
    status_code = 400
    default_message = "Cannot vote on your own review"


class InvalidTransitionError(ParkDirectoryError):
    kind = "invalid_transition"
    status_code = 409
    default_message = "Status transition is not allowed"
