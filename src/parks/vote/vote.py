"""HelpfulVote aggregate — one user marking one review as helpful.

A vote either exists or it doesn't; toggling deletes or creates it. At most
one vote per (review, user), enforced by the unique ``vote_key``. Authors
cannot vote on their own reviews.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from parks.domain import parks
from parks.shared.errors import SelfVoteError
from parks.shared.paging import fetch_all
from parks.vote.events import HelpfulVoteCast


def vote_key(review_id, user_id) -> str:
    return f"{review_id}:{user_id}"


def ensure_not_author(review, user_id) -> None:
    if str(review.user_id) == str(user_id):
        raise SelfVoteError()


@parks.aggregate
class HelpfulVote:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    vote_key = String(required=True, max_length=255, unique=True)
    created_at = DateTime()

    @classmethod
    def cast(cls, review, user_id):
        """A new helpful vote by ``user_id`` on ``review``."""
        ensure_not_author(review, user_id)
        now = datetime.now(UTC)

        vote = cls(
            review_id=str(review.id),
            user_id=str(user_id),
            vote_key=vote_key(review.id, user_id),
            created_at=now,
        )
        vote.raise_(
            HelpfulVoteCast(
                vote_id=str(vote.id),
                review_id=str(review.id),
                user_id=str(user_id),
                cast_at=now,
            )
        )
        return vote


def _votes():
    return current_domain.repository_for(HelpfulVote)._dao


def find_vote(review_id, user_id) -> HelpfulVote | None:
    result = _votes().query.filter(vote_key=vote_key(review_id, user_id)).all()
    return result.first


def has_voted(review_id, user_id) -> bool:
    if not user_id:
        return False
    return find_vote(review_id, user_id) is not None


def count_helpful_votes(review_id) -> int:
    return _votes().query.filter(review_id=str(review_id)).all().total


def delete_votes_for(review_id) -> int:
    """Remove every vote on a review. Returns how many were removed."""
    dao = _votes()
    votes = fetch_all(dao.query.filter(review_id=str(review_id)))
    for vote in votes:
        dao.delete(vote)
    return len(votes)
