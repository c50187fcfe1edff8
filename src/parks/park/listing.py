"""Park directory listing — approved parks with their rating summaries."""

from protean.utils.globals import current_domain

from parks.park.park import Park, ParkStatus
from parks.shared.paging import DEFAULT_LIMIT, Page, clamp, fetch_page


def list_parks(page=1, limit=DEFAULT_LIMIT) -> Page:
    """One page of APPROVED parks, ordered by name."""
    page, limit = clamp(page, limit)
    query = (
        current_domain.repository_for(Park)
        ._dao.query.filter(status=ParkStatus.APPROVED.value)
        .order_by("name")
    )
    parks_found, total = fetch_page(query, page, limit)
    return Page(items=parks_found, page=page, limit=limit, total=total)
