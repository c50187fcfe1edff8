"""Domain events for the Park aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from parks.domain import parks


@parks.event(part_of="Park")
class ParkSubmitted:
    """A user submitted a new park to the directory."""

    __version__ = 1

    park_id = Identifier(required=True)
    name = String(required=True)
    slug = String(required=True)
    submitted_by = Identifier()
    submitted_at = DateTime(required=True)


@parks.event(part_of="Park")
class ParkApproved:
    __version__ = 1

    park_id = Identifier(required=True)
    approved_by = Identifier(required=True)
    approved_at = DateTime(required=True)


@parks.event(part_of="Park")
class ParkRejected:
    __version__ = 1

    park_id = Identifier(required=True)
    rejected_by = Identifier(required=True)
    rejected_at = DateTime(required=True)


@parks.event(part_of="Park")
class ParkRatingsRecomputed:
    """The park's rating summary was rebuilt from its approved reviews."""

    __version__ = 1

    park_id = Identifier(required=True)
    average_rating = Float()
    review_count = Integer(required=True)
    recomputed_at = DateTime(required=True)


@parks.event(part_of="Park")
class ParkDetailsUpdated:
    """An administrator corrected the park's name, state or description."""

    __version__ = 1

    park_id = Identifier(required=True)
    updated_by = Identifier(required=True)
    updated_at = DateTime(required=True)
