"""Parks bounded context — park directory, reviews, moderation and ratings.

Handles park submission and approval, the review lifecycle (submit, edit,
moderate, delete), helpful votes, and the denormalized rating summary kept
on each park. Every mutation that can change the set of approved reviews
recomputes the owning park's summary before the command returns.
"""

from protean.domain import Domain

from parks.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
parks = Domain(name="parks")
