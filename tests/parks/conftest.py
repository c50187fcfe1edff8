import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def parks_bed():
    from parks.domain import parks
    from parks.utils.db import drop_db, setup_db

    bed = DomainFixture(parks)
    bed.setup()
    setup_db(parks)
    yield bed
    drop_db(parks)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(parks_bed):
    with parks_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()
