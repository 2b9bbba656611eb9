import pytest

from family_registry.domain.families import BasicService, Family, FamilyStatus
from family_registry.domain.views import BasicServiceView, FamilyView
from family_registry.repositories.memory import (
    InMemoryBasicServiceRepository,
    InMemoryFamilyRepository,
)
from family_registry.services.events import FamilyEventPublisher, InMemoryEventSink
from family_registry.services.families import FamilyAggregateManager


@pytest.fixture
def family_repo() -> InMemoryFamilyRepository:
    return InMemoryFamilyRepository()


@pytest.fixture
def service_repo() -> InMemoryBasicServiceRepository:
    return InMemoryBasicServiceRepository()


@pytest.fixture
def event_sink() -> InMemoryEventSink:
    return InMemoryEventSink()


@pytest.fixture
def publisher(event_sink: InMemoryEventSink) -> FamilyEventPublisher:
    return FamilyEventPublisher(event_sink)


@pytest.fixture
def manager(
    family_repo: InMemoryFamilyRepository,
    service_repo: InMemoryBasicServiceRepository,
    publisher: FamilyEventPublisher,
) -> FamilyAggregateManager:
    return FamilyAggregateManager(
        family_repo=family_repo,
        service_repo=service_repo,
        publisher=publisher,
    )


@pytest.fixture
def sample_family() -> Family:
    return Family(
        last_name="Quispe",
        direction="Av. Los Incas 123",
        reasib_admission="Low income",
        number_members=5,
        number_children=3,
        family_type="Nuclear",
        tenure="Owned",
        type_of_housing="House",
        home_environment=2,
        bedroom_number=2,
        number_rooms=4,
        number_of_bedrooms=2,
        status=FamilyStatus.ACTIVE,
    )


@pytest.fixture
def sample_service() -> BasicService:
    return BasicService(
        water_service="Yes",
        serv_drain="Yes",
        serv_light="Yes",
        serv_cable="No",
        serv_gas="No",
        area="Urban",
        reference_location="Near the market",
        guide_tip="Visit on weekdays",
    )


@pytest.fixture
def sample_view() -> FamilyView:
    return FamilyView(
        last_name="Diaz",
        direction="Jr. Lima 456",
        number_members=4,
        number_children=2,
        family_type="Extended",
        basic_service=BasicServiceView(water_service="Yes", serv_light="Yes"),
    )
