from family_registry.domain.events import FamilyEvent, FamilyEventType
from family_registry.domain.families import BasicService, Family, FamilyStatus
from family_registry.domain.views import BasicServiceView, FamilyView
from family_registry.services.families import FamilyAggregateManager

__all__ = [
    "BasicService",
    "BasicServiceView",
    "Family",
    "FamilyAggregateManager",
    "FamilyEvent",
    "FamilyEventType",
    "FamilyStatus",
    "FamilyView",
]

__version__ = "0.1.0"
