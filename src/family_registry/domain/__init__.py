from family_registry.domain.events import FamilyEvent, FamilyEventType
from family_registry.domain.families import (
    BASIC_SERVICE_FIELDS,
    FAMILY_DESCRIPTIVE_FIELDS,
    BasicService,
    Family,
    FamilyStatus,
)
from family_registry.domain.views import BasicServiceView, FamilyView

__all__ = [
    "BASIC_SERVICE_FIELDS",
    "FAMILY_DESCRIPTIVE_FIELDS",
    "BasicService",
    "BasicServiceView",
    "Family",
    "FamilyEvent",
    "FamilyEventType",
    "FamilyStatus",
    "FamilyView",
]
