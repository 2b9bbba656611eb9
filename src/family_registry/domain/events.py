"""Domain events emitted after a family record is persisted."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from family_registry.domain.families import Family, FamilyStatus


class FamilyEventType(str, Enum):
    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"


@dataclass(frozen=True, slots=True)
class FamilyEvent:
    family_id: int
    event_type: FamilyEventType
    last_name: str | None
    status: FamilyStatus

    @classmethod
    def from_family(cls, family: Family, event_type: FamilyEventType) -> "FamilyEvent":
        if family.id is None:
            raise ValueError("Cannot build an event for an unsaved family")
        return cls(
            family_id=family.id,
            event_type=event_type,
            last_name=family.last_name,
            status=family.status,
        )

    @property
    def key(self) -> str:
        """Partition key used by downstream consumers."""
        return str(self.family_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "familyId": self.family_id,
            "eventType": self.event_type.value,
            "lastName": self.last_name,
            "status": self.status.value,
        }
