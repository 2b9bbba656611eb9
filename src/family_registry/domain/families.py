"""Family and basic service domain models."""

from dataclasses import dataclass, fields
from enum import Enum

from family_registry.exceptions import InvalidFamilyStatusError


class FamilyStatus(str, Enum):
    """Soft lifecycle status of a family record."""

    ACTIVE = "A"
    INACTIVE = "I"

    @classmethod
    def parse(cls, value: "str | FamilyStatus") -> "FamilyStatus":
        """Accept the one-letter code, the member name or the plain word."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for member in cls:
            if text.upper() in (member.value, member.name):
                return member
        raise InvalidFamilyStatusError(value)

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass
class BasicService:
    """Utility, housing and social-support profile of one household."""

    service_id: int | None = None
    water_service: str | None = None
    serv_drain: str | None = None
    serv_light: str | None = None
    serv_cable: str | None = None
    serv_gas: str | None = None
    area: str | None = None
    reference_location: str | None = None
    residue: str | None = None
    public_lighting: str | None = None
    security: str | None = None
    material: str | None = None
    feeding: str | None = None
    economic: str | None = None
    spiritual: str | None = None
    social_company: str | None = None
    guide_tip: str | None = None


@dataclass
class Family:
    """One household record.

    ``id`` is assigned by the store on first save. ``status`` and
    ``service_id`` are controlled by the aggregate manager and are never
    touched by a descriptive update.
    """

    id: int | None = None
    last_name: str | None = None
    direction: str | None = None
    reasib_admission: str | None = None
    number_members: int | None = None
    number_children: int | None = None
    family_type: str | None = None
    social_problems: str | None = None
    weekly_frequency: str | None = None
    feeding_type: str | None = None
    safe_type: str | None = None
    family_disease: str | None = None
    treatment: str | None = None
    disease_history: str | None = None
    medical_exam: str | None = None
    tenure: str | None = None
    type_of_housing: str | None = None
    housing_material: str | None = None
    housing_security: str | None = None
    home_environment: int | None = None
    bedroom_number: int | None = None
    habitability: str | None = None
    number_rooms: int | None = None
    number_of_bedrooms: int | None = None
    habitability_building: str | None = None
    status: FamilyStatus = FamilyStatus.ACTIVE
    service_id: int | None = None

    @property
    def is_active(self) -> bool:
        return self.status == FamilyStatus.ACTIVE

    def deactivate(self) -> None:
        self.status = FamilyStatus.INACTIVE

    def activate(self) -> None:
        self.status = FamilyStatus.ACTIVE


_MANAGED_FAMILY_FIELDS = {"id", "status", "service_id"}

FAMILY_DESCRIPTIVE_FIELDS: tuple[str, ...] = tuple(
    f.name for f in fields(Family) if f.name not in _MANAGED_FAMILY_FIELDS
)

BASIC_SERVICE_FIELDS: tuple[str, ...] = tuple(
    f.name for f in fields(BasicService) if f.name != "service_id"
)

FAMILY_INTEGER_FIELDS: frozenset[str] = frozenset(
    {
        "number_members",
        "number_children",
        "home_environment",
        "bedroom_number",
        "number_rooms",
        "number_of_bedrooms",
    }
)
