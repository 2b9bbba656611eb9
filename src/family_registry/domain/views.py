"""Wire representation of the family aggregate.

``FamilyView`` is the only shape that crosses the boundary to the API
layer. Attributes are snake_case in Python and camelCase on the wire
(``lastName``, ``basicService``, ``serviceId``).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from family_registry.domain.families import FamilyStatus
from family_registry.exceptions import InvalidFamilyStatusError

_VIEW_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    str_strip_whitespace=True,
)


class BasicServiceView(BaseModel):
    """Basic service payload embedded in a family view."""

    model_config = _VIEW_CONFIG

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


class FamilyView(BaseModel):
    """Family fields plus the optional linked basic service."""

    model_config = _VIEW_CONFIG

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
    status: FamilyStatus | None = None
    service_id: int | None = None
    basic_service: BasicServiceView | None = None

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, value: Any) -> Any:
        """Accept the code, the member name or the word ("A", "ACTIVE", "Active")."""
        if value is None:
            return None
        try:
            return FamilyStatus.parse(value)
        except InvalidFamilyStatusError as e:
            raise ValueError(e.message) from e
