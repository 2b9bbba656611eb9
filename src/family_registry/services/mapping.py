"""Conversions between the family view and the two stored records.

All functions are pure except the ``apply_*`` helpers, which copy fields
onto an existing record in place.
"""

from family_registry.domain.families import (
    BASIC_SERVICE_FIELDS,
    FAMILY_DESCRIPTIVE_FIELDS,
    BasicService,
    Family,
)
from family_registry.domain.views import BasicServiceView, FamilyView


def to_view(family: Family) -> FamilyView:
    """Build a view from a family. The basic service is left unset."""
    values = {name: getattr(family, name) for name in FAMILY_DESCRIPTIVE_FIELDS}
    return FamilyView(
        id=family.id,
        status=family.status,
        service_id=family.service_id,
        **values,
    )


def from_view(view: FamilyView) -> Family:
    """Build a new family from a view.

    ``id``, ``status`` and ``service_id`` are dropped; the manager owns them.
    """
    values = {name: getattr(view, name) for name in FAMILY_DESCRIPTIVE_FIELDS}
    return Family(**values)


def apply_view(family: Family, view: FamilyView) -> None:
    """Copy every descriptive field of ``view`` onto ``family``."""
    for name in FAMILY_DESCRIPTIVE_FIELDS:
        setattr(family, name, getattr(view, name))


def apply_service_view(service: BasicService, view: BasicServiceView) -> None:
    """Copy every basic service field of ``view`` onto ``service``."""
    for name in BASIC_SERVICE_FIELDS:
        setattr(service, name, getattr(view, name))


def service_from_view(view: BasicServiceView | None) -> BasicService:
    """Build a new, unsaved basic service; an absent payload gives an empty one."""
    service = BasicService()
    if view is not None:
        apply_service_view(service, view)
    return service


def service_to_view(service: BasicService) -> BasicServiceView:
    values = {name: getattr(service, name) for name in BASIC_SERVICE_FIELDS}
    return BasicServiceView(service_id=service.service_id, **values)
