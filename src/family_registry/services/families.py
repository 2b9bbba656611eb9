"""Family aggregate manager.

Keeps a family and its linked basic service consistent across reads,
creation, updates and status transitions, and emits a change event after
each successful family write.

The two stores are written independently. A basic service saved during
``create`` stays in place when the following family save fails, and
``update`` runs its service write and family write side by side. No
operation retries a store call, and concurrent writers to the same
family are last-write-wins.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

from family_registry.domain.events import FamilyEventType
from family_registry.domain.families import BasicService, Family, FamilyStatus
from family_registry.domain.views import BasicServiceView, FamilyView
from family_registry.exceptions import (
    FamilyCreationError,
    FamilyNotFoundError,
    FamilyStatusChangeError,
    FamilyUpdateError,
)
from family_registry.logging_config import family_context, get_logger
from family_registry.repositories.interfaces import (
    BasicServiceRepository,
    FamilyRepository,
)
from family_registry.services.events import FamilyEventPublisher
from family_registry.services.mapping import (
    apply_service_view,
    apply_view,
    from_view,
    service_from_view,
    service_to_view,
    to_view,
)

logger = get_logger(__name__)


class FamilyAggregateManager:
    def __init__(
        self,
        family_repo: FamilyRepository,
        service_repo: BasicServiceRepository,
        publisher: FamilyEventPublisher,
    ) -> None:
        self._family_repo = family_repo
        self._service_repo = service_repo
        self._publisher = publisher

    @property
    def publisher(self) -> FamilyEventPublisher:
        return self._publisher

    # -- reads ---------------------------------------------------------------

    async def list_by_status(
        self, status: FamilyStatus | str
    ) -> AsyncIterator[FamilyView]:
        """Yield assembled views of every family with ``status``, by ascending id."""
        status = FamilyStatus.parse(status)
        families = [f async for f in self._family_repo.list_by_status(status)]
        families.sort(key=lambda f: f.id or 0)
        for family in families:
            yield await self._assemble(family)

    def list_active(self) -> AsyncIterator[FamilyView]:
        return self.list_by_status(FamilyStatus.ACTIVE)

    def list_inactive(self) -> AsyncIterator[FamilyView]:
        return self.list_by_status(FamilyStatus.INACTIVE)

    async def get_by_id(self, family_id: int) -> FamilyView | None:
        family = await self._family_repo.get(family_id)
        if family is None:
            return None
        return await self._assemble(family)

    async def get_detail(self, family_id: int) -> FamilyView | None:
        return await self.get_by_id(family_id)

    # -- writes --------------------------------------------------------------

    async def create(self, view: FamilyView) -> FamilyView:
        """Persist a new family together with its basic service.

        A service record is always created, empty when the view carries
        none, so every new family has a ``service_id``.

        Raises:
            FamilyCreationError: If either store call fails.
        """
        try:
            service = await self._service_repo.save(
                service_from_view(view.basic_service)
            )
            family = from_view(view)
            family.status = FamilyStatus.ACTIVE
            family.service_id = service.service_id
            saved = await self._persist(family, FamilyEventType.CREATED)
        except Exception as e:
            logger.error(
                "family_creation_failed",
                last_name=view.last_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise FamilyCreationError(e) from e

        logger.info(
            "family_created", family_id=saved.id, service_id=saved.service_id
        )
        result = to_view(saved)
        result.basic_service = service_to_view(service)
        return result

    async def update(self, family_id: int, view: FamilyView) -> FamilyView | None:
        """Overwrite the descriptive fields of a family.

        ``status`` and ``service_id`` are never changed here. When the family
        has a service and the view carries one, the stored service is
        overwritten too; a missing service record is skipped silently.

        Returns:
            The assembled view, or None if no family has ``family_id``.

        Raises:
            FamilyUpdateError: If any store call fails.
        """
        with family_context(family_id, "update"):
            try:
                existing = await self._family_repo.get(family_id)
                if existing is None:
                    return None

                apply_view(existing, view)
                saved, _ = await asyncio.gather(
                    self._persist(existing, FamilyEventType.UPDATED),
                    self._update_service(existing.service_id, view.basic_service),
                )
                result = await self._assemble(saved)
            except Exception as e:
                logger.error(
                    "family_update_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise FamilyUpdateError(e) from e

            logger.info("family_updated")
            return result

    async def set_status(self, family_id: int, target: FamilyStatus | str) -> None:
        """Move a family to ``target``.

        Deactivation emits DELETED and reactivation emits UPDATED; downstream
        consumers treat deactivation as a soft delete.

        Raises:
            FamilyNotFoundError: If no family has ``family_id``.
            FamilyStatusChangeError: If a store call fails.
        """
        target = FamilyStatus.parse(target)
        with family_context(family_id, "set_status"):
            try:
                family = await self._family_repo.get(family_id)
            except Exception as e:
                logger.error("family_status_change_failed", error=str(e))
                raise FamilyStatusChangeError(e) from e
            if family is None:
                logger.info("family_status_change_not_found")
                raise FamilyNotFoundError(family_id)

            previous = family.status
            if target == FamilyStatus.INACTIVE:
                family.deactivate()
                event_type = FamilyEventType.DELETED
            else:
                family.activate()
                event_type = FamilyEventType.UPDATED

            try:
                await self._persist(family, event_type)
            except Exception as e:
                logger.error(
                    "family_status_change_failed",
                    target=target.value,
                    error=str(e),
                )
                raise FamilyStatusChangeError(e) from e

            logger.info(
                "family_status_changed",
                previous=previous.value,
                status=target.value,
            )

    async def deactivate(self, family_id: int) -> None:
        await self.set_status(family_id, FamilyStatus.INACTIVE)

    async def activate(self, family_id: int) -> None:
        await self.set_status(family_id, FamilyStatus.ACTIVE)

    # -- helpers -------------------------------------------------------------

    async def _assemble(self, family: Family) -> FamilyView:
        view = to_view(family)
        if family.service_id is not None:
            service = await self._service_repo.get(family.service_id)
            if service is not None:
                view.basic_service = service_to_view(service)
        return view

    async def _persist(self, family: Family, event_type: FamilyEventType) -> Family:
        saved = await self._family_repo.save(family)
        self._publisher.publish(saved, event_type)
        return saved

    async def _update_service(
        self, service_id: int | None, payload: BasicServiceView | None
    ) -> BasicService | None:
        if service_id is None or payload is None:
            return None
        service = await self._service_repo.get(service_id)
        if service is None:
            logger.debug("basic_service_missing", service_id=service_id)
            return None
        apply_service_view(service, payload)
        return await self._service_repo.save(service)
