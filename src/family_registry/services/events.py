"""Family change event delivery.

Sinks deliver a ``FamilyEvent`` somewhere. ``FamilyEventPublisher`` sits
between the aggregate manager and a sink: it dispatches each event as a
detached task so the caller never waits on delivery, and it absorbs every
delivery failure.
"""

from __future__ import annotations

import asyncio
from typing import Any, Protocol, runtime_checkable

import httpx

from family_registry.domain.events import FamilyEvent, FamilyEventType
from family_registry.domain.families import Family
from family_registry.logging_config import get_logger

logger = get_logger(__name__)


@runtime_checkable
class EventSink(Protocol):
    async def publish(self, event: FamilyEvent) -> None:
        """Deliver one event. May raise; the publisher isolates failures."""
        ...


class LoggingEventSink:
    """Writes each event to the structured log."""

    def __init__(self, topic: str = "family-events") -> None:
        self._topic = topic

    async def publish(self, event: FamilyEvent) -> None:
        logger.info(
            "family_event",
            topic=self._topic,
            key=event.key,
            **event.to_dict(),
        )


class InMemoryEventSink:
    """Keeps published events in a list."""

    def __init__(self) -> None:
        self.events: list[FamilyEvent] = []

    async def publish(self, event: FamilyEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: FamilyEventType) -> list[FamilyEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def clear(self) -> None:
        self.events.clear()


class HttpEventSink:
    """Posts each event as JSON to a webhook endpoint.

    The topic and partition key travel as headers so a gateway can forward
    the payload to a broker unchanged.
    """

    def __init__(
        self,
        url: str,
        topic: str = "family-events",
        client: httpx.AsyncClient | None = None,
        timeout: float = 5.0,
    ) -> None:
        self._url = url
        self._topic = topic
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    async def publish(self, event: FamilyEvent) -> None:
        response = await self._client.post(
            self._url,
            json=event.to_dict(),
            headers={"X-Event-Topic": self._topic, "X-Event-Key": event.key},
        )
        response.raise_for_status()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class FamilyEventPublisher:
    """Fire-and-forget dispatch of family events to a sink."""

    def __init__(self, sink: EventSink) -> None:
        self._sink = sink
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def sink(self) -> EventSink:
        return self._sink

    @property
    def pending(self) -> int:
        """Number of dispatched events whose delivery has not finished."""
        return len(self._tasks)

    def publish(self, family: Family, event_type: FamilyEventType) -> None:
        """Schedule delivery of an event for ``family`` and return immediately."""
        try:
            event = FamilyEvent.from_family(family, event_type)
            task = asyncio.get_running_loop().create_task(self._deliver(event))
        except Exception as e:
            logger.warning(
                "family_event_dispatch_failed",
                family_id=family.id,
                event_type=event_type.value,
                error=str(e),
            )
            return
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _deliver(self, event: FamilyEvent) -> None:
        try:
            await self._sink.publish(event)
        except Exception as e:
            logger.warning(
                "family_event_publish_failed",
                family_id=event.family_id,
                event_type=event.event_type.value,
                error=str(e),
                error_type=type(e).__name__,
            )
        else:
            logger.debug(
                "family_event_published",
                family_id=event.family_id,
                event_type=event.event_type.value,
            )

    async def drain(self) -> None:
        """Wait for every in-flight delivery to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        await self.drain()
        close: Any = getattr(self._sink, "aclose", None)
        if close is not None:
            await close()
