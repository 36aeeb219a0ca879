from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
import logging
from typing import Callable, DefaultDict, List, Mapping, NamedTuple, Type

from boroughs.domain.events import GameEvent


Handler = Callable[[GameEvent], None]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HandlerFailure:
    event_name: str
    handler_name: str
    error: Exception

    @property
    def message(self) -> str:
        return f"{self.handler_name} could not handle {self.event_name}: {self.error}"


class _Subscription(NamedTuple):
    priority: int
    order: int
    handler: Handler


class EventBus:
    """Synchronous publish/subscribe for game events.

    Subscribers of one event type run lowest priority first, ties in
    subscription order. A subscriber that raises is skipped: the failure is
    logged, returned from ``publish`` and held until ``drain_failures`` so the
    turn that raised the event can still report it.
    """

    def __init__(self) -> None:
        self._subscriptions: DefaultDict[Type[GameEvent], List[_Subscription]] = defaultdict(list)
        self._order = 0
        self._pending: List[HandlerFailure] = []

    def subscribe(self, event_type: Type[GameEvent], handler: Handler, *, priority: int = 100) -> None:
        rows = self._subscriptions[event_type]
        rows.append(_Subscription(int(priority), self._order, handler))
        self._order += 1
        rows.sort(key=lambda row: (row.priority, row.order))

    def subscribe_many(self, handlers: Mapping[Type[GameEvent], Handler], *, priority: int = 100) -> None:
        for event_type, handler in handlers.items():
            self.subscribe(event_type, handler, priority=priority)

    def subscribers(self, event_type: Type[GameEvent]) -> List[Handler]:
        return [row.handler for row in self._subscriptions.get(event_type, ())]

    def publish(self, event: GameEvent) -> List[HandlerFailure]:
        event_name = type(event).__name__
        failures: List[HandlerFailure] = []
        for row in list(self._subscriptions.get(type(event), ())):
            try:
                row.handler(event)
            except Exception as exc:
                handler_name = getattr(row.handler, "__qualname__", repr(row.handler))
                failures.append(HandlerFailure(event_name, handler_name, exc))
                logger.exception(
                    "Subscriber %s failed on %s and was skipped",
                    handler_name,
                    event_name,
                    extra={"handler": handler_name, "priority": row.priority},
                )
        self._pending.extend(failures)
        return failures

    def drain_failures(self) -> List[HandlerFailure]:
        failures, self._pending = self._pending, []
        return failures
