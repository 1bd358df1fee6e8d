"""
Discrete-event scheduler.

Events live in a binary heap keyed by ``(time, seq)``. ``seq`` is a
monotonically increasing insertion counter, so events with equal times are
dispatched in the order they were scheduled, no matter how many other
events are interleaved between them.

The scheduler knows nothing about neurons or synapses: the owner registers
one handler per event kind and ``run()`` hands each event to its handler.
"""
from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .errors import SchedulingError
from .numeric import real

logger = logging.getLogger(__name__)


class EventKind(enum.Enum):
    NEURON_FIRE = "neuron_fire"
    SYNAPSE_FIRE = "synapse_fire"
    REPORT = "report"


@dataclass(frozen=True)
class Event:
    """What happens, and when.

    ``target`` is the arena id of the neuron or synapse the event re-enters;
    report events carry no target.
    """

    time: float
    kind: EventKind
    target: Optional[int] = None

    @classmethod
    def neuron_fire(cls, neuron_id: int, time: float) -> "Event":
        return cls(real(time), EventKind.NEURON_FIRE, neuron_id)

    @classmethod
    def synapse_fire(cls, synapse_id: int, time: float) -> "Event":
        return cls(real(time), EventKind.SYNAPSE_FIRE, synapse_id)

    @classmethod
    def report(cls, time: float) -> "Event":
        return cls(real(time), EventKind.REPORT)


Handler = Callable[[Event], None]


class Scheduler:
    """Time-ordered event queue and the single simulation driver."""

    def __init__(self, record: bool = False) -> None:
        self.now = real(0.0)
        self._queue: List[Tuple[float, int, Event]] = []
        self._seq: int = 0
        self._handlers: Dict[EventKind, Handler] = {}
        self._halted = False
        self.record = record
        self.history: List[Event] = []

    def register(self, kind: EventKind, handler: Handler) -> None:
        self._handlers[kind] = handler

    def schedule(self, event: Event) -> None:
        if event.time < self.now:
            raise SchedulingError(
                f"event {event.kind.value} at {event.time} is before current time {self.now}"
            )
        self._seq += 1
        heapq.heappush(self._queue, (event.time, self._seq, event))

    def halt(self) -> None:
        """Stop ``run()`` after the current event; pending events stay queued."""
        self._halted = True

    @property
    def halted(self) -> bool:
        return self._halted

    def run(self, until: Optional[float] = None) -> None:
        self._halted = False
        while self._queue and not self._halted:
            t, _, event = self._queue[0]
            if until is not None and t > until:
                break
            heapq.heappop(self._queue)
            self.now = t
            self._dispatch(event)

    def _dispatch(self, event: Event) -> None:
        handler = self._handlers.get(event.kind)
        if handler is None:
            raise SchedulingError(f"no handler for {event.kind.value} events")
        if self.record:
            self.history.append(event)
        logger.debug("t=%s %s %s", event.time, event.kind.value, event.target)
        handler(event)

    def pending(self) -> List[Event]:
        """Snapshot of queued events in dispatch order."""
        return [event for _, _, event in sorted(self._queue, key=lambda item: item[:2])]

    def __len__(self) -> int:
        return len(self._queue)
