"""
Event-driven neuron network: a registry of neurons and synapses wired to a
scheduler.

Event flow:
    kick -> (voltage > threshold) -> NEURON_FIRE at the same time
    NEURON_FIRE -> one SYNAPSE_FIRE per outgoing synapse at time + delay
    SYNAPSE_FIRE -> primary: kick destination neuron
                    secondary: add strength to destination primary synapse
"""
from __future__ import annotations

import logging
from typing import List, Optional, Set, Tuple, Union

from .config import SimulationConfig
from .errors import ErrorReporter, SchedulingError
from .neuron import Neuron
from .numeric import real
from .registry import NetworkRegistry
from .scheduler import Event, EventKind, Scheduler
from .synapse import Synapse

logger = logging.getLogger(__name__)

NeuronRef = Union[int, str, Neuron]


class Network:
    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        reporter: Optional[ErrorReporter] = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.registry = NetworkRegistry(reporter, default_delay=self.config.default_delay)
        self.scheduler = Scheduler(record=self.config.record_history)
        self.scheduler.register(EventKind.NEURON_FIRE, self._handle_neuron_fire)
        self.scheduler.register(EventKind.SYNAPSE_FIRE, self._handle_synapse_fire)

        # (time, neuron name) for every fire, in dispatch order
        self.spike_log: List[Tuple[float, str]] = []

        self.tracked_neuron_id: Optional[int] = None
        self.tracked_trace: List[Tuple[float, float]] = []  # (time, voltage)
        self._track_pending: Optional[str] = None

        self._seeded: Set[int] = set()

    @property
    def reporter(self) -> ErrorReporter:
        return self.registry.reporter

    @property
    def now(self) -> float:
        return self.scheduler.now

    # ------------------------- Construction API ------------------------- #

    def add_neuron(self, name: str, threshold: float, voltage: float = 0.0) -> Neuron:
        neuron = self.registry.add_neuron(name, threshold, voltage)
        if neuron.name == self._track_pending:
            self._track_pending = None
            self.track_neuron(neuron)
        return neuron

    def add_synapse(
        self,
        name: Optional[str],
        source: str,
        destination: str,
        delay: float,
        strength: float,
    ) -> Synapse:
        return self.registry.add_synapse(name, source, destination, delay, strength)

    def seed_initial_fires(self) -> int:
        """Schedule one fire for each new neuron that starts above threshold.

        Seeds go in at the current logical time (0 before the first run).
        Each neuron is considered at most once, and never after it has been
        kicked. Returns the number scheduled.
        """
        seeded = 0
        for neuron in self.registry.neurons:
            if neuron.neuron_id in self._seeded:
                continue
            self._seeded.add(neuron.neuron_id)
            if neuron.above_threshold():
                self.schedule_fire(neuron, self.scheduler.now)
                seeded += 1
        return seeded

    def track_neuron(self, neuron: NeuronRef) -> None:
        """Record the voltage trace of one neuron.

        A name that is not registered yet is remembered and tracking starts
        when a neuron of that name is added.
        """
        if isinstance(neuron, str) and self.registry.lookup_neuron(neuron) is None:
            self._track_pending = neuron
            return
        self.tracked_neuron_id = self._resolve(neuron).neuron_id
        self.tracked_trace.clear()

    # --------------------------- Simulation ----------------------------- #

    def kick(self, neuron: NeuronRef, time: float, strength: float) -> bool:
        """Kick a neuron; schedules a same-time fire if it crosses threshold.

        Kicks before the current logical time, or before the neuron's last
        update, raise ``SchedulingError`` and leave the neuron untouched.
        While a fire is already queued for the neuron, further kicks only
        add voltage.
        """
        target = self._resolve(neuron)
        at = real(time)
        if at < self.scheduler.now or at < target.last_update_time:
            raise SchedulingError(
                f"kick to {target.name} at {at} is before t={self.scheduler.now} "
                f"or its last update at {target.last_update_time}"
            )
        # the kick accounts for the initial voltage; no separate seed
        self._seeded.add(target.neuron_id)
        tracked = target.neuron_id == self.tracked_neuron_id
        if tracked:
            self._record(time, target.voltage_at(time))
        crossed = target.kick(time, strength)
        if tracked:
            self._record(time, target.voltage)
        if crossed:
            self.schedule_fire(target, time)
        return crossed

    def schedule_fire(self, neuron: NeuronRef, time: float) -> bool:
        """Queue a fire unless one is already pending; True if queued."""
        target = self._resolve(neuron)
        if target.fire_pending:
            return False
        self.scheduler.schedule(Event.neuron_fire(target.neuron_id, time))
        target.fire_pending = True
        return True

    def run(self, until: Optional[float] = None) -> None:
        self.seed_initial_fires()
        self.scheduler.run(until)

    # ------------------------------ Handlers ----------------------------- #

    def _handle_neuron_fire(self, event: Event) -> None:
        neuron = self.registry.neuron(event.target)
        neuron.fire(event.time)
        self.spike_log.append((float(event.time), neuron.name))
        logger.debug("%s fired at %s", neuron.name, event.time)
        if neuron.neuron_id == self.tracked_neuron_id:
            self._record(event.time, neuron.voltage)

        for synapse_id in neuron.outgoing:
            synapse = self.registry.synapse(synapse_id)
            self.scheduler.schedule(Event.synapse_fire(synapse_id, event.time + synapse.delay))

    def _handle_synapse_fire(self, event: Event) -> None:
        self.registry.synapse(event.target).fire(event.time, self)

    # ------------------------------ Helpers ------------------------------ #

    def _resolve(self, neuron: NeuronRef) -> Neuron:
        if isinstance(neuron, Neuron):
            return neuron
        if isinstance(neuron, str):
            found = self.registry.lookup_neuron(neuron)
            if found is None:
                raise KeyError(f"Neuron '{neuron}' not found")
            return found
        return self.registry.neuron(neuron)

    def _record(self, time: float, voltage: float) -> None:
        point = (float(real(time)), float(voltage))
        # skip identical consecutive points
        if self.tracked_trace and self.tracked_trace[-1] == point:
            return
        self.tracked_trace.append(point)

    def fire_counts(self) -> List[Tuple[str, int]]:
        """Current (unsampled) fire counts, in registration order."""
        return [(n.name, n.fire_count) for n in self.registry.neurons]
