"""
Neurons, joined by synapses, are the active components of a network.

The membrane voltage decays toward zero between kicks:

    V(t) = V(t0) * exp(t0 - t)

Only the voltage at ``last_update_time`` is stored; it is brought forward
lazily, when the next kick arrives.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .numeric import decay, fmt, real


@dataclass
class Neuron:
    neuron_id: int
    name: str
    threshold: np.float32
    voltage: np.float32 = field(default_factory=lambda: real(0.0))
    last_update_time: np.float32 = field(default_factory=lambda: real(0.0))
    fire_count: int = 0

    # a fire event for this neuron is queued and has not run yet
    fire_pending: bool = False

    # ids of the synapses this neuron drives, in declaration order
    outgoing: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.threshold = real(self.threshold)
        self.voltage = real(self.voltage)
        self.last_update_time = real(self.last_update_time)

    def voltage_at(self, time: float) -> np.float32:
        """Voltage decayed to ``time`` without changing any state."""
        return decay(self.voltage, self.last_update_time, time)

    def above_threshold(self) -> bool:
        # non-inclusive: landing exactly on threshold does not fire
        return bool(self.voltage > self.threshold)

    def kick(self, time: float, strength: float) -> bool:
        """Add ``strength`` at ``time`` after decaying from the last update.

        Returns True when the new voltage is above threshold; the caller is
        responsible for scheduling the fire at ``time``.
        """
        self.voltage = self.voltage_at(time) + real(strength)
        self.last_update_time = real(time)
        return self.above_threshold()

    def fire(self, time: float) -> None:
        # last_update_time is left alone; decay from 0 is a no-op
        self.fire_pending = False
        self.fire_count += 1
        self.voltage = real(0.0)

    def sample_and_reset(self) -> int:
        """Return the fires since the previous sample and restart the count."""
        count = self.fire_count
        self.fire_count = 0
        return count

    def __str__(self) -> str:
        return f"Neuron {self.name} {fmt(self.threshold)} {fmt(self.voltage)}"
