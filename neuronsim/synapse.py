"""
Synapses join neurons and come in two flavours.

- ``PrimarySynapse`` joins a neuron to a neuron; firing kicks the
  destination neuron with the synapse strength.
- ``SecondarySynapse`` joins a neuron to a primary synapse; firing adds its
  strength to the destination's strength, permanently.

Both hold arena ids for their endpoints (non-owning) plus the endpoint names,
which are only used for display.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

import numpy as np

from .numeric import fmt, real

if TYPE_CHECKING:
    from .network import Network

ANONYMOUS = "-"
MISSING = "---"


@dataclass
class _SynapseBase:
    synapse_id: int
    name: Optional[str]
    source_id: int
    destination_id: int
    delay: np.float32
    strength: np.float32

    # display only
    source_name: Optional[str] = None
    destination_name: Optional[str] = None

    def __post_init__(self) -> None:
        self.delay = real(self.delay)
        self.strength = real(self.strength)

    @property
    def label(self) -> str:
        return self.name if self.name is not None else ANONYMOUS

    def __str__(self) -> str:
        return (
            f"Synapse {self.label} {self.source_name or MISSING} "
            f"{self.destination_name or MISSING} {fmt(self.delay)} {fmt(self.strength)}"
        )


@dataclass
class PrimarySynapse(_SynapseBase):
    def fire(self, time: float, network: "Network") -> None:
        network.kick(self.destination_id, time, self.strength)


@dataclass
class SecondarySynapse(_SynapseBase):
    def fire(self, time: float, network: "Network") -> None:
        target = network.registry.synapse(self.destination_id)
        target.strength = target.strength + self.strength


Synapse = Union[PrimarySynapse, SecondarySynapse]


def describe(
    name: Optional[str],
    source: Optional[str],
    destination: Optional[str],
    delay: Optional[float] = None,
    strength: Optional[float] = None,
) -> str:
    """Render a synapse declaration that may not have been built."""
    parts = ["Synapse", name if name is not None else ANONYMOUS,
             source or MISSING, destination or MISSING]
    if delay is not None:
        parts.append(fmt(delay))
    if strength is not None:
        parts.append(fmt(strength))
    return " ".join(parts)
