"""
NetworkRegistry: the arena that owns every neuron and synapse.

Neurons and synapses share one namespace. Entities get stable integer ids in
registration order; synapses refer to their endpoints by these ids, so there
are no ownership cycles between neurons and synapses.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .config import DEFAULT_DELAY
from .errors import (
    DuplicateNameError,
    ErrorReporter,
    NetworkError,
    TopologyError,
    UnresolvedReferenceError,
)
from .neuron import Neuron
from .numeric import real
from .synapse import PrimarySynapse, SecondarySynapse, Synapse, describe

logger = logging.getLogger(__name__)

Entity = Union[Neuron, PrimarySynapse, SecondarySynapse]


class NetworkRegistry:
    def __init__(
        self,
        reporter: Optional[ErrorReporter] = None,
        default_delay: float = DEFAULT_DELAY,
    ) -> None:
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self.default_delay = default_delay

        self.neurons: List[Neuron] = []
        self.synapses: List[Synapse] = []
        # registration order across both kinds: ("neuron" | "synapse", id)
        self._order: List[Tuple[str, int]] = []
        self._names: Dict[str, Entity] = {}

    # ----------------------------- Lookup ----------------------------- #

    def lookup_any(self, name: Optional[str]) -> Optional[Entity]:
        if not name:
            return None
        return self._names.get(name)

    def lookup_neuron(self, name: Optional[str]) -> Optional[Neuron]:
        found = self.lookup_any(name)
        return found if isinstance(found, Neuron) else None

    def lookup_synapse(self, name: Optional[str]) -> Optional[Synapse]:
        found = self.lookup_any(name)
        return found if isinstance(found, (PrimarySynapse, SecondarySynapse)) else None

    def neuron(self, neuron_id: int) -> Neuron:
        return self.neurons[neuron_id]

    def synapse(self, synapse_id: int) -> Synapse:
        return self.synapses[synapse_id]

    # -------------------------- Construction -------------------------- #

    def add_neuron(self, name: str, threshold: float, voltage: float = 0.0) -> Neuron:
        if not name:
            raise NetworkError("Neuron ??? -- expected a name")
        if self.lookup_any(name) is not None:
            raise DuplicateNameError("Neuron", name)
        neuron = Neuron(
            neuron_id=len(self.neurons),
            name=name,
            threshold=threshold,
            voltage=voltage,
        )
        self.neurons.append(neuron)
        self._order.append(("neuron", neuron.neuron_id))
        self._names[name] = neuron
        logger.debug("registered %s", neuron)
        return neuron

    def add_synapse(
        self,
        name: Optional[str],
        source: str,
        destination: str,
        delay: float,
        strength: float,
    ) -> Synapse:
        """Validate and register a synapse; ``name=None`` makes it anonymous.

        A neuron destination makes a primary synapse, a synapse destination
        a secondary one. A negative delay is reported and replaced by the
        default delay; every other problem raises a ``NetworkError`` and
        leaves the registry unchanged.
        """
        if name is not None and self.lookup_any(name) is not None:
            raise DuplicateNameError("Synapse", name)

        context = describe(name, source, destination, delay, strength)
        src = self.lookup_neuron(source)
        if src is None:
            raise UnresolvedReferenceError(context, "source", source)

        dst_neuron = self.lookup_neuron(destination)
        dst_synapse = self.lookup_synapse(destination) if dst_neuron is None else None
        if dst_neuron is None and dst_synapse is None:
            raise UnresolvedReferenceError(context, "destination", destination)
        if isinstance(dst_synapse, SecondarySynapse):
            raise TopologyError(describe(name, src.name, dst_synapse.name))

        if real(delay) < 0:
            self.reporter.warning(f"{context} -- illegal negative delay")
            delay = self.default_delay

        synapse_id = len(self.synapses)
        fields = dict(
            synapse_id=synapse_id,
            name=name,
            source_id=src.neuron_id,
            delay=delay,
            strength=strength,
            source_name=src.name,
        )
        synapse: Synapse
        if dst_neuron is not None:
            synapse = PrimarySynapse(
                destination_id=dst_neuron.neuron_id,
                destination_name=dst_neuron.name,
                **fields,
            )
        else:
            synapse = SecondarySynapse(
                destination_id=dst_synapse.synapse_id,
                destination_name=dst_synapse.name,
                **fields,
            )

        self.synapses.append(synapse)
        self._order.append(("synapse", synapse_id))
        if name is not None:
            self._names[name] = synapse
        src.outgoing.append(synapse_id)
        logger.debug("registered %s", synapse)
        return synapse

    # ---------------------------- Iteration --------------------------- #

    def __iter__(self) -> Iterator[Entity]:
        for kind, entity_id in self._order:
            yield self.neurons[entity_id] if kind == "neuron" else self.synapses[entity_id]

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup_any(name) is not None

    def dump(self) -> List[str]:
        """Canonical one-line renderings: all neurons, then all synapses."""
        return [str(n) for n in self.neurons] + [str(s) for s in self.synapses]
