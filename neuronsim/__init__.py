"""
neuronsim - event-driven simulation of neurons joined by delayed synapses.
"""
from .config import SimulationConfig
from .errors import (
    DescriptionSyntaxError,
    DuplicateNameError,
    ErrorReporter,
    NetworkError,
    NeuronSimError,
    SchedulingError,
    TopologyError,
    UnresolvedReferenceError,
)
from .loader import NetworkLoader, load_network
from .network import Network
from .neuron import Neuron
from .registry import NetworkRegistry
from .sampler import FireCountSampler
from .scheduler import Event, EventKind, Scheduler
from .synapse import PrimarySynapse, SecondarySynapse, Synapse

__all__ = [
    "DescriptionSyntaxError",
    "DuplicateNameError",
    "ErrorReporter",
    "Event",
    "EventKind",
    "FireCountSampler",
    "Network",
    "NetworkError",
    "NetworkLoader",
    "NetworkRegistry",
    "Neuron",
    "NeuronSimError",
    "PrimarySynapse",
    "Scheduler",
    "SchedulingError",
    "SecondarySynapse",
    "SimulationConfig",
    "Synapse",
    "TopologyError",
    "UnresolvedReferenceError",
    "load_network",
]
