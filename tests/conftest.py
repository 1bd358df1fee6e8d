"""Shared test fixtures."""

import pytest

from neuronsim import Network


@pytest.fixture
def network():
    return Network()


@pytest.fixture
def ab_network(network):
    """A -> B through a primary synapse with delay 2.0 and strength 1.5."""
    network.add_neuron("A", threshold=1.0, voltage=0.0)
    network.add_neuron("B", threshold=1.0, voltage=0.0)
    network.add_synapse("AB", "A", "B", delay=2.0, strength=1.5)
    return network
