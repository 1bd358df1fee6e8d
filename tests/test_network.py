import pytest

from neuronsim import Event, Network, SchedulingError, SimulationConfig


def test_kick_over_threshold_schedules_one_fire_now(ab_network):
    assert ab_network.kick("A", 3.0, 2.0) is True
    assert ab_network.scheduler.pending() == [Event.neuron_fire(0, 3.0)]


def test_kick_at_threshold_schedules_nothing(ab_network):
    assert ab_network.kick("A", 0.0, 1.0) is False
    assert ab_network.scheduler.pending() == []


def test_fire_fans_out_to_every_outgoing_synapse(network):
    network.add_neuron("A", 1.0, 0.5)
    for name in ("B", "C", "D"):
        network.add_neuron(name, 10.0)
    network.add_synapse("AB", "A", "B", 1.0, 0.1)
    network.add_synapse("AC", "A", "C", 2.5, 0.1)
    network.add_synapse("AD", "A", "D", 0.5, 0.1)

    network.schedule_fire("A", 1.0)
    network.scheduler.run(until=1.0)

    a = network.registry.lookup_neuron("A")
    assert a.voltage == 0.0
    assert a.fire_count == 1
    assert network.scheduler.pending() == [
        Event.synapse_fire(2, 1.5),
        Event.synapse_fire(0, 2.0),
        Event.synapse_fire(1, 3.5),
    ]


def test_primary_synapse_kicks_its_destination(ab_network):
    ab_network.registry.lookup_synapse("AB").fire(4.0, ab_network)
    b = ab_network.registry.lookup_neuron("B")
    assert b.voltage == pytest.approx(1.5)
    assert b.last_update_time == 4.0
    assert ab_network.scheduler.pending() == [Event.neuron_fire(1, 4.0)]


def test_secondary_synapse_changes_primary_strength_for_good(network):
    for name in ("A", "B", "C"):
        network.add_neuron(name, 1.0)
    primary = network.add_synapse("P", "A", "B", 1.0, 0.5)
    network.add_synapse("S", "C", "P", 0.0, 1.0)

    # without the secondary, 0.5 would leave B below threshold
    network.schedule_fire("C", 0.0)
    network.schedule_fire("A", 1.0)
    network.run()

    assert primary.strength == pytest.approx(1.5)
    assert network.registry.lookup_neuron("B").fire_count == 1
    assert network.spike_log == [(0.0, "C"), (1.0, "A"), (2.0, "B")]


def test_secondary_additions_accumulate(network):
    for name in ("A", "B", "C"):
        network.add_neuron(name, 1.0)
    primary = network.add_synapse("P", "A", "B", 1.0, 0.5)
    secondary = network.add_synapse("S", "C", "P", 0.0, 1.0)
    secondary.fire(0.0, network)
    secondary.fire(0.0, network)
    assert primary.strength == pytest.approx(2.5)
    # no neuron was touched
    assert network.scheduler.pending() == []


def test_end_to_end_a_fires_then_b(ab_network):
    ab_network.kick("A", 0.0, 2.0)
    ab_network.run()
    assert ab_network.spike_log == [(0.0, "A"), (2.0, "B")]
    assert ab_network.fire_counts() == [("A", 1), ("B", 1)]


def test_initial_voltage_above_threshold_fires_once_at_zero(network):
    network.add_neuron("A", 1.0, 2.0)
    network.add_neuron("B", 1.0, 1.0)
    assert network.seed_initial_fires() == 1
    assert network.seed_initial_fires() == 0
    network.run()
    assert network.spike_log == [(0.0, "A")]


def test_kicked_neuron_is_not_seeded_again(ab_network):
    ab_network.kick("A", 0.0, 2.0)
    ab_network.run()
    assert ab_network.registry.lookup_neuron("A").fire_count == 1


def test_same_time_cascade_resolves_before_later_events(network):
    network.add_neuron("A", 1.0, 2.0)
    network.add_neuron("B", 1.0)
    network.add_neuron("C", 1.0)
    network.add_synapse(None, "A", "B", 0.0, 2.0)
    network.add_synapse(None, "B", "C", 0.0, 2.0)
    network.add_synapse(None, "A", "C", 1.0, 2.0)
    network.run()
    assert network.spike_log == [(0.0, "A"), (0.0, "B"), (0.0, "C"), (1.0, "C")]


def test_decay_between_kicks_can_keep_neuron_quiet(network):
    network.add_neuron("A", 1.0, 2.0)
    network.add_neuron("B", 1.0)
    network.add_synapse(None, "A", "B", 0.0, 0.6)
    network.add_synapse(None, "A", "B", 3.0, 0.6)
    network.run()
    # 0.6 * e^-3 + 0.6 stays below 1.0
    assert network.registry.lookup_neuron("B").fire_count == 0


def test_tracked_trace_records_kicks_and_resets(ab_network):
    ab_network.track_neuron("B")
    ab_network.kick("A", 0.0, 2.0)
    ab_network.run()
    assert ab_network.tracked_trace == [(2.0, 0.0), (2.0, 1.5), (2.0, 0.0)]


def test_tracking_a_neuron_declared_later(network):
    network.track_neuron("Z")
    assert network.tracked_neuron_id is None
    z = network.add_neuron("Z", 1.0)
    assert network.tracked_neuron_id == z.neuron_id


def test_history_is_recorded_when_configured():
    network = Network(SimulationConfig(record_history=True))
    network.add_neuron("A", 1.0, 2.0)
    network.run()
    assert network.scheduler.history == [Event.neuron_fire(0, 0.0)]


def test_convergent_same_time_kicks_fire_once(network):
    network.add_neuron("S", 1.0, 2.0)
    network.add_neuron("A", 1.0)
    network.add_neuron("B", 100.0)
    network.add_synapse(None, "S", "A", 1.0, 2.0)
    network.add_synapse(None, "S", "A", 1.0, 0.5)
    network.add_synapse(None, "A", "B", 1.0, 1.0)
    network.run()

    a = network.registry.lookup_neuron("A")
    b = network.registry.lookup_neuron("B")
    assert network.spike_log == [(0.0, "S"), (1.0, "A")]
    assert a.fire_count == 1
    assert not a.fire_pending
    # one fire of A means one kick of B
    assert b.voltage == pytest.approx(1.0)
    assert b.last_update_time == 2.0


def test_kick_while_fire_is_pending_only_adds_voltage(ab_network):
    assert ab_network.kick("A", 1.0, 2.0) is True
    assert ab_network.kick("A", 1.0, 2.0) is True
    assert ab_network.scheduler.pending() == [Event.neuron_fire(0, 1.0)]
    assert ab_network.registry.lookup_neuron("A").voltage == pytest.approx(4.0)


def test_kick_before_current_time_is_rejected(ab_network):
    ab_network.kick("A", 0.0, 2.0)
    ab_network.run()
    assert ab_network.now == 2.0

    a = ab_network.registry.lookup_neuron("A")
    with pytest.raises(SchedulingError):
        ab_network.kick("A", 1.0, 5.0)
    assert a.voltage == 0.0
    assert a.last_update_time == 0.0
    assert a.fire_count == 1
    assert ab_network.scheduler.pending() == []


def test_kick_before_last_update_is_rejected(network):
    network.add_neuron("S", 1.0, 2.0)
    network.add_neuron("A", 100.0)
    network.add_synapse(None, "S", "A", 1.0, 0.5)

    a = network.registry.lookup_neuron("A")
    network.kick("A", 3.0, 0.25)
    # the synapse arrives at 1.0, behind A's update at 3.0
    with pytest.raises(SchedulingError):
        network.run()
    assert a.last_update_time == 3.0
    assert a.voltage == pytest.approx(0.25)
