"""
Voltage trace plot for one tracked neuron.
"""
from __future__ import annotations

import logging
from typing import List, Tuple

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from .network import Network  # noqa: E402

logger = logging.getLogger(__name__)


def dense_trace(
    trace: List[Tuple[float, float]], tail: float = 3.0, points: int = 40
) -> Tuple[np.ndarray, np.ndarray]:
    """Fill in the analytic decay between recorded (time, voltage) points.

    Points recorded at the same time become vertical steps (kicks and
    resets); a decaying tail of length ``tail`` follows the last point.
    """
    times: List[float] = []
    volts: List[float] = []
    for (t0, v0), (t1, _) in zip(trace, trace[1:]):
        if t1 == t0:
            times.append(t0)
            volts.append(v0)
            continue
        seg = np.linspace(t0, t1, points, endpoint=False)
        times.extend(seg)
        volts.extend(v0 * np.exp(t0 - seg))

    last_t, last_v = trace[-1]
    seg = np.linspace(last_t, last_t + tail, points)
    times.extend(seg)
    volts.extend(last_v * np.exp(last_t - seg))
    return np.asarray(times), np.asarray(volts)


def render_voltage_plot(network: Network, filename: str, tail: float = 3.0) -> bool:
    """Save the tracked neuron's voltage over logical time as an image.

    Returns False when no neuron is tracked or nothing was recorded.
    """
    if network.tracked_neuron_id is None or not network.tracked_trace:
        logger.warning("no voltage trace recorded; skipping plot %s", filename)
        return False

    neuron = network.registry.neuron(network.tracked_neuron_id)
    times, volts = dense_trace(network.tracked_trace, tail=tail)

    fig, ax = plt.subplots(figsize=(8, 3))
    ax.plot(times, volts, lw=2.0, color="#1f77b4")
    ax.axhline(float(neuron.threshold), ls="--", lw=1.0, color="#d62728", label="threshold")
    for t, name in network.spike_log:
        if name == neuron.name:
            ax.axvline(float(t), lw=0.8, color="#7f7f7f", alpha=0.5)
    ax.set_xlabel("Logical time")
    ax.set_ylabel("Voltage")
    ax.set_title(f"Voltage of {neuron.name}")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper right")
    fig.tight_layout()
    fig.savefig(filename, dpi=150)
    plt.close(fig)
    logger.info("saved voltage plot to %s", filename)
    return True
