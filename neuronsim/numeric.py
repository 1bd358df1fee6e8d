"""
Single-precision arithmetic used by the simulation state.

Voltages, thresholds, strengths, delays and event times are all float32,
so sums and decays round the same way wherever they are computed.
"""
from __future__ import annotations

import numpy as np


def real(value: float) -> np.float32:
    """Coerce a Python or numpy number to a float32 scalar."""
    return np.float32(value)


def decay(voltage: float, since: float, now: float) -> np.float32:
    """Decay ``voltage`` recorded at ``since`` to time ``now``.

        V(now) = V(since) * exp(since - now)

    For ``now >= since`` the exponent is non-positive, so the result moves
    toward zero.
    """
    return real(voltage) * np.exp(real(since) - real(now), dtype=np.float32)


def fmt(value: float) -> str:
    """Shortest decimal rendering of a float32 (``1.5``, ``99.99``)."""
    return str(real(value))
