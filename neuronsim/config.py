"""
Simulation tuning knobs.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Placeholder for numbers that are missing or invalid in a description,
# and for negative synapse delays.
DEFAULT_VALUE = 99.99
DEFAULT_DELAY = DEFAULT_VALUE

# Report display: one column per neuron
NAME_WIDTH = 4
GLYPHS: Tuple[str, str, str] = ("| ", "|-", "|=")  # 0, 1, 2+ fires


@dataclass
class SimulationConfig:
    default_delay: float = DEFAULT_DELAY
    default_value: float = DEFAULT_VALUE

    # sampler; interval <= 0 disables reporting
    report_interval: float = 0.0
    report_length: float = 0.0
    name_width: int = NAME_WIDTH
    glyphs: Tuple[str, str, str] = GLYPHS

    # keep every dispatched event in Scheduler.history
    record_history: bool = False
