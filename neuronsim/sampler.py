"""
Periodic fire-count reports.

Every ``interval`` units of logical time the sampler reads (and resets) the
fire count of each neuron and prints one row of glyphs:

    |    no fire since the last report
    |-   one fire
    |=   two or more fires

A header of neuron names, cut or padded to ``name_width`` characters, is
printed before the first row.
"""
from __future__ import annotations

import logging
import sys
from typing import List, Optional, TextIO, Tuple

from .config import GLYPHS, NAME_WIDTH
from .network import Network
from .neuron import Neuron
from .scheduler import Event, EventKind

logger = logging.getLogger(__name__)


class FireCountSampler:
    def __init__(
        self,
        network: Network,
        interval: float,
        length: float,
        stream: Optional[TextIO] = None,
        name_width: int = NAME_WIDTH,
        glyphs: Tuple[str, str, str] = GLYPHS,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"report interval must be positive, got {interval}")
        self.network = network
        self.interval = float(interval)
        self.length = float(length)
        self.stream = stream
        self.name_width = name_width
        self.glyphs = glyphs

        self.neurons: List[Neuron] = []
        # (time, counts in column order) for every report
        self.rows: List[Tuple[float, List[int]]] = []
        self._header_done = False
        network.scheduler.register(EventKind.REPORT, self._handle_report)

    def start(self) -> None:
        """Snapshot the current neurons as columns and arm the first report."""
        self.neurons = list(self.network.registry.neurons)
        self.network.scheduler.schedule(Event.report(self.network.now + self.interval))

    def glyph(self, count: int) -> str:
        return self.glyphs[min(count, len(self.glyphs) - 1)]

    def header(self) -> str:
        width = self.name_width
        return "".join(f" {n.name[:width]:<{width}} " for n in self.neurons)

    def _out(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stdout

    def _handle_report(self, event: Event) -> None:
        out = self._out()
        if not self._header_done:
            print(self.header(), file=out)
            self._header_done = True

        counts = [n.sample_and_reset() for n in self.neurons]
        logger.debug("report at t=%s: %s", event.time, counts)
        self.rows.append((float(event.time), counts))
        width = self.name_width
        print("".join(f" {self.glyph(c):<{width}} " for c in counts), file=out)

        # re-arm until the requested length is covered
        if event.time < self.length:
            self.network.scheduler.schedule(Event.report(event.time + self.interval))
