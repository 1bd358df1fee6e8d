"""
Network descriptions and the directives that drive them.

A description is a stream of line-oriented commands:

    neuron NAME THRESHOLD VOLTAGE
    synapse NAME SOURCE DESTINATION DELAY STRENGTH    (NAME may be "-")
    output INTERVAL LENGTH
    run
    quit

Blank lines and text after ``#`` are ignored. Problems are reported on the
network's error channel with their line number and loading continues; a
declaration with a missing or malformed number gets the placeholder value,
one with a missing or malformed name is skipped.
"""
from __future__ import annotations

import logging
import re
import sys
from typing import Callable, Dict, Iterable, List, Optional, TextIO, Union

from .config import SimulationConfig
from .errors import DescriptionSyntaxError, ErrorReporter, NetworkError
from .network import Network
from .numeric import real
from .sampler import FireCountSampler
from .synapse import ANONYMOUS, MISSING

logger = logging.getLogger(__name__)

NAME = re.compile(r"[A-Za-z]\w*\Z")


class NetworkLoader:
    def __init__(
        self,
        network: Optional[Network] = None,
        output: Optional[TextIO] = None,
    ) -> None:
        self.network = network or Network()
        self.output = output
        self.sampler: Optional[FireCountSampler] = None
        self.ran = False
        self.quit = False
        self._line = 0
        self._commands: Dict[str, Callable[[List[str]], None]] = {
            "neuron": self._neuron,
            "synapse": self._synapse,
            "output": self._output,
            "run": self._run,
            "quit": self._quit,
        }

    @property
    def reporter(self) -> ErrorReporter:
        return self.network.reporter

    @property
    def config(self) -> SimulationConfig:
        return self.network.config

    def execute(self, lines: Iterable[str]) -> bool:
        """Process commands until input ends or ``quit``.

        Returns False if a ``quit`` directive stopped processing.
        """
        for line in lines:
            self._line += 1
            tokens = line.split("#", 1)[0].split()
            if not tokens:
                continue
            handler = self._commands.get(tokens[0])
            if handler is None:
                self._warn(f"{tokens[0]} -- what is that")
                continue
            handler(tokens)
            if self.quit:
                return False
        return True

    def run(self) -> None:
        """Drain pending events.

        Without an ``output`` command, a positive ``report_interval`` in the
        config starts a sampler over every neuron declared so far.
        """
        if self.sampler is None and self.config.report_interval > 0:
            self._start_sampler(self.config.report_interval, self.config.report_length)
        logger.info("running simulation from t=%s", self.network.now)
        self.ran = True
        self.network.run()

    def _start_sampler(self, interval: float, length: float) -> None:
        self.sampler = FireCountSampler(
            self.network,
            interval,
            length,
            stream=self.output,
            name_width=self.config.name_width,
            glyphs=self.config.glyphs,
        )
        self.sampler.start()

    # ---------------------------- Commands ----------------------------- #

    def _neuron(self, tokens: List[str]) -> None:
        name = self._name(tokens, 1, "Neuron ???")
        if name is None:
            return
        context = f"Neuron {name}"
        threshold = self._number(tokens, 2, context)
        voltage = self._number(tokens, 3, context)
        self._line_end(tokens, 4, context)
        try:
            self.network.add_neuron(name, threshold, voltage)
        except NetworkError as exc:
            self.reporter.report(exc, line=self._line)

    def _synapse(self, tokens: List[str]) -> None:
        if len(tokens) > 1 and tokens[1] == ANONYMOUS:
            name = None
        else:
            name = self._name(tokens, 1, "Synapse ???")
            if name is None:
                return
        label = name or ANONYMOUS
        source = self._name(tokens, 2, f"Synapse {label} ???")
        destination = self._name(tokens, 3, f"Synapse {label} {source or MISSING} ???")
        context = f"Synapse {label} {source or MISSING} {destination or MISSING}"
        delay = self._number(tokens, 4, context)
        strength = self._number(tokens, 5, context)
        self._line_end(tokens, 6, context)
        if source is None or destination is None:
            return
        try:
            self.network.add_synapse(name, source, destination, delay, strength)
        except NetworkError as exc:
            self.reporter.report(exc, line=self._line)

    def _output(self, tokens: List[str]) -> None:
        interval = self._number(tokens, 1, "output")
        length = self._number(tokens, 2, "output")
        self._line_end(tokens, 3, "output")
        if self.sampler is not None:
            self._warn("output -- already specified")
            return
        if interval <= 0:
            self._warn(f"output {interval} -- interval must be positive")
            return
        self._start_sampler(interval, length)

    def _run(self, tokens: List[str]) -> None:
        self._line_end(tokens, 1, "run")
        out = self.output if self.output is not None else sys.stdout
        print("--- running simulation ---", file=out)
        self.run()

    def _quit(self, tokens: List[str]) -> None:
        logger.info("quit at t=%s, %d events pending", self.network.now, len(self.network.scheduler))
        self.quit = True

    # ---------------------------- Scanning ----------------------------- #

    def _warn(self, message: str) -> None:
        self.reporter.report(DescriptionSyntaxError(message), line=self._line)

    def _name(self, tokens: List[str], index: int, context: str) -> Optional[str]:
        if index < len(tokens) and NAME.match(tokens[index]):
            return tokens[index]
        self._warn(f"{context} -- expected a name")
        return None

    def _number(self, tokens: List[str], index: int, context: str) -> float:
        if index < len(tokens):
            try:
                return real(tokens[index])
            except ValueError:
                pass
        self._warn(f"{context} -- expected a number")
        return real(self.config.default_value)

    def _line_end(self, tokens: List[str], index: int, context: str) -> None:
        if len(tokens) > index:
            self._warn(f"{context} -- expected a newline")


def load_network(
    source: Union[str, Iterable[str]],
    network: Optional[Network] = None,
    output: Optional[TextIO] = None,
) -> Network:
    """Build (and, if the description says so, run) a network from text."""
    lines = source.splitlines() if isinstance(source, str) else source
    loader = NetworkLoader(network, output=output)
    loader.execute(lines)
    return loader.network
