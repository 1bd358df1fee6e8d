"""
Exceptions and the error channel for network construction.

Exception hierarchy:

    NeuronSimError
    ├── NetworkError                 - a declaration cannot enter the network
    │   ├── DuplicateNameError       - name already used by a neuron or synapse
    │   ├── UnresolvedReferenceError - source/destination name not found
    │   └── TopologyError            - secondary synapse aimed at a secondary
    ├── DescriptionSyntaxError       - malformed line in a network description
    └── SchedulingError              - misuse of the event scheduler

Construction errors are never fatal: the loader catches them, hands them to
an ``ErrorReporter`` and moves on to the next declaration.
"""
from __future__ import annotations

import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


class NeuronSimError(Exception):
    """Base class for all neuronsim errors."""


class NetworkError(NeuronSimError):
    """A neuron or synapse declaration was rejected."""


class DuplicateNameError(NetworkError):
    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} {name} -- duplicate declaration")
        self.kind = kind
        self.name = name


class UnresolvedReferenceError(NetworkError):
    def __init__(self, context: str, role: str, name: Optional[str]) -> None:
        super().__init__(f"{context} -- no such {role}")
        self.context = context
        self.role = role
        self.name = name


class TopologyError(NetworkError):
    def __init__(self, context: str) -> None:
        super().__init__(f"{context} -- destination is a secondary synapse")
        self.context = context


class DescriptionSyntaxError(NeuronSimError):
    """A line of a network description could not be understood."""


class SchedulingError(NeuronSimError):
    """An event was scheduled in the past or has no handler.

    This signals a programming error in an event handler, not bad input.
    """


class ErrorReporter:
    """Non-fatal error channel.

    Every report is logged at WARNING level and counted; the messages are
    also kept so callers (and tests) can inspect what went wrong.
    """

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._log = log or logger
        self.count: int = 0
        self.messages: List[str] = []

    def warning(self, message: str, line: Optional[int] = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        self.count += 1
        self.messages.append(message)
        self._log.warning("Error: %s", message)

    def report(self, exc: NeuronSimError, line: Optional[int] = None) -> None:
        self.warning(str(exc), line=line)
