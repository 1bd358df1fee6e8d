"""
Command-line driver: read a network description, build it, simulate it.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import SimulationConfig
from .loader import NetworkLoader
from .network import Network

logger = logging.getLogger("neuronsim")


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="neuronsim",
        description="Simulate a network of neurons and synapses described in a text file.",
    )
    parser.add_argument("file", nargs="?", default=None,
                        help="Network description; read from stdin when omitted")
    parser.add_argument("--dump", action="store_true",
                        help="Print every neuron and synapse after loading")
    parser.add_argument("--strict", action="store_true",
                        help="Do not simulate a description that had errors; print it instead")
    parser.add_argument("--interval", type=float, default=0.0,
                        help="Report fire counts every INTERVAL when the description has no output line")
    parser.add_argument("--length", type=float, default=0.0,
                        help="Last report time for --interval")
    parser.add_argument("--track", type=str, default=None,
                        help="Record the voltage trace of this neuron")
    parser.add_argument("--plot-file", type=str, default=None,
                        help="Save the tracked voltage trace to this image (needs --track)")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level, default WARNING")
    return parser.parse_args(argv)


def _print_network(network: Network) -> None:
    for line in network.registry.dump():
        print(line)


def main_cli(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(message)s", stream=sys.stderr)

    if args.plot_file and not args.track:
        logger.error("Fatal error: --plot-file needs --track")
        return 1

    try:
        handle = open(args.file) if args.file else sys.stdin
    except OSError as exc:
        logger.error("Fatal error: cannot read %s: %s", args.file, exc)
        return 1

    network = Network(SimulationConfig(report_interval=args.interval, report_length=args.length))
    if args.track:
        network.track_neuron(args.track)
    loader = NetworkLoader(network, output=sys.stdout)
    with handle:
        finished = loader.execute(handle)

    if not finished:
        print("--- system quitting ---")
        return 0

    if args.dump:
        _print_network(network)

    if not loader.ran:
        if args.strict and network.reporter.count:
            logger.error("%d error(s) found; not simulating", network.reporter.count)
            if not args.dump:
                _print_network(network)
            return 1
        loader.run()

    if args.plot_file:
        if network.tracked_neuron_id is None:
            logger.warning("Error: --track %s -- no such neuron", args.track)
        else:
            from .plotting import render_voltage_plot

            render_voltage_plot(network, args.plot_file)
    return 0
