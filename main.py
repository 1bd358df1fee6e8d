"""
Neuron network simulator - command-line entry point.

    python main.py network.txt
    python main.py --track B --plot-file b.png network.txt

See neuronsim.cli for the options.
"""
import sys

from neuronsim.cli import main_cli

if __name__ == "__main__":
    sys.exit(main_cli())
