"""CLI helpers exposed for command modules."""

from .helpers import cli_state, fail, print_json, run_or_exit

__all__ = ["cli_state", "fail", "print_json", "run_or_exit"]
