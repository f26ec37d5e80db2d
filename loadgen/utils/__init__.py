"""Utility modules for loadgen."""

from loadgen.utils.shell import run_command

__all__ = ["run_command"]
