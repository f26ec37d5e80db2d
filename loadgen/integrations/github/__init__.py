"""GitHub integration for loadgen."""

from loadgen.integrations.github.client import GitDataClient

__all__ = ["GitDataClient"]
