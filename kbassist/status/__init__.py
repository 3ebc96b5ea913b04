"""Backend status probes for the settings view."""

from kbassist.status.aggregator import StatusAggregator

__all__ = ["StatusAggregator"]
