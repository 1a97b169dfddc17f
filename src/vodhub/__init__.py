"""vodhub: multi-source video metadata aggregation."""

__version__ = "0.1.0"
