"""AstroBioGen data aggregation and fallback gateway."""

__version__ = "2026.10"
