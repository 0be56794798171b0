"""Weather acquisition, caching and daily aggregation for the trip planner."""

__version__ = "0.1.0"
