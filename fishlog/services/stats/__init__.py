"""Statistics helpers used by :mod:`fishlog.services.stats_service`."""

from fishlog.services.stats.season import SeasonWindow, format_day_key

__all__ = ["SeasonWindow", "format_day_key"]
