"""Diagnostics package.

- pretty_month, era_table, round_trip: always available, light-weight checks
- span_plot: optional (requires numpy + matplotlib, the "diagnostics" extra)
"""

__all__ = ["pretty_month", "era_table", "round_trip", "span_plot"]
