"""Run summary reporting: console text and YAML report generation."""

from tasktest.reporting.reporter import Reporter

__all__ = [
    "Reporter",
]
