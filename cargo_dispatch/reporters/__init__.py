"""Reporting utilities for planning results."""

from .console_reporter import print_results, print_analysis, format_strategy_summary

__all__ = [
    "print_results",
    "print_analysis",
    "format_strategy_summary",
]
