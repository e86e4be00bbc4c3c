"""Calculation pipeline: the statistics engine and auto-recalculation."""

from .auto_calculate import AutoRecalculator
from .statistics_engine import (
    BatchResult,
    CalculationResult,
    StatisticsEngine,
    format_preview,
)

__all__ = [
    "AutoRecalculator",
    "BatchResult",
    "CalculationResult",
    "StatisticsEngine",
    "format_preview",
]
