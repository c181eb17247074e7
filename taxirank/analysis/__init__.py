"""Analysis package."""

from .statistics import OverallStats, RouteStats, StatisticsCalculator
from .charts import ChartGenerator

__all__ = ["OverallStats", "RouteStats", "StatisticsCalculator", "ChartGenerator"]
