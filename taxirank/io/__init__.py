"""IO package."""

from .loader import DataLoader, FeedReader
from .report import ReportRenderer
from .exporter import ResultExporter
from .feed_generator import generate_feed, generate_feed_content, write_feed

__all__ = [
    "DataLoader",
    "FeedReader",
    "ReportRenderer",
    "ResultExporter",
    "generate_feed",
    "generate_feed_content",
    "write_feed",
]
