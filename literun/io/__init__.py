"""Tag-based logging for evaluations."""

from literun.io.filters import TagFilter
from literun.io.formatters import RichFormatter, XMLFormatter
from literun.io.handlers import DisplayHandler, TranscriptHandler
from literun.io.setup import setup_logging
from literun.io.tags import FAILURE_TAGS, TAGS, TRANSCRIPT_TAGS

__all__ = [
    "TAGS",
    "FAILURE_TAGS",
    "TRANSCRIPT_TAGS",
    "TagFilter",
    "RichFormatter",
    "XMLFormatter",
    "DisplayHandler",
    "TranscriptHandler",
    "setup_logging",
]
