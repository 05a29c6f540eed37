"""Logger setup and wiring."""

from __future__ import annotations

import logging

from rich.console import Console

from literun.io.filters import TagFilter
from literun.io.handlers import DisplayHandler, TranscriptHandler
from literun.io.tags import FAILURE_TAGS, TRANSCRIPT_TAGS


def setup_logging(console: Console | None = None) -> tuple[logging.Logger, TranscriptHandler]:
    """Configure the literun logger with all handlers."""
    log = logging.getLogger("literun")
    log.setLevel(logging.INFO)

    # Transcript handler: every snippet in, its output and failures
    transcript = TranscriptHandler()
    transcript.addFilter(TagFilter(TRANSCRIPT_TAGS))
    log.addHandler(transcript)

    # Display handler: failures only, on stderr unless a console is given
    display = DisplayHandler(console or Console(stderr=True))
    display.addFilter(TagFilter(FAILURE_TAGS))
    log.addHandler(display)

    return log, transcript
