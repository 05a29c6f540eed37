"""Logging handlers for evaluation records."""

import logging

from rich.console import Console
from rich.panel import Panel

from literun.io.formatters import RichFormatter, XMLFormatter


class TranscriptHandler(logging.Handler):
    """Accumulates XML-formatted records of every evaluation."""

    def __init__(self) -> None:
        super().__init__()
        self.buffer: list[str] = []
        self.setFormatter(XMLFormatter())

    def emit(self, record: logging.LogRecord) -> None:
        self.buffer.append(self.format(record))

    def get_transcript(self) -> str:
        return "\n".join(self.buffer)

    def clear(self) -> None:
        self.buffer.clear()


class DisplayHandler(logging.Handler):
    """Routes records to a Rich console."""

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console
        self.setFormatter(RichFormatter())

    def emit(self, record: logging.LogRecord) -> None:
        match record.tag:
            case "evaluation-failed":
                panel = Panel(self.format(record), title="[bold red]literun[/]", border_style="red")
                self.console.print(panel)
            case _:
                self.console.print(self.format(record))
