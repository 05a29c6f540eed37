"""Logging formatters for different output targets."""

import logging

from rich.markup import escape


class RichFormatter(logging.Formatter):
    """Formats log messages with Rich markup based on tag."""

    def format(self, record: logging.LogRecord) -> str:
        content = escape(record.getMessage())

        match getattr(record, "tag", None):
            case "snippet-in":
                return f"[bold cyan]>>> [/]{content}"
            case "snippet-out":
                return content
            case "evaluation-failed":
                return f"[bold red]Evaluation failed:[/] {content}"
            case _:
                return content


class XMLFormatter(logging.Formatter):
    """Wraps log message in XML tag from record.tag attribute."""

    def format(self, record: logging.LogRecord) -> str:
        return f"<{record.tag}>{record.getMessage()}</{record.tag}>"
