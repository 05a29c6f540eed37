"""Presentation kinds that can be requested for an evaluation result."""

from enum import Enum


class EmbedKind(str, Enum):
    """What part of an evaluation result should be embedded in the document."""

    INTERPRETER_OUTPUT = "interpreter-output"
    MERGED_OUTPUT = "merged-output"
    CONSOLE_OUTPUT = "console-output"
    LAST_VALUE = "last-value"
    LAST_VALUE_RAW = "last-value-raw"
    EXPLICIT_VALUE = "explicit-value"
