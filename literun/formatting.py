"""Turn evaluation results into document output blocks."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from typing import Any

from literun.kinds import EmbedKind
from literun.presenters import HtmlChain, PlainTextChain
from literun.results import HTML, PLAIN_TEXT, EvaluationResult, OutputBlock, TypedValue

NO_OUTPUT = "No output has been produced."
NO_VALUE = "No value returned by any evaluator"
NOT_RAW = "Value could not be returned raw"

Transformation = Callable[[Any, type, int], list[OutputBlock] | None]

log = logging.getLogger("literun.formatting")


def unquote(content: str) -> str:
    """Strip one matching pair of surrounding quotes, if present."""
    if len(content) >= 2 and content[0] == content[-1] and content[0] in "'\"":
        return content[1:-1]
    return content


class ResultFormatter:
    """Formats evaluation results for a requested EmbedKind.

    Values are rendered by the first value transformation that returns
    blocks. The defaults try the HTML chain, then the plain-text chain;
    `register_transformation` puts new ones in front of them.
    """

    def __init__(
        self,
        plain_text: PlainTextChain,
        html: HtmlChain,
        lock: AbstractContextManager | None = None,
    ):
        self.plain_text = plain_text
        self.html = html
        self._lock = lock if lock is not None else nullcontext()
        self._transformations: tuple[Transformation, ...] = (self.html_blocks, self.plain_text_blocks)

    @property
    def transformations(self) -> tuple[Transformation, ...]:
        return self._transformations

    def register_transformation(self, transformation: Transformation) -> Transformation:
        self._transformations = (transformation, *self._transformations)
        return transformation

    def html_blocks(self, value: Any, _value_type: type, sequence_number: int) -> list[OutputBlock] | None:
        rendered = self.html.resolve(value)
        if rendered is None:
            return None
        return [OutputBlock(content=rendered.html, media_kind=HTML, sequence_number=sequence_number)]

    def plain_text_blocks(self, value: Any, _value_type: type, sequence_number: int) -> list[OutputBlock]:
        content = self.plain_text.resolve(value)
        return [OutputBlock(content=content, media_kind=PLAIN_TEXT, sequence_number=sequence_number)]

    def format(self, result: EvaluationResult, kind: EmbedKind, sequence_number: int) -> list[OutputBlock]:
        """Produce the blocks for one presentation kind of `result`."""
        match kind:
            case EmbedKind.CONSOLE_OUTPUT:
                return [self.text_block(result.console_output, sequence_number)]
            case EmbedKind.INTERPRETER_OUTPUT:
                return [self.text_block(result.interpreter_output, sequence_number)]
            case EmbedKind.MERGED_OUTPUT:
                return [self.text_block(result.merged_output, sequence_number)]
            case EmbedKind.LAST_VALUE_RAW if result.last_value is not None:
                return self.raw_blocks(result.last_value, sequence_number)
            case EmbedKind.LAST_VALUE if result.last_value is not None:
                return self.value_blocks(result.last_value, sequence_number)
            case EmbedKind.EXPLICIT_VALUE if result.explicit_value is not None:
                return self.value_blocks(result.explicit_value, sequence_number)
            case _:
                return [no_value_block(sequence_number)]

    def text_block(self, text: str | None, sequence_number: int) -> OutputBlock:
        text = NO_OUTPUT if text is None else text
        return OutputBlock(content=text.strip(), media_kind=PLAIN_TEXT, sequence_number=sequence_number)

    def value_blocks(self, typed: TypedValue, sequence_number: int) -> list[OutputBlock]:
        for transformation in self._transformations:
            with self._lock:
                blocks = transformation(typed.value, typed.value_type, sequence_number)
            if blocks is not None:
                return list(blocks) or [no_value_block(sequence_number)]
        log.debug("No transformation rendered a %s value", typed.value_type.__name__)
        return [no_value_block(sequence_number)]

    def raw_blocks(self, typed: TypedValue, sequence_number: int) -> list[OutputBlock]:
        with self._lock:
            rendered = self.html.resolve(typed.value)
        if rendered is None:
            return [OutputBlock(content=NOT_RAW, media_kind=PLAIN_TEXT, sequence_number=sequence_number)]
        content = unquote(rendered.html) if typed.value_type is str else rendered.html
        return [OutputBlock(content=content, media_kind=HTML, sequence_number=sequence_number)]


def no_value_block(sequence_number: int) -> OutputBlock:
    return OutputBlock(content=NO_VALUE, media_kind=PLAIN_TEXT, sequence_number=sequence_number)
