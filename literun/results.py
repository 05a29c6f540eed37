"""Evaluation results and output blocks using Pydantic models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PLAIN_TEXT = "text/plain"
HTML = "text/html"


class TypedValue(BaseModel):
    """A value produced in the session together with its runtime type."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Any
    value_type: type

    @classmethod
    def of(cls, value: Any) -> TypedValue:
        return cls(value=value, value_type=type(value))


class CapturedOutput(BaseModel):
    """Text captured from one stream during a single call.

    `interpreter` holds what the interpreter itself wrote (value echo or
    tracebacks), `console` what the running program wrote, and `merged`
    both interleaved in the order they were emitted.
    """

    model_config = ConfigDict(frozen=True)

    interpreter: str = ""
    console: str = ""
    merged: str = ""


class EvaluationResult(BaseModel):
    """Outcome of evaluating one snippet. Every field is absent on failure."""

    model_config = ConfigDict(frozen=True)

    console_output: str | None = None
    interpreter_output: str | None = None
    merged_output: str | None = None
    last_value: TypedValue | None = None
    explicit_value: TypedValue | None = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in type(self).model_fields)

    @classmethod
    def from_output(
        cls,
        output: CapturedOutput,
        last_value: TypedValue | None = None,
        explicit_value: TypedValue | None = None,
    ) -> EvaluationResult:
        return cls(
            console_output=output.console,
            interpreter_output=output.interpreter,
            merged_output=output.merged,
            last_value=last_value,
            explicit_value=explicit_value,
        )


class OutputBlock(BaseModel):
    """A formatted block ready to be inserted into a document."""

    model_config = ConfigDict(frozen=True)

    content: str
    media_kind: str = PLAIN_TEXT
    sequence_number: int | None = None


class HtmlOutput(BaseModel):
    """HTML rendering of a value: header tags (e.g. scripts) plus the body."""

    model_config = ConfigDict(frozen=True)

    tags: list[tuple[str, str]] = Field(default_factory=list)
    html: str
