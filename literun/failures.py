"""Failure records and the policy deciding how failures are reported or escalated."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict


class StrictEvaluationError(RuntimeError):
    """Raised by the strict error callback to stop document generation."""


def _indent(text: str) -> str:
    lines = [line for line in text.splitlines() if line]
    return "\n".join(f"    {line}" for line in lines)


class FailureRecord(BaseModel):
    """What is reported when a snippet fails to evaluate."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    text: str
    as_expression: bool
    file: str | None = None
    error: BaseException
    stderr: str = ""

    def __str__(self) -> str:
        return f"Error evaluating expression \nExpression:\n{_indent(self.text)}\nError:\n{_indent(self.stderr)}"


FailureObserver = Callable[[FailureRecord], None]


def format_escalation(record: FailureRecord, stdout: str) -> str:
    """Build the message handed to the error callback."""
    return (
        "Evaluation failed and --strict is on\n"
        f"    file={record.file!r}\n"
        f"    asExpression={str(record.as_expression).lower()}, text={record.text}\n"
        f"    stdout={stdout}\n"
        f"    stderr={record.stderr}\n"
        f"    inner exception={record.error!r}"
    )


def ignore_error(_message: str) -> None:
    pass


def strict_on_error(message: str) -> None:
    raise StrictEvaluationError(message)


class FailurePolicy:
    """Publishes failures to observers and hands escalations to a callback.

    The default callback ignores escalations (lenient mode); `strict()`
    builds a policy that raises StrictEvaluationError instead.
    """

    def __init__(self, on_error: Callable[[str], None] | None = None):
        self.on_error = on_error if on_error is not None else ignore_error
        self._observers: tuple[FailureObserver, ...] = ()
        self.log = logging.getLogger("literun")

    @classmethod
    def strict(cls) -> FailurePolicy:
        return cls(on_error=strict_on_error)

    def subscribe(self, observer: FailureObserver) -> Callable[[], None]:
        """Add an observer. Returns a function that removes it again."""
        self._observers = (*self._observers, observer)

        def unsubscribe() -> None:
            self._observers = tuple(o for o in self._observers if o is not observer)

        return unsubscribe

    def report(self, record: FailureRecord) -> None:
        for observer in self._observers:
            observer(record)
        self.log.info(str(record), extra={"tag": "evaluation-failed"})

    def escalate(self, message: str) -> None:
        self.on_error(message)
