"""Evaluator: serialized snippet evaluation against one shared session."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from literun.bridge import Guard, SessionBridge
from literun.config import EvaluatorConfig
from literun.failures import FailureObserver, FailurePolicy, FailureRecord, format_escalation, strict_on_error
from literun.formatting import ResultFormatter, Transformation
from literun.kinds import EmbedKind
from literun.presenters import HtmlChain, PlainTextChain
from literun.results import EvaluationResult, OutputBlock
from literun.session import EvaluationError, Session


def describe_elapsed(seconds: float) -> str:
    return f"{seconds:.2f}s" if seconds >= 1 else f"{seconds * 1000:.0f}ms"


class Evaluator:
    """Evaluates snippets embedded in documents and formats what they produce.

    Only one evaluation runs at a time: every call, including the probe for
    the last displayed value, holds a single reentrant lock. There is no
    timeout; a snippet that never finishes blocks every later call.

    Failures never escape `evaluate`. They are reported to observers
    registered with `on_failure`, handed to the `on_error` callback (which
    ignores them unless strict mode is on) and an empty result is returned.
    """

    def __init__(
        self,
        config: EvaluatorConfig | None = None,
        bridge: SessionBridge | None = None,
        on_error: Callable[[str], None] | None = None,
        session: Session | None = None,
    ):
        self.config = config if config is not None else EvaluatorConfig()

        if bridge is None and not self.config.disable_bridge:
            bridge = SessionBridge(self.config.display, supports_html=self.config.add_html_printer)
        self.bridge = bridge

        settings = bridge.settings if bridge is not None else self.config.display
        self.plain_text = PlainTextChain(settings)
        self.html = HtmlChain()
        self._lock = threading.RLock()
        self.formatter = ResultFormatter(self.plain_text, self.html, lock=self._lock)

        if on_error is None and self.config.strict:
            on_error = strict_on_error
        self.failures = FailurePolicy(on_error)

        if session is None:
            session = Session(discard_stdout=self.config.discard_stdout)
        if bridge is not None:
            bridge.connect(self.plain_text, self.html)
            session.attach_bridge(bridge, self.config.bridge_name)
        self.session = session

        self.log = logging.getLogger("literun")
        self.debug_log = logging.getLogger("literun.evaluator")

    def evaluate(self, text: str, as_expression: bool, file: str | None = None) -> EvaluationResult:
        """Evaluate a snippet in the shared session.

        Args:
            text: Python source of the snippet.
            as_expression: Evaluate as one expression (explicit value) rather
                than as statements (last displayed value).
            file: Document the snippet came from; its directory becomes the
                working directory for the call.

        Returns:
            The evaluation result, or an empty result if evaluation failed.
        """
        directory = Path(file).parent if file else Path.cwd()
        started = time.perf_counter()
        try:
            with self._lock, self.session.working_directory(directory):
                self.log.info(text, extra={"tag": "snippet-in"})
                result = self._run(text, as_expression)
        except EvaluationError as e:
            self._fail(e, text, as_expression, file)
            return EvaluationResult()

        elapsed = describe_elapsed(time.perf_counter() - started)
        self.log.info(f"{result.merged_output}({elapsed})", extra={"tag": "snippet-out"})
        return result

    def _run(self, text: str, as_expression: bool) -> EvaluationResult:
        if as_expression:
            output, value = self.session.evaluate_expression(text)
            return EvaluationResult.from_output(output, explicit_value=value)

        output, _ = self.session.evaluate_statements(text)
        try:
            last = self.session.last_value()
        except EvaluationError as e:
            self.debug_log.debug("No last value after statements: %s", e)
            last = None
        return EvaluationResult.from_output(output, last_value=last)

    def _fail(self, error: EvaluationError, text: str, as_expression: bool, file: str | None) -> None:
        record = FailureRecord(
            text=text,
            as_expression=as_expression,
            file=file,
            error=error.__cause__ or error,
            stderr=error.errors.merged,
        )
        self.failures.report(record)
        self.failures.escalate(format_escalation(record, error.output.merged))

    def format(self, result: EvaluationResult, kind: EmbedKind, sequence_number: int) -> list[OutputBlock]:
        """Format one presentation kind of `result` as output blocks."""
        return self.formatter.format(result, kind, sequence_number)

    def register_presenter(self, guard: Guard, presenter: Callable[[Any], Any], html: bool = False) -> None:
        """Register a presenter for values of `guard` type; newest registrations win."""
        chain = self.html if html else self.plain_text
        chain.register_presenter(guard, presenter)

    def register_transformer(self, guard: Guard, transformer: Callable[[Any], Any]) -> None:
        """Register a transformer on both chains."""
        self.plain_text.register_transformer(guard, transformer)
        self.html.register_transformer(guard, transformer)

    def register_transformation(self, transformation: Transformation) -> None:
        """Register a function that formats (some) values directly into blocks.

        It receives (value, value_type, sequence_number) and returns a list
        of blocks, or None when it does not handle the value.
        """
        self.formatter.register_transformation(transformation)

    def on_failure(self, observer: FailureObserver) -> Callable[[], None]:
        """Observe failed evaluations. Returns a function that unsubscribes."""
        return self.failures.subscribe(observer)
