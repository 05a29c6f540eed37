"""Session: one long-lived Python interpreter with captured output channels."""

from __future__ import annotations

import ast
import logging
import os
import sys
import textwrap
from code import InteractiveInterpreter
from collections.abc import Callable, Iterator
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal, TextIO, TypeVar

from literun.results import CapturedOutput, TypedValue

if TYPE_CHECKING:
    from literun.bridge import SessionBridge

T = TypeVar("T")

SNIPPET_FILENAME = "<snippet>"
LAST_VALUE_NAME = "_"

Mode = Literal["eval", "exec"]


class EvaluationError(Exception):
    """A snippet failed to compile or raised while running.

    Carries everything captured up to the failure: `output` for the stdout
    side and `errors` for the stderr side (tracebacks on the interpreter
    channel, program writes to sys.stderr on the console channel).
    """

    def __init__(self, message: str, output: CapturedOutput, errors: CapturedOutput):
        super().__init__(message)
        self.output = output
        self.errors = errors


class OutputRecorder:
    """Records two channels of one stream and their interleaving."""

    def __init__(self) -> None:
        self.buffers: dict[str, list[str]] = {"interpreter": [], "console": []}
        self.merged: list[str] = []

    def channel(self, name: str, tee: TextIO | None = None) -> Channel:
        return Channel(self, name, tee)

    def record(self, name: str, s: str) -> None:
        self.buffers[name].append(s)
        self.merged.append(s)

    def snapshot(self) -> CapturedOutput:
        return CapturedOutput(
            interpreter="".join(self.buffers["interpreter"]),
            console="".join(self.buffers["console"]),
            merged="".join(self.merged),
        )


class Channel:
    """File-like writer feeding one channel of an OutputRecorder."""

    encoding = "utf-8"

    def __init__(self, recorder: OutputRecorder, name: str, tee: TextIO | None = None):
        self.recorder = recorder
        self.name = name
        self.tee = tee

    def write(self, s: str) -> int:
        self.recorder.record(self.name, s)
        if self.tee is not None:
            self.tee.write(s)
        return len(s)

    def flush(self) -> None:
        if self.tee is not None:
            self.tee.flush()

    def isatty(self) -> bool:
        return False

    def writable(self) -> bool:
        return True


class SessionInterpreter(InteractiveInterpreter):
    """Python interpreter that captures value echo, program output and errors."""

    def __init__(self, namespace: dict[str, Any], discard_stdout: bool = True):
        super().__init__(locals=namespace)
        self.discard_stdout = discard_stdout
        self._echo: Channel | None = None
        self._errors: Channel | None = None

    def write(self, data: str) -> None:
        """Called by InteractiveInterpreter for error output (tracebacks)."""
        if self._errors is not None:
            self._errors.write(data)

    def displayhook(self, value: Any) -> None:
        """Echo expression statements and remember the last displayed value."""
        if value is None:
            return
        self.locals[LAST_VALUE_NAME] = value
        if self._echo is not None:
            self._echo.write(f"{value!r}\n")

    def compile_snippet(self, source: str, mode: Mode):
        """Compile source; statements are compiled interactively so bare expressions echo."""
        source = textwrap.dedent(source)
        if mode == "eval":
            return compile(source.strip(), SNIPPET_FILENAME, "eval")
        tree = ast.parse(source, SNIPPET_FILENAME, "exec")
        return compile(ast.Interactive(body=tree.body), SNIPPET_FILENAME, "single")

    def run(self, source: str, mode: Mode) -> tuple[CapturedOutput, Any]:
        """Execute source, returning (captured_output, value).

        Raises:
            EvaluationError: If the source does not compile or raises.
        """
        output = OutputRecorder()
        errors = OutputRecorder()
        tee = None if self.discard_stdout else sys.__stdout__
        self._echo = output.channel("interpreter")
        self._errors = errors.channel("interpreter")

        value = None
        failure: BaseException | None = None
        saved_hook = sys.displayhook
        sys.displayhook = self.displayhook
        try:
            with redirect_stdout(output.channel("console", tee)), redirect_stderr(errors.channel("console")):
                try:
                    code = self.compile_snippet(source, mode)
                except (OverflowError, SyntaxError, ValueError) as e:
                    self.showsyntaxerror(SNIPPET_FILENAME)
                    failure = e
                else:
                    try:
                        value = eval(code, self.locals)
                    except (Exception, SystemExit) as e:
                        self.showtraceback()
                        failure = e
        finally:
            sys.displayhook = saved_hook
            self._echo = self._errors = None

        if failure is not None:
            message = f"{type(failure).__name__}: {failure}"
            raise EvaluationError(message, output.snapshot(), errors.snapshot()) from failure
        return output.snapshot(), value


class Session:
    """The interpreter session all snippets run against. Not thread-safe."""

    def __init__(
        self,
        bridge: SessionBridge | None = None,
        bridge_name: str = "shell",
        discard_stdout: bool = True,
        namespace: dict[str, Any] | None = None,
    ):
        self.namespace: dict[str, Any] = namespace if namespace is not None else {}
        self.namespace.setdefault("__name__", "__main__")
        self.bridge: SessionBridge | None = None
        self.log = logging.getLogger("literun.session")

        if bridge is not None:
            self.attach_bridge(bridge, bridge_name)

        self.interpreter = SessionInterpreter(self.namespace, discard_stdout=discard_stdout)

    def attach_bridge(self, bridge: SessionBridge, name: str = "shell") -> None:
        """Make the configuration bridge visible to snippets under `name`."""
        self.bridge = bridge
        self.namespace[name] = bridge
        self.namespace["HAS_HTML_PRINTER"] = bridge.supports_html

    def evaluate_expression(self, text: str) -> tuple[CapturedOutput, TypedValue | None]:
        """Evaluate text as a single expression. A None result counts as no value."""
        output, value = self.interpreter.run(text, "eval")
        if value is None:
            return output, None
        return output, TypedValue.of(value)

    def evaluate_statements(self, text: str) -> tuple[CapturedOutput, None]:
        """Run text as a sequence of statements, echoing bare expressions."""
        output, _ = self.interpreter.run(text, "exec")
        return output, None

    def last_value(self) -> TypedValue | None:
        """Retrieve the last displayed value.

        Raises:
            EvaluationError: If no value has been displayed in this session.
        """
        _, value = self.evaluate_expression(LAST_VALUE_NAME)
        return value

    @contextmanager
    def working_directory(self, path: str | os.PathLike[str]) -> Iterator[Path]:
        """Run the block with `path` as the current directory and first import path."""
        directory = str(Path(path))
        previous = os.getcwd()
        os.chdir(directory)
        sys.path.insert(0, directory)
        self.log.debug("Working directory set to %s", directory)
        try:
            yield Path(directory)
        finally:
            try:
                sys.path.remove(directory)
            except ValueError:
                self.log.debug("%s was already removed from sys.path", directory)
            os.chdir(previous)

    def with_working_directory(self, path: str | os.PathLike[str], thunk: Callable[[], T]) -> T:
        with self.working_directory(path):
            return thunk()
