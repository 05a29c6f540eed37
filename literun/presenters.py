"""Presenter chains: ordered rules that turn produced values into text or HTML."""

from __future__ import annotations

import logging
import traceback
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, NamedTuple

from rich.pretty import pretty_repr

from literun.bridge import DisplaySettings, Guard, check_guard
from literun.results import HtmlOutput

log = logging.getLogger("literun.presenters")


class Attempt(NamedTuple):
    """Outcome of consulting one chain entry.

    `result` is None both when the entry did not apply and when it raised;
    `error` keeps the exception for diagnostics only.
    """

    result: Any = None
    error: Exception | None = None


@dataclass(frozen=True)
class PresenterEntry:
    """A presenter (value -> representation) or transformer (value -> value) for one type."""

    guard: Guard
    func: Callable[[Any], Any]
    transform: bool = False

    def matches(self, value: Any) -> bool:
        return value is not None and isinstance(value, self.guard)

    def attempt(self, value: Any, accept: Callable[[Any], Any] | None = None) -> Attempt:
        """Run the entry on value; a presenter's result is normalised by `accept`."""
        try:
            if not self.matches(value):
                return Attempt()
            result = self.func(value)
            if accept is not None and not self.transform and result is not None:
                result = accept(result)
            return Attempt(result=result)
        except Exception as e:
            return Attempt(error=e)


def describe_error(error: BaseException) -> str:
    return "".join(traceback.format_exception_only(type(error), error)).strip()


def render_generic(value: Any, settings: DisplaySettings | None = None) -> str:
    """Structural string form of any value. Never raises."""
    settings = settings or DisplaySettings()
    try:
        if isinstance(value, float):
            return format(value, settings.floating_point_format)
        return pretty_repr(
            value,
            max_width=settings.print_width,
            max_depth=settings.print_depth,
            max_length=settings.print_length,
            max_string=settings.print_size,
        )
    except Exception as e:
        return describe_error(e)


class PresenterChain:
    """Entries consulted newest first; registration replaces the tuple, never mutates it."""

    max_depth = 20

    def __init__(self) -> None:
        self._entries: tuple[PresenterEntry, ...] = ()

    @property
    def entries(self) -> tuple[PresenterEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def register_presenter(self, guard: Guard, presenter: Callable[[Any], Any]) -> Callable[[Any], Any]:
        check_guard(guard)
        self._entries = (PresenterEntry(guard, presenter), *self._entries)
        return presenter

    def register_transformer(self, guard: Guard, transformer: Callable[[Any], Any]) -> Callable[[Any], Any]:
        check_guard(guard)
        self._entries = (PresenterEntry(guard, transformer, transform=True), *self._entries)
        return transformer

    def resolve(self, value: Any, depth: int = 0) -> Any:
        """Render value with the first entry that produces something.

        Transformer output is fed back through this chain at depth + 1.
        Past `max_depth` recursion stops and `exhausted` decides the answer.
        """
        if depth > self.max_depth:
            return self.exhausted(value)

        for entry in self._entries:
            attempt = entry.attempt(value, self.accept)
            if attempt.error is not None:
                log.debug("%s for %s failed: %s", entry.func, type(value).__name__, describe_error(attempt.error))
            if attempt.result is None:
                continue
            if entry.transform:
                rendered = self.resolve(attempt.result, depth + 1)
            else:
                rendered = attempt.result
            if rendered is not None:
                return rendered

        return self.fallback(value)

    def accept(self, result: Any) -> Any:
        """Normalise a presenter's result; None rejects it."""
        return result

    def exhausted(self, value: Any) -> Any:
        return None

    def fallback(self, value: Any) -> Any:
        return None


class PlainTextChain(PresenterChain):
    """Plain-text presenters. Always produces a string."""

    max_depth = 20

    def __init__(self, settings: DisplaySettings | None = None) -> None:
        super().__init__()
        self.settings = settings if settings is not None else DisplaySettings()

    def resolve(self, value: Any, depth: int = 0) -> str:
        return super().resolve(value, depth)

    def accept(self, result: Any) -> str:
        return result if isinstance(result, str) else str(result)

    def exhausted(self, value: Any) -> str:
        return render_generic(value, self.settings)

    def fallback(self, value: Any) -> str:
        return render_generic(value, self.settings)


class HtmlChain(PresenterChain):
    """HTML presenters. Produces an HtmlOutput or None."""

    max_depth = 10

    def resolve(self, value: Any, depth: int = 0) -> HtmlOutput | None:
        return super().resolve(value, depth)

    def accept(self, result: Any) -> HtmlOutput | None:
        match result:
            case HtmlOutput():
                return result
            case str():
                return HtmlOutput(html=result)
            case (tags, str() as html):
                try:
                    return HtmlOutput(tags=[(str(k), str(v)) for k, v in tags], html=html)
                except (TypeError, ValueError) as e:
                    log.debug("Ignoring malformed HTML tags: %s", describe_error(e))
                    return None
            case _:
                log.debug("Ignoring HTML presenter result of type %s", type(result).__name__)
                return None
