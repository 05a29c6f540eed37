"""Configuration bridge between the host and code running in the session."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from literun.presenters import HtmlChain, PlainTextChain

Registration = Literal["printer", "transformer", "html"]
Guard = type | tuple[type, ...]


def check_guard(guard: Any) -> None:
    """Reject anything `isinstance` would not accept as a class check.

    Raises:
        TypeError: If `guard` is not a type or a non-empty tuple of types.
    """
    if isinstance(guard, type):
        return
    if isinstance(guard, tuple) and guard and all(isinstance(g, type) for g in guard):
        return
    raise TypeError(f"presenter guard must be a type or a tuple of types, not {guard!r}")


class DisplaySettings(BaseModel):
    """Display knobs for values rendered from the session."""

    model_config = ConfigDict(validate_assignment=True)

    floating_point_format: str = ".10g"
    print_width: int = Field(default=78, gt=0)
    print_depth: int = Field(default=100, ge=0)
    print_length: int = Field(default=100, ge=0)
    print_size: int = Field(default=10000, ge=0)
    show_properties: bool = True
    show_iterables: bool = True
    show_mappings: bool = True
    show_declaration_values: bool = True
    command_line_args: list[str] = Field(default_factory=lambda: list(sys.argv))


class SessionBridge:
    """The object snippets use to read settings and register printers.

    Bound into the session namespace (as `shell` by default):

        shell.print_width = 120
        shell.add_printer(Decimal, lambda d: f"{d:.2f}")
        shell.add_print_transformer(Frame, lambda f: f.to_dict())
        shell.add_html_printer(Table, lambda t: t.to_html())

    Registrations made before the evaluator connects its chains are kept
    and replayed on `connect`.
    """

    def __init__(self, settings: DisplaySettings | None = None, supports_html: bool = True):
        object.__setattr__(self, "settings", settings if settings is not None else DisplaySettings())
        object.__setattr__(self, "supports_html", supports_html)
        object.__setattr__(self, "registrations", [])
        object.__setattr__(self, "_chains", None)
        object.__setattr__(self, "log", logging.getLogger("literun.bridge"))

    def __getattr__(self, name: str) -> Any:
        if name in DisplaySettings.model_fields:
            return getattr(self.settings, name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        if name in DisplaySettings.model_fields:
            setattr(self.settings, name, value)
        else:
            object.__setattr__(self, name, value)

    def get(self, key: str) -> Any:
        """Read a display setting by name.

        Raises:
            KeyError: If `key` is not a known setting.
        """
        if key not in DisplaySettings.model_fields:
            raise KeyError(key)
        return getattr(self.settings, key)

    def set(self, key: str, value: Any) -> None:
        """Write a display setting by name (validated).

        Raises:
            KeyError: If `key` is not a known setting.
            pydantic.ValidationError: If `value` is not valid for `key`.
        """
        if key not in DisplaySettings.model_fields:
            raise KeyError(key)
        setattr(self.settings, key, value)

    def add_printer(self, guard: Guard, printer: Callable[[Any], str | None]) -> Callable[[Any], str | None]:
        """Render values of `guard` type as plain text with `printer`."""
        check_guard(guard)
        self._register("printer", guard, printer)
        return printer

    def add_print_transformer(self, guard: Guard, transformer: Callable[[Any], Any]) -> Callable[[Any], Any]:
        """Replace values of `guard` type with another value before rendering."""
        check_guard(guard)
        self._register("transformer", guard, transformer)
        return transformer

    def add_html_printer(self, guard: Guard, printer: Callable[[Any], Any]) -> Callable[[Any], Any]:
        """Render values of `guard` type as HTML with `printer`."""
        check_guard(guard)
        if not self.supports_html:
            self.log.warning("HTML printers are disabled; ignoring printer for %s", guard)
            return printer
        self._register("html", guard, printer)
        return printer

    def connect(self, plain_text: PlainTextChain, html: HtmlChain) -> None:
        """Route registrations to the evaluator's chains, replaying earlier ones."""
        object.__setattr__(self, "_chains", (plain_text, html))
        for kind, guard, func in self.registrations:
            self._apply(kind, guard, func)

    def _register(self, kind: Registration, guard: Guard, func: Callable[[Any], Any]) -> None:
        self.registrations.append((kind, guard, func))
        if self._chains is not None:
            self._apply(kind, guard, func)

    def _apply(self, kind: Registration, guard: Guard, func: Callable[[Any], Any]) -> None:
        plain_text, html = self._chains
        match kind:
            case "printer":
                plain_text.register_presenter(guard, func)
            case "transformer":
                plain_text.register_transformer(guard, func)
                html.register_transformer(guard, func)
            case "html":
                html.register_presenter(guard, func)


class NoOpBridge(SessionBridge):
    """A bridge that keeps settings but ignores every printer registration.

    Useful to neutralise printers registered by snippets that would open
    windows or otherwise misbehave while generating documents.
    """

    def _register(self, kind: Registration, guard: Guard, func: Callable[[Any], Any]) -> None:
        self.log.debug("Ignoring %s registration for %s", kind, getattr(guard, "__name__", guard))
