"""Tests for the configuration bridge."""

import pytest
from pydantic import ValidationError

from literun.bridge import DisplaySettings, NoOpBridge, SessionBridge
from literun.presenters import HtmlChain, PlainTextChain


def test_get_and_set_settings():
    bridge = SessionBridge()
    bridge.set("print_width", 120)
    assert bridge.get("print_width") == 120
    assert bridge.settings.print_width == 120


def test_attribute_access_reads_and_writes_settings():
    bridge = SessionBridge()
    bridge.print_depth = 3
    assert bridge.print_depth == 3
    assert bridge.settings.print_depth == 3


def test_unknown_key_raises():
    bridge = SessionBridge()
    with pytest.raises(KeyError):
        bridge.get("colour")
    with pytest.raises(KeyError):
        bridge.set("colour", "red")
    with pytest.raises(AttributeError):
        bridge.colour


def test_invalid_value_is_rejected():
    bridge = SessionBridge()
    with pytest.raises(ValidationError):
        bridge.set("print_width", 0)


def test_shares_settings_object():
    settings = DisplaySettings()
    bridge = SessionBridge(settings)
    bridge.print_length = 5
    assert settings.print_length == 5


def test_registrations_before_connect_are_replayed():
    bridge = SessionBridge()
    bridge.add_printer(int, lambda n: f"#{n}")
    plain_text, html = PlainTextChain(), HtmlChain()
    bridge.connect(plain_text, html)
    assert plain_text.resolve(1) == "#1"


def test_registrations_after_connect_apply_immediately():
    bridge = SessionBridge()
    plain_text, html = PlainTextChain(), HtmlChain()
    bridge.connect(plain_text, html)
    bridge.add_html_printer(int, lambda n: f"<b>{n}</b>")
    assert html.resolve(1).html == "<b>1</b>"
    assert len(plain_text) == 0


def test_print_transformer_goes_to_both_chains():
    bridge = SessionBridge()
    plain_text, html = PlainTextChain(), HtmlChain()
    bridge.connect(plain_text, html)
    bridge.add_print_transformer(int, str)
    assert len(plain_text) == 1
    assert len(html) == 1


def test_html_printer_ignored_when_unsupported():
    bridge = SessionBridge(supports_html=False)
    plain_text, html = PlainTextChain(), HtmlChain()
    bridge.connect(plain_text, html)
    bridge.add_html_printer(int, str)
    assert len(html) == 0


def test_registration_returns_function():
    bridge = SessionBridge()

    def show(n):
        return str(n)

    assert bridge.add_printer(int, show) is show


def test_noop_bridge_ignores_printers_but_keeps_settings():
    bridge = NoOpBridge()
    plain_text, html = PlainTextChain(), HtmlChain()
    bridge.connect(plain_text, html)
    bridge.add_printer(int, str)
    bridge.add_print_transformer(int, str)
    bridge.add_html_printer(int, str)
    bridge.print_width = 40
    assert len(plain_text) == 0
    assert len(html) == 0
    assert bridge.print_width == 40


@pytest.mark.parametrize("register", ["add_printer", "add_print_transformer", "add_html_printer"])
def test_non_type_guard_is_rejected(register):
    bridge = SessionBridge()
    plain_text, html = PlainTextChain(), HtmlChain()
    bridge.connect(plain_text, html)
    with pytest.raises(TypeError):
        getattr(bridge, register)("int", str)
    assert bridge.registrations == []
    assert len(plain_text) == 0
    assert len(html) == 0


def test_tuple_guard_is_accepted():
    bridge = SessionBridge()
    plain_text, html = PlainTextChain(), HtmlChain()
    bridge.connect(plain_text, html)
    bridge.add_printer((int, float), lambda n: "number")
    assert plain_text.resolve(2.5) == "number"
