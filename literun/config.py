"""Evaluator configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

from literun.bridge import DisplaySettings

_TRUE = {"1", "true", "yes", "on"}


class EvaluatorConfig(BaseModel):
    """Options for an Evaluator and the session it owns."""

    strict: bool = False
    discard_stdout: bool = True
    add_html_printer: bool = True
    disable_bridge: bool = False
    bridge_name: str = "shell"
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EvaluatorConfig:
        """Build a config, overriding defaults from LITERUN_* variables."""
        env = os.environ if environ is None else environ
        config = cls()
        if "LITERUN_STRICT" in env:
            config.strict = env["LITERUN_STRICT"].strip().lower() in _TRUE
        if "LITERUN_DISCARD_STDOUT" in env:
            config.discard_stdout = env["LITERUN_DISCARD_STDOUT"].strip().lower() in _TRUE
        if "LITERUN_PRINT_WIDTH" in env:
            config.display.print_width = int(env["LITERUN_PRINT_WIDTH"])
        return config
