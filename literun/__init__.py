"""
literun - evaluate code snippets embedded in literate documents.

Snippets run against one long-lived Python session; console output and
produced values are rendered back as document blocks through an ordered,
extensible chain of presenters.
"""

from literun.bridge import DisplaySettings, NoOpBridge, SessionBridge
from literun.config import EvaluatorConfig
from literun.evaluator import Evaluator
from literun.failures import FailurePolicy, FailureRecord, StrictEvaluationError
from literun.kinds import EmbedKind
from literun.results import EvaluationResult, HtmlOutput, OutputBlock, TypedValue
from literun.session import EvaluationError, Session

__version__ = "0.1.0"
__all__ = [
    "DisplaySettings",
    "EmbedKind",
    "EvaluationError",
    "EvaluationResult",
    "Evaluator",
    "EvaluatorConfig",
    "FailurePolicy",
    "FailureRecord",
    "HtmlOutput",
    "NoOpBridge",
    "OutputBlock",
    "Session",
    "SessionBridge",
    "StrictEvaluationError",
    "TypedValue",
]
