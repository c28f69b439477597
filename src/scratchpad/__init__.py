"""scratchpad: an interactive Python expression console."""

from scratchpad.config import ScratchpadConfig
from scratchpad.console.engine import Evaluation, evaluate, evaluate_safely
from scratchpad.console.history import HistoryRing, PersistResult
from scratchpad.console.renderer import DisplayTarget, Rendered, render
from scratchpad.console.segmenter import count_forms
from scratchpad.console.session import ConsoleSession
from scratchpad.exceptions import EvaluationError, ScratchpadError
from scratchpad.sandbox.runner import ExecutionContext, PythonEvaluator

__version__ = "0.1.0"

__all__ = [
    "ConsoleSession",
    "DisplayTarget",
    "Evaluation",
    "EvaluationError",
    "ExecutionContext",
    "HistoryRing",
    "PersistResult",
    "PythonEvaluator",
    "Rendered",
    "ScratchpadConfig",
    "ScratchpadError",
    "count_forms",
    "evaluate",
    "evaluate_safely",
    "render",
]
