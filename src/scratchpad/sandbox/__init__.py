"""Host evaluator for scratchpad forms."""

from scratchpad.sandbox.runner import SOURCE_NAME, ExecutionContext, PythonEvaluator

__all__ = ["SOURCE_NAME", "ExecutionContext", "PythonEvaluator"]
