"""Sandbox runner - executes forms against a namespace."""

from __future__ import annotations

import ast
import builtins
import importlib
import sys
from dataclasses import dataclass, field
from io import StringIO
from typing import TYPE_CHECKING, Any

from scratchpad.console.segmenter import Form, Sequence

if TYPE_CHECKING:
    from scratchpad.console.engine import Unit

# Filename given to compiled forms; tracebacks are trimmed to these frames.
SOURCE_NAME = "<scratchpad>"


@dataclass
class ExecutionContext:
    """Namespace that forms are evaluated in.

    Args:
        name: Display name of the context (usually a module name).
        namespace: Globals dict used for every evaluation in the session.
    """

    name: str
    namespace: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def fresh(cls, name: str = "__scratchpad__") -> ExecutionContext:
        """Create an empty module-like context."""
        return cls(name=name, namespace={"__name__": name, "__builtins__": builtins})

    @classmethod
    def from_module(cls, module_name: str) -> ExecutionContext:
        """Bind the globals of an importable module."""
        module = importlib.import_module(module_name)
        return cls(name=module_name, namespace=vars(module))


class PythonEvaluator:
    """Evaluate forms with Python's own compiler.

    An expression statement yields its value. Any other statement is
    executed for its effects and yields None. Output printed by the
    evaluated code is captured in ``last_stdout``.
    """

    def __init__(self) -> None:
        self.last_stdout = ""

    def execute(self, unit: Unit, context: ExecutionContext) -> Any:
        """Execute a form or a sequence of forms and return the last value."""
        stdout_capture = StringIO()
        old_stdout = sys.stdout
        try:
            sys.stdout = stdout_capture
            forms = unit.forms if isinstance(unit, Sequence) else (unit,)
            value = None
            for form in forms:
                value = self._execute_form(form, context)
            return value
        finally:
            sys.stdout = old_stdout
            self.last_stdout = stdout_capture.getvalue()

    def _execute_form(self, form: Form, context: ExecutionContext) -> Any:
        tree = ast.parse(form.source, filename=SOURCE_NAME)
        if len(tree.body) == 1 and isinstance(tree.body[0], ast.Expr):
            expression = ast.Expression(body=tree.body[0].value)
            return eval(compile(expression, SOURCE_NAME, "eval"), context.namespace)
        exec(compile(tree, SOURCE_NAME, "exec"), context.namespace)
        return None
