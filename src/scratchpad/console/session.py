"""Console session: one execution context, one history ring."""

from __future__ import annotations

import logging
from collections.abc import Callable

from scratchpad.config import ScratchpadConfig
from scratchpad.console.engine import Evaluation, Evaluator, evaluate_safely
from scratchpad.console.history import HistoryRing, PersistResult
from scratchpad.console.renderer import Rendered, display, render, render_error
from scratchpad.exceptions import ScratchpadError, SessionBusyError, SessionClosedError
from scratchpad.sandbox.runner import ExecutionContext, PythonEvaluator

logger = logging.getLogger(__name__)


class ConsoleSession:
    """Holds the state of one console session.

    The execution context is bound once by :meth:`open` and used for
    every submission until :meth:`close`. The history ring outlives the
    session through its backing file.

    Args:
        config: Console settings (history file and bound).
        evaluator: Host evaluator. Defaults to :class:`PythonEvaluator`.
        show_inline: Sink for short results.
        show_auxiliary: Sink for long results and captured output.
        history: Ring to use; a new empty one is created when omitted.
    """

    def __init__(
        self,
        config: ScratchpadConfig,
        evaluator: Evaluator | None = None,
        show_inline: Callable[[str], object] = print,
        show_auxiliary: Callable[[str], object] = print,
        history: HistoryRing | None = None,
    ) -> None:
        self.config = config
        self.evaluator = evaluator if evaluator is not None else PythonEvaluator()
        self.show_inline = show_inline
        self.show_auxiliary = show_auxiliary
        self.history = history if history is not None else HistoryRing(config.history_max_size)
        self.last_evaluation: Evaluation | None = None
        self._context: ExecutionContext | None = None
        self._pending = False

    @property
    def context(self) -> ExecutionContext | None:
        """The bound execution context, or None when closed."""
        return self._context

    @property
    def is_open(self) -> bool:
        """Whether a context is bound."""
        return self._context is not None

    def open(self, context: ExecutionContext) -> None:
        """Bind ``context`` and restore history if nothing is loaded yet."""
        if self._context is not None:
            raise ScratchpadError(f"Session is already bound to {self._context.name}")
        self._context = context
        if not len(self.history):
            result = self.history.load(self.config.history_file_path)
            logger.debug("History restore: %s", result.value)
        self.history.reset_cursor()
        logger.info("Console session opened on %s", context.name)

    def submit(self, text: str) -> Rendered:
        """Record ``text`` in history, evaluate it and display the result.

        Evaluation errors are rendered like values; they do not propagate.

        Raises:
            SessionClosedError: No context is bound.
            SessionBusyError: Another submission is still being evaluated.
        """
        if self._context is None:
            raise SessionClosedError("Console session is not open")
        if self._pending:
            raise SessionBusyError("A submission is already being evaluated")

        self.history.push(text)
        self.history.enforce_bound()

        if hasattr(self.evaluator, "last_stdout"):
            # A submission with no forms never calls execute().
            setattr(self.evaluator, "last_stdout", "")
        self._pending = True
        try:
            evaluation = evaluate_safely(text, self._context, self.evaluator)
        finally:
            self._pending = False
        self.last_evaluation = evaluation

        stdout = getattr(self.evaluator, "last_stdout", "")
        if stdout:
            self.show_auxiliary(stdout.rstrip("\n"))

        if evaluation.error is not None:
            rendered = render_error(evaluation.error)
        else:
            rendered = render(evaluation.value)
        display(rendered, self.show_inline, self.show_auxiliary)
        return rendered

    def previous(self) -> str | None:
        """Navigate history backward."""
        return self.history.previous()

    def next(self) -> str | None:
        """Navigate history forward."""
        return self.history.next()

    def save_history(self) -> PersistResult:
        """Persist the history ring."""
        return self.history.save(self.config.history_file_path)

    def clear_history(self) -> PersistResult:
        """Empty the history ring in memory and on disk."""
        return self.history.cleanup(self.config.history_file_path)

    def close(self) -> PersistResult:
        """Save history and release the execution context."""
        result = self.save_history()
        if self._context is not None:
            logger.info("Console session closed on %s", self._context.name)
        self._context = None
        return result
