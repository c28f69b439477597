"""Evaluate submitted text against an execution context."""

from __future__ import annotations

import logging
import traceback
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Protocol, Union

from scratchpad.console.segmenter import EXHAUSTED, Form, FormReader, Sequence, count_forms
from scratchpad.exceptions import EvaluationError
from scratchpad.sandbox.runner import SOURCE_NAME, ExecutionContext, PythonEvaluator

logger = logging.getLogger(__name__)

Unit = Union[Form, Sequence]


class Evaluator(Protocol):
    """Host capability that executes one unit of code."""

    def execute(self, unit: Unit, context: ExecutionContext) -> Any:
        """Execute ``unit`` in ``context`` and return its value. Raises on failure."""
        ...


@dataclass
class Evaluation:
    """Outcome of evaluating one submission."""

    value: Any
    form_count: int
    error: EvaluationError | None = None

    @property
    def ok(self) -> bool:
        """True when evaluation finished without an error."""
        return self.error is None


def prepare(text: str, form_count: int) -> Iterator[Unit]:
    """Yield the units to execute for ``text``.

    More than one form is grouped into a single Sequence so that the
    value of the submission is the value of its last form. Otherwise the
    text is read as-is.
    """
    reader = FormReader(text)
    if form_count > 1:
        forms = []
        form = reader.read()
        while form is not EXHAUSTED:
            forms.append(form)
            form = reader.read()
        yield Sequence(tuple(forms))
        return

    form = reader.read()
    while form is not EXHAUSTED:
        yield form
        form = reader.read()


def _format_traceback(exc: BaseException) -> str:
    """Format ``exc`` starting at the first frame of evaluated code."""
    frames = traceback.extract_tb(exc.__traceback__)
    for index, frame in enumerate(frames):
        if frame.filename == SOURCE_NAME:
            frames = frames[index:]
            break
    lines = ["Traceback (most recent call last):\n"]
    lines.extend(traceback.format_list(frames))
    lines.extend(traceback.format_exception_only(type(exc), exc))
    return "".join(lines)


def evaluate(
    text: str,
    context: ExecutionContext,
    evaluator: Evaluator | None = None,
) -> Evaluation:
    """Evaluate every form in ``text`` and return the last value.

    Args:
        text: Submitted text.
        context: Namespace the forms run in.
        evaluator: Host evaluator. Defaults to :class:`PythonEvaluator`.

    Raises:
        EvaluationError: The evaluated code raised.
    """
    if evaluator is None:
        evaluator = PythonEvaluator()
    form_count = count_forms(text)
    logger.debug("Evaluating %d form(s) in %s", form_count, context.name)

    value = None
    for unit in prepare(text, form_count):
        try:
            value = evaluator.execute(unit, context)
        except Exception as e:
            message = f"{type(e).__name__}: {e}" if str(e) else type(e).__name__
            raise EvaluationError(
                message, traceback=_format_traceback(e), form_count=form_count
            ) from e
    return Evaluation(value=value, form_count=form_count)


def evaluate_safely(
    text: str,
    context: ExecutionContext,
    evaluator: Evaluator | None = None,
) -> Evaluation:
    """Like :func:`evaluate`, but report failures in the result."""
    try:
        return evaluate(text, context, evaluator)
    except EvaluationError as e:
        logger.debug("Evaluation failed: %s", e)
        return Evaluation(value=None, form_count=e.form_count, error=e)
