"""Format evaluation results for display."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from rich.pretty import pretty_repr

from scratchpad.exceptions import EvaluationError

logger = logging.getLogger(__name__)

# Results longer than this go to the auxiliary output pane.
INLINE_LIMIT = 100


class DisplayTarget(Enum):
    """Where a rendered result is shown."""

    INLINE = "inline"
    AUXILIARY = "auxiliary"


@dataclass(frozen=True)
class Rendered:
    """Rendered text and the surface it belongs on.

    ``detail`` is extra text for the auxiliary pane, such as the traceback
    behind an inline error summary.
    """

    target: DisplayTarget
    text: str
    detail: str | None = None


def format_value(value: Any) -> str:
    """Format ``value`` as text without truncation. Never raises."""
    try:
        return pretty_repr(value, max_length=None, max_string=None, max_depth=None)
    except Exception as e:
        logger.debug("Pretty formatting failed for %s: %s", type(value).__name__, e)
    try:
        return repr(value)
    except Exception:
        return f"<unprintable {type(value).__name__} object>"


def _target_for(text: str) -> DisplayTarget:
    if len(text) > INLINE_LIMIT:
        return DisplayTarget.AUXILIARY
    return DisplayTarget.INLINE


def render(value: Any) -> Rendered:
    """Format ``value`` and choose its display surface."""
    text = format_value(value)
    return Rendered(target=_target_for(text), text=text)


def render_error(error: EvaluationError) -> Rendered:
    """Render an evaluation failure.

    The one-line summary is placed like any other result. A traceback
    longer than INLINE_LIMIT is attached as auxiliary detail.
    """
    text = str(error)
    detail = error.traceback if len(error.traceback) > INLINE_LIMIT else None
    return Rendered(target=_target_for(text), text=text, detail=detail)


def display(
    rendered: Rendered,
    show_inline: Callable[[str], object],
    show_auxiliary: Callable[[str], object],
) -> None:
    """Send ``rendered`` to the sink matching its target."""
    if rendered.detail is not None:
        show_auxiliary(rendered.detail)
    if rendered.target is DisplayTarget.AUXILIARY:
        show_auxiliary(rendered.text)
    else:
        show_inline(rendered.text)
