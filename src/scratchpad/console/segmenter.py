"""Split submitted text into top-level forms.

A form is one complete top-level statement. Positions come from the
standard tokenizer and the AST, so comments and string literals never
contribute forms of their own.
"""

from __future__ import annotations

import ast
import io
import logging
import tokenize
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Final, Literal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Form:
    """A complete top-level statement within submitted text.

    Attributes:
        start: Offset of the first character of the statement.
        end: Offset just past the last character of the statement.
        source: ``text[start:end]``.
    """

    start: int
    end: int
    source: str


@dataclass(frozen=True)
class Sequence:
    """Ordered group of forms evaluated as one unit.

    Forms run in document order and the value of the group is the value
    of its last form.
    """

    forms: tuple[Form, ...]

    @property
    def source(self) -> str:
        """Source of all grouped forms, one per line."""
        return "\n".join(form.source for form in self.forms)


class _ReadStatus(Enum):
    EXHAUSTED = "exhausted"


EXHAUSTED: Final = _ReadStatus.EXHAUSTED
"""Returned by :meth:`FormReader.read` once no complete form remains."""


def _line_offsets(text: str) -> list[int]:
    """Character offset at which each (1-based) line starts."""
    offsets = [0, 0]
    for line in io.StringIO(text).readlines():
        offsets.append(offsets[-1] + len(line))
    return offsets


def _logical_line_ends(text: str, line_offsets: list[int]) -> list[int]:
    """Offsets where logical lines end, up to the first tokenizer error."""
    ends: list[int] = []
    readline = io.StringIO(text).readline
    try:
        for tok in tokenize.generate_tokens(readline):
            if tok.type == tokenize.NEWLINE:
                row, col = tok.end
                ends.append(min(line_offsets[row] + col, len(text)))
    except (tokenize.TokenError, SyntaxError) as e:
        logger.debug("Tokenizer stopped early: %s", e)
    return ends


def _parse_complete_prefix(text: str) -> tuple[ast.Module, str]:
    """Parse the longest prefix of ``text`` made of complete statements."""
    try:
        return ast.parse(text), text
    except (SyntaxError, ValueError):
        pass

    line_offsets = _line_offsets(text)
    for end in reversed(_logical_line_ends(text, line_offsets)):
        prefix = text[:end]
        try:
            return ast.parse(prefix), prefix
        except (SyntaxError, ValueError):
            continue
    return ast.Module(body=[], type_ignores=[]), ""


def _char_offset(lines: list[str], line_offsets: list[int], lineno: int, col: int) -> int:
    # AST column offsets count UTF-8 bytes, not characters.
    line = lines[lineno - 1] if lineno - 1 < len(lines) else ""
    chars = len(line.encode("utf-8")[:col].decode("utf-8", errors="ignore"))
    return line_offsets[lineno] + chars


def iter_forms(text: str) -> Iterator[Form]:
    """Yield the top-level forms of ``text`` in document order.

    Segmentation stops at the first logical line that cannot be parsed;
    forms before it are still yielded.
    """
    module, source = _parse_complete_prefix(text)
    if not module.body:
        return
    lines = io.StringIO(source).readlines()
    line_offsets = _line_offsets(source)
    for node in module.body:
        decorators = getattr(node, "decorator_list", None)
        if decorators:
            # Top-level decorators start at column 0.
            start = line_offsets[decorators[0].lineno]
        else:
            start = _char_offset(lines, line_offsets, node.lineno, node.col_offset)
        end_lineno = node.end_lineno if node.end_lineno is not None else node.lineno
        end_col = node.end_col_offset if node.end_col_offset is not None else node.col_offset
        end = _char_offset(lines, line_offsets, end_lineno, end_col)
        yield Form(start=start, end=end, source=source[start:end])


def count_forms(text: str) -> int:
    """Count the complete top-level forms in ``text``."""
    return sum(1 for _ in iter_forms(text))


class FormReader:
    """Read forms one at a time from the start of a text.

    ``read()`` returns :data:`EXHAUSTED` when the text holds no further
    complete form. Running out of input is the normal end of reading,
    not an error.
    """

    def __init__(self, text: str) -> None:
        self._forms = iter_forms(text)

    def read(self) -> Form | Literal[_ReadStatus.EXHAUSTED]:
        """Return the next form, or EXHAUSTED."""
        return next(self._forms, EXHAUSTED)
