"""Scrolling output pane for long results."""

from rich.syntax import Syntax
from textual.containers import VerticalScroll
from textual.widgets import Static


class OutputArea(VerticalScroll):
    """Read-only scrolling pane for submissions and long output.

    Results are highlighted as Python source. ``entries`` keeps the plain
    text of everything shown, in order.
    """

    DEFAULT_CSS = """
    OutputArea {
        height: 1fr;
        padding: 0 1;
    }
    OutputArea:focus {
        border: solid #7e57c2;
    }
    OutputArea .submission {
        color: $accent;
        margin-top: 1;
    }
    OutputArea .system-message {
        color: $text-muted;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self.entries: list[str] = []

    def add_submission(self, text: str) -> None:
        """Echo a submitted text."""
        self.entries.append(text)
        self.mount(Static(f"\u276f {text}", classes="submission", markup=False))
        self.scroll_end(animate=False)

    def add_result(self, text: str) -> None:
        """Add a result, highlighted as Python."""
        self.entries.append(text)
        self.mount(Static(Syntax(text, "python", word_wrap=True, background_color="default")))
        self.scroll_end(animate=False)

    def add_system_message(self, text: str) -> None:
        """Add a system/info message to the output."""
        self.entries.append(text)
        self.mount(Static(text, classes="system-message", markup=False))
        self.scroll_end(animate=False)

    def clear(self) -> None:
        """Remove all child widgets from the output area."""
        self.entries.clear()
        for child in list(self.children):
            child.remove()
