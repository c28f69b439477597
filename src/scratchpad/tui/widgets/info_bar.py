"""Inline status line widget."""

from dataclasses import dataclass, field

from textual.widgets import Static


@dataclass
class InfoBarState:
    """Data model for the info bar, independent of Textual.

    Tracks the bound context, history size, and the last inline result.
    The render_lines() method produces the two display lines.
    """

    context_name: str
    history_max_size: int
    _history_size: int = field(default=0, init=False)
    _form_count: int | None = field(default=None, init=False)
    _message: str = field(default="Ready", init=False)

    def set_history_size(self, size: int) -> None:
        """Update the number of history entries."""
        self._history_size = size

    def set_result(self, text: str, form_count: int | None = None) -> None:
        """Show a short result."""
        self._message = text
        self._form_count = form_count

    def reset(self) -> None:
        """Reset to Ready."""
        self._message = "Ready"
        self._form_count = None

    @property
    def message(self) -> str:
        """Text currently shown on the result line."""
        return self._message

    def render_lines(self) -> tuple[str, str]:
        """Render the two info bar lines."""
        line1 = (
            f"Context: {self.context_name} \u2502 "
            f"History: {self._history_size}/{self.history_max_size}"
        )
        if self._form_count is not None:
            unit = "form" if self._form_count == 1 else "forms"
            line1 += f" \u2502 {self._form_count} {unit}"
        line2 = f"\u21d2 {self._message}"
        return line1, line2


class InfoBar(Static):
    """Textual widget displaying the inline status line."""

    DEFAULT_CSS = """
    InfoBar {
        height: auto;
        padding: 0 1;
        border: solid $accent;
    }
    """

    def __init__(self, context_name: str, history_max_size: int) -> None:
        super().__init__("", markup=False)
        self._state = InfoBarState(context_name=context_name, history_max_size=history_max_size)
        self._refresh_content()

    @property
    def state(self) -> InfoBarState:
        """The underlying display state."""
        return self._state

    def _refresh_content(self) -> None:
        """Re-render from state."""
        line1, line2 = self._state.render_lines()
        self.update(f"{line1}\n{line2}")

    def update_result(self, text: str, form_count: int | None = None) -> None:
        """Show a short result."""
        self._state.set_result(text, form_count)
        self._refresh_content()

    def update_history_size(self, size: int) -> None:
        """Update the history counter."""
        self._state.set_history_size(size)
        self._refresh_content()

    def reset_phase(self) -> None:
        """Reset to ready state."""
        self._state.reset()
        self._refresh_content()
