"""Scratch input widget with multiline support."""

from textual import events
from textual.message import Message
from textual.widgets import TextArea


class InputSubmitted(Message):
    """Posted when the user submits input."""

    def __init__(self, text: str) -> None:
        super().__init__()
        self.text = text


class InputArea(TextArea):
    """Input widget for composing code.

    Enter submits, Alt+Enter (or Shift+Enter) inserts newline.
    Up/Down walk the history ring, Escape clears the input.
    """

    DEFAULT_CSS = """
    InputArea {
        height: auto;
        min-height: 1;
        max-height: 12;
        border: none;
    }
    InputArea:focus {
        border: none;
    }
    """

    BINDINGS = []  # Override default TextArea bindings

    class FocusToggle(Message):
        """Posted when user presses Tab to toggle focus between panes."""

    class HistoryNavigate(Message):
        """Posted when user navigates history with up/down arrows."""

        def __init__(self, direction: int) -> None:
            super().__init__()
            self.direction = direction

    def __init__(self) -> None:
        super().__init__(language=None, show_line_numbers=False)

    async def _on_key(self, event: events.Key) -> None:
        """Handle key events."""
        if event.key == "tab":
            event.prevent_default()
            event.stop()
            self.post_message(InputArea.FocusToggle())
            return

        if event.key in ("up", "down"):
            event.prevent_default()
            event.stop()
            self.post_message(InputArea.HistoryNavigate(-1 if event.key == "up" else 1))
            return

        if event.key in ("shift+enter", "alt+enter", "ctrl+j"):
            event.prevent_default()
            event.stop()
            self.insert("\n")
            return

        if event.key == "enter":
            event.prevent_default()
            event.stop()
            text = self.text.strip()
            if not text:
                return
            self.post_message(InputSubmitted(text))
            self.text = ""
            return

        if event.key == "escape":
            event.prevent_default()
            event.stop()
            self.text = ""
            return

        await super()._on_key(event)
