"""Main Textual application for the scratchpad console."""

from __future__ import annotations

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.widgets import Static

from scratchpad.config import ScratchpadConfig
from scratchpad.console.engine import Evaluator
from scratchpad.console.renderer import DisplayTarget
from scratchpad.console.session import ConsoleSession
from scratchpad.sandbox.runner import ExecutionContext
from scratchpad.tui.commands import CommandRegistry
from scratchpad.tui.widgets.info_bar import InfoBar
from scratchpad.tui.widgets.input_area import InputArea, InputSubmitted
from scratchpad.tui.widgets.output_area import OutputArea

ACCENT = "#7e57c2"


class ScratchpadTUI(App[None]):
    """Textual app for an interactive scratchpad session.

    Short results appear on the info bar; long results, printed output
    and command output go to the scrolling output area.

    Args:
        config: Console settings.
        context: Execution context bound for the whole session.
        evaluator: Optional host evaluator override.
    """

    CSS = f"""
    Screen {{
        layout: vertical;
        border: solid {ACCENT};
    }}
    #input-row {{
        height: auto;
        min-height: 1;
        max-height: 12;
    }}
    #input-row:focus-within {{
        border: solid {ACCENT};
    }}
    #prompt {{
        width: 2;
        height: 1;
        color: {ACCENT};
    }}
    #input-row InputArea {{
        width: 1fr;
    }}
    #help-bar {{
        height: 1;
        color: $text-muted;
        padding: 0 1;
    }}
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        config: ScratchpadConfig,
        context: ExecutionContext,
        evaluator: Evaluator | None = None,
    ) -> None:
        super().__init__()
        self._config = config
        self._context = context
        self._session = ConsoleSession(
            config,
            evaluator=evaluator,
            show_inline=self._show_inline,
            show_auxiliary=self._show_auxiliary,
        )
        self._command_registry = CommandRegistry()
        self._register_builtin_commands()

    @property
    def session(self) -> ConsoleSession:
        """The console session driven by this app."""
        return self._session

    def _register_builtin_commands(self) -> None:
        """Register the default slash commands."""
        self._command_registry.register("/help", self._cmd_help, "Show available commands")
        self._command_registry.register("/history", self._cmd_history, "List history entries")
        self._command_registry.register("/clear", self._cmd_clear, "Clear the output pane")
        self._command_registry.register("/save", self._cmd_save, "Save history to disk")
        self._command_registry.register(
            "/clear-history", self._cmd_clear_history, "Erase history in memory and on disk"
        )
        self._command_registry.register(
            "/traceback", self._cmd_traceback, "Show the traceback of the last error"
        )
        self._command_registry.register("/quit", self._cmd_quit, "Save history and exit")

    def compose(self) -> ComposeResult:
        """Create the app layout."""
        yield OutputArea()
        yield InfoBar(
            context_name=self._context.name,
            history_max_size=self._config.history_max_size,
        )
        with Horizontal(id="input-row"):
            yield Static("\u276f", id="prompt")
            yield InputArea()
        yield Static(
            "Enter: evaluate \u2502 Alt+Enter: newline \u2502 \u2191\u2193: history"
            " \u2502 Tab: switch panes \u2502 /help: commands",
            id="help-bar",
        )

    def on_mount(self) -> None:
        """Open the session and focus the input area."""
        if not self._session.is_open:
            self._session.open(self._context)
        self.query_one(InfoBar).update_history_size(len(self._session.history))
        try:
            self.query_one(InputArea).focus()
        except NoMatches:
            pass  # InputArea not yet mounted; focus will be set later

    def _show_inline(self, text: str) -> None:
        self.query_one(InfoBar).update_result(text)

    def _show_auxiliary(self, text: str) -> None:
        self.query_one(OutputArea).add_result(text)

    def on_input_area_history_navigate(self, event: InputArea.HistoryNavigate) -> None:
        """Replace the input with the neighbouring history entry."""
        entry = self._session.history.navigate(event.direction)
        if entry is None:
            return
        input_area = self.query_one(InputArea)
        input_area.text = entry
        input_area.move_cursor(input_area.document.end)

    def on_input_area_focus_toggle(self, event: InputArea.FocusToggle) -> None:
        """Handle focus toggle from InputArea; move focus to OutputArea."""
        self.query_one(OutputArea).focus()

    def on_key(self, event: events.Key) -> None:
        """Handle app-level key events."""
        # Tab from OutputArea toggles focus back to InputArea
        if event.key == "tab" and self.query_one(OutputArea).has_focus:
            event.prevent_default()
            event.stop()
            self.query_one(InputArea).focus()

    def on_input_submitted(self, event: InputSubmitted) -> None:
        """Handle user input submission."""
        text = event.text
        output = self.query_one(OutputArea)

        if self._command_registry.is_command(text):
            resolved = self._command_registry.resolve(text)
            if resolved is None:
                output.add_system_message(f"Unknown command: {text.strip().split()[0]}")
            else:
                handler, args = resolved
                handler(args)
            return

        output.add_submission(text)
        rendered = self._session.submit(text)
        evaluation = self._session.last_evaluation
        form_count = evaluation.form_count if evaluation is not None else None

        info_bar = self.query_one(InfoBar)
        if rendered.target is DisplayTarget.AUXILIARY:
            info_bar.update_result("Result shown in output pane", form_count)
        else:
            info_bar.update_result(rendered.text, form_count)
        info_bar.update_history_size(len(self._session.history))

    # --- Built-in command handlers ---

    def _cmd_help(self, args: str) -> None:
        """Show help."""
        lines = ["Available commands:"]
        for name, desc in self._command_registry.list_commands():
            lines.append(f"  {name:20s} {desc}")
        self.query_one(OutputArea).add_system_message("\n".join(lines))

    def _cmd_clear(self, args: str) -> None:
        """Clear the output pane and the result line."""
        self.query_one(OutputArea).clear()
        self.query_one(InfoBar).reset_phase()

    def _cmd_history(self, args: str) -> None:
        """List history entries, oldest first."""
        entries = self._session.history.entries
        if not entries:
            self.query_one(OutputArea).add_system_message("History is empty.")
            return
        lines = [f"{i:4d}  {entry}" for i, entry in enumerate(entries)]
        self.query_one(OutputArea).add_system_message("\n".join(lines))

    def _cmd_save(self, args: str) -> None:
        """Save history."""
        result = self._session.save_history()
        self.query_one(OutputArea).add_system_message(
            f"History {result.value} ({self._config.history_file_path})"
        )

    def _cmd_clear_history(self, args: str) -> None:
        """Erase history."""
        result = self._session.clear_history()
        self.query_one(InfoBar).update_history_size(0)
        self.query_one(OutputArea).add_system_message(f"History cleared ({result.value}).")

    def _cmd_traceback(self, args: str) -> None:
        """Show the last traceback."""
        evaluation = self._session.last_evaluation
        if evaluation is None or evaluation.error is None:
            self.query_one(OutputArea).add_system_message("No error to show.")
            return
        self.query_one(OutputArea).add_system_message(evaluation.error.traceback)

    def _cmd_quit(self, args: str) -> None:
        """Save history and exit the app."""
        if self._session.is_open:
            self._session.close()
        self.exit()
