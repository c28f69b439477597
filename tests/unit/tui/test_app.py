"""Tests for main ScratchpadTUI app."""

import json
from pathlib import Path

from scratchpad.config import ScratchpadConfig
from scratchpad.sandbox.runner import ExecutionContext
from scratchpad.tui.app import ScratchpadTUI
from scratchpad.tui.widgets.info_bar import InfoBar
from scratchpad.tui.widgets.input_area import InputArea
from scratchpad.tui.widgets.output_area import OutputArea


def make_app(config: ScratchpadConfig) -> ScratchpadTUI:
    return ScratchpadTUI(config=config, context=ExecutionContext.fresh("tui-test"))


class TestScratchpadTUIComposition:
    """Tests for ScratchpadTUI app layout."""

    async def test_app_has_three_widgets(self, config: ScratchpadConfig) -> None:
        """App composes output area, info bar, and input area."""
        async with make_app(config).run_test() as pilot:
            assert pilot.app.query_one(OutputArea)
            assert pilot.app.query_one(InfoBar)
            assert pilot.app.query_one(InputArea)

    async def test_session_opened_on_mount(self, config: ScratchpadConfig) -> None:
        """The session binds the context when the app starts."""
        async with make_app(config).run_test() as pilot:
            assert pilot.app.session.is_open
            assert pilot.app.query_one(InfoBar).state.render_lines()[0].startswith(
                "Context: tui-test"
            )

    async def test_builtin_commands_registered(self, config: ScratchpadConfig) -> None:
        """Built-in commands are registered on startup."""
        async with make_app(config).run_test() as pilot:
            names = [name for name, _desc in pilot.app._command_registry.list_commands()]
            expected = (
                "/help", "/clear", "/history", "/save", "/clear-history", "/traceback", "/quit"
            )
            for name in expected:
                assert name in names


class TestEvaluation:
    """Tests for submitting code through the app."""

    async def test_short_result_on_info_bar(self, config: ScratchpadConfig) -> None:
        """A short result is shown on the info bar."""
        async with make_app(config).run_test() as pilot:
            pilot.app.query_one(InputArea).text = "1 + 2"
            await pilot.press("enter")
            await pilot.pause()
            assert pilot.app.query_one(InfoBar).state.message == "3"
            assert pilot.app.query_one(OutputArea).entries == ["1 + 2"]

    async def test_long_result_in_output_area(self, config: ScratchpadConfig) -> None:
        """A long result is shown in the output area."""
        async with make_app(config).run_test() as pilot:
            pilot.app.query_one(InputArea).text = "'x' * 200"
            await pilot.press("enter")
            await pilot.pause()
            output = pilot.app.query_one(OutputArea)
            assert output.entries[-1] == repr("x" * 200)
            assert pilot.app.query_one(InfoBar).state.message == "Result shown in output pane"

    async def test_error_on_info_bar(self, config: ScratchpadConfig) -> None:
        """Errors are displayed instead of raised."""
        async with make_app(config).run_test() as pilot:
            pilot.app.query_one(InputArea).text = "1 / 0"
            await pilot.press("enter")
            await pilot.pause()
            assert pilot.app.query_one(InfoBar).state.message == (
                "ZeroDivisionError: division by zero"
            )
            assert pilot.app.query_one(OutputArea).entries[-1].startswith("Traceback")

    async def test_state_persists_between_submissions(self, config: ScratchpadConfig) -> None:
        """Definitions stay in the bound context."""
        async with make_app(config).run_test() as pilot:
            input_area = pilot.app.query_one(InputArea)
            input_area.text = "x = 20"
            await pilot.press("enter")
            await pilot.pause()
            input_area.text = "x + 1"
            await pilot.press("enter")
            await pilot.pause()
            assert pilot.app.query_one(InfoBar).state.message == "21"


class TestHistoryNavigation:
    """Tests for walking history with the arrow keys."""

    async def test_up_recalls_previous_entries(self, config: ScratchpadConfig) -> None:
        """Up starts at the newest entry and walks backward."""
        async with make_app(config).run_test() as pilot:
            input_area = pilot.app.query_one(InputArea)
            for text in ("1", "2"):
                input_area.text = text
                await pilot.press("enter")
                await pilot.pause()
            await pilot.press("up")
            await pilot.pause()
            assert input_area.text == "2"
            await pilot.press("up")
            await pilot.pause()
            assert input_area.text == "1"

    async def test_navigation_on_empty_history(self, config: ScratchpadConfig) -> None:
        """Navigation does nothing when there is no history."""
        async with make_app(config).run_test() as pilot:
            await pilot.press("up")
            await pilot.pause()
            assert pilot.app.query_one(InputArea).text == ""


class TestCommands:
    """Tests for slash commands."""

    async def test_help_command_shows_output(self, config: ScratchpadConfig) -> None:
        """The /help command lists the commands."""
        async with make_app(config).run_test() as pilot:
            pilot.app.query_one(InputArea).text = "/help"
            await pilot.press("enter")
            await pilot.pause()
            entries = pilot.app.query_one(OutputArea).entries
            assert entries[0].startswith("Available commands:")
            assert "/clear-history" in entries[0]

    async def test_unknown_command(self, config: ScratchpadConfig) -> None:
        """Unknown commands are reported, not evaluated."""
        async with make_app(config).run_test() as pilot:
            pilot.app.query_one(InputArea).text = "/bogus now"
            await pilot.press("enter")
            await pilot.pause()
            assert pilot.app.query_one(OutputArea).entries == ["Unknown command: /bogus"]
            assert len(pilot.app.session.history) == 0

    async def test_clear_command(self, config: ScratchpadConfig) -> None:
        """The /clear command empties the output pane and the result line."""
        async with make_app(config).run_test() as pilot:
            input_area = pilot.app.query_one(InputArea)
            input_area.text = "1 + 2"
            await pilot.press("enter")
            await pilot.pause()
            input_area.text = "/clear"
            await pilot.press("enter")
            await pilot.pause()
            assert pilot.app.query_one(OutputArea).entries == []
            assert pilot.app.query_one(InfoBar).state.message == "Ready"
            assert len(pilot.app.session.history) == 1

    async def test_history_command(self, config: ScratchpadConfig) -> None:
        """The /history command lists entries oldest first."""
        async with make_app(config).run_test() as pilot:
            input_area = pilot.app.query_one(InputArea)
            for text in ("a = 1", "a"):
                input_area.text = text
                await pilot.press("enter")
                await pilot.pause()
            input_area.text = "/history"
            await pilot.press("enter")
            await pilot.pause()
            listing = pilot.app.query_one(OutputArea).entries[-1]
            assert listing.splitlines() == ["   0  a = 1", "   1  a"]

    async def test_save_command(self, config: ScratchpadConfig, history_file: Path) -> None:
        """The /save command writes the history file."""
        async with make_app(config).run_test() as pilot:
            input_area = pilot.app.query_one(InputArea)
            input_area.text = "42"
            await pilot.press("enter")
            await pilot.pause()
            input_area.text = "/save"
            await pilot.press("enter")
            await pilot.pause()
            assert json.loads(history_file.read_text()) == ["42"]
            assert pilot.app.query_one(OutputArea).entries[-1].startswith("History saved")

    async def test_clear_history_command(
        self, config: ScratchpadConfig, history_file: Path
    ) -> None:
        """The /clear-history command empties memory and disk."""
        async with make_app(config).run_test() as pilot:
            input_area = pilot.app.query_one(InputArea)
            input_area.text = "42"
            await pilot.press("enter")
            await pilot.pause()
            input_area.text = "/clear-history"
            await pilot.press("enter")
            await pilot.pause()
            assert len(pilot.app.session.history) == 0
            assert json.loads(history_file.read_text()) == []

    async def test_traceback_command(self, config: ScratchpadConfig) -> None:
        """The /traceback command shows the last error's traceback."""
        async with make_app(config).run_test() as pilot:
            input_area = pilot.app.query_one(InputArea)
            input_area.text = "1 / 0"
            await pilot.press("enter")
            await pilot.pause()
            input_area.text = "/traceback"
            await pilot.press("enter")
            await pilot.pause()
            assert "ZeroDivisionError" in pilot.app.query_one(OutputArea).entries[-1]

    async def test_quit_saves_and_closes(
        self, config: ScratchpadConfig, history_file: Path
    ) -> None:
        """The /quit command saves history and closes the session."""
        app = make_app(config)
        async with app.run_test() as pilot:
            input_area = pilot.app.query_one(InputArea)
            input_area.text = "7 * 6"
            await pilot.press("enter")
            await pilot.pause()
            input_area.text = "/quit"
            await pilot.press("enter")
            await pilot.pause()
        assert not app.session.is_open
        assert json.loads(history_file.read_text()) == ["7 * 6"]
