"""Tests for the inline status line."""

from textual.app import App, ComposeResult

from scratchpad.tui.widgets.info_bar import InfoBar, InfoBarState


class TestInfoBarState:
    """Tests for InfoBarState data model (no Textual dependency)."""

    def test_initial_state(self) -> None:
        """Initial state shows context, empty history and Ready."""
        state = InfoBarState(context_name="__main__", history_max_size=100)
        line1, line2 = state.render_lines()
        assert "__main__" in line1
        assert "0/100" in line1
        assert "Ready" in line2

    def test_set_result(self) -> None:
        """The result line shows the latest inline result."""
        state = InfoBarState(context_name="ctx", history_max_size=100)
        state.set_result("3", form_count=1)
        line1, line2 = state.render_lines()
        assert "1 form" in line1
        assert "forms" not in line1
        assert line2.endswith("3")

    def test_form_count_plural(self) -> None:
        """Several forms use the plural."""
        state = InfoBarState(context_name="ctx", history_max_size=100)
        state.set_result("3", form_count=3)
        line1, _ = state.render_lines()
        assert "3 forms" in line1

    def test_history_size(self) -> None:
        """History size is shown against the bound."""
        state = InfoBarState(context_name="ctx", history_max_size=5)
        state.set_history_size(2)
        line1, _ = state.render_lines()
        assert "2/5" in line1

    def test_reset(self) -> None:
        """reset() returns to Ready."""
        state = InfoBarState(context_name="ctx", history_max_size=5)
        state.set_result("x", form_count=1)
        state.reset()
        assert state.message == "Ready"
        assert "form" not in state.render_lines()[0]


class InfoBarApp(App[None]):
    """Minimal app for testing InfoBar."""

    def compose(self) -> ComposeResult:
        yield InfoBar(context_name="ctx", history_max_size=10)


class TestInfoBarWidget:
    """Tests for the InfoBar widget."""

    async def test_update_result(self) -> None:
        """update_result() changes the underlying state."""
        async with InfoBarApp().run_test() as pilot:
            bar = pilot.app.query_one(InfoBar)
            bar.update_result("42", form_count=1)
            assert bar.state.message == "42"
            bar.reset_phase()
            assert bar.state.message == "Ready"
