"""Command registry for console slash commands."""

from collections.abc import Callable


class CommandRegistry:
    """Registry for slash commands.

    Commands are registered with a name (e.g., "/help"), a handler callable,
    and a description. The handler receives the argument string (everything
    after the command name, stripped).
    """

    def __init__(self) -> None:
        self._commands: dict[str, tuple[Callable[[str], object], str]] = {}

    def register(self, name: str, handler: Callable[[str], object], description: str) -> None:
        """Register a slash command."""
        self._commands[name] = (handler, description)

    def list_commands(self) -> list[tuple[str, str]]:
        """Return list of (name, description) tuples, sorted by name."""
        return sorted((name, desc) for name, (_handler, desc) in self._commands.items())

    def resolve(self, text: str) -> tuple[Callable[[str], object], str] | None:
        """Resolve a command string to (handler, args) without executing."""
        parts = text.strip().split(maxsplit=1)
        if not parts or parts[0] not in self._commands:
            return None
        handler, _desc = self._commands[parts[0]]
        args = parts[1] if len(parts) > 1 else ""
        return handler, args

    def is_command(self, text: str) -> bool:
        """Check if text looks like a slash command.

        Only a single line starting with "/" counts, so that multi-line
        code beginning with a division is still evaluated.
        """
        stripped = text.strip()
        return stripped.startswith("/") and "\n" not in stripped
