"""Entry point for scratchpad."""

from __future__ import annotations

import argparse
import logging
import sys

from scratchpad.config import ScratchpadConfig
from scratchpad.console.session import ConsoleSession
from scratchpad.exceptions import ConfigError
from scratchpad.sandbox.runner import ExecutionContext

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        prog="scratchpad", description="Interactive Python expression console"
    )
    parser.add_argument(
        "--context",
        type=str,
        help="Module whose globals are used as the execution context",
    )
    parser.add_argument("--history-file", type=str, help="History file path")
    parser.add_argument("--history-max-size", type=int, help="Maximum history entries")
    parser.add_argument("--eval", dest="text", type=str, help="Evaluate TEXT once and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def run_once(config: ScratchpadConfig, context: ExecutionContext, text: str) -> int:
    """Evaluate ``text`` once, printing the result. Returns the exit status."""
    session = ConsoleSession(config, show_inline=print, show_auxiliary=print)
    session.open(context)
    try:
        session.submit(text)
    finally:
        session.close()
    evaluation = session.last_evaluation
    if evaluation is not None and not evaluation.ok:
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the scratchpad console."""
    args = build_parser().parse_args(argv)
    try:
        config = ScratchpadConfig.load(
            history_file_path=args.history_file,
            history_max_size=args.history_max_size,
            log_level="DEBUG" if args.verbose else None,
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        if args.context:
            context = ExecutionContext.from_module(args.context)
        else:
            context = ExecutionContext.fresh()
    except ImportError as e:
        print(f"Error: cannot bind context {args.context!r}: {e}", file=sys.stderr)
        return 2

    if args.text is not None:
        logging.basicConfig(level=config.log_level, format=LOG_FORMAT)
        return run_once(config, context, args.text)

    from textual.logging import TextualHandler

    from scratchpad.tui.app import ScratchpadTUI

    # stderr belongs to the terminal UI; route records to the Textual devtools console.
    logging.basicConfig(level=config.log_level, handlers=[TextualHandler()])

    app = ScratchpadTUI(config=config, context=context)
    try:
        app.run()
    finally:
        if app.session.is_open:
            app.session.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
