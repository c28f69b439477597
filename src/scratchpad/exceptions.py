"""Exceptions raised by scratchpad."""


class ScratchpadError(Exception):
    """Base exception for all scratchpad errors."""


class ConfigError(ScratchpadError):
    """Raised when configuration values are invalid."""


class EvaluationError(ScratchpadError):
    """Raised when evaluated code fails.

    The original exception is kept as ``__cause__``; ``traceback`` holds the
    formatted traceback trimmed to the frames of the evaluated code, and
    ``form_count`` the number of forms in the failed submission.
    """

    def __init__(self, message: str, traceback: str = "", form_count: int = 0) -> None:
        super().__init__(message)
        self.traceback = traceback
        self.form_count = form_count


class SessionClosedError(ScratchpadError):
    """Raised when a closed console session is asked to evaluate."""


class SessionBusyError(ScratchpadError):
    """Raised when a submission arrives while another is still running."""
