"""Error types shared by every muxtap layer.

Every tmux call is itself a shell invocation, so a rejected tmux operation and
a missing tmux binary both surface as ShellError.

PUBLIC API:
  - MuxtapError: Base exception for all muxtap failures
  - ShellError: A command line exited non-zero or could not be spawned
  - TmuxError: tmux produced output that cannot be parsed
  - ConfigError: A project configuration could not be loaded
"""


class MuxtapError(Exception):
    """Base exception for all muxtap failures."""

    pass


class ShellError(MuxtapError):
    """Raised when a command line fails.

    Attributes:
        command: The literal command line, arguments joined by spaces.
        error: The underlying failure (CalledProcessError or OSError).
    """

    def __init__(self, command: str, error: BaseException):
        self.command = command
        self.error = error
        super().__init__(f'Cannot run "{command}". Error {error}')


class TmuxError(MuxtapError):
    """Raised when tmux output does not match the requested format."""

    pass


class ConfigError(MuxtapError):
    """Raised when a project configuration is missing or malformed."""

    pass
