"""Command execution - the only place muxtap spawns processes.

PUBLIC API:
  - Executor: Protocol for components that run command lines
  - DefaultExecutor: subprocess-backed executor with an optional trace logger
  - shell_command: Wrap a shell snippet as a /bin/sh invocation
"""

import logging
import subprocess
from typing import IO, Optional, Protocol, Sequence

from .errors import ShellError

SHELL = "/bin/sh"


def shell_command(command: str) -> list[str]:
    """Build the argv that runs `command` through the POSIX shell."""
    return [SHELL, "-c", command]


def _command_line(args: Sequence[str]) -> str:
    return " ".join(args)


class Executor(Protocol):
    """Protocol for components that run command lines.

    Implementations block until the command finishes and raise ShellError on
    a non-zero exit status or a spawn failure.
    """

    def run(self, args: Sequence[str], cwd: Optional[str] = None) -> str:
        """Run and return combined stdout/stderr without its trailing newline."""
        ...

    def run_quiet(
        self,
        args: Sequence[str],
        cwd: Optional[str] = None,
        stdin: Optional[IO] = None,
        stdout: Optional[IO] = None,
        stderr: Optional[IO] = None,
    ) -> None:
        """Run without capturing output; streams default to the null device."""
        ...


class DefaultExecutor:
    """Runs commands with subprocess.

    No timeout is applied: a command that never exits blocks the caller.

    Attributes:
        trace: Logger receiving every command line and every failure. None
            disables tracing.
    """

    def __init__(self, trace: Optional[logging.Logger] = None):
        self.trace = trace

    def _log(self, message: str) -> None:
        if self.trace is not None:
            self.trace.info(message)

    def run(self, args: Sequence[str], cwd: Optional[str] = None) -> str:
        command = _command_line(args)
        self._log(command)

        try:
            result = subprocess.run(
                list(args),
                cwd=cwd or None,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        except OSError as e:
            self._log(str(e))
            raise ShellError(command, e) from e

        if result.returncode != 0:
            error = subprocess.CalledProcessError(result.returncode, list(args), output=result.stdout)
            self._log(str(error))
            raise ShellError(command, error)

        return result.stdout.removesuffix("\n")

    def run_quiet(
        self,
        args: Sequence[str],
        cwd: Optional[str] = None,
        stdin: Optional[IO] = None,
        stdout: Optional[IO] = None,
        stderr: Optional[IO] = None,
    ) -> None:
        command = _command_line(args)
        self._log(command)

        try:
            result = subprocess.run(
                list(args),
                cwd=cwd or None,
                stdin=stdin if stdin is not None else subprocess.DEVNULL,
                stdout=stdout if stdout is not None else subprocess.DEVNULL,
                stderr=stderr if stderr is not None else subprocess.DEVNULL,
            )
        except OSError as e:
            self._log(str(e))
            raise ShellError(command, e) from e

        if result.returncode != 0:
            error = subprocess.CalledProcessError(result.returncode, list(args))
            self._log(str(error))
            raise ShellError(command, error)
