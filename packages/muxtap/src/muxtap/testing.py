"""Deterministic executor for exercising muxtap without tmux.

PUBLIC API:
  - RecordingExecutor: Records command lines and replays scripted outputs
"""

import subprocess
from dataclasses import dataclass, field
from typing import IO, Optional, Sequence

from .errors import ShellError


@dataclass
class RecordingExecutor:
    """Executor that records every command line instead of running it.

    Outputs are consumed front to back; once a single output remains it is
    returned for every further call. With no outputs, "" is returned.

    Attributes:
        outputs: Scripted outputs for run().
        fail_on: Command-line prefixes that raise ShellError when run.
        commands: Recorded command lines, arguments joined by spaces.
        cwds: Working directory of each recorded command.
    """

    outputs: list[str] = field(default_factory=list)
    fail_on: list[str] = field(default_factory=list)
    commands: list[str] = field(default_factory=list)
    cwds: list[Optional[str]] = field(default_factory=list)

    def _record(self, args: Sequence[str], cwd: Optional[str]) -> str:
        command = " ".join(args)
        self.commands.append(command)
        self.cwds.append(cwd)

        if any(command.startswith(prefix) for prefix in self.fail_on):
            raise ShellError(command, subprocess.CalledProcessError(1, list(args)))
        return command

    def run(self, args: Sequence[str], cwd: Optional[str] = None) -> str:
        self._record(args, cwd)

        if len(self.outputs) > 1:
            return self.outputs.pop(0)
        if self.outputs:
            return self.outputs[0]
        return ""

    def run_quiet(
        self,
        args: Sequence[str],
        cwd: Optional[str] = None,
        stdin: Optional[IO] = None,
        stdout: Optional[IO] = None,
        stderr: Optional[IO] = None,
    ) -> None:
        self._record(args, cwd)
