"""tmux gateway - one method per tmux invocation.

Every method shells out exactly once through the injected executor and lets
its ShellError propagate.

PUBLIC API:
  - Tmux: Gateway onto the tmux server
"""

from dataclasses import dataclass
from typing import IO, List

from ..errors import ShellError
from ..executor import Executor
from ..types import HORIZONTAL_SPLIT, VERTICAL_SPLIT, Target
from .structure import PANE_FORMAT, WINDOW_FORMAT, TmuxPane, TmuxWindow

TMUX = "tmux"


def _lines(output: str) -> List[str]:
    return [line for line in output.split("\n") if line]


@dataclass
class Tmux:
    """Gateway onto the tmux server.

    Attributes:
        executor: Runs each tmux command line.
    """

    executor: Executor

    def _run(self, *args: str) -> str:
        return self.executor.run([TMUX, *args])

    def _run_quiet(self, *args: str) -> None:
        self.executor.run_quiet([TMUX, *args])

    def session_exists(self, target: Target) -> bool:
        """Check if a session exists.

        has-session prints nothing on success, so any output or failure
        means the session is missing.
        """
        try:
            output = self._run("has-session", "-t", target)
        except ShellError:
            return False
        return output == ""

    def new_session(self, name: str, root: str, window_name: str) -> str:
        """Create a detached session with one window, return tmux's report."""
        return self._run("new", "-Pd", "-s", name, "-n", window_name, "-c", root)

    def stop_session(self, name: str) -> str:
        """Kill a session."""
        return self._run("kill-session", "-t", name)

    def new_window(self, target: Target, name: str, root: str) -> str:
        """Create a window in `target` session, return its window ID."""
        return self._run("neww", "-Pd", "-t", target, "-c", root, "-F", "#{window_id}", "-n", name)

    def kill_window(self, target: Target) -> None:
        """Kill a window."""
        self._run_quiet("kill-window", "-t", target)

    def split_window(self, target: Target, split_type: str, root: str) -> str:
        """Split a window, return the new pane's ID.

        Args:
            target: Window to split.
            split_type: "horizontal" (-h), "vertical" (-v), or anything else
                for tmux's default direction.
            root: Working directory of the new pane.
        """
        args = ["split-window", "-Pd"]
        if split_type == VERTICAL_SPLIT:
            args.append("-v")
        elif split_type == HORIZONTAL_SPLIT:
            args.append("-h")

        args.extend(["-t", target, "-c", root, "-F", "#{pane_id}"])
        return self._run(*args)

    def send_keys(self, target: Target, command: str) -> None:
        """Type `command` into `target` followed by Enter."""
        self._run_quiet("send-keys", "-t", target, command, "Enter")

    def select_layout(self, target: Target, layout: str) -> str:
        """Apply a named layout to a window."""
        return self._run("select-layout", "-t", target, layout)

    def set_env(self, target: Target, key: str, value: str) -> str:
        """Set a session environment variable."""
        return self._run("setenv", "-t", target, key, value)

    def renumber_windows(self, target: Target) -> None:
        """Close gaps in a session's window indexes."""
        self._run_quiet("move-window", "-r", "-s", target, "-t", target)

    def switch_client(self, target: Target) -> None:
        """Switch the current client to `target`."""
        self._run_quiet("switch-client", "-t", target)

    def attach(self, target: Target, stdin: IO, stdout: IO, stderr: IO) -> None:
        """Attach to `target`, blocking until the client detaches."""
        self.executor.run_quiet([TMUX, "attach", "-d", "-t", target], stdin=stdin, stdout=stdout, stderr=stderr)

    def session_name(self) -> str:
        """Name of the session the current client is in."""
        return self._run("display-message", "-p", "#S")

    def list_windows(self, target: Target) -> List[TmuxWindow]:
        """List windows of a session in tmux's order."""
        output = self._run("list-windows", "-F", WINDOW_FORMAT, "-t", target)
        return [TmuxWindow.from_format_line(line) for line in _lines(output)]

    def list_panes(self, target: Target) -> List[TmuxPane]:
        """List panes of a window in tmux's order."""
        output = self._run("list-panes", "-F", PANE_FORMAT, "-t", target)
        return [TmuxPane.from_format_line(line) for line in _lines(output)]
