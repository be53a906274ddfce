"""Session orchestration - start, stop and capture tmux workspaces.

Walks a Config and drives the tmux gateway and the shell executor in a fixed
order. The first failure aborts the operation and propagates unchanged;
nothing is retried and no tmux state is cached between calls.

PUBLIC API:
  - Muxtap: Orchestrator for start/stop/capture
  - PLACEHOLDER_WINDOW: Name of the window a new session is created with
  - DEFAULT_REBALANCE_PANES_AFTER: Default rebalance threshold
"""

import logging
import sys
from dataclasses import dataclass
from typing import Iterable

from .executor import Executor, shell_command
from .paths import expand_path, resolve_pane_root, resolve_window_root
from .tmux import Tmux
from .types import EVEN_HORIZONTAL, TILED, WINDOW_LAYOUTS, Config, Context, Options, Pane, Window

logger = logging.getLogger(__name__)

PLACEHOLDER_WINDOW = "muxtap_def"

# Past this many panes every split is followed by a tiled layout,
# otherwise tmux fails with "no space for new pane"
DEFAULT_REBALANCE_PANES_AFTER = 5


def _window_layout(layout: str) -> str:
    return layout if layout in WINDOW_LAYOUTS else EVEN_HORIZONTAL


@dataclass
class Muxtap:
    """Orchestrates a tmux session from its Config.

    Attributes:
        tmux: Gateway for tmux operations.
        executor: Runs before_start and stop shell commands.
    """

    tmux: Tmux
    executor: Executor

    def _run_shell_commands(self, commands: Iterable[str], cwd: str) -> None:
        for command in commands:
            self.executor.run(shell_command(command), cwd=cwd)

    def _set_env(self, target: str, env: Iterable[tuple[str, str]]) -> None:
        for key, value in env:
            self.tmux.set_env(target, key, value)

    def switch_or_attach(self, target: str, attach: bool, inside_tmux_session: bool) -> None:
        """Bring the operator to `target`.

        Inside a client, switch only when attach was requested. Outside one,
        attach with the operator's terminal and block until detached.
        """
        if inside_tmux_session and attach:
            self.tmux.switch_client(target)
        elif not inside_tmux_session:
            self.tmux.attach(target, sys.stdin, sys.stdout, sys.stderr)

    def start(self, config: Config, options: Options, context: Context) -> None:
        """Create the session and its windows, then attach.

        With options.windows set, only those windows are created, manual or
        not, and nothing is attached. An existing session is attached to
        directly unless windows were requested or the caller is working
        inside the current session.

        Raises:
            ShellError: On the first failing shell or tmux command.
        """
        session = config.session + ":"
        session_root = expand_path(config.root)
        windows = options.windows
        threshold = config.rebalance_panes_after or DEFAULT_REBALANCE_PANES_AFTER

        if not self.tmux.session_exists(session):
            logger.debug(f"Creating session {config.session} in {session_root}")
            self._run_shell_commands(config.before_start, session_root)
            self.tmux.new_session(config.session, session_root, PLACEHOLDER_WINDOW)
            self._set_env(config.session, config.env)
        elif not windows and not options.inside_current_session:
            logger.debug(f"Session {config.session} exists, attaching")
            self.switch_or_attach(session, options.attach, context.inside_tmux_session)
            return

        for window in config.windows:
            if (not windows and window.manual) or (windows and window.name not in windows):
                continue
            self._start_window(session, session_root, window, threshold)

        if not options.inside_current_session:
            self.tmux.kill_window(session + PLACEHOLDER_WINDOW)
            self.tmux.renumber_windows(session)

        if not windows and config.windows and not options.detach:
            self.switch_or_attach(session + config.windows[0].name, options.attach, context.inside_tmux_session)

    def _start_window(self, session: str, session_root: str, window: Window, threshold: int) -> None:
        window_root = resolve_window_root(window.root, session_root)
        logger.debug(f"Creating window {window.name} in {window_root}")

        target = self.tmux.new_window(session, window.name, window_root)
        for command in window.commands:
            self.tmux.send_keys(target, command)

        for index, pane in enumerate(window.panes, start=1):
            self._start_pane(target, window_root, pane)
            if index >= threshold:
                self.tmux.select_layout(target, TILED)

        self.tmux.select_layout(target, _window_layout(window.layout))

    def _start_pane(self, window_target: str, window_root: str, pane: Pane) -> None:
        pane_root = resolve_pane_root(pane.root, window_root)
        pane_id = self.tmux.split_window(window_target, pane.type, pane_root)
        for command in pane.commands:
            self.tmux.send_keys(f"{window_target}.{pane_id}", command)

    def stop(self, config: Config, options: Options, context: Context) -> None:
        """Tear down the session, or only the requested windows.

        Stop commands run only when the whole session is stopped.

        Raises:
            ShellError: On the first failing shell or tmux command.
        """
        if not options.windows:
            self._run_shell_commands(config.stop, expand_path(config.root))
            self.tmux.stop_session(config.session)
            return

        for name in options.windows:
            self.tmux.kill_window(f"{config.session}:{name}")

    def capture(self, options: Options, context: Context) -> Config:
        """Describe a live session as a Config.

        Windows are listed for options.project, or for the current session
        when no project was given. A pane whose path equals its window's path
        gets an empty root.

        Raises:
            ShellError: If any tmux query fails.
        """
        session = self.tmux.session_name()
        scope = options.project or session

        windows = []
        for tmux_window in self.tmux.list_windows(scope):
            panes = tuple(
                Pane(root="" if p.root == tmux_window.root else p.root)
                for p in self.tmux.list_panes(f"{scope}:{tmux_window.id}")
            )
            windows.append(
                Window(
                    name=tmux_window.name,
                    layout=tmux_window.layout,
                    root=tmux_window.root,
                    panes=panes,
                )
            )

        return Config(session=session, windows=tuple(windows))
