"""Declarative tmux session manager.

Describes a tmux workspace (a session with ordered windows and panes, each
seeded with commands) in YAML and recreates, tears down or captures it.

PUBLIC API:
  - Muxtap: Orchestrator for start/stop/capture
  - Tmux: tmux gateway
  - DefaultExecutor: subprocess-backed command runner
  - Config, Window, Pane, Options, Context: Declarative model
"""

__version__ = "0.1.0"

from .executor import DefaultExecutor  # noqa: E402
from .session import Muxtap  # noqa: E402
from .tmux import Tmux  # noqa: E402
from .types import Config, Context, Options, Pane, Window  # noqa: E402

__all__ = [
    "Muxtap",
    "Tmux",
    "DefaultExecutor",
    "Config",
    "Window",
    "Pane",
    "Options",
    "Context",
]
