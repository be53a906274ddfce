"""tmux gateway - each operation is one tmux invocation.

PUBLIC API:
  - Tmux: Gateway onto the tmux server
  - TmuxWindow: Window record from list-windows
  - TmuxPane: Pane record from list-panes
"""

from .core import Tmux
from .structure import TmuxPane, TmuxWindow

__all__ = [
    "Tmux",
    "TmuxWindow",
    "TmuxPane",
]
