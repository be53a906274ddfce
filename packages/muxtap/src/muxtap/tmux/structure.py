"""Window and pane records parsed from tmux list output.

PUBLIC API:
  - TmuxWindow: Window information named tuple
  - TmuxPane: Pane information named tuple
  - WINDOW_FORMAT: list-windows format matching TmuxWindow.from_format_line
  - PANE_FORMAT: list-panes format matching TmuxPane.from_format_line
"""

from typing import NamedTuple

from ..errors import TmuxError

WINDOW_FORMAT = "#{window_id};#{window_name};#{window_layout};#{pane_current_path}"
PANE_FORMAT = "#{pane_current_path}"


class TmuxWindow(NamedTuple):
    """Window information named tuple.

    Attributes:
        id: tmux window ID (e.g., "@3").
        name: Window name.
        layout: Layout string as reported by tmux.
        root: Current path of the window's active pane.
    """

    id: str
    name: str
    layout: str
    root: str

    @classmethod
    def from_format_line(cls, line: str) -> "TmuxWindow":
        """Parse from WINDOW_FORMAT output."""
        parts = line.split(";", 3)
        if len(parts) < 4:
            raise TmuxError(f"Failed to parse window info: invalid format '{line}'")
        return cls(id=parts[0], name=parts[1], layout=parts[2], root=parts[3])


class TmuxPane(NamedTuple):
    """Pane information named tuple."""

    root: str

    @classmethod
    def from_format_line(cls, line: str) -> "TmuxPane":
        """Parse from PANE_FORMAT output."""
        return cls(root=line)
