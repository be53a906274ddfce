"""Filesystem locations and working-directory resolution.

PUBLIC API:
  - CONFIG_DIR: Directory holding project configurations
  - LOG_PATH: Command trace written with --debug
  - expand_path: Replace a leading "~/" with the home directory
  - join_path: Join and normalize path elements, ignoring empty ones
  - resolve_window_root: Working directory for a window
  - resolve_pane_root: Working directory for a pane
"""

import os
from pathlib import Path
from typing import Optional


def _home_dir() -> Optional[str]:
    """Resolve the home directory, None if it cannot be determined."""
    home = os.environ.get("HOME")
    if home:
        return home

    expanded = os.path.expanduser("~")
    return None if expanded == "~" else expanded


CONFIG_DIR = Path(_home_dir() or ".") / ".config" / "muxtap"
LOG_PATH = CONFIG_DIR / "muxtap.log"


def expand_path(path: str) -> str:
    """Replace the "~" of a leading "~/" with the home directory.

    Only the first "~" is substituted. Paths without the shorthand, or any
    path when the home directory is unknown, are returned unchanged.
    """
    if not path.startswith("~/"):
        return path

    home = _home_dir()
    if home is None:
        return path

    return path.replace("~", home, 1)


def join_path(*elements: str) -> str:
    """Join path elements, skipping empty ones, and normalize the result.

    Unlike os.path.join, an absolute element does not discard the elements
    before it. Joining nothing yields "".
    """
    parts = [e for e in elements if e]
    if not parts:
        return ""

    path = os.path.normpath("/".join(parts))
    # normpath keeps a POSIX "//" prefix
    if path.startswith("//"):
        path = "/" + path.lstrip("/")
    return path


def resolve_window_root(raw: str, base: str) -> str:
    """Working directory for a window declared with root `raw`.

    Joined onto `base` when the expanded path is empty or relative.
    """
    root = expand_path(raw)
    if root == "" or not os.path.isabs(root):
        root = join_path(base, raw)
    return root


def resolve_pane_root(raw: str, base: str) -> str:
    """Working directory for a pane declared with root `raw`.

    Joined onto `base` when the expanded path is empty or when `raw` itself
    is relative. A "~/" pane root therefore lands under the window root.
    """
    root = expand_path(raw)
    if root == "" or not os.path.isabs(raw):
        root = join_path(base, raw)
    return root
