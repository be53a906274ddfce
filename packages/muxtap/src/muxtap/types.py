"""Type definitions for muxtap - the declarative workspace model.

A Config describes a tmux session: ordered windows, each with ordered panes,
each seeded with keystrokes. Configs are built fresh per invocation and are
never mutated once handed to the orchestrator.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, TypeAlias

from .errors import ConfigError

# tmux addressing: "session", "session:window", "session:window.pane", "@3", "%42"
Target: TypeAlias = str

COMMANDS: tuple[str, ...] = ("start", "stop", "new", "edit", "list", "print")

EVEN_HORIZONTAL = "even-horizontal"
EVEN_VERTICAL = "even-vertical"
MAIN_HORIZONTAL = "main-horizontal"
MAIN_VERTICAL = "main-vertical"
TILED = "tiled"

# Layouts a window may declare; anything else falls back to even-horizontal
WINDOW_LAYOUTS = frozenset([EVEN_HORIZONTAL, EVEN_VERTICAL, MAIN_HORIZONTAL, MAIN_VERTICAL])

HORIZONTAL_SPLIT = "horizontal"
VERTICAL_SPLIT = "vertical"


def _str_list(value: Any, key: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be a list, got {type(value).__name__}")
    return tuple(str(item) for item in value)


def _mapping(value: Any, key: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return value


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Pane:
    """A pane split off a window, seeded with keystrokes.

    Attributes:
        type: Split direction, "horizontal" or "vertical".
        root: Working directory, relative to the window root unless absolute.
        commands: Keystrokes sent after the pane is created.
    """

    type: str = ""
    root: str = ""
    commands: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Pane":
        data = _mapping(data, "panes[]")
        return cls(
            type=_text(data.get("type")),
            root=_text(data.get("root")),
            commands=_str_list(data.get("commands"), "commands"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.type:
            result["type"] = self.type
        if self.root:
            result["root"] = self.root
        if self.commands:
            result["commands"] = list(self.commands)
        return result


@dataclass(frozen=True)
class Window:
    """A window in the session.

    Attributes:
        name: Window name, unique within the session.
        root: Working directory, relative to the session root unless absolute.
        manual: Only started when requested by name.
        layout: One of WINDOW_LAYOUTS, or empty for the default.
        commands: Keystrokes sent right after the window is created.
        panes: Panes split off the window, in order.
    """

    name: str = ""
    root: str = ""
    manual: bool = False
    layout: str = ""
    commands: tuple[str, ...] = ()
    panes: tuple[Pane, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Window":
        data = _mapping(data, "windows[]")
        panes = data.get("panes") or []
        if not isinstance(panes, list):
            raise ConfigError(f"'panes' must be a list, got {type(panes).__name__}")

        return cls(
            name=_text(data.get("name")),
            root=_text(data.get("root")),
            manual=bool(data.get("manual", False)),
            layout=_text(data.get("layout")),
            commands=_str_list(data.get("commands"), "commands"),
            panes=tuple(Pane.from_dict(p) for p in panes),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.root:
            result["root"] = self.root
        if self.manual:
            result["manual"] = True
        if self.layout:
            result["layout"] = self.layout
        if self.commands:
            result["commands"] = list(self.commands)
        if self.panes:
            result["panes"] = [p.to_dict() for p in self.panes]
        return result


@dataclass(frozen=True)
class Config:
    """A tmux session description.

    Attributes:
        session: Session name, never empty.
        root: Session working directory, may start with "~/".
        before_start: Shell commands run once before the session is created.
        stop: Shell commands run when the whole session is stopped.
        env: Environment variables set on the session at creation, as
            (name, value) pairs in declaration order. A mapping is accepted
            and converted.
        rebalance_panes_after: Pane count after which each split is followed
            by a tiled layout. 0 selects the default.
        windows: Windows in declaration order. The first is the attach target.
    """

    session: str
    root: str = ""
    before_start: tuple[str, ...] = ()
    stop: tuple[str, ...] = ()
    env: tuple[tuple[str, str], ...] = ()
    rebalance_panes_after: int = 0
    windows: tuple[Window, ...] = ()

    def __post_init__(self):
        if isinstance(self.env, Mapping):
            object.__setattr__(self, "env", tuple(self.env.items()))

    @classmethod
    def from_dict(cls, data: Any) -> "Config":
        """Build a Config from a parsed YAML document.

        Raises:
            ConfigError: If the document is not a mapping, has no session
                name, or a field has the wrong shape.
        """
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a mapping")

        session = _text(data.get("session")).strip()
        if not session:
            raise ConfigError("Configuration must define a non-empty 'session'")

        windows = data.get("windows") or []
        if not isinstance(windows, list):
            raise ConfigError(f"'windows' must be a list, got {type(windows).__name__}")

        threshold = data.get("rebalance_panes_after") or 0
        if not isinstance(threshold, int) or isinstance(threshold, bool) or threshold < 0:
            raise ConfigError(f"'rebalance_panes_after' must be a non-negative integer, got {threshold!r}")

        env = _mapping(data.get("env"), "env")

        return cls(
            session=session,
            root=_text(data.get("root")),
            before_start=_str_list(data.get("before_start"), "before_start"),
            stop=_str_list(data.get("stop"), "stop"),
            env=tuple((str(k), _text(v)) for k, v in env.items()),
            rebalance_panes_after=threshold,
            windows=tuple(Window.from_dict(w) for w in windows),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serializable form with empty fields omitted."""
        result: dict[str, Any] = {"session": self.session}
        if self.root:
            result["root"] = self.root
        if self.before_start:
            result["before_start"] = list(self.before_start)
        if self.stop:
            result["stop"] = list(self.stop)
        if self.env:
            result["env"] = dict(self.env)
        if self.rebalance_panes_after:
            result["rebalance_panes_after"] = self.rebalance_panes_after
        if self.windows:
            result["windows"] = [w.to_dict() for w in self.windows]
        return result


@dataclass
class Options:
    """Per-invocation options parsed from the command line."""

    command: str = ""
    project: str = ""
    config: str = ""
    windows: list[str] = field(default_factory=list)
    settings: dict[str, str] = field(default_factory=dict)
    attach: bool = False
    detach: bool = False
    inside_current_session: bool = False
    debug: bool = False


@dataclass(frozen=True)
class Context:
    """Ambient facts about the operator's terminal."""

    inside_tmux_session: bool = False


def create_context() -> Context:
    """Build the Context from the process environment."""
    return Context(inside_tmux_session=bool(os.environ.get("TMUX")))
