"""Project configuration files for muxtap.

Projects live as YAML files in ~/.config/muxtap/. Before parsing, `$name` and
`${name}` references are substituted from command-line settings, then from
the environment.

PUBLIC API:
  - config_path: Locate a project's file
  - parse_config: Build a Config from YAML text
  - get_config: Load a Config from a file
  - dump_config: Serialize a Config to YAML
  - list_configs: List available project names
  - edit_config: Open a project file in $EDITOR
"""

import os
import re
import shlex
import sys
from pathlib import Path
from typing import Mapping, Optional

import yaml

from .errors import ConfigError
from .executor import DefaultExecutor, Executor
from .paths import CONFIG_DIR
from .types import Config

CONFIG_EXTENSIONS = (".yml", ".yaml")
DEFAULT_EDITOR = "vim"

_VARIABLE = re.compile(r"\$(?:\{(?P<braced>[^}]*)\}|(?P<name>[A-Za-z0-9_]+))")

TEMPLATE = """\
session: {project}

root: ~/

before_start: []

stop: []

windows:
  - name: code
    commands:
      - echo "hello from {project}"
    panes:
      - type: horizontal
        commands: []
"""


def config_path(project: str, directory: Path = CONFIG_DIR) -> Path:
    """Path of a project's configuration.

    Prefers <project>.yml; falls back to <project>.yaml when only that exists.
    """
    primary = directory / f"{project}{CONFIG_EXTENSIONS[0]}"
    if primary.exists():
        return primary

    for extension in CONFIG_EXTENSIONS[1:]:
        candidate = directory / f"{project}{extension}"
        if candidate.exists():
            return candidate

    return primary


def _substitute(text: str, settings: Mapping[str, str]) -> str:
    """Expand $name and ${name}; unknown names expand to the bare name."""

    def replace(match: re.Match) -> str:
        name = match.group("braced")
        if name is None:
            name = match.group("name")
        if name in settings:
            return settings[name]
        if name in os.environ:
            return os.environ[name]
        return name

    return _VARIABLE.sub(replace, text)


def parse_config(text: str, settings: Optional[Mapping[str, str]] = None) -> Config:
    """Build a Config from YAML text.

    Raises:
        ConfigError: If the YAML is invalid or describes no session.
    """
    text = _substitute(text, settings or {})
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}") from e

    return Config.from_dict(data)


def get_config(path: Path | str, settings: Optional[Mapping[str, str]] = None) -> Config:
    """Load a Config from a YAML file.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        text = Path(path).read_text()
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    return parse_config(text, settings)


def dump_config(config: Config) -> str:
    """Serialize a Config to YAML, omitting empty fields."""
    return yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)


def list_configs(directory: Path = CONFIG_DIR) -> list[str]:
    """Names of the projects stored in `directory`."""
    if not directory.is_dir():
        return []

    return sorted(p.stem for p in directory.iterdir() if p.is_file() and p.suffix in CONFIG_EXTENSIONS)


def edit_config(path: Path, executor: Optional[Executor] = None) -> None:
    """Open a project file in $EDITOR, creating it from a template if missing.

    Raises:
        ShellError: If the editor exits non-zero or cannot be started.
    """
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(TEMPLATE.format(project=path.stem))

    editor = shlex.split(os.environ.get("EDITOR") or DEFAULT_EDITOR)
    executor = executor or DefaultExecutor()
    executor.run_quiet([*editor, str(path)], stdin=sys.stdin, stdout=sys.stdout, stderr=sys.stderr)
