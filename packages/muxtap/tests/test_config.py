"""Tests for project configuration loading, listing and editing."""

import pytest

from muxtap.config import config_path, dump_config, edit_config, get_config, list_configs, parse_config
from muxtap.errors import ConfigError
from muxtap.testing import RecordingExecutor
from muxtap.types import Config, Pane, Window

PROJECT = """\
session: work
root: ~/work
before_start:
  - docker compose up -d
stop:
  - docker compose stop
env:
  PORT: 8080
rebalance_panes_after: 3
windows:
  - name: code
    root: src
    layout: main-vertical
    commands:
      - nvim .
    panes:
      - type: horizontal
        root: tests
        commands:
          - pytest -f
  - name: logs
    manual: true
"""


class TestParseConfig:
    def test_full_project(self):
        config = parse_config(PROJECT)

        assert config == Config(
            session="work",
            root="~/work",
            before_start=("docker compose up -d",),
            stop=("docker compose stop",),
            env={"PORT": "8080"},
            rebalance_panes_after=3,
            windows=(
                Window(
                    name="code",
                    root="src",
                    layout="main-vertical",
                    commands=("nvim .",),
                    panes=(Pane(type="horizontal", root="tests", commands=("pytest -f",)),),
                ),
                Window(name="logs", manual=True),
            ),
        )

    def test_config_is_hashable_and_immutable(self):
        config = parse_config(PROJECT)

        assert config.env == (("PORT", "8080"),)
        assert hash(config) == hash(parse_config(PROJECT))
        with pytest.raises(AttributeError):
            config.env = ()

    def test_env_mapping_converted_to_pairs(self):
        assert Config(session="s", env={"A": "1"}).env == (("A", "1"),)

    def test_settings_take_precedence_over_environment(self, monkeypatch):
        monkeypatch.setenv("branch", "from-env")
        monkeypatch.setenv("user", "alice")

        config = parse_config("session: ${branch}-$user\n", {"branch": "main"})

        assert config.session == "main-alice"

    def test_unknown_variable_expands_to_its_name(self, monkeypatch):
        monkeypatch.delenv("undefined_var", raising=False)
        assert parse_config("session: x-${undefined_var}\n").session == "x-undefined_var"

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "- not a mapping\n",
            "root: /tmp\n",
            "session: '  '\n",
            "session: s\nwindows: nope\n",
            "session: s\nrebalance_panes_after: -1\n",
            "session: s\nwindows:\n  - name: w\n    panes: 3\n",
        ],
    )
    def test_invalid_documents_rejected(self, text):
        with pytest.raises(ConfigError):
            parse_config(text)

    def test_yaml_syntax_error(self):
        with pytest.raises(ConfigError, match="Invalid YAML"):
            parse_config("session: [unclosed\n")


class TestFiles:
    def test_get_config_reads_file(self, tmp_path):
        path = tmp_path / "work.yml"
        path.write_text(PROJECT)

        assert get_config(path).session == "work"

    def test_get_config_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read config"):
            get_config(tmp_path / "absent.yml")

    def test_config_path_prefers_yml(self, tmp_path):
        assert config_path("work", tmp_path) == tmp_path / "work.yml"

        (tmp_path / "work.yaml").write_text("session: w\n")
        assert config_path("work", tmp_path) == tmp_path / "work.yaml"

        (tmp_path / "work.yml").write_text("session: w\n")
        assert config_path("work", tmp_path) == tmp_path / "work.yml"

    def test_list_configs(self, tmp_path):
        for name in ["b.yml", "a.yaml", "notes.txt"]:
            (tmp_path / name).write_text("session: x\n")
        (tmp_path / "nested.yml").mkdir()

        assert list_configs(tmp_path) == ["a", "b"]

    def test_list_configs_missing_directory(self, tmp_path):
        assert list_configs(tmp_path / "absent") == []


class TestDumpConfig:
    def test_empty_fields_omitted(self):
        config = Config(
            session="s",
            windows=(Window(name="w", root="/src", layout="tiled", panes=(Pane(), Pane(root="/tmp"))),),
        )

        assert dump_config(config) == (
            "session: s\n"
            "windows:\n"
            "- name: w\n"
            "  root: /src\n"
            "  layout: tiled\n"
            "  panes:\n"
            "  - {}\n"
            "  - root: /tmp\n"
        )

    def test_dump_loads_back(self):
        config = parse_config(PROJECT)
        assert parse_config(dump_config(config)) == config


class TestEditConfig:
    def test_new_project_gets_template(self, tmp_path, monkeypatch):
        monkeypatch.delenv("EDITOR", raising=False)
        executor = RecordingExecutor()
        path = tmp_path / "sub" / "demo.yml"

        edit_config(path, executor)

        assert parse_config(path.read_text()).session == "demo"
        assert executor.commands == [f"vim {path}"]

    def test_existing_project_untouched(self, tmp_path, monkeypatch):
        monkeypatch.setenv("EDITOR", "code --wait")
        executor = RecordingExecutor()
        path = tmp_path / "demo.yml"
        path.write_text("session: mine\n")

        edit_config(path, executor)

        assert path.read_text() == "session: mine\n"
        assert executor.commands == [f"code --wait {path}"]
