"""Command line interface for muxtap.

Parses `muxtap <command> [<project>[:win1,win2]] [options] [key=value]...`
into Options and dispatches to the orchestrator or the config helpers.

PUBLIC API:
  - app: Typer application with the muxtap commands
  - run: Entry point taking an argv list
  - USAGE: Help text printed for unknown or missing commands
"""

import logging
import sys
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console

from . import __version__
from .config import config_path, dump_config, edit_config, get_config, list_configs
from .errors import MuxtapError
from .executor import DefaultExecutor
from .paths import CONFIG_DIR, LOG_PATH
from .session import Muxtap
from .tmux import Tmux
from .types import COMMANDS, Options, create_context

logger = logging.getLogger(__name__)

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

FILE_USAGE = "A custom path to a config file"
WINDOWS_USAGE = "List of windows to start. If session exists, those windows will be attached to current session."
ATTACH_USAGE = "Force switch client for a session"
DETACH_USAGE = "Detach tmux session. The same as -d flag in the tmux"
INSIDE_CURRENT_SESSION_USAGE = "Create all windows inside current session"
DEBUG_USAGE = f"Print all commands to {LOG_PATH}"

USAGE = f"""muxtap - session manager for tmux. Version {__version__}

Usage:
	muxtap <command> [<project>] [-f, --file <file>] [-w, --windows <window>]... [-a, --attach]
	[-d, --debug] [--detach] [-i, --inside-current-session] [<key>=<value>]...

Options:
	-f, --file {FILE_USAGE}
	-w, --windows {WINDOWS_USAGE}
	-a, --attach {ATTACH_USAGE}
	-i, --inside-current-session {INSIDE_CURRENT_SESSION_USAGE}
	-d, --debug {DEBUG_USAGE}
	--detach {DETACH_USAGE}

Commands:
	list    list available project configurations
	edit    edit project configuration
	new     new project configuration
	start   start project session
	stop    stop project session
	print   session configuration to stdout

Examples:
	$ muxtap list
	$ muxtap edit work
	$ muxtap new work
	$ muxtap start work
	$ muxtap start work:win1
	$ muxtap start work -w win1
	$ muxtap start work:win1,win2
	$ muxtap stop work
	$ muxtap start work --attach
	$ muxtap print > ~/.config/muxtap/work.yml
"""

Args = Annotated[
    Optional[List[str]],
    typer.Argument(help="Project, optionally as project:win1,win2, followed by key=value settings"),
]
FileOption = Annotated[Optional[str], typer.Option("--file", "-f", help=FILE_USAGE)]
WindowsOption = Annotated[Optional[List[str]], typer.Option("--windows", "-w", help=WINDOWS_USAGE)]
AttachOption = Annotated[bool, typer.Option("--attach", "-a", help=ATTACH_USAGE)]
DetachOption = Annotated[bool, typer.Option("--detach", help=DETACH_USAGE)]
InsideOption = Annotated[
    bool, typer.Option("--inside-current-session", "-i", help=INSIDE_CURRENT_SESSION_USAGE)
]
DebugOption = Annotated[bool, typer.Option("--debug", "-d", help=DEBUG_USAGE)]

app = typer.Typer(
    name="muxtap",
    help="Session manager for tmux.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def build_options(
    command: str,
    args: Optional[List[str]] = None,
    file: Optional[str] = None,
    windows: Optional[List[str]] = None,
    attach: bool = False,
    detach: bool = False,
    inside_current_session: bool = False,
    debug: bool = False,
) -> Options:
    """Turn parsed command-line values into Options.

    The first positional without "=" is the project unless a file was given.
    "project:w1,w2" replaces any --windows values. Positionals of the form
    key=value become settings; anything else is ignored.
    """
    args = args or []
    project = ""
    if not file and args and "=" not in args[0]:
        project = args[0]

    selected = list(windows or [])
    if ":" in project:
        project, _, names = project.partition(":")
        selected = [name for name in names.split(",") if name]

    settings = {}
    for item in args:
        key, sep, value = item.partition("=")
        if sep:
            settings[key] = value

    return Options(
        command=command,
        project=project,
        config=file or "",
        windows=selected,
        settings=settings,
        attach=attach,
        detach=detach,
        inside_current_session=inside_current_session,
        debug=debug,
    )


def _trace_logger(debug: bool) -> Optional[logging.Logger]:
    """Logger receiving every executed command line when debugging."""
    if not debug:
        return None

    trace = logging.getLogger("muxtap.trace")
    try:
        LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(LOG_PATH, mode="w")
    except OSError as e:
        err_console.print(str(e), markup=False)
        return None

    handler.setFormatter(logging.Formatter("%(message)s"))
    trace.addHandler(handler)
    trace.setLevel(logging.INFO)
    trace.propagate = False
    return trace


def _build_muxtap(options: Options) -> Muxtap:
    executor = DefaultExecutor(_trace_logger(options.debug))
    return Muxtap(Tmux(executor), executor)


def _config_file(options: Options) -> Path:
    if options.config:
        return Path(options.config)
    return config_path(options.project)


def _fail(error: Exception) -> typer.Exit:
    err_console.print(str(error), markup=False)
    return typer.Exit(1)


@app.command()
def start(
    args: Args = None,
    file: FileOption = None,
    windows: WindowsOption = None,
    attach: AttachOption = False,
    detach: DetachOption = False,
    inside_current_session: InsideOption = False,
    debug: DebugOption = False,
):
    """Start project session."""
    options = build_options("start", args, file, windows, attach, detach, inside_current_session, debug)
    muxtap = _build_muxtap(options)
    context = create_context()

    if options.windows:
        console.print("Starting new windows...")
    else:
        console.print("Starting a new session...")

    try:
        conf = get_config(_config_file(options), options.settings)
    except MuxtapError as e:
        raise _fail(e) from None

    try:
        muxtap.start(conf, options, context)
    except MuxtapError as e:
        console.print("Oops, an error occurred! Rolling back...")
        err_console.print(str(e), markup=False)
        try:
            muxtap.stop(conf, options, context)
        except MuxtapError as rollback_error:
            logger.warning(f"Rollback failed: {rollback_error}")
        raise typer.Exit(1) from None


@app.command()
def stop(
    args: Args = None,
    file: FileOption = None,
    windows: WindowsOption = None,
    attach: AttachOption = False,
    detach: DetachOption = False,
    inside_current_session: InsideOption = False,
    debug: DebugOption = False,
):
    """Stop project session."""
    options = build_options("stop", args, file, windows, attach, detach, inside_current_session, debug)
    muxtap = _build_muxtap(options)

    if options.windows:
        console.print("Killing windows...")
    else:
        console.print("Terminating session...")

    try:
        conf = get_config(_config_file(options), options.settings)
        muxtap.stop(conf, options, create_context())
    except MuxtapError as e:
        raise _fail(e) from None


@app.command()
def new(
    args: Args = None,
    file: FileOption = None,
    windows: WindowsOption = None,
    attach: AttachOption = False,
    detach: DetachOption = False,
    inside_current_session: InsideOption = False,
    debug: DebugOption = False,
):
    """New project configuration."""
    _edit(build_options("new", args, file, windows, attach, detach, inside_current_session, debug))


@app.command()
def edit(
    args: Args = None,
    file: FileOption = None,
    windows: WindowsOption = None,
    attach: AttachOption = False,
    detach: DetachOption = False,
    inside_current_session: InsideOption = False,
    debug: DebugOption = False,
):
    """Edit project configuration."""
    _edit(build_options("edit", args, file, windows, attach, detach, inside_current_session, debug))


def _edit(options: Options) -> None:
    try:
        edit_config(_config_file(options))
    except MuxtapError as e:
        raise _fail(e) from None


# Every verb takes the full flag set; list ignores all of it
@app.command(name="list")
def list_(
    args: Args = None,
    file: FileOption = None,
    windows: WindowsOption = None,
    attach: AttachOption = False,
    detach: DetachOption = False,
    inside_current_session: InsideOption = False,
    debug: DebugOption = False,
):
    """List available project configurations."""
    for name in list_configs(CONFIG_DIR):
        typer.echo(name)


@app.command(name="print")
def print_(
    args: Args = None,
    file: FileOption = None,
    windows: WindowsOption = None,
    attach: AttachOption = False,
    detach: DetachOption = False,
    inside_current_session: InsideOption = False,
    debug: DebugOption = False,
):
    """Print current session configuration to stdout."""
    options = build_options("print", args, file, windows, attach, detach, inside_current_session, debug)
    muxtap = _build_muxtap(options)

    try:
        conf = muxtap.capture(options, create_context())
    except MuxtapError as e:
        raise _fail(e) from None

    typer.echo(dump_config(conf), nl=False)


def run(argv: Optional[List[str]] = None) -> None:
    """Run the CLI.

    A missing, unknown or help command prints USAGE and exits 0; option
    parse errors exit non-zero through typer.
    """
    argv = sys.argv[1:] if argv is None else argv

    if not argv or argv[0] not in COMMANDS:
        typer.echo(USAGE)
        raise SystemExit(0)

    app(args=argv, prog_name="muxtap")
