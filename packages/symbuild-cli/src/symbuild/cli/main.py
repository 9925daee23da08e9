import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from symbuild.common import bus, resolve_root, symbuild_operator as nexus
from symbuild.spec import SymbuildError

from .factories import make_app
from .rendering import CliRenderer


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


_LOGGING_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.SUCCESS: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}

app = typer.Typer(add_completion=False, help=nexus("cli.app.help"))


@app.command()
def build(
    target: Optional[str] = typer.Argument(
        None, help=nexus("cli.argument.target.help")
    ),
    root: Optional[Path] = typer.Option(
        None, "--root", file_okay=False, help=nexus("cli.option.root.help")
    ),
    jobs: Optional[int] = typer.Option(
        None, "--jobs", "-j", min=1, help=nexus("cli.option.jobs.help")
    ),
    loglevel: LogLevel = typer.Option(
        LogLevel.INFO,
        "--loglevel",
        case_sensitive=False,
        help=nexus("cli.option.loglevel.help"),
    ),
    dump_index: bool = typer.Option(
        False, "--dump-index", help=nexus("cli.option.dump_index.help")
    ),
    explain: bool = typer.Option(
        False, "--explain", help=nexus("cli.option.explain.help")
    ),
):
    bus.set_renderer(CliRenderer())
    bus.set_level(loglevel.value)
    logging.basicConfig(level=_LOGGING_LEVELS[loglevel])

    # The target is checked here rather than by Typer so a missing argument
    # exits with the same status as every other fatal condition.
    if not target:
        bus.error("error.no_target")
        raise typer.Exit(code=1)

    try:
        root_path = resolve_root(root)
        app_instance = make_app(root_path, jobs=jobs)
        app_instance.run_build(target, dump_index=dump_index, explain=explain)
    except SymbuildError as e:
        bus.error(e.msg_id, **e.render_params())
        raise typer.Exit(code=1)
