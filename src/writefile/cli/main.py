from __future__ import annotations

import json
import logging
import os
import stat
import sys
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

import writefile
from writefile.adapters.json_logger import JsonLogger
from writefile.config.settings import LOG_LEVEL_CHOICES, settings
from writefile.core.errors import WriteFileError
from writefile.core.models import SweepPlan
from writefile.core.sweep import sweep as sweep_command


app = typer.Typer(no_args_is_help=True, add_completion=False, rich_markup_mode=None)
err_console = Console(stderr=True)


def _make_logger(fmt: str, level: str, file: str | None) -> JsonLogger:
    level_num = getattr(logging, level.upper(), logging.INFO)
    return JsonLogger(level=level_num, fmt=fmt, file=file)


def _emit(payload: dict[str, object]) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _report(command: str, logger: JsonLogger, exc: Exception, *, crash: bool) -> None:
    if crash:
        logger.error(f"{command}_crash", error=str(exc))
    else:
        logger.error(f"{command}_failed", error=str(exc))
    err_console.print(f"[bold red]error:[/bold red] {escape(str(exc))}")


@app.callback()
def main(
    log_format: Annotated[str, typer.Option("--log")] = settings.log_format,
    log_level: Annotated[str, typer.Option("--log-level")] = settings.log_level,
    log_file: Annotated[str | None, typer.Option("--log-file")] = None,
):
    if log_format not in {"json", "text"}:
        raise typer.BadParameter("--log must be either 'json' or 'text'.")
    log_level = log_level.upper()
    if log_level not in LOG_LEVEL_CHOICES:
        raise typer.BadParameter("--log-level must be DEBUG, INFO, WARN, or ERROR.")
    app.state = {"logger": _make_logger(log_format, log_level, log_file)}


@app.command(help="Atomically replace TARGET with bytes read from stdin or --input.")
def put(
    target: Annotated[str, typer.Argument(help="File to replace (created if missing).")],
    input_file: Annotated[str | None, typer.Option("--input", "-i", help="Read content from this file instead of stdin.")] = None,
    no_deref: Annotated[bool, typer.Option("--no-deref", help="Replace a symlink itself instead of its target.")] = False,
):
    logger: JsonLogger = app.state["logger"]
    from .options import read_input

    try:
        data = read_input(input_file)
        with writefile.replace(target, deref=settings.follow_symlinks and not no_deref, hooks=[logger.progress_hook]) as staging:
            staging.write(data)
        resolved = staging.final_path
        result = {
            "target": target,
            "resolved": resolved,
            "bytes": len(data),
            "mode": oct(stat.S_IMODE(os.lstat(resolved).st_mode)),
        }
        logger.info("put_completed", **result)
        _emit(result)
    except typer.BadParameter:
        raise
    except WriteFileError as e:
        _report("put", logger, e, crash=False)
        raise typer.Exit(code=2)
    except Exception as e:
        _report("put", logger, e, crash=True)
        raise typer.Exit(code=1)


@app.command(help="Show which file a write to TARGET would replace.")
def resolve(
    target: Annotated[str, typer.Argument(help="Path to resolve.")],
):
    logger: JsonLogger = app.state["logger"]
    try:
        resolved = writefile.resolve_target(target)
        result = {"target": target, "resolved": resolved, "exists": os.path.lexists(resolved)}
        logger.info("resolve_completed", **result)
        _emit(result)
    except WriteFileError as e:
        _report("resolve", logger, e, crash=False)
        raise typer.Exit(code=2)
    except Exception as e:
        _report("resolve", logger, e, crash=True)
        raise typer.Exit(code=1)


@app.command(help="Remove staging files left behind by interrupted writes.")
def sweep(
    root: Annotated[str, typer.Argument(help="Directory to clean.")],
    recursive: Annotated[bool, typer.Option("--recursive")] = False,
    min_age: Annotated[float, typer.Option("--min-age", help="Only remove files older than this many seconds.")] = settings.sweep_min_age_seconds,
    dry_run: Annotated[bool, typer.Option("--dry-run")] = False,
):
    logger: JsonLogger = app.state["logger"]
    try:
        plan = SweepPlan(root=root, recursive=recursive, min_age_seconds=min_age, dry_run=dry_run)
        result = sweep_command(plan, hooks=[logger.progress_hook])
        logger.info("sweep_completed", **result)
        _emit(result)
    except WriteFileError as e:
        _report("sweep", logger, e, crash=False)
        raise typer.Exit(code=2)
    except Exception as e:
        _report("sweep", logger, e, crash=True)
        raise typer.Exit(code=1)


@app.command(help="Print environment diagnostics.")
def diagnose():
    import platform

    import pydantic

    info = {
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "writefile": writefile.__version__,
        "pydantic": pydantic.VERSION,
        "max_symlink_deref": writefile.MAX_SYMLINK_DEREF,
        "settings": {
            "log_format": settings.log_format,
            "log_level": settings.log_level,
            "sweep_min_age_seconds": settings.sweep_min_age_seconds,
            "follow_symlinks": settings.follow_symlinks,
        },
    }
    _emit(info)


@app.command(help="Show version.")
def version():
    typer.echo(writefile.__version__)
