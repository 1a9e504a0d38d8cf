"""Jobby CLI: lock and notification helper for scheduled jobs."""

import logging
from pathlib import Path

import typer
from rich.console import Console

from jobby import __version__

from .config import JobbyConfig, get_config_path, load_config, write_config_template
from .core import (
    LockManager,
    Notifier,
    current_platform,
    get_identity,
    lock_path_for,
    resolve_temp_dir,
)
from .errors import ConfigError, LockError, LockHeldError
from .logging import configure_logging
from .models import JobOptions
from .output import OutputContext
from .services import build_mailer

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"jobby {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="jobby",
    help="Run-time helper for scheduled jobs: single-instance locks and status mail",
    no_args_is_help=True,
)

# Global output context
_ctx: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Get the current output context."""
    if _ctx is None:
        return OutputContext(Console())
    return _ctx


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging with times and source paths",
    ),
) -> None:
    """Jobby - single-instance locks and status mail for scheduled jobs."""
    global _ctx
    configure_logging(verbosity=verbose, quiet=quiet, no_color=no_color, debug=debug)
    _ctx = OutputContext(console=Console(no_color=no_color), json_mode=json_output)


def _load_config_or_exit(config: Path | None) -> JobbyConfig:
    ctx = get_output_context()
    try:
        return load_config(config)
    except ConfigError as e:
        ctx.error(str(e))
        raise typer.Exit(2) from None


@app.command()
def init(
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file to write"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Write a config file template."""
    ctx = get_output_context()
    config_path = get_config_path(config)
    if config_path.exists() and not force:
        ctx.error(f"Config already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(1)
    write_config_template(config_path)
    ctx.success(f"Created config template: {config_path}", {"path": str(config_path)})


@app.command()
def info() -> None:
    """Show platform, scratch directory, host and environment."""
    ctx = get_output_context()
    identity = get_identity()
    ctx.table(
        "jobby",
        {
            "platform": current_platform().value,
            "temp_dir": str(resolve_temp_dir()),
            **identity.model_dump(),
        },
    )


@app.command("lock-status")
def lock_status(
    job: str = typer.Argument(..., help="Job name"),
    lock_file: Path | None = typer.Option(
        None, "--lock-file", "-l", help="Lock file (defaults to <locks dir>/<job>.lck)"
    ),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Check whether another process currently holds a job's lock.

    Exits 1 if the lock is held.
    """
    ctx = get_output_context()
    if lock_file is None:
        cfg = _load_config_or_exit(config)
        lock_file = lock_path_for(job, cfg.locks.directory)

    manager = LockManager()
    try:
        with manager.locked(lock_file):
            pass
    except LockHeldError:
        ctx.error(f"Job '{job}' is running", {"job": job, "lock_file": str(lock_file)})
        raise typer.Exit(1) from None
    except LockError as e:
        ctx.error(str(e), {"job": job, "lock_file": str(e.path)})
        raise typer.Exit(1) from None
    ctx.success(f"Job '{job}' is not running", {"job": job, "lock_file": str(lock_file)})


@app.command()
def notify(
    job: str = typer.Argument(..., help="Job name"),
    recipients: str = typer.Option(
        ..., "--recipients", "-r", help="Comma-separated recipient addresses"
    ),
    output: str = typer.Option("", "--output", "-o", help="Captured job output"),
    message: str = typer.Option("", "--message", "-m", help="Message placed above the output"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Send a job status mail through the configured transport."""
    ctx = get_output_context()
    cfg = _load_config_or_exit(config)
    notifier = Notifier(build_mailer(cfg.mailer))
    options = JobOptions(output=output, recipients=recipients)
    if not options.recipient_list():
        ctx.error("No recipients given")
        raise typer.Exit(1)

    try:
        mail = notifier.send_mail(job, options, message)
    except Exception as e:
        logger.debug("Mail delivery failed", exc_info=True)
        ctx.error(f"Failed to send mail: {e}")
        raise typer.Exit(1) from None
    ctx.success(f"Sent '{mail.subject}' to {', '.join(mail.to)}", {"to": mail.to})


if __name__ == "__main__":
    app()
