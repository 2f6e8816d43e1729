"""
Shared command plumbing.

Consoles for stdout/stderr output, stage labelling for errors, and the
mapping from ApplicationError to "Error: ..." plus exit code 1.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import typer
from rich.console import Console

from npmctl.core.config import CLIConfig
from npmctl.core.exceptions import ApplicationError
from npmctl.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)


@contextmanager
def stage(label: str) -> Iterator[None]:
    """Label any ApplicationError raised inside the block with `label`."""
    try:
        yield
    except ApplicationError as e:
        e.with_stage(label)
        raise


@contextmanager
def handle_errors() -> Iterator[None]:
    """Print ApplicationError to stderr and exit non-zero."""
    try:
        yield
    except ApplicationError as e:
        log_with_source(
            logger,
            "cli",
            "info",
            "Command failed",
            code=e.code,
            stage=e.stage,
            status_code=getattr(e, "status_code", None),
        )
        err_console.print(f"Error: {e}", markup=False)
        raise typer.Exit(1) from e


def get_cli_config(ctx: typer.Context) -> CLIConfig:
    """Return the configuration resolved by the root callback."""
    config = ctx.obj
    if not isinstance(config, CLIConfig):
        raise RuntimeError("CLI configuration was not resolved; invoke through the npmctl app")
    return config
