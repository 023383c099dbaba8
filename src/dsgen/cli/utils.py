"""
dsgen CLI Utilities.

Shared utility functions used across CLI modules.
"""

import logging
import platform

import typer

from dsgen._version import get_version

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        typer.echo(f"dsgen version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {python_impl} {python_version}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Trace the core pipeline on stderr when running verbosely."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)
