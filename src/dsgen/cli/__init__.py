"""
dsgen CLI Package.

- project.py: build and parse commands
- utils.py: Shared utilities
"""

import sys

import typer

from dsgen.cli.project import build_command, parse_command
from dsgen.cli.utils import get_version, version_callback

app = typer.Typer(
    help="""dsgen – Service-Component descriptor generator

Commands:
  • build: compile the Service-Component header into OSGI-INF/*.xml
  • parse: show how a header splits into clauses
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """dsgen CLI main callback for global options."""
    pass


app.command(name="build")(build_command)
app.command(name="parse")(parse_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = [
    "app",
    "main",
    "get_version",
    "version_callback",
]


if __name__ == "__main__":
    main(sys.argv[1:])
