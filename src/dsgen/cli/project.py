"""
Project commands for the dsgen CLI.

- build: Compile the Service-Component header into descriptors
- parse: Show how a header is split into clauses
"""

from __future__ import annotations

import json
from pathlib import Path

import typer

from dsgen.core.builder import BuildResult, build_components
from dsgen.core.catalog import CatalogClassIndex, load_catalog
from dsgen.core.errors import DsgenError, ParseError
from dsgen.core.header import parse_header
from dsgen.core.manifest import DEFAULT_MANIFEST, ProjectManifest, load_manifest
from dsgen.core.output import write_resources

from .utils import configure_logging

# =============================================================================
# Helper Functions
# =============================================================================


def _print_human_diagnostics(result: BuildResult) -> None:
    """Print diagnostics in human-readable format."""
    errors = result.diagnostics.errors
    warnings = result.diagnostics.warnings

    if errors:
        typer.echo("Build failed:\n", err=True)
        for diagnostic in errors:
            typer.echo(f"ERROR ({diagnostic.kind.value}): {diagnostic.format()}", err=True)

    if warnings:
        typer.echo("Build warnings:\n", err=False)
        for diagnostic in warnings:
            typer.echo(f"WARNING: {diagnostic.format()}", err=False)

    if not errors and not warnings:
        typer.echo("OK: all components generated.")


def _print_vscode_diagnostics(result: BuildResult) -> None:
    """
    Print diagnostics in VS Code format: file:line:col: severity: message
    """
    for diagnostic in result.diagnostics.errors:
        typer.echo(f"{DEFAULT_MANIFEST}:1:1: error: {diagnostic.format()}", err=True)

    for diagnostic in result.diagnostics.warnings:
        typer.echo(f"{DEFAULT_MANIFEST}:1:1: warning: {diagnostic.format()}", err=True)

    if not result.diagnostics.items:
        typer.echo("::notice: Build successful")


def _load_project(manifest_path: Path, header: str | None) -> ProjectManifest:
    """Load the manifest, or fall back to defaults when a header is given inline."""
    if manifest_path.exists() or header is None:
        return load_manifest(manifest_path)
    return ProjectManifest(name="unnamed", version="0.0.0", root=Path.cwd())


def _load_index(mf: ProjectManifest, catalog: Path | None) -> CatalogClassIndex:
    if catalog is not None:
        return load_catalog(catalog)
    if mf.catalog_path.exists():
        return load_catalog(mf.catalog_path)
    typer.echo(f"No class catalog at {mf.catalog_path}; every class will be unresolved.", err=True)
    return CatalogClassIndex()


# =============================================================================
# Commands
# =============================================================================


def build_command(
    manifest: str = typer.Option(DEFAULT_MANIFEST, "--manifest", "-m", help="Path to dsgen.toml"),
    header: str | None = typer.Option(
        None, "--header", "-H", help="Header value (overrides the manifest)"
    ),
    catalog: Path | None = typer.Option(  # noqa: B008
        None, "--catalog", "-c", help="Class catalog (overrides the manifest)"
    ),
    output: Path | None = typer.Option(  # noqa: B008
        None, "--output", "-o", help="Output directory (overrides the manifest)"
    ),
    format: str = typer.Option(
        "human", "--format", "-f", help="Output format: 'human' or 'vscode'"
    ),
    strict: bool = typer.Option(False, "--strict", help="Treat warnings as errors"),
    verbose: bool = typer.Option(False, "--verbose", help="Log pipeline progress"),
) -> None:
    """
    Generate component descriptors from the Service-Component header.

    Writes OSGI-INF/<name>.xml per component plus the rewritten header.
    """
    configure_logging(verbose)
    manifest_path = Path(manifest).resolve()

    try:
        mf = _load_project(manifest_path, header)
        header_text = header if header is not None else mf.read_header()
        index = _load_index(mf, catalog)
        result = build_components(header_text, index)
    except ParseError as e:
        typer.echo(f"Parse error: {e}", err=True)
        raise typer.Exit(code=2)
    except DsgenError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    output_dir = output if output is not None else mf.output_path
    written = write_resources(result, output_dir)

    if format == "vscode":
        _print_vscode_diagnostics(result)
    else:
        _print_human_diagnostics(result)
        for path in written:
            typer.echo(f"  wrote {path}")
        if result.header:
            typer.echo(f"Service-Component: {result.header}")

    fail_on_warning = strict or mf.diagnostics.fail_on_warning
    if result.diagnostics.has_errors or (fail_on_warning and result.diagnostics.warnings):
        raise typer.Exit(code=1)


def parse_command(
    header: str = typer.Argument(..., help="Service-Component header value"),
    format: str = typer.Option("table", "--format", "-f", help="Output format: 'table' or 'json'"),
) -> None:
    """
    Show the clauses and attributes of a header.
    """
    try:
        clauses = parse_header(header)
    except ParseError as e:
        typer.echo(f"Parse error: {e}", err=True)
        raise typer.Exit(code=2)

    if format == "json":
        typer.echo(json.dumps(clauses, indent=2))
        return

    from dsgen.cli_ui import display_clauses_table, print_header

    print_header("Service-Component", f"{len(clauses)} clause(s)")
    display_clauses_table(clauses)
