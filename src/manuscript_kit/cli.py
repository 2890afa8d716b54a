"""
CLI: ``manuscript`` assembles, flattens and audits a book manifest.

A thin wrapper: it supplies a manifest path and a fragment root to the
library and prints the assembled text or a one-line error.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import typer
import yaml
from pydantic import ValidationError

from manuscript_kit.assembly import (
    Assembler,
    AssemblyConfig,
    audit_manifest,
    load_assembly_config,
)
from manuscript_kit.errors import ManuscriptError
from manuscript_kit.fragments import FileSystemFragmentStore
from manuscript_kit.manifest import flatten_section, load_manifest
from manuscript_kit.observability import InMemoryMetricsHook

app = typer.Typer(
    name="manuscript",
    help="Assemble a linear manuscript from a manifest and fragment files.",
    no_args_is_help=True,
)

DUPLICATE_POLICIES = ("allow", "warn", "error")

# Failures reported as a one-line error instead of a traceback.
RUN_ERRORS = (
    ManuscriptError,
    OSError,
    UnicodeDecodeError,
    ValidationError,
    ValueError,
    yaml.YAMLError,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _fail(exc: Exception) -> NoReturn:
    message = "; ".join(line.strip() for line in str(exc).splitlines() if line.strip())
    typer.echo(f"error: {type(exc).__name__}: {message}", err=True)
    raise typer.Exit(code=1)


def _resolve_config(config_path: Path | None, duplicates: str | None) -> AssemblyConfig:
    config = load_assembly_config(config_path) if config_path else AssemblyConfig()
    if duplicates is not None:
        if duplicates not in DUPLICATE_POLICIES:
            raise typer.BadParameter(
                f"must be one of {', '.join(DUPLICATE_POLICIES)}",
                param_hint="--duplicates",
            )
        config = config.model_copy(update={"duplicates": duplicates})
    return config


@app.command("assemble")
def assemble(
    manifest: Path = typer.Argument(..., exists=True, dir_okay=False),
    root: Path = typer.Option(Path("."), "--root", "-r", help="Fragment root directory."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write here instead of stdout."),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="YAML assembly config."),
    duplicates: str | None = typer.Option(None, "--duplicates", help="allow, warn or error."),
    stats: bool = typer.Option(False, "--stats", help="Print run metrics to stderr."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Assemble the manuscript."""
    _configure_logging(verbose)
    metrics = InMemoryMetricsHook()

    try:
        config = _resolve_config(config_path, duplicates)
        parsed = load_manifest(manifest, metrics_hook=metrics)
        store = FileSystemFragmentStore(root, metrics_hook=metrics)
        document = Assembler(config, metrics_hook=metrics).assemble(parsed, store.resolve)
        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(document.text, encoding="utf-8")
    except RUN_ERRORS as exc:
        _fail(exc)

    if output is not None:
        typer.echo(f"wrote {len(document.paths)} fragments to {output}", err=True)
    else:
        typer.echo(document.text, nl=False)

    if stats:
        for name, value in sorted(metrics.counters.items()):
            typer.echo(f"{name}={value}", err=True)
        for name, gauge in sorted(metrics.gauges.items()):
            typer.echo(f"{name}={gauge:g}", err=True)


@app.command("flatten")
def flatten_cmd(
    manifest: Path = typer.Argument(..., exists=True, dir_okay=False),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Print enabled fragment paths in output order."""
    _configure_logging(verbose)
    try:
        parsed = load_manifest(manifest)
    except RUN_ERRORS as exc:
        _fail(exc)

    for section in parsed.sections:
        for entry in flatten_section(section):
            typer.echo(f"{section.name.value}\t{entry.path}")


@app.command("check")
def check(
    manifest: Path = typer.Argument(..., exists=True, dir_okay=False),
    root: Path = typer.Option(Path("."), "--root", "-r", help="Fragment root directory."),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="YAML assembly config."),
    duplicates: str | None = typer.Option(None, "--duplicates", help="allow, warn or error."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Audit the manifest against the fragment tree without assembling."""
    _configure_logging(verbose)
    try:
        config = _resolve_config(config_path, duplicates)
        parsed = load_manifest(manifest)
        report = audit_manifest(parsed, FileSystemFragmentStore(root))
    except RUN_ERRORS as exc:
        _fail(exc)

    for position in report.missing:
        typer.echo(f"missing   {position.path}  {position}")
    for path, positions in report.duplicates.items():
        typer.echo(f"duplicate {path}  " + ", ".join(str(p) for p in positions))
    for position in report.disabled:
        typer.echo(f"disabled  {position.path}  {position}")
    for path in report.orphans:
        typer.echo(f"orphan    {path}")

    failed = not report.ok or (bool(report.duplicates) and config.duplicates == "error")
    if failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
