#!/usr/bin/env python3
"""
jsx_converter.cli.cli

Typer-based CLI for the TypeScript to JavaScript/JSX starter-kit pipeline.

The conversion shells out to ``npx tsc``; everything else is file-system work
done in-process.

Examples
--------
Convert the project in the current directory into ``./output``:

    jsx-convert convert

Run the workflow self-test and write ``workflow-test-report.json``:

    jsx-convert selftest

Publish ``./output`` into a template checkout:

    jsx-convert deploy ../template-repo --commit-sha "$SHA"
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path
from typing import TYPE_CHECKING

import typer

from jsx_converter.errors import ConverterError

if TYPE_CHECKING:
    from jsx_converter.schemas import ConversionConfig

app = typer.Typer(
    name="jsx-convert",
    help="Convert a TypeScript React starter kit into a JavaScript/JSX template.",
    no_args_is_help=True,
)

SOURCE_HELP = "Project root containing resources/js (defaults to the current directory)."
LOG_FORMAT = "%(levelname)s %(message)s"


# -----------------------------
# Utilities
# -----------------------------
def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly pipeline error.

    Parameters
    ----------
    exc : Exception
        Exception raised by the pipeline.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo(
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
            err=True,
        )
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _load_config(source: Path) -> ConversionConfig:
    from jsx_converter.application.use_cases import build_conversion_config

    return build_conversion_config(source)


def _debug(ctx: typer.Context) -> bool:
    return bool((ctx.obj or {}).get("debug", False))


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show debug logs and full tracebacks."),
) -> None:
    """Initialize shared CLI state and logging.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug logging and error output.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    source: Path = typer.Argument(
        Path("."), exists=True, file_okay=False, help=SOURCE_HELP
    ),
    stats_json: Path | None = typer.Option(
        None, "--stats-json", help="Also write the conversion statistics as JSON."
    ),
) -> None:
    """Rebuild the staging tree as a JavaScript/JSX project.

    Notes
    -----
    - A missing compiler is reported but the conversion is still attempted.
    - Compiler diagnostics are non-fatal as long as files were emitted.
    """
    debug = _debug(ctx)
    try:
        from jsx_converter.application.use_cases import convert_project, write_stats_json
        from jsx_converter.selftest import compiler_available

        config = _load_config(source)
        if compiler_available():
            typer.echo("✓ TypeScript compiler is available")
        else:
            typer.echo("✗ TypeScript compiler not found", err=True)

        result = convert_project(config)
        stats = result.stats
        typer.echo("Conversion Statistics:")
        typer.echo(f"  TypeScript source files: {stats.source_files}")
        typer.echo(f"  JavaScript output files: {stats.output_files}")
        typer.echo(f"  Configuration files: {stats.config_files}")
        typer.echo(f"  Template files: {stats.template_files}")
        typer.echo(f"  Total output files: {stats.total_output_files}")
        if stats_json is not None:
            write_stats_json(result, stats_json)
        typer.echo(f"✓ Saved: {result.staging_root}")
    except ConverterError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_conversion_error(exc, debug))


@app.command("verify")
def verify_cmd(
    ctx: typer.Context,
    source: Path = typer.Argument(
        Path("."), exists=True, file_okay=False, help=SOURCE_HELP
    ),
) -> None:
    """Check the staging tree against the output contract."""
    debug = _debug(ctx)
    try:
        from jsx_converter.verify import verify_output

        result = verify_output(_load_config(source))
    except ConverterError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    if not result.ok:
        typer.echo(f"✗ {len(result.errors)} output check(s) failed", err=True)
        raise typer.Exit(code=1)
    typer.echo(
        f"✓ Conversion output verified ({result.output_file_count} JavaScript/JSX files)"
    )


@app.command("selftest")
def selftest_cmd(
    ctx: typer.Context,
    source: Path = typer.Argument(
        Path("."), exists=True, file_okay=False, help=SOURCE_HELP
    ),
    report: Path | None = typer.Option(
        None, "--report", help="Report path (default: <source>/workflow-test-report.json)."
    ),
) -> None:
    """Run prerequisite, structure, conversion and component checks."""
    debug = _debug(ctx)
    try:
        from jsx_converter.application.options import SelfTestOptions
        from jsx_converter.selftest import run_self_test

        result = run_self_test(
            _load_config(source), options=SelfTestOptions(report_path=report)
        )
    except ConverterError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    if result.status != "completed":
        raise typer.Exit(code=1)
    typer.echo("✓ All tests passed")


@app.command("check-upstream")
def check_upstream_cmd(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Report changes even if none exist."),
    ref: str = typer.Option("upstream/main", "--ref", help="Upstream ref to compare."),
) -> None:
    """Print ``has_changes=true|false`` comparing the upstream ref with HEAD."""
    debug = _debug(ctx)
    try:
        from jsx_converter.adapters.git import GitClient
        from jsx_converter.deploy import upstream_has_changes

        changed = upstream_has_changes(GitClient(), force=force, ref=ref)
    except ConverterError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    typer.echo(f"has_changes={'true' if changed else 'false'}")


@app.command("deploy")
def deploy_cmd(
    ctx: typer.Context,
    checkout: Path = typer.Argument(
        ..., file_okay=False, help="Template repository working copy (cloned when missing)."
    ),
    source: Path = typer.Argument(
        Path("."), exists=True, file_okay=False, help=SOURCE_HELP
    ),
    commit_sha: str | None = typer.Option(
        None, "--commit-sha", help="Source commit recorded in the commit message."
    ),
    push: bool = typer.Option(True, "--push/--no-push", help="Push the deploy commit."),
    summary_file: Path | None = typer.Option(
        None, "--summary-file", help="Append a Markdown deployment summary to this file."
    ),
) -> None:
    """Mirror the staging tree into the template repository and publish it."""
    debug = _debug(ctx)
    try:
        from jsx_converter.application.options import DeployOptions
        from jsx_converter.deploy import clone_template, deploy_template
        from jsx_converter.schemas import RepositoryEnvironment
        from jsx_converter.stages.classifier import iter_scripts
        from jsx_converter.summary import append_summary, render_deployment_summary

        config = _load_config(source)
        staging_root = config.source_root / config.staging_dir_name
        env = RepositoryEnvironment.from_env()
        if not (checkout / ".git").exists():
            clone_template(env, checkout)

        result = deploy_template(
            staging_root,
            checkout,
            options=DeployOptions(commit_sha=commit_sha, push=push),
        )
        if summary_file is not None:
            converted = len(iter_scripts(staging_root / config.scripts_dir))
            append_summary(
                summary_file, render_deployment_summary(env, converted, commit_sha)
            )
    except ConverterError as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    except Exception as exc:
        raise typer.Exit(code=_print_conversion_error(exc, debug))
    if result.changed:
        typer.echo(f"✓ Deployed: {result.commit_message}")
    else:
        typer.echo("No changes to deploy")


@app.command("doctor")
def doctor_cmd() -> None:
    """Print installed toolchain versions."""
    import importlib.metadata as metadata

    from jsx_converter.adapters.process import SubprocessRunner

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in ("typer", "pydantic"):
        try:
            typer.echo(f"{module}: {metadata.version(module)}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")

    runner = SubprocessRunner()
    for label, command in (
        ("node", ("node", "--version")),
        ("npm", ("npm", "--version")),
        ("git", ("git", "--version")),
    ):
        result = runner.run(command)
        typer.echo(f"{label}: {result.stdout.strip() if result.ok else '<not installed>'}")


if __name__ == "__main__":
    app()
