"""
Exceptable test-suite generator — CLI entrypoint.

Usage:
    python -m exceptable_testgen.main --help
    python -m exceptable_testgen.main generate
    python -m exceptable_testgen.main scan --json
    python -m exceptable_testgen.main config check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from exceptable_testgen import __version__
from exceptable_testgen.core.observability.logging_config import level_from_flags, setup_from_env


@click.group()
@click.version_option(version=__version__, prog_name="testgen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to testgen.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Exceptable test-suite generator — write JUnit suites for @TestSource classes."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_from_env(level_from_flags(debug=debug, verbose=verbose, quiet=quiet))


@cli.command()
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default=None,
    help="Write suites here instead of the configured output_dir.",
)
@click.option("--dry-run", is_flag=True, help="Render but don't write files.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(ctx: click.Context, output_dir: str | None, dry_run: bool, as_json: bool) -> None:
    """Generate a test suite for every @TestSource declaration."""
    from exceptable_testgen.core.use_cases.generate import run_generate

    result = run_generate(
        config_path=ctx.obj.get("config_path"),
        output_dir=Path(output_dir) if output_dir else None,
        dry_run=dry_run,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    quiet = ctx.obj.get("quiet", False)
    if not quiet:
        label = "Dry run" if dry_run else "Output"
        click.secho(f"\n🧪 {label}: {result.output_dir}", fg="cyan", bold=True)

    for outcome in result.outcomes:
        element = outcome.declaration.element.qualified_name
        if outcome.ok:
            click.secho("   ✓ ", fg="green", nl=False)
            click.echo(f"{outcome.artifact}  ← {element}")
        else:
            click.secho(f"   ✗ {element}: ", fg="red", nl=False)
            click.echo(outcome.error or outcome.state.value)

    if result.skipped:
        click.secho(f"   ⚠️  {result.skipped} declaration(s) not processed", fg="yellow")

    if not result.outcomes and not quiet:
        click.echo("   No @TestSource declarations found.")

    if not result.ok:
        click.echo()
        click.secho("❌ Code generation failed", fg="red", bold=True)
        sys.exit(1)

    if not quiet:
        click.echo(f"\n   {len(result.generated)} suite(s) generated\n")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def scan(ctx: click.Context, as_json: bool) -> None:
    """List @TestSource declarations and the suites they would produce."""
    from exceptable_testgen.core.use_cases.scan import run_scan

    result = run_scan(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    click.secho(f"\n🔍 Declarations: {len(result.entries)}", fg="cyan", bold=True)
    for entry in result.entries:
        if entry.problem:
            click.secho(f"   ✗ {entry.element} ", fg="red", nl=False)
            click.echo(f"({entry.problem})")
        else:
            click.secho(f"   • {entry.element} ", fg="green", nl=False)
            click.echo(f"→ {entry.artifact}")
    click.echo()


@cli.command()
@click.option("--exceptable-class", "-e", required=True, help="Exception class under test.")
@click.option("--test-source", "-t", required=True, help="Test-source base class.")
@click.option("--package", "-p", "package", default=None, help="Package of the suite.")
def render(exceptable_class: str, test_source: str, package: str | None) -> None:
    """Print one rendered suite to stdout."""
    from exceptable_testgen.core.models.declaration import DEFAULT_PACKAGE, MarkerDeclaration
    from exceptable_testgen.core.models.element import ProgramElement
    from exceptable_testgen.core.services.generator import validate_declaration
    from exceptable_testgen.core.services.generators.exceptable_test import (
        generate_exceptable_test,
    )

    declaration = MarkerDeclaration(
        element=ProgramElement(name=test_source),
        package_name=package,
        exceptable_class=exceptable_class,
    )
    problem = validate_declaration(declaration)
    if problem:
        click.secho(f"❌ {problem}", fg="red", err=True)
        sys.exit(1)

    generated = generate_exceptable_test(package or DEFAULT_PACKAGE, exceptable_class, test_source)
    click.echo(generated.content, nl=False)


@cli.group()
def config() -> None:
    """Generator configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate testgen.yml configuration."""
    from exceptable_testgen.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Output:       {result.config.output_dir}")
        click.echo(f"   Declarations: {len(result.config.declarations)}")
        click.echo(f"   Source roots: {len(result.config.source_roots)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
