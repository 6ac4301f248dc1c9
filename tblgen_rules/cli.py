"""CLI entry point: tblgen-rules.

Subcommands:
    tblgen-rules classify IntrinsicsX86.h      # Show the generator mode for outputs
    tblgen-rules catalog                       # List every known output
    tblgen-rules create-decl -o modules.json   # Generate a declaration template
    tblgen-rules plan modules.json             # Print the build actions
    tblgen-rules ninja modules.json -o build.ninja
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from tblgen_rules.build.rule import TOOL_VARIABLE
from tblgen_rules.config import (
    DECLARATION_TEMPLATE,
    AdapterSettings,
    build_modules,
    load_declarations,
)
from tblgen_rules.core.logging import setup_logging
from tblgen_rules.exceptions import TblgenRulesError, UnrecognizedOutputError
from tblgen_rules.generators.catalog import SUFFIX_RULES, catalog_entries, classify
from tblgen_rules.host.local import LocalBuildGraph
from tblgen_rules.models.module import PublishedArtifacts
from tblgen_rules.module import evaluate_modules


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """tblgen-rules: build actions for llvm-min-tblgen generated headers."""
    setup_logging("DEBUG" if verbose else None)


@main.command("classify")
@click.argument("outputs", nargs=-1, required=True)
def classify_cmd(outputs: tuple[str, ...]) -> None:
    """Show the generator arguments for each output file name."""
    failed = False
    for out in outputs:
        try:
            click.echo(f"{out}: {classify(out).render()}")
        except UnrecognizedOutputError as e:
            click.echo(f"Error: {e}", err=True)
            failed = True
    if failed:
        sys.exit(1)


@main.command("catalog")
def catalog_cmd() -> None:
    """List every recognised output and its generator arguments."""
    for entry in catalog_entries():
        click.echo(f"  {entry.output:28s} {entry.invocation().render()}")
    for rule in SUFFIX_RULES:
        click.echo(f"  {'*' + rule.suffix:28s} {rule.invocation().render()}")


@main.command("create-decl")
@click.option("-o", "--output", default="modules.json", help="Output file path")
def create_decl(output: str) -> None:
    """Generate a module declaration template JSON file."""
    Path(output).write_text(json.dumps(DECLARATION_TEMPLATE, indent=2) + "\n")
    click.echo(f"Declaration template written to {output}")
    click.echo("Edit the file, then run: tblgen-rules plan " + output)


def _evaluate(
    decl_file: str,
    source_root: str | None,
    out_dir: str | None,
    tool: str | None,
) -> tuple[LocalBuildGraph, dict[str, PublishedArtifacts]]:
    settings = AdapterSettings.from_env(source_root=source_root, out_dir=out_dir, tool=tool)
    try:
        modules = build_modules(load_declarations(decl_file), settings)
        host = LocalBuildGraph(
            settings.source_root,
            out_dir=settings.out_dir,
            tools={TOOL_VARIABLE: settings.tool},
        )
        published = evaluate_modules(host, modules)
    except TblgenRulesError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    return host, published


_host_options = [
    click.argument("decl_file", type=click.Path(exists=True, dir_okay=False)),
    click.option("--source-root", default=None, help="Top of the source tree (default: .)"),
    click.option("--out-dir", default=None, help="Output directory, relative to source root"),
    click.option("--tool", default=None, help="llvm-min-tblgen binary"),
]


def _with_host_options(func):
    for option in reversed(_host_options):
        func = option(func)
    return func


@main.command("plan")
@_with_host_options
def plan(decl_file: str, source_root: str | None, out_dir: str | None, tool: str | None) -> None:
    """Print the build actions every declared module registers."""
    host, published = _evaluate(decl_file, source_root, out_dir, tool)
    for action in host.actions:
        click.echo(f"[{action.module}] {action.output}")
        click.echo(f"    {host.command_for(action)}")
    for name, artifacts in published.items():
        click.echo(f"[{name}] exports {', '.join(artifacts.include_dirs)}")
    click.echo(f"\n{len(host.actions)} action(s)")


@main.command("ninja")
@_with_host_options
@click.option("-o", "--output", default="build.ninja", help="Manifest path")
def ninja(
    decl_file: str,
    source_root: str | None,
    out_dir: str | None,
    tool: str | None,
    output: str,
) -> None:
    """Write a Ninja manifest for every declared module."""
    host, _ = _evaluate(decl_file, source_root, out_dir, tool)
    path = host.write_ninja(output)
    click.echo(f"Wrote {len(host.actions)} action(s) to {path}")


if __name__ == "__main__":
    main()
