# cli.py
from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from branchenv.git_facts.git import current_branch, current_ref
from branchenv.model import INPUT_PREFIX, NO_REF_ACTIONS, Settings
from branchenv.runner import preview as preview_variables
from branchenv.runner import run as run_action
from branchenv.ui.console import Console, get_console, set_console


def _git_default(fn) -> str:
    try:
        return fn()
    except FileNotFoundError:
        # git not installed
        return ""


def parse_var_option(raw: str) -> tuple[str, str]:
    """
    Parse a --var option: NAME=VALUE, or NAME=@path to read the value
    (usually a multi-line pattern block) from a file.
    """
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise click.BadParameter(f"expected NAME=VALUE, got {raw!r}", param_hint="--var")
    if value.startswith("@"):
        path = Path(value[1:])
        if not path.exists():
            raise click.BadParameter(f"file not found: {path}", param_hint="--var")
        value = path.read_text(encoding="utf-8")
    return name, value


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces)",
)
@click.pass_context
def cli(ctx, debug):
    """branchenv: per-branch environment variables for CI builds."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.pass_context
def run(ctx):
    """Resolve INPUT_* variables for the current ref and export them."""
    console = get_console()

    try:
        result = run_action(dict(os.environ), reporter=console)
    except KeyboardInterrupt:
        console.info("\nInterrupted by user")
        sys.exit(130)

    if result.branch_key is not None:
        console.info(f"Branch key: {result.branch_key}")
        console.info(f"Exported {len(result.exported)} variable(s), skipped {len(result.skipped)}")

    if result.failed or console.failed:
        sys.exit(1)


@cli.command()
@click.option("--ref", default=None, help="Ref being built (defaults to GITHUB_REF, then git HEAD)")
@click.option("--base-ref", default=None, help="PR base branch (defaults to GITHUB_BASE_REF)")
@click.option("--branch-name", default=None, help="Branch key for refs/heads/* (defaults to the current git branch)")
@click.option(
    "--no-ref-action",
    type=click.Choice(NO_REF_ACTIONS),
    default="warn",
    show_default=True,
    help="What to do when no ref is available",
)
@click.option("--var", "variables", multiple=True, help="Variable as NAME=VALUE or NAME=@file (repeatable)")
@click.option("--from-env/--no-from-env", default=False, help="Also include INPUT_* variables from the environment")
@click.pass_context
def preview(ctx, ref, base_ref, branch_name, no_ref_action, variables, from_env):
    """Show what each variable would resolve to, without exporting."""
    console = get_console()

    if ref is None:
        ref = os.environ.get("GITHUB_REF") or _git_default(current_ref)
    if base_ref is None:
        base_ref = os.environ.get("GITHUB_BASE_REF", "")
    if branch_name is None:
        branch_name = _git_default(current_branch)

    env: dict[str, str] = {}
    if from_env:
        env.update({k: v for k, v in os.environ.items() if k.startswith(INPUT_PREFIX)})
    for raw in variables:
        name, value = parse_var_option(raw)
        env[INPUT_PREFIX + name] = value
    env["GITHUB_REF"] = ref
    env["GITHUB_BASE_REF"] = base_ref

    settings = Settings(no_ref_action=no_ref_action, branch_name=branch_name)

    try:
        branch_key, resolved = preview_variables(env, settings, reporter=console)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    if branch_key is None:
        sys.exit(1)

    console.print_header(f"Branch key: {branch_key}")
    for name, value in resolved:
        if value is None:
            console.info(f"  {name} (no match)")
        else:
            console.info(f"  {name}={value}")


if __name__ == "__main__":
    cli()
