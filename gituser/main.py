"""
gituser — CLI entrypoint.

Usage:
    gituser --help
    gituser apply
    gituser status
    gituser hook install
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from gituser import __version__
from gituser.core.errors import GitUserError
from gituser.core.models.outcome import RepositoryPass
from gituser.core.observability.logging_config import resolve_level, setup_logging
from gituser.ui.cli._context import fail, get_chooser, get_settings, get_store


@click.group()
@click.version_option(version=__version__, prog_name="gituser")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.yml (default: ~/.config/gituser/config.yml).",
)
@click.option(
    "--identities",
    "identities_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Identity catalog directory (default: $GITUSER_IDENTITIES).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: Path | None,
    identities_dir: Path | None,
) -> None:
    """gituser — commit under the right identity in every repository."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path
    ctx.obj["identities_dir"] = identities_dir

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        hook=ctx.invoked_subcommand == "hook",
    )


@cli.command()
@click.argument(
    "path", required=False, default=".",
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option("--identity", "-i", "identity", default=None, help="Apply this identity key, skip matching.")
@click.option(
    "--interactive/--batch", default=None,
    help="Prompt for ambiguous repositories, or skip them (default: prompt on a terminal).",
)
@click.option("--no-submodules", is_flag=True, help="Only the top-level repository.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def apply(
    ctx: click.Context,
    path: Path,
    identity: str | None,
    interactive: bool | None,
    no_submodules: bool,
    as_json: bool,
) -> None:
    """Set user.name and user.email for the repository at PATH."""
    from gituser.core.use_cases.apply import run_apply

    if interactive is None:
        interactive = sys.stdin.isatty() and not as_json

    settings = get_settings(ctx)
    try:
        result = run_apply(
            path,
            get_store(ctx),
            settings=settings,
            chooser=get_chooser(ctx) if interactive else None,
            identity=identity,
            recurse=False if no_submodules else None,
            identities_dir=ctx.obj.get("identities_dir"),
        )
    except GitUserError as e:
        if e.partial_result is not None and not as_json:
            for repo in e.partial_result.passes:
                _echo_pass(repo, detailed=ctx.obj.get("verbose", False))
            click.echo()
        fail(e, as_json)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    for repo in result.passes:
        _echo_pass(repo, detailed=ctx.obj.get("verbose", False))
    if result.skipped:
        click.echo()
        click.secho(
            "⚠️  Some repositories were left unchanged. "
            "Re-run interactively or with --identity to choose.",
            fg="yellow",
        )


@cli.command()
@click.argument(
    "path", required=False, default=".",
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option("--no-submodules", is_flag=True, help="Only the top-level repository.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, path: Path, no_submodules: bool, as_json: bool) -> None:
    """Show remotes, candidate identities and the resolution, without writing."""
    from gituser.core.use_cases.apply import run_apply

    settings = get_settings(ctx)
    try:
        result = run_apply(
            path,
            get_store(ctx),
            settings=settings,
            recurse=False if no_submodules else None,
            dry_run=True,
            identities_dir=ctx.obj.get("identities_dir"),
        )
    except GitUserError as e:
        fail(e, as_json)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho(f"📇 {result.catalog_root} ({result.identity_count} identities)", fg="cyan")
    for repo in result.passes:
        _echo_pass(repo, detailed=True)


def _echo_pass(repo: RepositoryPass, detailed: bool) -> None:
    """Print one repository pass."""
    indent = "   " * repo.depth
    click.echo()
    click.secho(f"{indent}📦 {repo.display_path}", fg="cyan", bold=True)

    if detailed:
        if repo.match.remotes:
            width = max(len(n) for n in repo.match.remotes)
            for name, remote in repo.match.remotes.items():
                user = remote.user or "-"
                click.echo(f"{indent}   {name.ljust(width)}  {remote.authority}  {user}  {remote.path}")
        else:
            click.echo(f"{indent}   No matching remotes")
        for key, ann in repo.match.identities.items():
            flags = []
            if ann.user_match:
                flags.append("user")
            if ann.origin_match:
                flags.append("origin")
            if ann.preferred:
                flags.append("preferred")
            suffix = f"  [{', '.join(flags)}]" if flags else ""
            click.echo(f"{indent}   • {key}{suffix}")

    if repo.status == "applied" and repo.identity:
        click.secho(f"{indent}   ✅ {repo.identity.key}", fg="green", nl=False)
        click.echo(f"  {repo.identity.name} <{repo.identity.email}>")
    elif repo.status == "resolved":
        click.secho(f"{indent}   → {repo.message}", fg="green")
    else:
        click.secho(f"{indent}   ⚠️  {repo.message}", fg="yellow")


# ── Register sub-command groups from gituser/ui/cli/ ────────────

from gituser.ui.cli.hook import hook  # noqa: E402
from gituser.ui.cli.identities import identities  # noqa: E402

cli.add_command(hook)
cli.add_command(identities)


if __name__ == "__main__":
    cli()
