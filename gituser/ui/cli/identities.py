"""
CLI commands for the identity catalog.
"""

from __future__ import annotations

import json

import click

from gituser.core.errors import GitUserError
from gituser.ui.cli._context import fail, get_settings, get_store


@click.group()
def identities() -> None:
    """Identity catalog — list and inspect known identities."""


@identities.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_identities(ctx: click.Context, as_json: bool) -> None:
    """List every identity in the catalog."""
    from gituser.core.use_cases.apply import load_catalog

    settings = get_settings(ctx)
    try:
        catalog = load_catalog(settings, ctx.obj.get("identities_dir"))
    except GitUserError as e:
        fail(e, as_json)

    if as_json:
        click.echo(json.dumps({
            "root": str(catalog.root),
            "identities": {key: str(rec.source) for key, rec in catalog.items()},
        }, indent=2))
        return

    click.secho(f"📇 {catalog.root}", fg="cyan", bold=True)
    if not catalog:
        click.secho("   No identities found.", fg="yellow")
        return

    width = max(len(k) for k in catalog)
    for key, record in sorted(catalog.items()):
        label = click.style(key.ljust(width), fg="green" if record.is_local else None)
        click.echo(f"   {label}  {record.source}")
    if catalog.local_key not in catalog:
        click.echo()
        click.secho(
            f"⚠️  No '{catalog.local_key}' identity: repositories without "
            "known remotes cannot be configured.",
            fg="yellow",
        )


@identities.command("show")
@click.argument("key")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show_identity(ctx: click.Context, key: str, as_json: bool) -> None:
    """Show the name and email stored for KEY."""
    from gituser.core.use_cases.apply import load_catalog

    settings = get_settings(ctx)
    try:
        catalog = load_catalog(settings, ctx.obj.get("identities_dir"))
        identity = catalog.load(key, get_store(ctx))
    except GitUserError as e:
        fail(e, as_json)

    if as_json:
        click.echo(json.dumps({
            **identity.model_dump(),
            "source": str(catalog[key].source),
        }, indent=2))
        return

    click.secho(f"🪪 {identity.key}", fg="cyan", bold=True)
    click.echo(f"   Name:   {identity.name}")
    click.echo(f"   Email:  {identity.email}")
    click.echo(f"   Source: {catalog[key].source}")
