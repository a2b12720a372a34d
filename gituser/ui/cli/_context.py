"""
Shared CLI plumbing — settings, backends and error reporting.

Backends live in ``ctx.obj`` so tests can inject doubles::

    runner.invoke(cli, ["apply"], obj={"store": MockConfigStore()})
"""

from __future__ import annotations

import json
import sys
from typing import NoReturn

import click

from gituser.adapters.base import Chooser, ConfigStore
from gituser.core.config.loader import Settings, load_settings
from gituser.core.errors import ConfigError


def get_settings(ctx: click.Context) -> Settings:
    """Load settings once per invocation."""
    settings = ctx.obj.get("settings")
    if settings is None:
        try:
            settings = load_settings(ctx.obj.get("config_path"))
        except ConfigError as e:
            fail(e, as_json=False)
        ctx.obj["settings"] = settings
    return settings


def get_store(ctx: click.Context) -> ConfigStore:
    store = ctx.obj.get("store")
    if store is None:
        from gituser.adapters.vcs.git import GitConfigStore

        store = GitConfigStore()
        ctx.obj["store"] = store
    return store


def get_chooser(ctx: click.Context) -> Chooser:
    chooser = ctx.obj.get("chooser")
    if chooser is None:
        from gituser.adapters.terminal.prompt import ClickChooser

        chooser = ClickChooser()
        ctx.obj["chooser"] = chooser
    return chooser


def fail(error: Exception | str, as_json: bool) -> NoReturn:
    """Report a fatal error and exit 1."""
    if as_json:
        payload = {"error": str(error)}
        partial = getattr(error, "partial_result", None)
        if partial is not None:
            payload["partial"] = partial.to_dict()
        click.echo(json.dumps(payload, indent=2))
    else:
        click.secho(f"❌ {error}", fg="red")
    sys.exit(1)
