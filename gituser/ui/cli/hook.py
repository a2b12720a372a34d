"""
CLI commands for running gituser as a git post-checkout hook.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from gituser.core.errors import GitUserError
from gituser.core.models.outcome import RepositoryPass
from gituser.ui.cli._context import fail, get_settings, get_store

logger = logging.getLogger(__name__)


@click.group()
def hook() -> None:
    """Git hook — set identities automatically on fresh clones."""


@hook.command("run")
@click.argument("previous_head")
@click.argument("new_head", required=False, default="")
@click.argument("branch_flag", required=False, default="1")
@click.pass_context
def run_hook(ctx: click.Context, previous_head: str, new_head: str, branch_flag: str) -> None:
    """Post-checkout entry point (arguments as passed by git).

    Acts only on the checkout that completes a clone. Never prompts:
    repositories without an unambiguous identity are left untouched.
    """
    from gituser.core.use_cases.apply import run_apply
    from gituser.core.use_cases.hook import is_fresh_checkout

    if not is_fresh_checkout(previous_head):
        logger.debug("Not a fresh checkout (%s → %s), nothing to do", previous_head, new_head)
        return

    settings = get_settings(ctx)
    try:
        result = run_apply(
            Path.cwd(),
            get_store(ctx),
            settings=settings,
            chooser=None,
            identities_dir=ctx.obj.get("identities_dir"),
        )
    except GitUserError as e:
        if e.partial_result is not None:
            _report(e.partial_result.passes)
        fail(e, as_json=False)

    _report(result.passes)


def _report(passes: list[RepositoryPass]) -> None:
    """One line per repository the hook touched or had to leave alone."""
    for repo in passes:
        if repo.status == "applied" and repo.identity:
            click.secho(f"✅ {repo.display_path}: {repo.identity.key}", fg="green")
        elif repo.status == "skipped":
            click.secho(
                f"⚠️  {repo.display_path}: no identity set "
                f"({', '.join(repo.outcome.candidates) if repo.outcome else 'no candidates'}). "
                "Run 'gituser apply' in it to choose one.",
                fg="yellow",
            )


@hook.command("install")
@click.argument(
    "path", required=False, default=".",
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option(
    "--template-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
    help="Install into a git template directory instead (applies to new clones).",
)
@click.option("--force", is_flag=True, help="Replace an existing post-checkout hook.")
@click.pass_context
def install(ctx: click.Context, path: Path, template_dir: Path | None, force: bool) -> None:
    """Install the post-checkout hook into a repository or template dir."""
    from gituser.core.use_cases.hook import hooks_dir_for, install_hook

    try:
        if template_dir is not None:
            hooks_dir = template_dir.expanduser() / "hooks"
        else:
            hooks_dir = hooks_dir_for(get_store(ctx), path)
        result = install_hook(hooks_dir, force=force)
    except GitUserError as e:
        fail(e, as_json=False)

    verb = "Replaced" if result.replaced else "Installed"
    click.secho(f"✅ {verb} hook: {result.path}", fg="green", bold=True)
    if template_dir is not None:
        click.echo(f"   Enable it with: git config --global init.templateDir {template_dir}")
