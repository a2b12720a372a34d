"""
Terminal prompt — interactive identity selection.

Lists the options numbered, then reads a choice with ``click.prompt``.
Answers can be typed as a number or as the identity key itself; while
the prompt is open, Tab completes and cycles through matching keys
when the interpreter has readline, GNU or libedit.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterator

import click

from gituser.adapters.base import Chooser

logger = logging.getLogger(__name__)


class ClickChooser(Chooser):
    """Chooser that asks the user on the terminal."""

    def choose(
        self,
        options: list[str],
        default: str | None = None,
        title: str = "",
    ) -> str:
        if not options:
            raise ValueError("Nothing to choose from")

        if title:
            click.secho(title, fg="cyan", bold=True)
        for i, option in enumerate(options, 1):
            marker = "  (default)" if option == default else ""
            click.echo(f"   {i}) {option}{marker}")

        numbered = [str(i) for i in range(1, len(options) + 1)]
        with _completion(options):
            answer = click.prompt(
                "Identity",
                type=click.Choice([*options, *numbered]),
                default=default,
                show_choices=False,
            )
        if answer in numbered and answer not in options:
            return options[int(answer) - 1]
        return answer


def _completer(options: list[str]) -> Callable[[str, int], str | None]:
    """readline completer cycling through the *options* starting with the text."""

    def complete(text: str, state: int) -> str | None:
        matches = [o for o in options if o.startswith(text)]
        return matches[state] if state < len(matches) else None

    return complete


def _tab_bindings(readline_doc: str | None) -> tuple[str, str]:
    """(install, restore) Tab bindings for the readline implementation.

    macOS builds of Python link libedit, which takes editline syntax
    and has no menu-complete, so Tab stays on ``rl_complete`` there.
    """
    if "libedit" in (readline_doc or ""):
        return "bind ^I rl_complete", "bind ^I rl_complete"
    return "tab: menu-complete", "tab: complete"


@contextlib.contextmanager
def _completion(options: list[str]) -> Iterator[None]:
    """Install a Tab completer over *options* for the duration of a prompt."""
    try:
        import readline
    except ImportError:
        # no line editing on this platform; plain prompt still works
        yield
        return

    install, restore = _tab_bindings(readline.__doc__)
    logger.debug("Tab binding for identity prompt: %s", install)
    previous = readline.get_completer()
    previous_delims = readline.get_completer_delims()
    readline.set_completer(_completer(options))
    # identity keys contain '@' and '.', keep them in one word
    readline.set_completer_delims(" \t\n")
    readline.parse_and_bind(install)
    try:
        yield
    finally:
        readline.set_completer(previous)
        readline.set_completer_delims(previous_delims)
        readline.parse_and_bind(restore)
