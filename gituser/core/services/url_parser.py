"""
Remote URL parser — splits a remote URL into (user, authority, path).

Recognised shapes::

    https://github.com/jdoe/repo.git       scheme://authority/user/repo
    ssh://git@github.com/jdoe/repo.git     scheme://user@authority/user/repo
    git://example.org:9418/jdoe/repo       (any scheme works the same way)
    git@github.com:jdoe/repo.git           user@authority:user/repo (implicit ssh)

The URL goes through one generic URI decomposition (RFC 3986,
appendix B). In the implicit-ssh shape the "scheme" is ``git@github.com``,
which is how that shape is told apart. Nothing is validated: a URL of
any other shape yields whatever fields fall out, possibly empty.
"""

from __future__ import annotations

import re

from gituser.core.models.remote import RemoteDescriptor

_URI = re.compile(
    r"^(?:(?P<scheme>[^:/?#]+):)?"
    r"(?://(?P<authority>[^/?#]*))?"
    r"(?P<path>[^?#]*)"
    r"(?:\?(?P<query>[^#]*))?"
    r"(?:#(?P<fragment>.*))?"
)


def parse_url(url: str) -> tuple[str | None, str, str]:
    """Decompose *url* into ``(user, authority, path)``.

    ``user`` is the first path segment, or None when the path has only
    one segment. ``path`` is the rest, always starting with ``/``.

    >>> parse_url("git@github.com:jdoe/myrepo.git")
    ('jdoe', 'github.com', '/myrepo.git')
    >>> parse_url("https://gitlab.com/johnd/gituser")
    ('johnd', 'gitlab.com', '/gituser')
    """
    m = _URI.match(url.strip())
    # the pattern matches any string; every group is optional
    assert m is not None
    scheme = m.group("scheme") or ""
    authority = m.group("authority") or ""
    path = m.group("path") or ""

    if "@" in scheme:
        authority = scheme.rsplit("@", 1)[1]
    elif "@" in authority:
        authority = authority.rsplit("@", 1)[1]

    if not path.startswith("/"):
        path = "/" + path

    head, sep, tail = path[1:].partition("/")
    if sep:
        return head, authority, "/" + tail
    return None, authority, path


def parse_remote(name: str, url: str) -> RemoteDescriptor:
    """Build a RemoteDescriptor for remote *name*."""
    user, authority, path = parse_url(url)
    return RemoteDescriptor(name=name, url=url, user=user, authority=authority, path=path)


def parse_remotes(remotes: dict[str, str]) -> dict[str, RemoteDescriptor]:
    """Parse every ``{name: url}`` pair, keeping order."""
    return {name: parse_remote(name, url) for name, url in remotes.items()}
