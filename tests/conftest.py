"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from gituser.adapters.mock import MockConfigStore
from gituser.core.models.identity import IdentityRecord
from gituser.core.services.catalog import IdentityCatalog

IDENTITIES = {
    "jdoe@github.com": ("John Doe", "jdoe@users.noreply.github.com"),
    "flurrycat@github.com": ("Flurry Cat", "flurrycat@example.org"),
    "johnd@gitlab.com": ("John D.", "johnd@example.com"),
    "local": ("John Local", "john@localhost"),
}

REMOTES = {
    "upstream": "https://github.com/c-alpha/gituser.git",
    "my-sandbox": "git@github.com:flurrycat/gituser.git",
    "origin": "git@github.com:jdoe/gituser.git",
    "playground": "https://gitlab.com/johnd/gituser",
}


def write_identity(path: Path, name: str, email: str) -> Path:
    """Write a git-config identity fragment."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(f"""\
        [user]
        \tname = {name}
        \temail = {email}
    """))
    return path


@pytest.fixture
def catalog_dir(tmp_path: Path) -> Path:
    """A catalog directory holding the standard identities."""
    root = tmp_path / "identities"
    for key, (name, email) in IDENTITIES.items():
        sub = "work" if key.endswith("gitlab.com") else ""
        write_identity(root / sub / key, name, email)
    return root


@pytest.fixture
def store() -> MockConfigStore:
    return MockConfigStore()


@pytest.fixture
def catalog(tmp_path: Path, store: MockConfigStore) -> IdentityCatalog:
    """In-memory catalog whose identity files live in the mock store."""
    root = tmp_path / "identities"
    records = {}
    for key, (name, email) in IDENTITIES.items():
        source = root / key
        store.add_file(source, {"user.name": name, "user.email": email})
        records[key] = IdentityRecord(key=key, source=source)
    return IdentityCatalog(records, root=root)


@pytest.fixture
def identities() -> dict[str, tuple[str, str]]:
    """Identity key → (name, email) of the standard catalog."""
    return dict(IDENTITIES)


@pytest.fixture
def remotes() -> dict[str, str]:
    """Remotes of a repository known to three identities, jdoe on origin."""
    return dict(REMOTES)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the caller's gituser environment out of the tests."""
    for var in (
        "GITUSER_IDENTITIES", "GITUSER_CONFIG",
        "GITUSER_LOG_LEVEL", "GITUSER_LOG_FILE", "GITUSER_LOG_FILE_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
