"""
Tests for the identity catalog — directory scanning and identity loading.
"""

import os
import shutil
from pathlib import Path

import pytest

from gituser.adapters.mock import MockConfigStore
from gituser.core.errors import (
    CatalogUnreadable,
    IdentityUnreadable,
    MissingLocalIdentity,
    UnknownIdentity,
)
from gituser.core.services.catalog import iter_identity_files, scan_catalog


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("[user]\n")
    return path


class TestIterIdentityFiles:
    def test_breadth_first(self, tmp_path: Path):
        _touch(tmp_path / "b" / "deep" / "three@example.org")
        _touch(tmp_path / "a" / "two@example.org")
        _touch(tmp_path / "one@example.org")
        names = [p.name for p in iter_identity_files(tmp_path)]
        assert names == ["one@example.org", "two@example.org", "three@example.org"]

    def test_skips_hidden(self, tmp_path: Path):
        _touch(tmp_path / ".hidden")
        _touch(tmp_path / ".git" / "config")
        _touch(tmp_path / "visible@example.org")
        assert [p.name for p in iter_identity_files(tmp_path)] == ["visible@example.org"]

    def test_follows_file_symlinks(self, tmp_path: Path):
        target = _touch(tmp_path / "elsewhere" / "real")
        root = tmp_path / "catalog"
        root.mkdir()
        os.symlink(target, root / "jdoe@github.com")
        assert [p.name for p in iter_identity_files(root)] == ["jdoe@github.com"]

    def test_follows_directory_symlinks(self, tmp_path: Path):
        shared = tmp_path / "shared"
        _touch(shared / "team@gitlab.com")
        root = tmp_path / "catalog"
        root.mkdir()
        os.symlink(shared, root / "linked")
        assert [p.name for p in iter_identity_files(root)] == ["team@gitlab.com"]

    def test_symlink_loop_terminates(self, tmp_path: Path):
        root = tmp_path / "catalog"
        _touch(root / "sub" / "jdoe@github.com")
        os.symlink(root, root / "sub" / "loop")
        os.symlink(root / "sub", root / "again")
        names = [p.name for p in iter_identity_files(root)]
        assert names == ["jdoe@github.com"]

    def test_is_lazy(self, tmp_path: Path):
        _touch(tmp_path / "one@example.org")
        files = iter_identity_files(tmp_path)
        assert next(files).name == "one@example.org"

    def test_missing_root(self, tmp_path: Path):
        with pytest.raises(CatalogUnreadable):
            list(iter_identity_files(tmp_path / "nope"))


class TestScanCatalog:
    def test_keys_from_basenames(self, catalog_dir: Path):
        catalog = scan_catalog(catalog_dir)
        assert set(catalog) == {
            "jdoe@github.com", "flurrycat@github.com", "johnd@gitlab.com", "local",
        }
        assert catalog["johnd@gitlab.com"].source == catalog_dir / "work" / "johnd@gitlab.com"
        assert catalog.root == catalog_dir

    def test_forge_keys_exclude_local(self, catalog_dir: Path):
        catalog = scan_catalog(catalog_dir)
        assert "local" not in catalog.forge_keys
        assert catalog["local"].is_local

    def test_duplicate_last_scanned_wins(self, tmp_path: Path, caplog):
        _touch(tmp_path / "jdoe@github.com")
        deeper = _touch(tmp_path / "z" / "jdoe@github.com")
        catalog = scan_catalog(tmp_path)
        assert catalog["jdoe@github.com"].source == deeper
        assert "Duplicate identity" in caplog.text

    def test_root_not_a_directory(self, tmp_path: Path):
        f = _touch(tmp_path / "file")
        with pytest.raises(CatalogUnreadable):
            scan_catalog(f)

    def test_missing_root(self, tmp_path: Path):
        with pytest.raises(CatalogUnreadable):
            scan_catalog(tmp_path / "missing")

    def test_empty_catalog(self, tmp_path: Path):
        assert len(scan_catalog(tmp_path)) == 0

    def test_catalog_is_read_only(self, catalog_dir: Path):
        catalog = scan_catalog(catalog_dir)
        with pytest.raises(TypeError):
            catalog["new@example.org"] = catalog["local"]  # type: ignore[index]


class TestLoadIdentity:
    def test_load(self, catalog, store):
        identity = catalog.load("jdoe@github.com", store)
        assert identity.name == "John Doe"
        assert identity.email == "jdoe@users.noreply.github.com"

    def test_missing_local(self, catalog, store):
        from gituser.core.services.catalog import IdentityCatalog

        without_local = IdentityCatalog({k: v for k, v in catalog.items() if k != "local"})
        with pytest.raises(MissingLocalIdentity):
            without_local.load("local", store)

    def test_unknown(self, catalog, store):
        with pytest.raises(UnknownIdentity):
            catalog.load("nobody@example.org", store)

    def test_incomplete_file(self, catalog, tmp_path: Path):
        empty_store = MockConfigStore()
        empty_store.add_file(catalog["local"].source, {"user.name": "Only Name"})
        with pytest.raises(IdentityUnreadable):
            catalog.load("local", empty_store)

    @pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
    def test_load_with_git(self, catalog_dir: Path):
        from gituser.adapters.vcs.git import GitConfigStore

        catalog = scan_catalog(catalog_dir)
        identity = catalog.load("johnd@gitlab.com", GitConfigStore())
        assert identity.name == "John D."
        assert identity.email == "johnd@example.com"
