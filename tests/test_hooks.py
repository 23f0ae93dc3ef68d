"""Tests for hook installation."""
import os
from pathlib import Path

import pytest
from git import Repo

from gitcommitguard.hooks import (
    HOOK_MARKER,
    HOOKS,
    get_hooks_dir,
    install_hooks,
    installed_hooks,
    uninstall_hooks,
)


@pytest.fixture
def repo(git_repo):
    return Repo(git_repo)


def test_install_hooks(repo):
    written = install_hooks(repo)
    hooks_dir = get_hooks_dir(repo)

    assert sorted(p.name for p in written) == sorted(HOOKS)
    pre_commit = (hooks_dir / "pre-commit").read_text()
    assert pre_commit.startswith("#!/bin/sh\n")
    assert HOOK_MARKER in pre_commit
    assert "git-commit-guard check" in pre_commit
    if os.name != "nt":
        assert os.access(hooks_dir / "pre-commit", os.X_OK)
    assert all(installed_hooks(repo).values())


def test_install_is_repeatable(repo):
    install_hooks(repo)
    assert len(install_hooks(repo)) == len(HOOKS)


def test_foreign_hook_is_kept_without_force(repo):
    hooks_dir = get_hooks_dir(repo)
    hooks_dir.mkdir(parents=True, exist_ok=True)
    (hooks_dir / "pre-commit").write_text("#!/bin/sh\necho custom\n")

    written = install_hooks(repo)
    assert "pre-commit" not in [p.name for p in written]
    assert "echo custom" in (hooks_dir / "pre-commit").read_text()
    assert installed_hooks(repo)["pre-commit"] is False


def test_force_backs_up_and_uninstall_restores(repo):
    hooks_dir = get_hooks_dir(repo)
    hooks_dir.mkdir(parents=True, exist_ok=True)
    (hooks_dir / "pre-commit").write_text("#!/bin/sh\necho custom\n")

    install_hooks(repo, force=True)
    assert (hooks_dir / "pre-commit.bak").exists()
    assert installed_hooks(repo)["pre-commit"] is True

    removed = uninstall_hooks(repo)
    assert len(removed) == len(HOOKS)
    assert "echo custom" in (hooks_dir / "pre-commit").read_text()
    assert not (hooks_dir / "commit-msg").exists()
    assert not any(installed_hooks(repo).values())


def test_hooks_path_setting(repo, git_repo):
    with repo.config_writer() as writer:
        writer.set_value("core", "hooksPath", ".githooks")

    assert get_hooks_dir(repo).resolve() == (git_repo / ".githooks").resolve()
    install_hooks(repo)
    assert (git_repo / ".githooks" / "commit-msg").exists()


def test_hooks_dir_defaults_to_git_dir(repo):
    with repo.config_reader() as reader:
        assert not reader.has_option("core", "hooksPath")
    assert get_hooks_dir(repo) == Path(repo.git_dir) / "hooks"
