import os
from pathlib import Path

import pytest
from click.testing import CliRunner
from git import Repo

from gitcommitguard.config import Config


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep GIT_COMMIT_GUARD_* settings from the outer shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("GIT_COMMIT_GUARD_"):
            monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def cli_runner():
    """Fixture for testing CLI commands."""
    return CliRunner()


@pytest.fixture
def git_repo(tmp_path):
    """Create a temporary git repository with an initial commit."""
    repo = Repo.init(tmp_path)
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")

    readme = tmp_path / "README.md"
    readme.write_text("# test\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")
    return tmp_path


@pytest.fixture
def stage(git_repo):
    """Write and stage files in the temporary repository."""
    repo = Repo(git_repo)

    def _stage(*paths: str) -> None:
        for path in paths:
            target = Path(git_repo) / path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(f"content of {path}\n")
        repo.index.add(list(paths))

    return _stage


@pytest.fixture
def config():
    return Config()
