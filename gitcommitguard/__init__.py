"""git-commit-guard: folder and commit-message policies for git hooks."""

__version__ = "0.1.0"
