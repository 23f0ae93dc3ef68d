"""Git plumbing used by the hooks."""
import re
from pathlib import Path
from typing import Dict, List, Tuple, Union

import git
from git import Repo

from .errors import GitOperationError

SPECIAL_COMMIT_PREFIXES = ("Merge ", "Revert ", "Squash ", "fixup! ", "squash! ", "amend! ")
COMMIT_PREFIX_PATTERN = re.compile(r"^\[[^\]]+\]\s")
STATS_PREFIX_PATTERN = re.compile(r"^\[([^\]]+)\]")


def normalize_path(path: str) -> str:
    """Convert Windows separators to forward slashes."""
    return path.replace("\\", "/")


def open_repo(repo_path: Union[str, Path]) -> Repo:
    """Open the repository containing ``repo_path``."""
    try:
        return Repo(repo_path, search_parent_directories=True)
    except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
        raise GitOperationError(f"Not a git repository: {repo_path}", "open") from e


def get_staged_files(repo: Repo) -> List[str]:
    """List staged files (added, copied, modified, renamed, deleted).

    Paths are repository-relative, use forward slashes, and keep git's
    order with duplicates removed.
    """
    try:
        output = repo.git.diff("--cached", "--name-only", "-z", "--diff-filter=ACMRD")
    except git.GitCommandError as e:
        raise GitOperationError(f"Failed to list staged files: {e}", "diff") from e

    seen = set()
    files = []
    for path in output.split("\0"):
        path = normalize_path(path.strip("\n"))
        if path and path not in seen:
            seen.add(path)
            files.append(path)
    return files


def get_current_branch(repo: Repo) -> str:
    """Name of the checked-out branch, or an empty string when detached."""
    try:
        return repo.active_branch.name
    except TypeError:
        return ""


def read_commit_message(path: Union[str, Path]) -> str:
    """Read a commit message file, dropping git's ``#`` comment lines."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise GitOperationError(f"Error reading commit message file: {path}", "read") from e
    lines = [line for line in content.splitlines() if not line.startswith("#")]
    return "\n".join(lines).strip()


def is_special_commit(message: str) -> bool:
    """Merge, revert and squash/fixup commits are exempt from message rules."""
    first_line = message.lstrip().split("\n", 1)[0]
    return first_line.startswith(SPECIAL_COMMIT_PREFIXES)


def has_commit_prefix(message: str) -> bool:
    """Check if the message already starts with a ``[prefix] ``."""
    return bool(COMMIT_PREFIX_PATTERN.match(message))


def get_prefix_stats(repo: Repo, count: int) -> Tuple[Dict[str, int], List[str], int]:
    """Count ``[prefix]`` subjects over the last ``count`` commits.

    Returns:
        Tuple: prefix -> number of commits (most used first), subjects of
        commits without a prefix (truncated to 50 characters), and the
        number of commits inspected
    """
    if not repo.head.is_valid():
        return {}, [], 0

    try:
        commits = list(repo.iter_commits(max_count=count))
    except git.GitCommandError as e:
        raise GitOperationError(f"Failed to read commit history: {e}", "log") from e

    counts: Dict[str, int] = {}
    without_prefix = []
    for commit in commits:
        subject = commit.message.strip().split("\n", 1)[0]
        match = STATS_PREFIX_PATTERN.match(subject)
        if match:
            counts[match.group(1)] = counts.get(match.group(1), 0) + 1
        else:
            without_prefix.append(subject[:50])

    ordered = dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))
    return ordered, without_prefix, len(commits)
