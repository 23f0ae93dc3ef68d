"""Installation of git hook scripts.

Each hook is a small shell script that calls back into the
``git-commit-guard`` console script. Scripts written by this module carry a
marker line so they can be told apart from hooks written by other tools.
"""
import os
import shutil
import stat
from pathlib import Path
from typing import Dict, List, Optional

from git import Repo

HOOK_MARKER = "# installed by git-commit-guard"

HOOKS: Dict[str, str] = {
    "pre-commit": 'exec git-commit-guard check\n',
    "prepare-commit-msg": 'exec git-commit-guard prepare-commit-msg "$1" "$2" "$3"\n',
    "commit-msg": 'exec git-commit-guard commit-msg "$1"\n',
    "post-commit": 'exec git-commit-guard post-commit\n',
}


def hook_script(command: str) -> str:
    return f"#!/bin/sh\n{HOOK_MARKER}\n{command}"


def get_hooks_dir(repo: Repo) -> Path:
    """Hooks directory, honouring ``core.hooksPath`` when it is set."""
    reader = repo.config_reader()
    hooks_path: Optional[str] = reader.get_value("core", "hooksPath", default="")
    if hooks_path:
        path = Path(os.path.expanduser(str(hooks_path)))
        if not path.is_absolute():
            path = Path(repo.working_tree_dir) / path
        return path
    return Path(repo.git_dir) / "hooks"


def is_own_hook(path: Path) -> bool:
    try:
        return HOOK_MARKER in path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False


def install_hooks(repo: Repo, force: bool = False) -> List[Path]:
    """Write the hook scripts into the repository.

    Foreign hooks are left untouched unless ``force`` is set, in which case
    they are backed up to ``<name>.bak`` first.

    Returns:
        List[Path]: Hooks that were written
    """
    hooks_dir = get_hooks_dir(repo)
    hooks_dir.mkdir(parents=True, exist_ok=True)

    installed = []
    for name, command in HOOKS.items():
        dest = hooks_dir / name
        if dest.exists() and not is_own_hook(dest):
            if not force:
                continue
            shutil.copy2(dest, dest.with_suffix(".bak"))

        dest.write_text(hook_script(command), encoding="utf-8")
        # Make executable on Unix
        if os.name != "nt":
            dest.chmod(dest.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        installed.append(dest)
    return installed


def uninstall_hooks(repo: Repo) -> List[Path]:
    """Remove hooks written by :func:`install_hooks`, restoring backups."""
    hooks_dir = get_hooks_dir(repo)
    removed = []
    for name in HOOKS:
        dest = hooks_dir / name
        if dest.exists() and is_own_hook(dest):
            dest.unlink()
            backup = dest.with_suffix(".bak")
            if backup.exists():
                backup.rename(dest)
            removed.append(dest)
    return removed


def installed_hooks(repo: Repo) -> Dict[str, bool]:
    """Map of hook name -> whether this tool's script is installed."""
    hooks_dir = get_hooks_dir(repo)
    return {name: is_own_hook(hooks_dir / name) for name in HOOKS}
