"""Folder-based preset.

Enforces that all staged files live in the same folder path up to a
configured depth, and derives a ``[folder/path]`` commit prefix from it.

    depth=2: src/components/Button.tsx, src/components/Input.tsx -> [src/components]
    depth=1: src/utils.py, src/helpers.py -> [src]
"""
import re
from typing import Dict, List, Optional, Tuple, Union

from ..config import Config
from ..glob import match_any
from ..messages import format_message, get_messages
from ..models import CommitMsgValidationResult, ValidationResult, ValidationStats
from .base import Preset

MIN_DESCRIPTION_LENGTH = 3
PREFIX_PATTERN = re.compile(r"^\[([^\]]*)\]\s*(.*)$", re.DOTALL)

EXAMPLE_FOLDERS = ["src", "components", "Button", "tests", "hooks"]
GENERIC_FOLDERS = ["folder", "path", "to", "file"]


def split_path(path: str) -> List[str]:
    """Split a repository-relative path into segments."""
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return [part for part in path.strip("/").split("/") if part]


def truncate_path(path: str, depth: int) -> str:
    """Cut ``path`` to its first ``depth`` folders.

    The filename never counts as a folder, so ``src/file.py`` truncates to
    ``src`` at any depth and ``file.py`` truncates to ``""``.
    """
    parts = split_path(path)
    keep = min(len(parts) - 1, depth)
    if keep <= 0:
        return ""
    return "/".join(parts[:keep])


class FolderBasedPreset(Preset):
    """Requires every non-ignored staged file to share one truncated path."""

    name = "folder-based"
    description = "Enforce folder-based commit rules with automatic prefix generation"

    def _override_depth(self, path: str, overrides: Dict[str, int]) -> Optional[int]:
        # Longest prefix first; ties broken lexically so key order never matters
        for prefix in sorted(overrides, key=lambda p: (-len(p), p)):
            if path == prefix or path.startswith(prefix + "/"):
                return overrides[prefix]
        return None

    def _detect_depth(self, path: str, max_depth: int) -> int:
        for depth in range(1, max_depth + 1):
            if truncate_path(path, depth):
                return depth
        return max_depth

    def depth_for_file(self, path: str, config: Config) -> int:
        """Resolve the effective depth for one file."""
        override = self._override_depth("/".join(split_path(path)), config.depth_overrides)
        if override is not None:
            return override
        if config.depth == "auto":
            return self._detect_depth(path, config.max_depth)
        return config.depth

    def _partition(self, files: List[str], patterns: List[str]) -> Tuple[List[str], List[str]]:
        candidates, ignored = [], []
        for path in files:
            (ignored if match_any(path, patterns) else candidates).append(path)
        return candidates, ignored

    def validate_files(self, files: List[str], config: Config) -> ValidationResult:
        messages = get_messages(config.language)
        candidates, ignored = self._partition(files, config.ignore_paths)

        result = ValidationResult(
            files=list(files),
            stats=ValidationStats(
                total_files=len(files),
                filtered_files=len(candidates),
                ignored_files=len(ignored),
            ),
        )

        if not candidates:
            if files:
                result.warnings.append(messages.all_files_ignored)
            return result

        groups: Dict[str, List[str]] = {}
        for path in candidates:
            folder = truncate_path(path, self.depth_for_file(path, config))
            groups.setdefault(folder, []).append(path)

        result.groups = {folder: groups[folder] for folder in sorted(groups)}
        result.stats.unique_folders = len(groups)

        if len(groups) == 1:
            result.common_path = next(iter(groups))
        else:
            for folder, grouped in result.groups.items():
                result.errors.append(
                    format_message(
                        messages.folder_group,
                        folder=folder or "(root)",
                        count=len(grouped),
                        files=", ".join(grouped),
                    )
                )

        if config.max_files is not None and len(candidates) > config.max_files:
            result.errors.append(
                format_message(messages.too_many_files, count=len(candidates), limit=config.max_files)
            )

        return result

    def validate_commit_message(self, message: str, config: Config) -> CommitMsgValidationResult:
        """Validate the ``[prefix] description`` message format."""
        messages = get_messages(config.language)
        result = CommitMsgValidationResult()

        depth = config.max_depth if config.depth == "auto" else config.depth
        example_prefix = "[" + "/".join(EXAMPLE_FOLDERS[:depth]) + "]"
        depth_format = "[" + "/".join(GENERIC_FOLDERS[:depth]) + "]"

        subject = message.strip()
        match = PREFIX_PATTERN.match(subject)
        if not match:
            result.errors.append(messages.commit_msg_invalid)
            result.errors.append(
                format_message(messages.commit_msg_missing_prefix, example_prefix=example_prefix)
            )
            if subject:
                result.errors.append(messages.commit_msg_rule)
                result.errors.append(
                    format_message(messages.commit_msg_valid_prefixes, depth_format=depth_format)
                )
                result.errors.append(
                    format_message(
                        messages.commit_msg_depth_info, depth=depth, example_prefix=example_prefix
                    )
                )
            return result

        prefix, description = match.group(1).strip(), match.group(2).strip()
        if not prefix:
            result.errors.append(
                format_message(messages.commit_msg_invalid_prefix, depth_format=depth_format)
            )
            return result

        if not description:
            result.errors.append(messages.commit_msg_missing_description)
            result.errors.append(
                format_message(messages.commit_msg_example, example_prefix=example_prefix)
            )
            return result

        first_line = description.splitlines()[0].strip()
        if len(first_line) < MIN_DESCRIPTION_LENGTH:
            result.errors.append(
                format_message(messages.commit_msg_too_short, min_length=MIN_DESCRIPTION_LENGTH)
            )
            return result

        result.prefix = f"[{prefix}]"
        return result

    def get_commit_prefix(
        self,
        result: Union[ValidationResult, CommitMsgValidationResult],
        config: Config,
    ) -> str:
        if isinstance(result, CommitMsgValidationResult):
            return result.prefix or ""
        if result.all_files_ignored or result.common_path is None:
            return f"[{config.ignored_prefix}]"
        if not result.common_path:
            return f"[{config.root_prefix}]"
        return f"[{result.common_path}]"
