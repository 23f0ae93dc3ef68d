"""Conventional Commits preset.

Format: ``<type>(<scope>): <description>`` on the first line, for example
``feat(api): add endpoint`` or ``fix: resolve memory leak``. A ``!`` before
the colon (``feat(api)!: drop v1``) marks a breaking change. Body lines are
not inspected and no length limit is applied.
"""
import re
from typing import List, Union

from ..config import Config
from ..messages import format_message, get_messages
from ..models import CommitMsgValidationResult, ValidationResult
from .base import Preset

SUBJECT_PATTERN = re.compile(
    r"^(?P<type>[^\s():!]+)(?:\((?P<scope>[^()]+)\))?(?P<breaking>!)?:(?: (?P<description>.*))?$"
)
MAX_SUGGESTIONS = 3


def suggest_types(token: str, types: List[str]) -> List[str]:
    """Pick allowed types that look like a mistyped ``token``."""
    lowered = token.lower()
    suggestions = [
        t for t in types
        if t.lower() == lowered
        or (lowered and t.lower().startswith(lowered[0]))
        or (lowered and lowered in t.lower())
        or t.lower() in lowered
    ]
    return suggestions[:MAX_SUGGESTIONS]


class ConventionalCommitsPreset(Preset):
    """Validates commit messages against the Conventional Commits grammar."""

    name = "conventional-commits"
    description = "Enforce Conventional Commits specification"

    def validate_files(self, files: List[str], config: Config) -> ValidationResult:
        # Any combination of files may be committed together
        return self._accept_all(files)

    def validate_commit_message(self, message: str, config: Config) -> CommitMsgValidationResult:
        messages = get_messages(config.language)
        result = CommitMsgValidationResult()
        types = ", ".join(config.types)

        subject = message.strip().splitlines()[0].strip() if message.strip() else ""
        if not subject:
            result.errors.append(messages.cc_empty)
            result.errors.append(format_message(messages.cc_format, types=types))
            return result

        match = SUBJECT_PATTERN.match(subject)
        if not match:
            result.errors.append(format_message(messages.cc_bad_format, message=subject))
            result.errors.append(format_message(messages.cc_format, types=types))
            return result

        commit_type, scope = match.group("type"), match.group("scope")
        description = (match.group("description") or "").strip()

        if commit_type not in config.types:
            error = format_message(messages.cc_invalid_type, type=commit_type, types=types)
            suggestions = suggest_types(commit_type, config.types)
            if suggestions:
                error += " " + format_message(messages.cc_did_you_mean, suggestions=", ".join(suggestions))
            result.errors.append(error)

        if scope is None and config.require_scope:
            result.errors.append(messages.cc_scope_required)
        elif scope is not None and config.scopes and scope not in config.scopes:
            result.errors.append(
                format_message(messages.cc_invalid_scope, scope=scope, scopes=", ".join(config.scopes))
            )

        if not description:
            result.errors.append(messages.cc_missing_description)
        elif description[0].isupper():
            result.warnings.append(messages.cc_lowercase)

        result.prefix = f"{commit_type}({scope})" if scope is not None else commit_type
        return result

    def get_commit_prefix(
        self,
        result: Union[ValidationResult, CommitMsgValidationResult],
        config: Config,
    ) -> str:
        if isinstance(result, CommitMsgValidationResult):
            return result.prefix or ""
        return ""
