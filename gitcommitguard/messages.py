"""User-facing message tables (English and Korean)."""
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Messages:
    # pre-commit
    commit_blocked: str
    validation_passed: str
    commit_successful: str
    no_files_staged: str
    all_files_ignored: str
    multiple_folders: str
    folder_group: str
    too_many_files: str
    rule: str
    depth: str
    solution: str
    quick_fixes: str
    unstage: str
    summary: str
    staged_files: str
    required_depth: str
    multiple_folders_detected: str
    action_required: str
    # commit-msg, folder-based
    commit_msg_blocked: str
    commit_msg_valid: str
    commit_msg_special: str
    commit_msg_invalid: str
    commit_msg_missing_prefix: str
    commit_msg_invalid_prefix: str
    commit_msg_too_short: str
    commit_msg_missing_description: str
    commit_msg_rule: str
    commit_msg_example: str
    commit_msg_valid_prefixes: str
    commit_msg_depth_info: str
    # commit-msg, conventional commits
    cc_empty: str
    cc_bad_format: str
    cc_format: str
    cc_invalid_type: str
    cc_did_you_mean: str
    cc_scope_required: str
    cc_invalid_scope: str
    cc_missing_description: str
    cc_lowercase: str


EN_MESSAGES = Messages(
    commit_blocked="COMMIT BLOCKED - Folder Rule Violation",
    validation_passed="Validation passed",
    commit_successful="Commit successful - logs cleared",
    no_files_staged="No files staged for commit",
    all_files_ignored="All staged files are in the ignore list",
    multiple_folders="Files from multiple folders detected (depth={depth}):",
    folder_group="[{folder}] ({count} files): {files}",
    too_many_files="Too many files staged: {count} (limit: {limit})",
    rule="RULE: All staged files must be in the same folder path",
    depth="DEPTH: {depth} levels",
    solution="SOLUTION: Unstage files from other folders or commit them separately",
    quick_fixes="Quick fixes:",
    unstage="Unstage",
    summary="Error summary:",
    staged_files="Staged files: {count}",
    required_depth="Required depth: {depth}",
    multiple_folders_detected="Folders detected: {count}",
    action_required="Action required: Unstage conflicting files",
    commit_msg_blocked="COMMIT BLOCKED - Invalid Commit Message Format",
    commit_msg_valid="Commit message format valid",
    commit_msg_special="Special commit type detected, skipping validation",
    commit_msg_invalid="Commit message does not follow the required format",
    commit_msg_missing_prefix="Missing required prefix (e.g., {example_prefix}, [root], [config])",
    commit_msg_invalid_prefix="Invalid prefix format - must be {depth_format}",
    commit_msg_too_short="Commit message description is too short (minimum {min_length} characters)",
    commit_msg_missing_description="Missing commit message description after prefix",
    commit_msg_rule="RULE: Commit messages must start with [prefix] followed by a description",
    commit_msg_example="EXAMPLE: {example_prefix} Add new feature",
    commit_msg_valid_prefixes="VALID PREFIXES: {depth_format}, [root], [config]",
    commit_msg_depth_info="CONFIGURED DEPTH: {depth} levels (e.g., {example_prefix})",
    cc_empty="Commit message is empty",
    cc_bad_format='Commit message "{message}" does not follow Conventional Commits format: missing or invalid type',
    cc_format="FORMAT: <type>(<scope>): <description>, TYPES: {types}",
    cc_invalid_type='Invalid type: "{type}" (allowed types: {types})',
    cc_did_you_mean="Did you mean: {suggestions}?",
    cc_scope_required="Scope is required: <type>(<scope>): <description>",
    cc_invalid_scope='Invalid scope: "{scope}" (allowed scopes: {scopes})',
    cc_missing_description="Missing description after <type>(<scope>):",
    cc_lowercase="Description should start with a lowercase letter",
)

KO_MESSAGES = Messages(
    commit_blocked="커밋 차단 - 폴더 규칙 위반",
    validation_passed="검증 통과",
    commit_successful="커밋 성공 - 로그 삭제됨",
    no_files_staged="커밋할 파일이 없습니다",
    all_files_ignored="모든 staged 파일이 무시 목록에 있습니다",
    multiple_folders="여러 폴더의 파일이 감지됨 (depth={depth}):",
    folder_group="[{folder}] ({count}개 파일): {files}",
    too_many_files="staged 파일이 너무 많습니다: {count}개 (제한: {limit})",
    rule="규칙: 모든 staged 파일은 같은 폴더 경로에 있어야 합니다",
    depth="DEPTH: {depth} 레벨",
    solution="해결방법: 다른 폴더의 파일을 unstage하거나 별도로 커밋하세요",
    quick_fixes="빠른 해결:",
    unstage="Unstage",
    summary="에러 요약:",
    staged_files="Staged 파일: {count}개",
    required_depth="필요 depth: {depth}",
    multiple_folders_detected="감지된 폴더 수: {count}",
    action_required="필요한 작업: 충돌하는 파일 unstage",
    commit_msg_blocked="커밋 차단 - 잘못된 커밋 메시지 형식",
    commit_msg_valid="커밋 메시지 형식이 올바릅니다",
    commit_msg_special="특수 커밋이 감지되어 검증을 건너뜁니다",
    commit_msg_invalid="커밋 메시지가 필요한 형식을 따르지 않습니다",
    commit_msg_missing_prefix="필수 prefix가 없습니다 (예: {example_prefix}, [root], [config])",
    commit_msg_invalid_prefix="잘못된 prefix 형식 - {depth_format} 형식이어야 합니다",
    commit_msg_too_short="커밋 메시지 설명이 너무 짧습니다 (최소 {min_length}자)",
    commit_msg_missing_description="Prefix 뒤에 커밋 메시지 설명이 없습니다",
    commit_msg_rule="규칙: 커밋 메시지는 [prefix]로 시작하고 설명이 따라와야 합니다",
    commit_msg_example="예시: {example_prefix} 새로운 기능 추가",
    commit_msg_valid_prefixes="유효한 PREFIX: {depth_format}, [root], [config]",
    commit_msg_depth_info="설정된 DEPTH: {depth} 레벨 (예: {example_prefix})",
    cc_empty="커밋 메시지가 비어 있습니다",
    cc_bad_format='커밋 메시지 "{message}"가 Conventional Commits 형식이 아닙니다: type이 없거나 잘못되었습니다',
    cc_format="형식: <type>(<scope>): <description>, TYPES: {types}",
    cc_invalid_type='잘못된 type: "{type}" (허용된 type: {types})',
    cc_did_you_mean="혹시 이것을 의도했나요: {suggestions}?",
    cc_scope_required="scope가 필요합니다: <type>(<scope>): <description>",
    cc_invalid_scope='잘못된 scope: "{scope}" (허용된 scope: {scopes})',
    cc_missing_description="<type>(<scope>): 뒤에 설명이 없습니다",
    cc_lowercase="설명은 소문자로 시작하는 것이 좋습니다",
)

_MESSAGES = {"en": EN_MESSAGES, "ko": KO_MESSAGES}


def get_messages(language: str = "en") -> Messages:
    """Return the message table for ``language``, falling back to English."""
    return _MESSAGES.get(language, EN_MESSAGES)


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def format_message(template: str, **params: Any) -> str:
    """Fill ``{name}`` placeholders; unknown placeholders are left as-is.

    Substituted values are inserted verbatim, so a value that itself looks
    like a placeholder is never expanded again.
    """
    return template.format_map(_KeepMissing(params))
