"""Tests for the Conventional Commits preset."""
import pytest

from gitcommitguard.config import Config
from gitcommitguard.messages import EN_MESSAGES
from gitcommitguard.presets.conventional_commits import ConventionalCommitsPreset, suggest_types


@pytest.fixture
def preset():
    return ConventionalCommitsPreset()


@pytest.fixture
def config():
    return Config(preset="conventional-commits", types=["feat", "fix"])


def test_valid_message_with_scope(preset, config):
    result = preset.validate_commit_message("feat(api): add endpoint", config)
    assert result.valid
    assert result.prefix == "feat(api)"
    assert preset.get_commit_prefix(result, config) == "feat(api)"


def test_valid_message_without_scope(preset, config):
    result = preset.validate_commit_message("fix: resolve memory leak", config)
    assert result.valid
    assert result.prefix == "fix"


def test_breaking_change_marker(preset, config):
    result = preset.validate_commit_message("feat(api)!: drop v1 endpoints", config)
    assert result.valid
    assert result.prefix == "feat(api)"


def test_only_subject_line_is_checked(preset, config):
    message = "fix: handle empty input\n\nUpdate Stuff in the body: anything goes"
    assert preset.validate_commit_message(message, config).valid


def test_missing_type(preset, config):
    result = preset.validate_commit_message("update stuff", config)
    assert not result.valid
    assert "missing or invalid type" in result.errors[0]
    assert '"update stuff"' in result.errors[0]
    assert "TYPES: feat, fix" in result.errors[1]
    assert result.prefix is None


def test_empty_message(preset, config):
    result = preset.validate_commit_message("   \n", config)
    assert not result.valid
    assert result.errors[0] == EN_MESSAGES.cc_empty


def test_unknown_type_suggests_alternatives(preset):
    config = Config(preset="conventional-commits")
    result = preset.validate_commit_message("feature: add login", config)
    assert not result.valid
    assert result.errors[0].startswith('Invalid type: "feature"')
    assert "Did you mean: feat, fix?" in result.errors[0]
    assert result.prefix == "feature"


def test_type_is_case_sensitive(preset, config):
    result = preset.validate_commit_message("Feat: add login", config)
    assert not result.valid
    assert "Did you mean: feat" in result.errors[0]


def test_missing_description(preset, config):
    result = preset.validate_commit_message("feat(api):", config)
    assert not result.valid
    assert result.errors == [EN_MESSAGES.cc_missing_description]


def test_uppercase_description_is_a_warning(preset, config):
    result = preset.validate_commit_message("feat: Add login", config)
    assert result.valid
    assert result.warnings == [EN_MESSAGES.cc_lowercase]


def test_require_scope(preset):
    config = Config(types=["feat"], require_scope=True)
    assert not preset.validate_commit_message("feat: add login", config).valid
    assert preset.validate_commit_message("feat(auth): add login", config).valid


def test_allowed_scopes(preset):
    config = Config(types=["feat"], scopes=["api", "ui"])
    result = preset.validate_commit_message("feat(db): add index", config)
    assert not result.valid
    assert result.errors == ['Invalid scope: "db" (allowed scopes: api, ui)']
    assert preset.validate_commit_message("feat(ui): add button", config).valid


def test_errors_accumulate(preset):
    config = Config(types=["feat"], scopes=["api"])
    result = preset.validate_commit_message("chore(db):", config)
    assert len(result.errors) == 3


def test_files_are_never_rejected(preset, config):
    files = ["src/a/x.py", "docs/b.md", "README.md"]
    result = preset.validate_files(files, config)
    assert result.valid
    assert result.files == files
    assert result.stats.total_files == 3
    assert preset.get_commit_prefix(result, config) == ""


def test_suggest_types_limit():
    assert suggest_types("c", ["ci", "chore", "ch", "cx"]) == ["ci", "chore", "ch"]
    assert suggest_types("zzz", ["feat", "fix"]) == []
