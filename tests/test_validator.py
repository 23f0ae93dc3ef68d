"""Tests for the CommitValidator façade."""
from unittest.mock import Mock

import pytest

from gitcommitguard.config import Config
from gitcommitguard.errors import PresetNotFoundError
from gitcommitguard.models import ValidationResult
from gitcommitguard.presets import Preset, PresetRegistry, build_default_registry
from gitcommitguard.validator import CommitValidator


def test_resolves_preset_from_config():
    validator = CommitValidator(Config(preset="conventional-commits"))
    assert validator.preset_name == "conventional-commits"
    assert validator.preset_description == "Enforce Conventional Commits specification"


def test_unknown_preset_is_not_replaced_by_default():
    with pytest.raises(PresetNotFoundError) as exc_info:
        CommitValidator(Config(preset="does-not-exist"))
    assert exc_info.value.available_presets == ["folder-based", "conventional-commits"]


def test_validate_delegates_to_preset():
    preset = Mock(spec=Preset)
    preset.validate_files.return_value = ValidationResult(common_path="src")
    registry = PresetRegistry()
    registry.register("mock", preset)
    config = Config(preset="mock")

    result = CommitValidator(config, registry).validate(["src/a.py"])

    preset.validate_files.assert_called_once_with(["src/a.py"], config)
    assert result.common_path == "src"


def test_validate_folder_based():
    validator = CommitValidator(Config(depth=2))
    result = validator.validate(["src/a/x.ts", "src/a/y.ts"])
    assert result.valid
    assert validator.get_commit_prefix(result) == "[src/a]"


def test_validate_commit_message():
    validator = CommitValidator(Config(preset="conventional-commits", types=["feat", "fix"]))
    result = validator.validate_commit_message("feat(api): add endpoint")
    assert result.valid
    assert validator.get_commit_prefix(result) == "feat(api)"
    assert not validator.validate_commit_message("update stuff").valid


def test_commit_prefix_from_bare_path():
    validator = CommitValidator(Config(), build_default_registry())
    assert validator.get_commit_prefix("src/core") == "[src/core]"
    assert validator.get_commit_prefix("") == "[root]"
    assert validator.get_commit_prefix(None) == "[config]"
    assert validator.get_commit_prefix(None, all_files_ignored=True) == "[config]"
    assert validator.get_commit_prefix("src", all_files_ignored=True) == "[config]"
