"""Tests for result models."""
from gitcommitguard.models import CommitMsgValidationResult, ValidationResult, ValidationStats


def test_valid_follows_errors():
    result = ValidationResult()
    assert result.valid
    result.errors.append("boom")
    assert not result.valid


def test_valid_is_serialized():
    assert ValidationResult().model_dump()["valid"] is True
    assert CommitMsgValidationResult(errors=["x"]).model_dump()["valid"] is False


def test_all_files_ignored():
    assert not ValidationResult().all_files_ignored
    assert not ValidationResult(stats=ValidationStats()).all_files_ignored
    stats = ValidationStats(total_files=2, ignored_files=2)
    assert ValidationResult(stats=stats).all_files_ignored
    stats = ValidationStats(total_files=2, ignored_files=1, filtered_files=1)
    assert not ValidationResult(stats=stats).all_files_ignored
