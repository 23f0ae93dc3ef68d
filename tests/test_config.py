"""Tests for configuration functionality."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from gitcommitguard.config import DEFAULT_LOG_FILE, DEFAULT_TYPES, Config
from gitcommitguard.errors import ConfigurationError


def test_default_config():
    """Test default configuration values."""
    config = Config()
    assert config.preset == "folder-based"
    assert config.enabled is True
    assert config.depth == 2
    assert config.max_depth == 5
    assert config.max_files == 100
    assert config.ignore_paths == []
    assert config.depth_overrides == {}
    assert config.language == "en"
    assert config.types == DEFAULT_TYPES
    assert config.log_file == DEFAULT_LOG_FILE


def test_config_load_nonexistent(tmp_path):
    """Test loading configuration when file doesn't exist."""
    config = Config.load(tmp_path)
    assert config.preset == "folder-based"  # Should use defaults


def test_config_load_and_save(tmp_path):
    """Test saving and loading configuration."""
    config = Config(
        preset="conventional-commits",
        depth="auto",
        max_depth=4,
        ignore_paths=["*.md", "poetry.lock"],
        depth_overrides={"packages": 3},
        language="ko",
        scopes=["api"],
        require_scope=True,
    )

    config_path = config.save(tmp_path)
    assert config_path == tmp_path / ".gitcommitguard.toml"

    loaded_config = Config.load(tmp_path)
    assert loaded_config == config


def test_config_load_invalid_toml(tmp_path):
    """Test loading invalid configuration file."""
    (tmp_path / ".gitcommitguard.toml").write_text("invalid [ toml")
    with pytest.raises(ConfigurationError, match="Error reading config file"):
        Config.load(tmp_path)


def test_config_load_invalid_value(tmp_path):
    (tmp_path / ".gitcommitguard.toml").write_text("depth = 0\n")
    with pytest.raises(ConfigurationError) as exc_info:
        Config.load(tmp_path)
    assert exc_info.value.field == "depth"


def test_config_section_table(tmp_path):
    (tmp_path / ".gitcommitguard.toml").write_text('[gitcommitguard]\ndepth = 3\nignore_paths = ["*.md"]\n')
    config = Config.load(tmp_path)
    assert config.depth == 3
    assert config.ignore_paths == ["*.md"]


def test_config_from_pyproject(tmp_path):
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "demo"\n\n[tool.gitcommitguard]\npreset = "conventional-commits"\n'
    )
    assert Config.find_config_file(tmp_path) == tmp_path / "pyproject.toml"
    assert Config.load(tmp_path).preset == "conventional-commits"


def test_pyproject_without_section_is_ignored(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n')
    assert Config.find_config_file(tmp_path) is None


def test_dedicated_file_wins_over_pyproject(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[tool.gitcommitguard]\ndepth = 4\n')
    (tmp_path / ".gitcommitguard.toml").write_text("depth = 1\n")
    assert Config.load(tmp_path).depth == 1


def test_extends_profile(tmp_path):
    (tmp_path / ".gitcommitguard.toml").write_text('extends = "strict"\ndepth = 4\n')
    config = Config.load(tmp_path)
    assert config.depth == 4  # file value wins over the profile
    assert config.max_files == 20
    assert "poetry.lock" in config.ignore_paths


def test_unknown_profile(tmp_path):
    (tmp_path / ".gitcommitguard.toml").write_text('extends = "lenient"\n')
    with pytest.raises(ConfigurationError, match="Unknown profile 'lenient'"):
        Config.load(tmp_path)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"depth": 0},
        {"depth": 11},
        {"depth": "deep"},
        {"depth": True},
        {"max_depth": 0},
        {"max_files": 0},
        {"max_files": 1001},
        {"language": "fr"},
        {"preset": "  "},
        {"depth_overrides": {"src": 0}},
        {"depth_overrides": {"/": 2}},
        {"log_max_age_hours": -1},
    ],
)
def test_invalid_values(kwargs):
    with pytest.raises(ConfigurationError):
        Config(**kwargs)


def test_depth_coercion():
    assert Config(depth="3").depth == 3
    assert Config(depth="AUTO").depth == "auto"


def test_depth_override_keys_are_normalized():
    config = Config(depth_overrides={"./packages/": 3, "src\\legacy": 1})
    assert config.depth_overrides == {"packages": 3, "src/legacy": 1}


def test_config_is_frozen():
    config = Config()
    with pytest.raises(ValidationError):
        config.depth = 3


def test_with_overrides():
    config = Config(depth=2)
    updated = config.with_overrides(depth="4", preset=None)
    assert updated.depth == 4
    assert config.depth == 2
    assert config.with_overrides(preset=None) is config
    with pytest.raises(ConfigurationError):
        config.with_overrides(depth=99)


def test_environment_overrides_file(tmp_path, monkeypatch):
    (tmp_path / ".gitcommitguard.toml").write_text("depth = 2\nenabled = true\n")
    monkeypatch.setenv("GIT_COMMIT_GUARD_DEPTH", "4")
    monkeypatch.setenv("GIT_COMMIT_GUARD_ENABLED", "false")

    config = Config.load(tmp_path)
    assert config.depth == 4
    assert config.enabled is False


def test_explicit_arguments_override_environment(monkeypatch):
    monkeypatch.setenv("GIT_COMMIT_GUARD_PRESET", "conventional-commits")
    assert Config().preset == "conventional-commits"
    assert Config(preset="folder-based").preset == "folder-based"


def test_environment_values_are_sanitized(monkeypatch):
    monkeypatch.setenv("GIT_COMMIT_GUARD_PRESET", "folder-based; rm -rf /")
    assert Config().preset == "folder-based"


def test_unsafe_log_file_is_dropped(tmp_path):
    (tmp_path / ".gitcommitguard.toml").write_text('log_file = "../../etc/passwd"\n')
    config = Config.load(tmp_path)
    assert config.log_file == DEFAULT_LOG_FILE


def test_get_log_file():
    assert Config().get_log_file() == Path(DEFAULT_LOG_FILE)
    assert Config(log_file="logs/guard.log").get_log_file(Path("/repo")) == Path("/repo/logs/guard.log")
    assert Config(log_file="/etc/guard.log").get_log_file() == Path(DEFAULT_LOG_FILE)


def test_is_safe_path():
    assert Config._is_safe_path("logs/guard.log")
    assert not Config._is_safe_path("")
    assert not Config._is_safe_path("../guard.log")
    assert not Config._is_safe_path("/tmp/guard.log")
    assert not Config._is_safe_path("logs\\guard.log")


def test_boolean_depth_in_file_is_rejected(tmp_path):
    (tmp_path / ".gitcommitguard.toml").write_text("depth = true\n")
    with pytest.raises(ConfigurationError):
        Config.load(tmp_path)


@pytest.mark.parametrize(
    "filename,content",
    [
        ("pyproject.toml", '[tool]\ngitcommitguard = "folder-based"\n'),
        (".gitcommitguard.toml", 'gitcommitguard = "folder-based"\n'),
    ],
)
def test_config_section_must_be_table(tmp_path, filename, content):
    (tmp_path / filename).write_text(content)
    with pytest.raises(ConfigurationError) as exc_info:
        Config.load(tmp_path)
    assert exc_info.value.field == "gitcommitguard"
    assert "must be a table" in str(exc_info.value)


def test_plugins_setting(tmp_path):
    assert Config().plugins == []
    (tmp_path / ".gitcommitguard.toml").write_text('plugins = ["team_presets:TeamPreset"]\n')
    assert Config.load(tmp_path).plugins == ["team_presets:TeamPreset"]
