"""Configuration management for git-commit-guard."""
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import tomli
import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError

DEFAULT_CONFIG_FILENAME = ".gitcommitguard.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_SECTION = "gitcommitguard"
DEFAULT_LOG_FILE = ".commit-logs/violations.log"

MIN_DEPTH = 1
MAX_DEPTH = 10
MAX_FILES_LIMIT = 1000

DEFAULT_TYPES = [
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "chore",
    "revert",
]

# Built-in profiles usable through ``extends = "<name>"``
PROFILES: Dict[str, Dict[str, Any]] = {
    "recommended": {
        "preset": "folder-based",
        "depth": 3,
        "max_files": 50,
        "ignore_paths": [
            "pyproject.toml",
            "poetry.lock",
            "requirements*.txt",
            ".gitignore",
            "README.md",
            "CHANGELOG.md",
        ],
    },
    "strict": {
        "preset": "folder-based",
        "depth": 2,
        "max_files": 20,
        "ignore_paths": ["pyproject.toml", "poetry.lock"],
    },
    "relaxed": {
        "preset": "folder-based",
        "depth": 5,
        "max_files": 100,
        "ignore_paths": ["pyproject.toml", "poetry.lock", "*.md", "*.toml"],
    },
}

_ENV_MAPPING = {
    "GIT_COMMIT_GUARD_PRESET": "preset",
    "GIT_COMMIT_GUARD_ENABLED": "enabled",
    "GIT_COMMIT_GUARD_DEPTH": "depth",
    "GIT_COMMIT_GUARD_MAX_DEPTH": "max_depth",
    "GIT_COMMIT_GUARD_MAX_FILES": "max_files",
    "GIT_COMMIT_GUARD_LANGUAGE": "language",
    "GIT_COMMIT_GUARD_VERBOSE": "verbose",
    "GIT_COMMIT_GUARD_LOG_FILE": "log_file",
}
_BOOL_FIELDS = {"enabled", "verbose"}
_STRING_FIELDS = {"preset", "language", "log_file", "depth"}


def _read_env() -> Dict[str, Any]:
    env_data: Dict[str, Any] = {}
    for env_var, field_name in _ENV_MAPPING.items():
        if env_var not in os.environ:
            continue
        value: Any = os.environ[env_var]
        if field_name in _STRING_FIELDS:
            value = Config._sanitize_string(value)
        if field_name in _BOOL_FIELDS:
            value = value.lower() in ["true", "1", "yes", "on"]
        env_data[field_name] = value
    return env_data


class Config(BaseModel):
    """Configuration settings for git-commit-guard.

    Values come from ``.gitcommitguard.toml`` (or ``[tool.gitcommitguard]``
    in ``pyproject.toml``), then ``GIT_COMMIT_GUARD_*`` environment
    variables. A loaded config is frozen; command line overrides produce a
    copy.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    preset: str = Field(
        default="folder-based",
        description="Name of the registered preset to enforce",
    )

    enabled: bool = Field(
        default=True,
        description="Whether the hooks enforce anything at all",
    )

    log_file: str = Field(
        default=DEFAULT_LOG_FILE,
        description="Violation log, relative to the repository root",
    )

    log_max_age_hours: int = Field(
        default=24,
        description="Log files older than this are removed by cleanup",
    )

    language: Literal["en", "ko"] = Field(
        default="en",
        description="Language for hook output",
    )

    verbose: bool = Field(default=False, description="Print diagnostic output")

    depth: Union[int, Literal["auto"]] = Field(
        default=2,
        description="Number of folder levels that must match, or 'auto'",
    )

    ignore_paths: List[str] = Field(
        default_factory=list,
        description="Glob patterns excluded from folder validation",
    )

    max_files: Optional[int] = Field(
        default=100,
        description="Maximum number of non-ignored files per commit",
    )

    depth_overrides: Dict[str, int] = Field(
        default_factory=dict,
        description="Path prefix -> depth; the longest matching prefix wins",
    )

    max_depth: int = Field(
        default=5,
        description="Upper bound for automatic depth detection",
    )

    types: List[str] = Field(
        default_factory=lambda: list(DEFAULT_TYPES),
        description="Allowed conventional commit types",
    )

    scopes: List[str] = Field(
        default_factory=list,
        description="Allowed conventional commit scopes (empty allows any)",
    )

    require_scope: bool = Field(
        default=False,
        description="Whether conventional commits must carry a scope",
    )

    root_prefix: str = Field(
        default="root",
        description="Prefix marker for commits touching only root-level files",
    )

    ignored_prefix: str = Field(
        default="config",
        description="Prefix marker for commits touching only ignored files",
    )

    plugins: List[str] = Field(
        default_factory=list,
        description="Extra presets to load, as 'module:attribute' references",
    )

    def __init__(self, **data):
        """Initialize config with environment variable support.

        Explicit keyword arguments win over the environment. Invalid values
        raise :class:`ConfigurationError`.
        """
        merged_data = {**_read_env(), **data}
        try:
            super().__init__(**merged_data)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error.get("loc", ())) or None
            raise ConfigurationError(
                f"Invalid configuration: {field}: {error.get('msg')}",
                field=field,
                value=error.get("input"),
            ) from e

    @field_validator("preset")
    @classmethod
    def _check_preset(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("preset must not be empty")
        return value.strip()

    @field_validator("depth", mode="before")
    @classmethod
    def _coerce_depth(cls, value: Any) -> Any:
        # bool is an int subclass
        if isinstance(value, bool):
            raise ValueError("depth must be an integer or 'auto', not a boolean")
        if isinstance(value, str):
            value = value.strip().lower()
            if value.lstrip("-").isdigit():
                return int(value)
        return value

    @field_validator("depth")
    @classmethod
    def _check_depth(cls, value: Union[int, str]) -> Union[int, str]:
        if value != "auto" and not MIN_DEPTH <= value <= MAX_DEPTH:
            raise ValueError(
                f"depth must be between {MIN_DEPTH} and {MAX_DEPTH} or 'auto', got {value}"
            )
        return value

    @field_validator("max_depth")
    @classmethod
    def _check_max_depth(cls, value: int) -> int:
        if not MIN_DEPTH <= value <= MAX_DEPTH:
            raise ValueError(f"max_depth must be between {MIN_DEPTH} and {MAX_DEPTH}")
        return value

    @field_validator("max_files")
    @classmethod
    def _check_max_files(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and not 1 <= value <= MAX_FILES_LIMIT:
            raise ValueError(f"max_files must be between 1 and {MAX_FILES_LIMIT}")
        return value

    @field_validator("log_max_age_hours")
    @classmethod
    def _check_log_age(cls, value: int) -> int:
        if value < 0:
            raise ValueError("log_max_age_hours must not be negative")
        return value

    @field_validator("depth_overrides")
    @classmethod
    def _check_overrides(cls, value: Dict[str, int]) -> Dict[str, int]:
        overrides = {}
        for prefix, depth in value.items():
            key = prefix.replace("\\", "/").strip("/")
            while key.startswith("./"):
                key = key[2:]
            if not key:
                raise ValueError("depth_overrides keys must be non-empty paths")
            if not MIN_DEPTH <= depth <= MAX_DEPTH:
                raise ValueError(
                    f"depth override for '{prefix}' must be between {MIN_DEPTH} and {MAX_DEPTH}"
                )
            overrides[key] = depth
        return overrides

    @staticmethod
    def _sanitize_string(value: str) -> str:
        """Sanitize string values to prevent injection attacks."""
        if not value:
            return value

        # Remove control characters and null bytes
        value = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', value)

        # Remove command injection patterns and split on them
        value = re.split(r'[;&|`$()]', value)[0]

        if len(value) > 1000:
            value = value[:1000]

        return value.strip()

    @staticmethod
    def _is_safe_path(path: str) -> bool:
        """Check if a path is safe (no path traversal)."""
        if not path:
            return False

        if '..' in path or path.startswith('/') or '\\' in path:
            return False

        if os.path.isabs(path):
            return False

        dangerous_patterns = [
            r'/etc/', r'/var/', r'/usr/', r'/bin/', r'/sbin/',
            r'C:\\Windows', r'C:\\System', r'C:\\Program'
        ]

        for pattern in dangerous_patterns:
            if re.search(pattern, path, re.IGNORECASE):
                return False

        return True

    @staticmethod
    def find_config_file(repo_path: Path) -> Optional[Path]:
        """Locate the file that holds this repository's configuration."""
        config_path = repo_path / DEFAULT_CONFIG_FILENAME
        if config_path.exists():
            return config_path

        pyproject = repo_path / PYPROJECT_FILENAME
        if pyproject.exists():
            try:
                with pyproject.open('rb') as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError:
                return None
            if CONFIG_SECTION in data.get("tool", {}):
                return pyproject
        return None

    @classmethod
    def load(cls, repo_path: Path) -> 'Config':
        """Load configuration for a repository.

        Args:
            repo_path: Path to the git repository

        Returns:
            Config: Configuration object with values from file, environment or defaults

        Raises:
            ConfigurationError: If the file cannot be parsed or holds invalid values
        """
        config_path = cls.find_config_file(repo_path)
        if config_path is None:
            return cls()

        try:
            with config_path.open('rb') as f:
                raw = tomli.load(f)
        except (OSError, tomli.TOMLDecodeError) as e:
            raise ConfigurationError(f"Error reading config file {config_path.name}: {e}") from e

        if config_path.name == PYPROJECT_FILENAME:
            section = raw["tool"][CONFIG_SECTION]
        elif CONFIG_SECTION in raw:
            section = raw[CONFIG_SECTION]
        else:
            section = raw

        if not isinstance(section, dict):
            raise ConfigurationError(
                f"Error reading config file {config_path.name}: "
                f"'{CONFIG_SECTION}' must be a table",
                field=CONFIG_SECTION,
                value=section,
            )
        config_data = dict(section)

        config_data = cls._apply_profile(config_data)

        for key in ['preset', 'language', 'log_file', 'root_prefix', 'ignored_prefix']:
            if key in config_data and isinstance(config_data[key], str):
                config_data[key] = cls._sanitize_string(config_data[key])

        log_file = config_data.get('log_file')
        if isinstance(log_file, str) and not cls._is_safe_path(log_file):
            config_data.pop('log_file')

        return cls(**{**config_data, **_read_env()})

    @staticmethod
    def _apply_profile(config_data: Dict[str, Any]) -> Dict[str, Any]:
        profile_name = config_data.pop("extends", None)
        if profile_name is None:
            return config_data
        profile = PROFILES.get(profile_name)
        if profile is None:
            raise ConfigurationError(
                f"Unknown profile '{profile_name}'. Available: {', '.join(PROFILES)}",
                field="extends",
                value=profile_name,
            )
        return {**profile, **config_data}

    def save(self, repo_path: Path) -> Path:
        """Save configuration to ``.gitcommitguard.toml``.

        Args:
            repo_path: Path to the git repository

        Returns:
            Path: The written file
        """
        config_path = repo_path / DEFAULT_CONFIG_FILENAME
        config_dict = {k: v for k, v in self.model_dump().items() if v is not None}

        try:
            with config_path.open('wb') as f:
                tomli_w.dump(config_dict, f)
        except OSError as e:
            raise ConfigurationError(f"Error saving config file: {e}") from e
        return config_path

    def get_log_file(self, repo_path: Optional[Path] = None) -> Path:
        """Get the violation log path, falling back to the default when unsafe."""
        log_file = self.log_file if self._is_safe_path(self.log_file) else DEFAULT_LOG_FILE
        if repo_path is not None:
            return repo_path / log_file
        return Path(log_file)

    def with_overrides(self, **overrides: Any) -> 'Config':
        """Return a validated copy with ``overrides`` applied (None values skipped)."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        return type(self)(**{**self.model_dump(), **updates})
