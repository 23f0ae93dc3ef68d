"""Exception types for git-commit-guard.

Policy violations are never raised; presets report them through the
``errors`` list of a result object. Exceptions are reserved for conditions
that make validation impossible.
"""
from typing import Any, List, Optional


class GuardError(Exception):
    """Base class for all git-commit-guard errors."""


class ConfigurationError(GuardError):
    """Invalid or unusable configuration."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class PresetNotFoundError(ConfigurationError):
    """Raised when a preset name is not registered."""

    def __init__(self, preset_name: str, available_presets: List[str]):
        available = ", ".join(available_presets) or "(none)"
        super().__init__(
            f'Preset "{preset_name}" not found. Available: {available}',
            field="preset",
            value=preset_name,
        )
        self.preset_name = preset_name
        self.available_presets = list(available_presets)


class GitOperationError(GuardError):
    """A git command needed by a hook failed."""

    def __init__(self, message: str, operation: str):
        super().__init__(message)
        self.operation = operation
