"""Validator façade that delegates to the configured preset."""
from typing import List, Optional, Union

from .config import Config
from .models import CommitMsgValidationResult, ValidationResult, ValidationStats
from .presets import Preset, PresetRegistry, build_default_registry, default_registry


class CommitValidator:
    """Validates staged files and commit messages with the configured preset.

    The preset is resolved once, when the validator is created. An unknown
    preset name raises :class:`~gitcommitguard.errors.PresetNotFoundError`;
    it is never replaced by a default. Without an explicit registry, presets
    named in ``config.plugins`` are loaded alongside the built-in ones.

    Example:
        ```python
        validator = CommitValidator(Config.load(repo_path))
        result = validator.validate(["src/core/config.py", "src/core/types.py"])
        if result.valid:
            print(validator.get_commit_prefix(result))  # [src/core]
        ```
    """

    def __init__(self, config: Config, registry: Optional[PresetRegistry] = None):
        self.config = config
        if registry is None:
            registry = build_default_registry(config.plugins) if config.plugins else default_registry()
        self.registry = registry
        self.preset: Preset = self.registry.get(config.preset)

    @property
    def preset_name(self) -> str:
        return self.preset.name

    @property
    def preset_description(self) -> str:
        return self.preset.description

    def validate(self, files: List[str]) -> ValidationResult:
        """Validate staged files against the active preset."""
        return self.preset.validate_files(files, self.config)

    def validate_commit_message(self, message: str) -> CommitMsgValidationResult:
        """Validate a commit message against the active preset."""
        return self.preset.validate_commit_message(message, self.config)

    def get_commit_prefix(
        self,
        result: Union[ValidationResult, CommitMsgValidationResult, str, None],
        all_files_ignored: bool = False,
    ) -> str:
        """Generate the commit prefix.

        Args:
            result: A validation result, or a bare common path (``None``
                when nothing was validated)
            all_files_ignored: With a bare common path, whether every staged
                file was ignored

        Returns:
            str: Formatted prefix, e.g. ``[src/core]``
        """
        if result is None or isinstance(result, str):
            ignored = 1 if all_files_ignored else 0
            result = ValidationResult(
                common_path=result,
                stats=ValidationStats(
                    total_files=1,
                    filtered_files=1 - ignored,
                    ignored_files=ignored,
                    unique_folders=0 if result is None else 1,
                ),
            )
        return self.preset.get_commit_prefix(result, self.config)
