"""Base class for commit policies.

Every preset validates two things: the set of staged files and the commit
message. Violations are returned as data, never raised.
"""
from abc import ABC, abstractmethod
from typing import List, Union

from ..config import Config
from ..models import CommitMsgValidationResult, ValidationResult, ValidationStats


class Preset(ABC):
    """Abstract base class for commit policies.

    Presets hold no per-call state, so a single instance can be registered
    once and reused for every validation.

    Attributes:
        name (str): Registry key of the preset
        description (str): Human-readable summary shown by ``presets``
    """

    name: str = ""
    description: str = ""

    @abstractmethod
    def validate_files(self, files: List[str], config: Config) -> ValidationResult:
        """Validate staged files.

        Args:
            files: Repository-relative paths of the staged files
            config: Active configuration

        Returns:
            ValidationResult: Result with ``errors`` empty when the files comply
        """
        pass

    @abstractmethod
    def validate_commit_message(self, message: str, config: Config) -> CommitMsgValidationResult:
        """Validate a commit message."""
        pass

    @abstractmethod
    def get_commit_prefix(
        self,
        result: Union[ValidationResult, CommitMsgValidationResult],
        config: Config,
    ) -> str:
        """Build the commit message prefix for a validation result."""
        pass

    def _accept_all(self, files: List[str]) -> ValidationResult:
        return ValidationResult(
            files=list(files),
            stats=ValidationStats(total_files=len(files), filtered_files=len(files)),
        )
