"""Shared models for git-commit-guard."""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, computed_field


class ValidationStats(BaseModel):
    total_files: int = 0
    filtered_files: int = 0
    ignored_files: int = 0
    unique_folders: int = 0


class ValidationResult(BaseModel):
    """Outcome of validating a set of staged files.

    ``valid`` is derived from ``errors`` so the two can never disagree.
    """

    common_path: Optional[str] = Field(
        default=None,
        description="Shared truncated path of all non-ignored files ('' for the repository root)",
    )
    files: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    stats: Optional[ValidationStats] = None
    groups: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Truncated path -> files that produced it",
    )

    @computed_field
    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def all_files_ignored(self) -> bool:
        if self.stats is None or self.stats.total_files == 0:
            return False
        return self.stats.ignored_files == self.stats.total_files


class CommitMsgValidationResult(BaseModel):
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    prefix: Optional[str] = Field(
        default=None, description="Prefix token extracted from the message"
    )

    @computed_field
    @property
    def valid(self) -> bool:
        return not self.errors
