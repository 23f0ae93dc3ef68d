"""Commit policies and the registry that selects between them.

Example:
    ```python
    from gitcommitguard.presets import default_registry

    preset = default_registry().get("folder-based")
    result = preset.validate_files(["src/a/x.py", "src/a/y.py"], config)
    ```
"""

from .base import Preset
from .conventional_commits import ConventionalCommitsPreset
from .folder_based import FolderBasedPreset
from .registry import PresetRegistry, build_default_registry, default_registry

__all__ = [
    "Preset",
    "ConventionalCommitsPreset",
    "FolderBasedPreset",
    "PresetRegistry",
    "build_default_registry",
    "default_registry",
]
