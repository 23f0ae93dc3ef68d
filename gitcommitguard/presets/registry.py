"""Name-keyed registry of presets."""
import importlib
from functools import lru_cache
from importlib.metadata import entry_points
from typing import Any, Callable, Dict, Iterable, List

from ..errors import ConfigurationError, PresetNotFoundError
from .base import Preset

ENTRY_POINT_GROUP = "gitcommitguard.presets"


class PresetRegistry:
    """Lookup table from preset name to :class:`Preset`.

    Registration happens once at start-up (see :func:`build_default_registry`);
    afterwards the registry is only read, so no locking is needed.
    """

    def __init__(self):
        self._presets: Dict[str, Preset] = {}

    def register(self, name: str, preset: Preset) -> None:
        """Register ``preset`` under ``name``, replacing any previous entry."""
        self._presets[name] = preset

    def get(self, name: str) -> Preset:
        """Return the preset registered as ``name``.

        Raises:
            PresetNotFoundError: If no preset has that name; the error lists
                every registered name.
        """
        try:
            return self._presets[name]
        except KeyError:
            raise PresetNotFoundError(name, self.list()) from None

    def has(self, name: str) -> bool:
        return name in self._presets

    def list(self) -> List[str]:
        return list(self._presets)

    def get_all(self) -> Dict[str, Preset]:
        return dict(self._presets)

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        return len(self._presets)


def load_preset(reference: str, loader: Callable[[], Any]) -> Preset:
    """Load one plugin preset.

    ``loader`` returns either a :class:`Preset` subclass, which is
    instantiated without arguments, or a ready preset instance.

    Raises:
        ConfigurationError: If loading fails or yields something that is not
            a preset.
    """
    try:
        loaded = loader()
        preset = loaded() if isinstance(loaded, type) else loaded
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load preset plugin '{reference}': {e}",
            field="plugins",
            value=reference,
        ) from e

    if not isinstance(preset, Preset) or not preset.name:
        raise ConfigurationError(
            f"Preset plugin '{reference}' is not a named Preset",
            field="plugins",
            value=reference,
        )
    return preset


def _import_reference(reference: str) -> Callable[[], Any]:
    module_name, _, attribute = reference.partition(":")

    def loader() -> Any:
        if not module_name or not attribute:
            raise ValueError("expected 'module:attribute'")
        return getattr(importlib.import_module(module_name), attribute)

    return loader


def build_default_registry(plugins: Iterable[str] = ()) -> PresetRegistry:
    """Create a registry holding the built-in and plugin presets.

    Plugins come from the ``gitcommitguard.presets`` entry point group of
    installed distributions, then from ``plugins`` (``module:attribute``
    references, usually ``Config.plugins``). Later registrations replace
    earlier ones with the same name.
    """
    from .conventional_commits import ConventionalCommitsPreset
    from .folder_based import FolderBasedPreset

    registry = PresetRegistry()
    for preset in (FolderBasedPreset(), ConventionalCommitsPreset()):
        registry.register(preset.name, preset)

    for entry_point in entry_points(group=ENTRY_POINT_GROUP):
        preset = load_preset(entry_point.name, entry_point.load)
        registry.register(preset.name, preset)

    for reference in plugins:
        preset = load_preset(reference, _import_reference(reference))
        registry.register(preset.name, preset)
    return registry


@lru_cache(maxsize=None)
def default_registry() -> PresetRegistry:
    """Process-wide registry of built-in and entry point presets, built on first use."""
    return build_default_registry()
