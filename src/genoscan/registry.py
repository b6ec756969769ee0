"""Extractor registry mapping format tags to extractor implementations."""

from __future__ import annotations

import importlib
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from genoscan.formats import (
    AncestryExtractor,
    FormatExtractor,
    MyHeritageExtractor,
    TabularGenotypeExtractor,
    VcfExtractor,
)
from genoscan.models import FormatTag

ExtractorFactory = Callable[..., FormatExtractor]


@dataclass(frozen=True)
class ExtractorPluginSpec:
    """Third-party extractor imported at runtime, optionally relabelled."""

    name: str
    module: str
    class_name: str
    label: str | None = None


@dataclass(frozen=True)
class _Registration:
    factory: ExtractorFactory
    label: str | None = None


class ExtractorRegistry:
    """Map format names onto extractor factories.

    Several vendors ship the same column layout under their own brand, so one
    extractor class can be registered under many names. Each registration may
    carry its own display label, which ``create`` stamps onto the instance
    together with the registered name.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _Registration] = {}

    def register(
        self,
        name: str | FormatTag,
        factory: ExtractorFactory,
        *,
        label: str | None = None,
    ) -> None:
        key = self._key(name)
        if not key:
            raise ValueError("Extractor name cannot be empty")
        if key in self._entries:
            raise ValueError(f"Extractor already registered: {key}")
        self._entries[key] = _Registration(factory=factory, label=label)

    def register_plugin(self, plugin: ExtractorPluginSpec) -> None:
        """Import ``module.class_name`` and register it under ``plugin.name``."""

        module = importlib.import_module(plugin.module)
        extractor_cls = getattr(module, plugin.class_name)
        self.register(plugin.name, extractor_cls, label=plugin.label)

    def create(self, name: str | FormatTag, **kwargs: Any) -> FormatExtractor:
        key = self._key(name)
        entry = self._entries.get(key)
        if entry is None:
            raise KeyError(
                f"Unknown extractor '{key}'. Available: {', '.join(self.available())}"
            )

        extractor = entry.factory(**kwargs)
        extractor.name = key
        if entry.label is not None:
            extractor.label = entry.label
        return extractor

    def available(self) -> list[str]:
        return sorted(self._entries)

    def labels(self) -> dict[str, str]:
        """Display label per registered format name, in name order."""

        return {
            key: self._entries[key].label or getattr(self._entries[key].factory, "label", key)
            for key in self.available()
        }

    @staticmethod
    def _key(name: str | FormatTag) -> str:
        if isinstance(name, FormatTag):
            return name.value
        return name.strip().lower()


def build_default_extractor_registry() -> ExtractorRegistry:
    """Registry with the built-in vendor extractors.

    23andMe, Nebula and FamilyTreeDNA share the tabular layout.
    """

    registry = ExtractorRegistry()
    registry.register(FormatTag.TWENTY_THREE_AND_ME, TabularGenotypeExtractor)
    registry.register(FormatTag.NEBULA, TabularGenotypeExtractor, label="Nebula Genomics")
    registry.register(FormatTag.FAMILY_TREE_DNA, TabularGenotypeExtractor, label="FamilyTreeDNA")
    registry.register(FormatTag.ANCESTRY, AncestryExtractor)
    registry.register(FormatTag.MYHERITAGE, MyHeritageExtractor)
    registry.register(FormatTag.VCF, VcfExtractor)
    return registry
