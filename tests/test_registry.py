import importlib
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from genoscan.formats import ExtractionResult, FormatExtractor  # noqa: E402
from genoscan.models import FormatTag  # noqa: E402
from genoscan.registry import (  # noqa: E402
    ExtractorPluginSpec,
    ExtractorRegistry,
    build_default_extractor_registry,
)


class _InlineExtractor(FormatExtractor):
    name = "inline"
    label = "Inline"

    def extract(self, content, validator):
        return ExtractionResult()


def test_default_registry_contains_builtin_extractors() -> None:
    registry = build_default_extractor_registry()

    assert registry.available() == sorted(
        tag.value for tag in FormatTag if tag is not FormatTag.UNKNOWN
    )


def test_shared_layout_keeps_vendor_labels() -> None:
    registry = build_default_extractor_registry()

    assert registry.create(FormatTag.NEBULA).label == "Nebula Genomics"
    assert registry.create("FTDNA").label == "FamilyTreeDNA"
    assert registry.create(FormatTag.TWENTY_THREE_AND_ME).label == "23andMe"


def test_registry_plugin_registration(tmp_path: Path) -> None:
    module_path = tmp_path / "plugin_extractor.py"
    module_path.write_text(
        "from genoscan.formats import ExtractionResult, FormatExtractor\n"
        "class CustomExtractor(FormatExtractor):\n"
        "    name='custom'\n"
        "    label='Custom'\n"
        "    def __init__(self, delimiter=';'):\n"
        "        self.delimiter=delimiter\n"
        "    def extract(self, content, validator):\n"
        "        return ExtractionResult()\n"
    )

    sys.path.insert(0, str(tmp_path))
    try:
        importlib.invalidate_caches()
        registry = ExtractorRegistry()
        registry.register_plugin(
            ExtractorPluginSpec(
                name="custom",
                module="plugin_extractor",
                class_name="CustomExtractor",
            )
        )

        instance = registry.create("custom", delimiter="|")
        assert getattr(instance, "delimiter") == "|"
    finally:
        sys.path = [path for path in sys.path if path != str(tmp_path)]
        sys.modules.pop("plugin_extractor", None)


def test_registry_rejects_duplicate_registration() -> None:
    registry = ExtractorRegistry()
    registry.register("inline", _InlineExtractor)

    with pytest.raises(ValueError):
        registry.register("Inline", _InlineExtractor)


def test_registry_unknown_format_lists_available() -> None:
    registry = ExtractorRegistry()
    registry.register("inline", _InlineExtractor)

    with pytest.raises(KeyError, match="inline"):
        registry.create("vcf")


def test_labels_follow_registrations() -> None:
    labels = build_default_extractor_registry().labels()

    assert labels["nebula"] == "Nebula Genomics"
    assert labels["ftdna"] == "FamilyTreeDNA"
    assert labels["23andme"] == "23andMe"
    assert labels["vcf"] == "VCF"


def test_create_stamps_registered_name_and_label() -> None:
    registry = ExtractorRegistry()
    registry.register("acme", _InlineExtractor, label="Acme DNA")

    extractor = registry.create("ACME")

    assert extractor.name == "acme"
    assert extractor.label == "Acme DNA"
    assert _InlineExtractor.label == "Inline"
    assert registry.labels() == {"acme": "Acme DNA"}
