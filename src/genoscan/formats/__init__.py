"""Format detection and per-vendor extractors."""

from .ancestry import AncestryExtractor
from .base import ExtractionResult, FormatExtractor
from .detection import DEFAULT_DETECTION_RULES, DetectionRule, FormatDetector
from .myheritage import MyHeritageExtractor
from .tabular import TabularGenotypeExtractor
from .vcf import VcfExtractor

__all__ = [
    "AncestryExtractor",
    "DEFAULT_DETECTION_RULES",
    "DetectionRule",
    "ExtractionResult",
    "FormatDetector",
    "FormatExtractor",
    "MyHeritageExtractor",
    "TabularGenotypeExtractor",
    "VcfExtractor",
]
