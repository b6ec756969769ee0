"""Reference-database analyzers."""

from .base import notify
from .curated import CuratedAnalyzer
from .drugs import DrugInteractionAnalyzer, dedupe_interactions
from .pathogenic import PathogenicVariantAnalyzer

__all__ = [
    "CuratedAnalyzer",
    "DrugInteractionAnalyzer",
    "PathogenicVariantAnalyzer",
    "dedupe_interactions",
    "notify",
]
