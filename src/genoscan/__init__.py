"""Consumer genome parsing and reference-database analysis.

The package turns raw DNA export files into a validated variant map and
matches it against a curated SNP table, a pathogenic-variant table and a
drug-gene table.
"""

from .aggregate import AnalysisSummary, ResultAggregator, summarize
from .analyzers import CuratedAnalyzer, DrugInteractionAnalyzer, PathogenicVariantAnalyzer
from .config import FetchPolicy, ParserLimits
from .errors import (
    FileTooLarge,
    GenomeParseError,
    InputTooLarge,
    NoValidMarkers,
    ResultTooLarge,
    SourceUnavailable,
    TooManyLines,
    UnrecognizedFormat,
)
from .formats import FormatDetector
from .matching import candidate_genotypes, match_genotype
from .models import (
    AnalysisResult,
    DiseaseRisk,
    DrugInteraction,
    Finding,
    FormatTag,
    ParseResult,
    ProgressEvent,
    SourceStatus,
    VariantCall,
    impact_tier,
)
from .parser import GenomeParser
from .pipeline import GenomeAnalysisPipeline, build_default_pipeline
from .registry import ExtractorPluginSpec, ExtractorRegistry, build_default_extractor_registry
from .significance import classify_significance, significance_rank
from .sources import (
    JsonFetcher,
    ReferenceManifest,
    ReferenceManifestLoader,
    ReferenceTableLoader,
    load_curated_table,
)

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "AnalysisSummary",
    "CuratedAnalyzer",
    "DiseaseRisk",
    "DrugInteraction",
    "DrugInteractionAnalyzer",
    "ExtractorPluginSpec",
    "ExtractorRegistry",
    "FetchPolicy",
    "FileTooLarge",
    "Finding",
    "FormatDetector",
    "FormatTag",
    "GenomeAnalysisPipeline",
    "GenomeParseError",
    "GenomeParser",
    "InputTooLarge",
    "JsonFetcher",
    "NoValidMarkers",
    "ParseResult",
    "ParserLimits",
    "PathogenicVariantAnalyzer",
    "ProgressEvent",
    "ReferenceManifest",
    "ReferenceManifestLoader",
    "ReferenceTableLoader",
    "ResultAggregator",
    "ResultTooLarge",
    "SourceStatus",
    "SourceUnavailable",
    "TooManyLines",
    "UnrecognizedFormat",
    "VariantCall",
    "build_default_extractor_registry",
    "build_default_pipeline",
    "candidate_genotypes",
    "classify_significance",
    "impact_tier",
    "load_curated_table",
    "match_genotype",
    "significance_rank",
    "summarize",
]
