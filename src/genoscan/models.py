"""Canonical in-memory data models used by genoscan."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any

IMPACT_TIERS: tuple[str, ...] = ("high", "moderate", "low", "info")


def impact_tier(magnitude: int) -> str:
    """Map a curated 0-6 magnitude onto its impact tier."""

    if magnitude >= 3:
        return "high"
    if magnitude >= 2:
        return "moderate"
    if magnitude >= 1:
        return "low"
    return "info"


class FormatTag(str, Enum):
    """Consumer DNA export formats recognized by the detector."""

    TWENTY_THREE_AND_ME = "23andme"
    ANCESTRY = "ancestry"
    MYHERITAGE = "myheritage"
    NEBULA = "nebula"
    FAMILY_TREE_DNA = "ftdna"
    VCF = "vcf"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class VariantCall:
    """Single sanitized genotype call for one reference-SNP marker."""

    marker_id: str
    chromosome: str
    position: str
    genotype: str

    @property
    def position_key(self) -> str:
        """Genomic coordinate key used by position-indexed reference tables."""

        return f"{self.chromosome}:{self.position}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "marker_id": self.marker_id,
            "chromosome": self.chromosome,
            "position": self.position,
            "genotype": self.genotype,
        }


VariantMap = Mapping[str, VariantCall]


@dataclass(frozen=True)
class ParseResult:
    """Normalized output of the genome parser.

    ``variants`` is a read-only view keyed by lowercase marker id; the parser
    never hands out the dict it built.
    """

    variants: VariantMap
    format_tag: FormatTag
    format_label: str
    skipped_records: int = 0

    @property
    def marker_count(self) -> int:
        return len(self.variants)


@dataclass(frozen=True)
class Finding:
    """Curated-table interpretation of one of the user's genotypes."""

    marker_id: str
    gene: str
    category: str
    genotype: str
    status: str
    description: str
    magnitude: int

    @property
    def impact(self) -> str:
        return impact_tier(self.magnitude)

    def to_dict(self) -> dict[str, Any]:
        return {
            "marker_id": self.marker_id,
            "gene": self.gene,
            "category": self.category,
            "genotype": self.genotype,
            "status": self.status,
            "description": self.description,
            "magnitude": self.magnitude,
            "impact": self.impact,
        }


@dataclass(frozen=True)
class DrugInteraction:
    """Drug-gene annotation attached to a genotyped marker."""

    marker_id: str
    gene: str
    drugs: tuple[str, ...]
    level: str
    recommendation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "marker_id": self.marker_id,
            "gene": self.gene,
            "drugs": list(self.drugs),
            "level": self.level,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class DiseaseRisk:
    """Pathogenic-variant table hit for an allele the user carries."""

    marker_id: str
    gene: str
    condition: str
    significance: str
    interpretation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "marker_id": self.marker_id,
            "gene": self.gene,
            "condition": self.condition,
            "significance": self.significance,
            "interpretation": self.interpretation,
        }


@dataclass(frozen=True)
class SourceStatus:
    """Outcome of one reference source during an analysis run."""

    source_id: str
    succeeded: bool
    record_count: int = 0
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_id": self.source_id,
            "succeeded": self.succeeded,
            "record_count": self.record_count,
            "error": self.error,
        }


@dataclass(frozen=True)
class ProgressEvent:
    """Cooperative progress signal emitted while an analysis runs."""

    stage: str
    progress: float
    message: str


ProgressCallback = Callable[[ProgressEvent], None]


@dataclass(frozen=True)
class AnalysisResult:
    """Merged output of every reference analyzer for one parsed genome."""

    total_markers_parsed: int
    markers_with_findings: int
    format_label: str
    findings: tuple[Finding, ...]
    drug_interactions: tuple[DrugInteraction, ...]
    disease_risks: tuple[DiseaseRisk, ...]
    timestamp: datetime
    sources: Mapping[str, SourceStatus] = field(default_factory=lambda: MappingProxyType({}))

    def to_dict(self) -> dict[str, Any]:
        """Serialize into plain JSON-ready structures."""

        from genoscan.aggregate import summarize

        return {
            "total_markers_parsed": self.total_markers_parsed,
            "markers_with_findings": self.markers_with_findings,
            "format": self.format_label,
            "findings": [item.to_dict() for item in self.findings],
            "drug_interactions": [item.to_dict() for item in self.drug_interactions],
            "disease_risks": [item.to_dict() for item in self.disease_risks],
            "sources": {key: status.to_dict() for key, status in self.sources.items()},
            "summary": summarize(
                self.findings,
                self.drug_interactions,
                self.disease_risks,
            ).to_dict(),
            "timestamp": self.timestamp.isoformat(),
        }
