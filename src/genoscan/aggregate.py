"""Merge analyzer streams into one immutable analysis result."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any

from genoscan.analyzers.drugs import dedupe_interactions
from genoscan.models import (
    IMPACT_TIERS,
    AnalysisResult,
    DiseaseRisk,
    DrugInteraction,
    Finding,
    ParseResult,
    SourceStatus,
)
from genoscan.significance import significance_rank


@dataclass(frozen=True)
class AnalysisSummary:
    """Counts derived from a result's finding streams."""

    total_findings: int
    high_impact: int
    drug_interactions: int
    disease_risks: int
    by_category: dict[str, int] = field(default_factory=dict)
    by_impact: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_findings": self.total_findings,
            "high_impact": self.high_impact,
            "drug_interactions": self.drug_interactions,
            "disease_risks": self.disease_risks,
            "by_category": dict(self.by_category),
            "by_impact": dict(self.by_impact),
        }


def summarize(
    findings: Sequence[Finding],
    drug_interactions: Sequence[DrugInteraction] = (),
    disease_risks: Sequence[DiseaseRisk] = (),
) -> AnalysisSummary:
    """Compute summary statistics; all four impact tiers are always present."""

    by_impact = {tier: 0 for tier in IMPACT_TIERS}
    for finding in findings:
        by_impact[finding.impact] += 1

    return AnalysisSummary(
        total_findings=len(findings),
        high_impact=sum(1 for finding in findings if finding.impact == "high"),
        drug_interactions=len(drug_interactions),
        disease_risks=len(disease_risks),
        by_category=dict(Counter(finding.category for finding in findings)),
        by_impact=by_impact,
    )


def count_markers_with_findings(
    findings: Iterable[Finding],
    drug_interactions: Iterable[DrugInteraction],
    disease_risks: Iterable[DiseaseRisk],
) -> int:
    markers = {item.marker_id.lower() for item in findings}
    markers.update(item.marker_id.lower() for item in drug_interactions)
    markers.update(item.marker_id.lower() for item in disease_risks)
    return len(markers)


class ResultAggregator:
    """Apply canonical ordering and dedup, then freeze the merged result."""

    def aggregate(
        self,
        parse_result: ParseResult,
        findings: Iterable[Finding],
        drug_interactions: Iterable[DrugInteraction],
        disease_risks: Iterable[DiseaseRisk],
        sources: Mapping[str, SourceStatus] | None = None,
    ) -> AnalysisResult:
        ordered_findings = tuple(
            sorted(findings, key=lambda item: item.magnitude, reverse=True)
        )
        ordered_drugs = tuple(dedupe_interactions(drug_interactions))
        ordered_risks = tuple(
            sorted(disease_risks, key=lambda item: significance_rank(item.significance))
        )

        return AnalysisResult(
            total_markers_parsed=parse_result.marker_count,
            markers_with_findings=count_markers_with_findings(
                ordered_findings, ordered_drugs, ordered_risks
            ),
            format_label=parse_result.format_label,
            findings=ordered_findings,
            drug_interactions=ordered_drugs,
            disease_risks=ordered_risks,
            timestamp=datetime.now(timezone.utc),
            sources=MappingProxyType(dict(sources or {})),
        )
