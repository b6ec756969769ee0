"""Report helpers: finding filters plus JSON and text rendering."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from genoscan.aggregate import summarize
from genoscan.models import AnalysisResult, Finding

CATEGORY_ALIASES: dict[str, tuple[str, ...]] = {
    "pharma": ("Drug Metabolism", "Pharmacogenomics"),
    "health": ("Health", "Autoimmune", "Respiratory"),
    "nutrition": ("Nutrition", "Iron Metabolism"),
    "sleep": ("Sleep/Circadian", "Sleep"),
    "fitness": ("Fitness", "Sports"),
    "cardio": ("Cardiovascular",),
    "mental": ("Neurotransmitters", "Mental Health", "Psychology", "Cognitive"),
    "longevity": ("Longevity", "Aging"),
}


def resolve_categories(category: str) -> tuple[str, ...]:
    return CATEGORY_ALIASES.get(category.strip().lower(), (category,))


def filter_findings(
    findings: Iterable[Finding],
    category: str | None = None,
    min_magnitude: int = 0,
) -> list[Finding]:
    """Keep findings whose category matches an alias and whose magnitude is high enough."""

    selected = list(findings)

    if category:
        wanted = [item.lower() for item in resolve_categories(category)]
        selected = [
            finding
            for finding in selected
            if any(token in finding.category.lower() for token in wanted)
        ]

    if min_magnitude > 0:
        selected = [finding for finding in selected if finding.magnitude >= min_magnitude]

    return selected


def high_impact(findings: Iterable[Finding]) -> list[Finding]:
    return [finding for finding in findings if finding.impact == "high"]


def build_report(
    result: AnalysisResult,
    findings: Sequence[Finding] | None = None,
    *,
    file_path: str | None = None,
) -> dict[str, Any]:
    """JSON payload for the CLI; the summary covers the filtered findings."""

    shown = list(result.findings if findings is None else findings)
    payload: dict[str, Any] = {"success": True}
    if file_path is not None:
        payload["file"] = file_path

    payload.update(
        {
            "format": result.format_label,
            "total_markers_parsed": result.total_markers_parsed,
            "markers_with_findings": result.markers_with_findings,
            "findings": [finding.to_dict() for finding in shown],
            "drug_interactions": [item.to_dict() for item in result.drug_interactions],
            "disease_risks": [item.to_dict() for item in result.disease_risks],
            "high_impact": [finding.to_dict() for finding in high_impact(shown)],
            "summary": summarize(
                shown,
                result.drug_interactions,
                result.disease_risks,
            ).to_dict(),
            "sources": {key: status.to_dict() for key, status in result.sources.items()},
            "timestamp": result.timestamp.isoformat(),
        }
    )
    return payload


def render_text(
    result: AnalysisResult,
    findings: Sequence[Finding] | None = None,
    *,
    file_path: str | None = None,
) -> str:
    """Human-readable report."""

    shown = list(result.findings if findings is None else findings)
    summary = summarize(shown, result.drug_interactions, result.disease_risks)
    lines = ["", "DNA ANALYSIS RESULTS", ""]

    if file_path is not None:
        lines.append(f"File: {file_path}")
    lines.append(f"Format: {result.format_label}")
    lines.append(
        f"Markers with findings: {result.markers_with_findings} / {result.total_markers_parsed}"
    )
    lines.append(f"Total findings: {summary.total_findings}")
    lines.append("")

    flagged = high_impact(shown)
    if flagged:
        lines.extend(["HIGH IMPACT FINDINGS:", ""])
        for finding in flagged:
            lines.append(f"  * {finding.gene} ({finding.marker_id})")
            lines.append(f"    {finding.description}")
            lines.append(f"    Category: {finding.category} | Magnitude: {finding.magnitude}/6")
            lines.append("")

    if result.drug_interactions:
        lines.extend(["DRUG INTERACTIONS:", ""])
        for interaction in result.drug_interactions:
            lines.append(
                f"  * {interaction.gene} [{interaction.level}]: {', '.join(interaction.drugs)}"
            )
            lines.append(f"    {interaction.recommendation}")
            lines.append("")

    if result.disease_risks:
        lines.extend(["DISEASE RISKS:", ""])
        for risk in result.disease_risks:
            lines.append(f"  * {risk.gene} ({risk.marker_id}): {risk.condition}")
            lines.append(f"    {risk.significance} - {risk.interpretation}")
            lines.append("")

    failed = [status for status in result.sources.values() if not status.succeeded]
    if failed:
        lines.extend(["UNAVAILABLE SOURCES:", ""])
        for status in failed:
            lines.append(f"  * {status.source_id}: {status.error}")
        lines.append("")

    lines.extend(["SUMMARY BY CATEGORY:", ""])
    for name, count in sorted(summary.by_category.items(), key=lambda item: -item[1]):
        lines.append(f"  {name}: {count}")
    lines.append("")

    return "\n".join(lines)
