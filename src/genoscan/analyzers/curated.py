"""Curated SNP table analyzer."""

from __future__ import annotations

from genoscan.matching import match_genotype
from genoscan.models import Finding, ParseResult
from genoscan.sources.curated import CuratedTable


class CuratedAnalyzer:
    """Match the user's calls against the in-memory curated table.

    Iterates the curated table rather than the variant map, so cost is
    bounded by the table size and not by the upload.
    """

    def __init__(self, table: CuratedTable) -> None:
        self.table = table

    def analyze(self, parse_result: ParseResult) -> list[Finding]:
        findings: list[Finding] = []

        for marker_id, entry in self.table.items():
            call = parse_result.variants.get(marker_id)
            if call is None:
                continue

            interpretation = match_genotype(entry.variants, call.genotype)
            if interpretation is None:
                continue

            findings.append(
                Finding(
                    marker_id=marker_id.upper(),
                    gene=entry.gene,
                    category=entry.category,
                    genotype=call.genotype,
                    status=interpretation.status,
                    description=interpretation.description,
                    magnitude=interpretation.magnitude,
                )
            )

        findings.sort(key=lambda item: item.magnitude, reverse=True)
        return findings
