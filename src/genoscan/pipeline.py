"""End-to-end genome analysis pipeline."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from genoscan.aggregate import ResultAggregator
from genoscan.analyzers import (
    CuratedAnalyzer,
    DrugInteractionAnalyzer,
    PathogenicVariantAnalyzer,
    notify,
)
from genoscan.config import FetchPolicy
from genoscan.errors import SourceUnavailable
from genoscan.models import AnalysisResult, ParseResult, ProgressCallback, SourceStatus
from genoscan.parser import GenomeParser
from genoscan.sources import (
    CuratedTable,
    JsonFetcher,
    ReferenceManifestLoader,
    ReferenceTableLoader,
    TableKeyType,
    load_curated_table,
)

logger = logging.getLogger(__name__)


class GenomeAnalysisPipeline:
    """Parse, run every analyzer, and aggregate.

    Parse errors are fatal. A reference source that cannot be loaded only
    empties its own stream and is reported in ``AnalysisResult.sources``.
    """

    def __init__(
        self,
        *,
        parser: GenomeParser | None = None,
        curated_table: CuratedTable | None = None,
        loader: ReferenceTableLoader | None = None,
        aggregator: ResultAggregator | None = None,
        pathogenic_source: str = "clinvar",
        drug_source: str = "pharmgkb",
    ) -> None:
        self.parser = parser or GenomeParser()
        self.curated = CuratedAnalyzer(
            curated_table if curated_table is not None else load_curated_table()
        )
        self.loader = loader or ReferenceTableLoader({})
        self.aggregator = aggregator or ResultAggregator()
        self.pathogenic = PathogenicVariantAnalyzer(self.loader, source_id=pathogenic_source)
        self.drugs = DrugInteractionAnalyzer(self.loader, source_id=drug_source)
        for analyzer in (self.pathogenic, self.drugs):
            self._check_key_type(analyzer.source_id, analyzer.key_type)

    async def run(
        self,
        content: str,
        progress: ProgressCallback | None = None,
    ) -> AnalysisResult:
        notify(progress, "parsing", 5, "Reading file...")
        parse_result = self.parser.parse(content)
        notify(
            progress,
            "parsing",
            10,
            f"Found {parse_result.marker_count:,} SNPs ({parse_result.format_label})",
        )
        return await self.analyze(parse_result, progress)

    async def analyze(
        self,
        parse_result: ParseResult,
        progress: ProgressCallback | None = None,
    ) -> AnalysisResult:
        notify(progress, "snps", 20, "Matching curated SNP database...")
        findings = self.curated.analyze(parse_result)
        notify(progress, "snps", 40, f"Found {len(findings)} curated matches")

        notify(progress, "clinvar", 50, "Loading pathogenic variant database...")
        risks_outcome, drugs_outcome = await asyncio.gather(
            self.pathogenic.analyze(parse_result, progress),
            self.drugs.analyze(parse_result, progress),
            return_exceptions=True,
        )

        sources: dict[str, SourceStatus] = {}
        disease_risks = self._settle(self.pathogenic.source_id, risks_outcome, sources)
        notify(progress, "pharmgkb", 85, "Checking drug-gene interactions...")
        drug_interactions = self._settle(self.drugs.source_id, drugs_outcome, sources)

        result = self.aggregator.aggregate(
            parse_result,
            findings,
            drug_interactions,
            disease_risks,
            sources,
        )
        notify(progress, "complete", 100, "Analysis complete!")
        return result

    def _check_key_type(self, source_id: str, expected: TableKeyType) -> None:
        manifest = self.loader.manifests.get(source_id)
        if manifest is not None and manifest.key_type is not expected:
            raise ValueError(
                f"Reference source {source_id} is keyed by {manifest.key_type.value}, "
                f"but its analyzer needs {expected.value}"
            )

    def run_sync(
        self,
        content: str,
        progress: ProgressCallback | None = None,
    ) -> AnalysisResult:
        return asyncio.run(self.run(content, progress))

    @staticmethod
    def _settle(
        source_id: str,
        outcome: Any,
        sources: dict[str, SourceStatus],
    ) -> list[Any]:
        if isinstance(outcome, SourceUnavailable):
            logger.warning("Continuing without %s: %s", source_id, outcome.reason)
            sources[source_id] = SourceStatus(
                source_id=source_id,
                succeeded=False,
                error=outcome.reason,
            )
            return []
        if isinstance(outcome, BaseException):
            raise outcome

        sources[source_id] = SourceStatus(
            source_id=source_id,
            succeeded=True,
            record_count=len(outcome),
        )
        return list(outcome)


def build_default_pipeline(
    manifests_dir: str | Path | None = None,
    curated_path: str | Path | None = None,
    policy: FetchPolicy | None = None,
    overrides: Mapping[str, str] | None = None,
) -> GenomeAnalysisPipeline:
    """Wire manifests, loader and curated table from the repository config.

    ``overrides`` maps a source id onto another URL or path.
    """

    manifests = ReferenceManifestLoader(manifests_dir).load_all()
    for source_id, location in (overrides or {}).items():
        key = source_id.strip().lower()
        if key not in manifests:
            raise KeyError(
                f"Unknown reference source: {source_id}. "
                f"Available: {', '.join(sorted(manifests))}"
            )
        manifests[key] = manifests[key].with_location(location)

    loader = ReferenceTableLoader(manifests, fetcher=JsonFetcher(policy))
    return GenomeAnalysisPipeline(
        curated_table=load_curated_table(curated_path),
        loader=loader,
    )
