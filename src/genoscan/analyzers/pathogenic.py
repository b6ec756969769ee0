"""Pathogenic-variant analyzer over a position-keyed ClinVar-shaped table."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from genoscan.analyzers.base import notify
from genoscan.config import DEFAULT_PROGRESS_INTERVAL
from genoscan.models import DiseaseRisk, ParseResult, ProgressCallback, VariantCall, VariantMap
from genoscan.significance import classify_significance, significance_rank
from genoscan.sources.loader import ReferenceTableLoader
from genoscan.sources.manifest import TableKeyType

logger = logging.getLogger(__name__)

STAGE = "clinvar"
PROGRESS_START = 60.0
PROGRESS_SPAN = 20.0


def build_position_index(variants: VariantMap) -> dict[str, VariantCall]:
    """Index the user's calls by ``chromosome:position``."""

    return {call.position_key: call for call in variants.values()}


def format_interpretation(significance_text: str, stars: int) -> str:
    suffix = "s" if stars != 1 else ""
    return f"{significance_text} ({stars} star{suffix} review)"


class PathogenicVariantAnalyzer:
    """Flag alleles the user carries that a pathogenic-variant table lists.

    The scan walks the reference table, so its cost grows with the table and
    not with the number of parsed markers. Progress is reported every
    ``progress_interval`` table entries. ``analyze`` runs the scan in a worker
    thread, so progress callbacks are invoked from that thread.
    """

    key_type = TableKeyType.POSITION

    def __init__(
        self,
        loader: ReferenceTableLoader,
        *,
        source_id: str = "clinvar",
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    ) -> None:
        if progress_interval < 1:
            raise ValueError("progress_interval must be >= 1")
        self.loader = loader
        self.source_id = source_id
        self.progress_interval = progress_interval

    async def analyze(
        self,
        parse_result: ParseResult,
        progress: ProgressCallback | None = None,
    ) -> list[DiseaseRisk]:
        table = await self.loader.get(self.source_id)
        return await asyncio.to_thread(self.find_risks, table, parse_result.variants, progress)

    def find_risks(
        self,
        table: Mapping[str, Mapping[str, Any]],
        variants: VariantMap,
        progress: ProgressCallback | None = None,
    ) -> list[DiseaseRisk]:
        index = build_position_index(variants)
        total = len(table)
        risks: list[DiseaseRisk] = []

        for checked, (position_key, entry) in enumerate(table.items(), start=1):
            if checked % self.progress_interval == 0:
                notify(
                    progress,
                    STAGE,
                    PROGRESS_START + checked / total * PROGRESS_SPAN,
                    f"Checked {checked:,} / {total:,} pathogenic variants...",
                )

            call = index.get(position_key)
            if call is None:
                continue

            alt = str(entry.get("alt") or "").upper()
            if not any(allele == alt for allele in call.genotype):
                continue

            raw_significance = str(entry.get("sig") or "")
            stars = int(entry.get("stars") or 0)
            risks.append(
                DiseaseRisk(
                    marker_id=call.marker_id.upper(),
                    gene=entry.get("gene") or "Unknown",
                    condition=entry.get("condition") or "Not specified",
                    significance=classify_significance(raw_significance),
                    interpretation=format_interpretation(raw_significance, stars),
                )
            )

        risks.sort(key=lambda item: significance_rank(item.significance))
        logger.info("Pathogenic scan matched %d of %d table entries", len(risks), total)
        return risks
