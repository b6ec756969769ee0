"""Drug-gene interaction analyzer over a marker-keyed PharmGKB-shaped table."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from genoscan.models import DrugInteraction, ParseResult, ProgressCallback, VariantMap
from genoscan.sources.loader import ReferenceTableLoader
from genoscan.sources.manifest import TableKeyType

logger = logging.getLogger(__name__)

DEFAULT_LEVEL = "3"
DEFAULT_RECOMMENDATION = "See PharmGKB for details"


def split_drugs(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(";") if part.strip())


def dedupe_interactions(interactions: Iterable[DrugInteraction]) -> list[DrugInteraction]:
    """Sort by evidence level and keep the first row per (gene, level)."""

    ordered = sorted(interactions, key=lambda item: item.level)
    seen: set[tuple[str, str]] = set()
    unique: list[DrugInteraction] = []
    for item in ordered:
        key = (item.gene, item.level)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


class DrugInteractionAnalyzer:
    """Emit drug-gene annotations for markers the user has genotyped."""

    key_type = TableKeyType.MARKER_ID

    def __init__(self, loader: ReferenceTableLoader, *, source_id: str = "pharmgkb") -> None:
        self.loader = loader
        self.source_id = source_id

    async def analyze(
        self,
        parse_result: ParseResult,
        progress: ProgressCallback | None = None,
    ) -> list[DrugInteraction]:
        table = await self.loader.get(self.source_id)
        return self.find_interactions(table, parse_result.variants)

    def find_interactions(
        self,
        table: Mapping[str, list[Mapping[str, Any]]],
        variants: VariantMap,
    ) -> list[DrugInteraction]:
        interactions: list[DrugInteraction] = []

        for marker_id, rows in table.items():
            if marker_id.lower() not in variants:
                continue

            for row in rows:
                interactions.append(
                    DrugInteraction(
                        marker_id=marker_id.upper(),
                        gene=str(row.get("gene") or ""),
                        drugs=split_drugs(row.get("drugs")),
                        level=str(row.get("level") or DEFAULT_LEVEL),
                        recommendation=(
                            row.get("annotation")
                            or row.get("phenotype")
                            or DEFAULT_RECOMMENDATION
                        ),
                    )
                )

        unique = dedupe_interactions(interactions)
        logger.info(
            "Drug scan produced %d interactions (%d before dedup)",
            len(unique),
            len(interactions),
        )
        return unique
