"""Curated SNP interpretation table shipped with the repository."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from jsonschema import exceptions as jsex

from genoscan.sources.loader import compile_validator
from genoscan.sources.manifest import DEFAULT_SCHEMAS_DIR, REPO_ROOT

DEFAULT_CURATED_PATH = REPO_ROOT / "config" / "reference" / "curated_snps.json"
CURATED_SCHEMA_PATH = DEFAULT_SCHEMAS_DIR / "curated_table.schema.json"


@dataclass(frozen=True)
class GenotypeInterpretation:
    """What a specific genotype at a curated marker means."""

    status: str
    description: str
    magnitude: int


@dataclass(frozen=True)
class CuratedEntry:
    """Curated knowledge about one marker, keyed by genotype."""

    gene: str
    category: str
    variants: Mapping[str, GenotypeInterpretation] = field(default_factory=dict)
    note: str | None = None


CuratedTable = Mapping[str, CuratedEntry]


def parse_curated_table(payload: Mapping[str, Any]) -> CuratedTable:
    """Convert a raw JSON mapping into typed, read-only curated entries."""

    table: dict[str, CuratedEntry] = {}
    for marker_id, raw_entry in payload.items():
        variants = {
            genotype.upper(): GenotypeInterpretation(
                status=str(raw["status"]),
                description=str(raw["desc"]),
                magnitude=int(raw["magnitude"]),
            )
            for genotype, raw in raw_entry["variants"].items()
        }
        table[marker_id.lower()] = CuratedEntry(
            gene=str(raw_entry["gene"]),
            category=str(raw_entry["category"]),
            variants=MappingProxyType(variants),
            note=raw_entry.get("note"),
        )
    return MappingProxyType(table)


def load_curated_table(
    path: str | Path | None = None,
    *,
    schema_path: str | Path | None = None,
) -> CuratedTable:
    """Load and validate the curated SNP table from JSON."""

    table_path = Path(path) if path else DEFAULT_CURATED_PATH
    payload = json.loads(table_path.read_text(encoding="utf-8"))

    validator = compile_validator(Path(schema_path) if schema_path else CURATED_SCHEMA_PATH)
    error = jsex.best_match(validator.iter_errors(payload))
    if error is not None:
        location = "/".join(str(part) for part in error.absolute_path) or "<root>"
        raise ValueError(f"Curated table {table_path} invalid at {location}: {error.message}")

    return parse_curated_table(payload)
