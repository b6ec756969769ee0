"""Reference-table manifests, fetching and caching."""

from .curated import (
    CuratedEntry,
    CuratedTable,
    GenotypeInterpretation,
    load_curated_table,
    parse_curated_table,
)
from .fetch import JsonFetcher
from .loader import ReferenceTableLoader
from .manifest import (
    ReferenceManifest,
    ReferenceManifestLoader,
    TableKeyType,
)

__all__ = [
    "CuratedEntry",
    "CuratedTable",
    "GenotypeInterpretation",
    "JsonFetcher",
    "ReferenceManifest",
    "ReferenceManifestLoader",
    "ReferenceTableLoader",
    "TableKeyType",
    "load_curated_table",
    "parse_curated_table",
]
