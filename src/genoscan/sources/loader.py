"""Process-lifetime cache of reference tables with single-flight loading."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from jsonschema import exceptions as jsex
from jsonschema.validators import validator_for

from genoscan.errors import SourceUnavailable
from genoscan.sources.fetch import JsonFetcher
from genoscan.sources.manifest import ReferenceManifest

logger = logging.getLogger(__name__)


def compile_validator(schema_path: Path) -> Any:
    """Build a validator for the draft declared by the schema file."""

    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    validator_cls = validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


class ReferenceTableLoader:
    """Fetch each reference table at most once and share it across analyses.

    Concurrent ``get`` calls for a table that is not cached yet await the same
    in-flight task, so a table is never fetched twice or cached in two
    diverging copies. Failed loads are not cached; the next request retries.
    """

    def __init__(
        self,
        manifests: Mapping[str, ReferenceManifest],
        *,
        fetcher: JsonFetcher | None = None,
    ) -> None:
        self.manifests = dict(manifests)
        self.fetcher = fetcher or JsonFetcher()
        self._tables: dict[str, Mapping[str, Any]] = {}
        self._inflight: dict[str, asyncio.Task[Mapping[str, Any]]] = {}
        self._validators: dict[str, Any] = {}
        self._generation = 0

    async def get(self, source_id: str) -> Mapping[str, Any]:
        """Return the cached table, loading it on first use."""

        key = source_id.strip().lower()
        cached = self._tables.get(key)
        if cached is not None:
            return cached

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.create_task(self._load(key, self._generation))
            self._inflight[key] = task
            task.add_done_callback(lambda done, key=key: self._forget(key, done))

        return await asyncio.shield(task)

    def preload(self, source_id: str, table: Mapping[str, Any]) -> None:
        """Seed the cache with a table the caller already holds."""

        self._tables[source_id.strip().lower()] = MappingProxyType(dict(table))

    def is_loaded(self, source_id: str) -> bool:
        return source_id.strip().lower() in self._tables

    def clear(self) -> None:
        """Drop every cached table.

        Loads already in flight still resolve for their callers but are not
        cached; the next ``get`` starts a fresh load.
        """

        self._tables.clear()
        self._inflight.clear()
        self._generation += 1

    def _forget(self, key: str, task: asyncio.Task[Mapping[str, Any]]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    async def _load(self, source_id: str, generation: int) -> Mapping[str, Any]:
        manifest = self.manifests.get(source_id)
        if manifest is None:
            raise SourceUnavailable(source_id, "no manifest registered")

        logger.info("Loading reference table %s from %s", source_id, manifest.location)
        payload = await self.fetcher.fetch(source_id, manifest.location)
        await asyncio.to_thread(self._validate, manifest, payload)

        table = MappingProxyType(payload)
        if generation != self._generation:
            logger.info("Discarding %s: cache cleared while loading", source_id)
            return table
        self._tables[source_id] = table
        logger.info("Loaded reference table %s (%d entries)", source_id, len(table))
        return table

    def _validate(self, manifest: ReferenceManifest, payload: Any) -> None:
        if not isinstance(payload, dict):
            raise SourceUnavailable(manifest.source_id, "payload is not a JSON object")

        if manifest.schema_path is None:
            return

        validator = self._validators.get(manifest.source_id)
        if validator is None:
            validator = compile_validator(manifest.schema_path)
            self._validators[manifest.source_id] = validator

        error = jsex.best_match(validator.iter_errors(payload))
        if error is not None:
            location = "/".join(str(part) for part in error.absolute_path) or "<root>"
            raise SourceUnavailable(
                manifest.source_id,
                f"schema validation failed at {location}: {error.message}",
            )
