"""Reference-source manifests describing where lookup tables live."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

REPO_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_MANIFESTS_DIR = REPO_ROOT / "config" / "sources"
DEFAULT_SCHEMAS_DIR = REPO_ROOT / "schemas"


class TableKeyType(str, Enum):
    """How a reference table addresses its entries."""

    MARKER_ID = "marker_id"
    POSITION = "position"


@dataclass(frozen=True)
class ReferenceManifest:
    """Immutable metadata for one reference table."""

    source_id: str
    display_name: str
    description: str
    location: str
    key_type: TableKeyType
    schema_path: Path | None = None
    homepage_url: str | None = None
    license_name: str | None = None

    def with_location(self, location: str) -> ReferenceManifest:
        """Return a copy pointing at another URL or path."""

        return ReferenceManifest(
            source_id=self.source_id,
            display_name=self.display_name,
            description=self.description,
            location=resolve_location(location),
            key_type=self.key_type,
            schema_path=self.schema_path,
            homepage_url=self.homepage_url,
            license_name=self.license_name,
        )


def resolve_location(raw: str) -> str:
    """Expand ``~`` and environment variables; anchor relative paths at the repo."""

    expanded = os.path.expandvars(os.path.expanduser(raw.strip()))
    if expanded.startswith(("http://", "https://")):
        return expanded

    path = Path(expanded)
    if not path.is_absolute():
        path = REPO_ROOT / path
    return str(path)


class ReferenceManifestLoader:
    """Load reference manifests from ``config/sources`` JSON files."""

    def __init__(
        self,
        manifests_dir: str | Path | None = None,
        schemas_dir: str | Path | None = None,
    ) -> None:
        self.manifests_dir = Path(manifests_dir) if manifests_dir else DEFAULT_MANIFESTS_DIR
        self.schemas_dir = Path(schemas_dir) if schemas_dir else DEFAULT_SCHEMAS_DIR

    def list_sources(self) -> list[str]:
        """List available reference source IDs."""

        return sorted(path.stem for path in self.manifests_dir.glob("*.json"))

    def load(self, source_id_or_path: str | Path) -> ReferenceManifest:
        """Load one manifest by ID or explicit path."""

        path = self._resolve_path(source_id_or_path)
        payload = json.loads(path.read_text())
        return self._parse(payload)

    def load_all(self) -> dict[str, ReferenceManifest]:
        """Load every manifest in the manifest directory."""

        manifests: dict[str, ReferenceManifest] = {}
        for source_id in self.list_sources():
            manifest = self.load(source_id)
            manifests[manifest.source_id] = manifest
        return manifests

    def _resolve_path(self, source_id_or_path: str | Path) -> Path:
        requested = Path(source_id_or_path)

        if requested.exists():
            return requested

        candidate = self.manifests_dir / f"{requested}.json"
        if candidate.exists():
            return candidate

        raise FileNotFoundError(
            f"Reference manifest not found: {source_id_or_path}. "
            f"Available: {', '.join(self.list_sources())}"
        )

    def _parse(self, payload: dict[str, Any]) -> ReferenceManifest:
        source_id = str(payload.get("source_id", "")).strip().lower()
        if not source_id:
            raise ValueError("Manifest source_id cannot be empty")

        location = str(payload.get("location", "")).strip()
        if not location:
            raise ValueError(f"Manifest {source_id} must define a location")

        key_type = TableKeyType(str(payload.get("key_type", "marker_id")).lower())

        schema_name = self._clean_optional(payload.get("schema"))
        schema_path = self.schemas_dir / schema_name if schema_name else None

        return ReferenceManifest(
            source_id=source_id,
            display_name=str(payload.get("display_name", source_id)),
            description=str(payload.get("description", "")),
            location=resolve_location(location),
            key_type=key_type,
            schema_path=schema_path,
            homepage_url=self._clean_optional(payload.get("homepage_url")),
            license_name=self._clean_optional(payload.get("license_name")),
        )

    @staticmethod
    def _clean_optional(value: Any) -> str | None:
        if value is None:
            return None
        cleaned = str(value).strip()
        return cleaned or None
