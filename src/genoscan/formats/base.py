"""Base interface for all genome export extractors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from genoscan.models import VariantCall
from genoscan.quality import MarkerValidator


@dataclass
class ExtractionResult:
    """Calls collected by an extractor plus the count of rejected records."""

    variants: dict[str, VariantCall] = field(default_factory=dict)
    skipped: int = 0

    def add(self, call: VariantCall | None) -> None:
        """Store a validated call (last seen wins) or count a rejected record."""

        if call is None:
            self.skipped += 1
            return
        self.variants[call.marker_id] = call


class FormatExtractor(ABC):
    """Extractor that converts one vendor export layout into variant calls."""

    name: str
    label: str

    @abstractmethod
    def extract(self, content: str, validator: MarkerValidator) -> ExtractionResult:
        """Parse the full file text into validated calls."""
