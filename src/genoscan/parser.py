"""Genome parser orchestrating size guards, detection and extraction."""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType

from genoscan.config import ParserLimits
from genoscan.errors import (
    FileTooLarge,
    NoValidMarkers,
    ResultTooLarge,
    TooManyLines,
    UnrecognizedFormat,
)
from genoscan.formats import FormatDetector
from genoscan.formats.base import ExtractionResult
from genoscan.models import FormatTag, ParseResult
from genoscan.quality import MarkerValidator
from genoscan.registry import ExtractorRegistry, build_default_extractor_registry

logger = logging.getLogger(__name__)

FALLBACK_LABEL = "Unknown (parsed as 23andMe)"


class GenomeParser:
    """Turn an uploaded export file into a validated, read-only variant map.

    The input is untrusted: byte and line ceilings are enforced before any
    detection or extraction work. Unknown layouts get one last attempt with
    the 23andMe extractor, since many vendor files share that shape without
    announcing it in their header.
    """

    def __init__(
        self,
        *,
        limits: ParserLimits | None = None,
        detector: FormatDetector | None = None,
        registry: ExtractorRegistry | None = None,
    ) -> None:
        self.limits = limits or ParserLimits()
        self.detector = detector or FormatDetector()
        self.registry = registry or build_default_extractor_registry()
        self.validator = MarkerValidator(self.limits.max_genotype_length)

    def parse(self, content: str) -> ParseResult:
        self._check_size(len(content.encode("utf-8", "surrogatepass")))
        self._check_lines(content)

        tag = self.detector.detect(content)
        if tag is FormatTag.UNKNOWN:
            extractor = self.registry.create(FormatTag.TWENTY_THREE_AND_ME)
            extracted = extractor.extract(content, self.validator)
            if not extracted.variants:
                raise UnrecognizedFormat()
            label = FALLBACK_LABEL
        else:
            extractor = self.registry.create(tag)
            extracted = extractor.extract(content, self.validator)
            label = extractor.label
            if not extracted.variants:
                raise NoValidMarkers(label)

        return self._build_result(tag, label, extracted)

    def parse_file(self, path: str | Path) -> ParseResult:
        """Parse a file on disk, refusing oversized files before reading them."""

        return self.parse(self.read_file(path))

    def read_file(self, path: str | Path) -> str:
        file_path = Path(path)
        self._check_size(file_path.stat().st_size)
        return file_path.read_text(encoding="utf-8")

    def _check_size(self, size_bytes: int) -> None:
        if size_bytes > self.limits.max_file_bytes:
            raise FileTooLarge(size_bytes, self.limits.max_file_bytes)

    def _check_lines(self, content: str) -> None:
        line_count = content.count("\n") + 1
        if line_count > self.limits.max_line_count:
            raise TooManyLines(line_count, self.limits.max_line_count)

    def _build_result(
        self,
        tag: FormatTag,
        label: str,
        extracted: ExtractionResult,
    ) -> ParseResult:
        marker_count = len(extracted.variants)
        if marker_count > self.limits.max_line_count:
            raise ResultTooLarge(marker_count, self.limits.max_line_count)

        logger.info(
            "Parsed genome: format=%s markers=%d skipped=%d",
            label,
            marker_count,
            extracted.skipped,
        )
        return ParseResult(
            variants=MappingProxyType(dict(extracted.variants)),
            format_tag=tag,
            format_label=label,
            skipped_records=extracted.skipped,
        )
