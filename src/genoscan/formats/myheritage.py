"""Extractor for MyHeritage CSV exports."""

from __future__ import annotations

from genoscan.formats.base import ExtractionResult, FormatExtractor
from genoscan.formats.common import iter_data_lines
from genoscan.quality import MarkerValidator


class MyHeritageExtractor(FormatExtractor):
    """Read quoted ``"RSID","CHROMOSOME","POSITION","RESULT"`` rows.

    Anything before the ``RSID`` header row is preamble and ignored.
    """

    name = "myheritage"
    label = "MyHeritage"
    min_columns = 4

    def extract(self, content: str, validator: MarkerValidator) -> ExtractionResult:
        result = ExtractionResult()
        in_header = True

        for line in iter_data_lines(content):
            if "rsid" in line.lower():
                in_header = False
                continue
            if in_header:
                continue

            parts = [part.replace('"', "").strip() for part in line.split(",")]
            if len(parts) < self.min_columns:
                result.skipped += 1
                continue

            marker_id, chromosome, position, genotype = parts[:4]
            result.add(validator.build_call(marker_id, chromosome, position, genotype))

        return result
