"""Extractor for AncestryDNA raw data downloads."""

from __future__ import annotations

from genoscan.formats.base import ExtractionResult, FormatExtractor
from genoscan.formats.common import iter_data_lines
from genoscan.quality import MarkerValidator

NO_CALL_ALLELE = "0"


class AncestryExtractor(FormatExtractor):
    """Read ``rsid  chromosome  position  allele1  allele2`` rows.

    AncestryDNA reports each allele in its own column and marks no-calls with
    ``0``; a call with either allele missing is rejected rather than stored as
    a half genotype.
    """

    name = "ancestry"
    label = "AncestryDNA"
    min_columns = 5

    def extract(self, content: str, validator: MarkerValidator) -> ExtractionResult:
        result = ExtractionResult()

        for line in iter_data_lines(content):
            parts = line.split("\t")
            if len(parts) < self.min_columns:
                result.skipped += 1
                continue

            marker_id, chromosome, position, allele1, allele2 = parts[:5]
            allele1 = allele1.strip()
            allele2 = allele2.strip()
            if not allele1 or not allele2 or NO_CALL_ALLELE in (allele1, allele2):
                result.skipped += 1
                continue

            result.add(
                validator.build_call(marker_id, chromosome, position, allele1 + allele2)
            )

        return result
