"""Extractor for 23andMe-shaped tab-separated exports."""

from __future__ import annotations

from genoscan.formats.base import ExtractionResult, FormatExtractor
from genoscan.formats.common import iter_data_lines
from genoscan.quality import MarkerValidator


class TabularGenotypeExtractor(FormatExtractor):
    """Read ``rsid  chromosome  position  genotype`` rows.

    23andMe, Nebula and FamilyTreeDNA raw downloads share this layout; the
    extractor registry stamps the vendor label onto each instance.
    """

    name = "23andme"
    label = "23andMe"
    min_columns = 4

    def extract(self, content: str, validator: MarkerValidator) -> ExtractionResult:
        result = ExtractionResult()

        for line in iter_data_lines(content):
            parts = line.split("\t")
            if len(parts) < self.min_columns:
                result.skipped += 1
                continue

            marker_id, chromosome, position, genotype = parts[:4]
            result.add(validator.build_call(marker_id, chromosome, position, genotype))

        return result
