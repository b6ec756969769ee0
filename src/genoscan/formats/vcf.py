"""Extractor for single-sample VCF genotype files."""

from __future__ import annotations

import re

from genoscan.formats.base import ExtractionResult, FormatExtractor
from genoscan.formats.common import iter_data_lines
from genoscan.quality import MarkerValidator

GT_SEPARATOR = re.compile(r"[|/]")
GT_INDEX = re.compile(r"[0-9]{1,4}")
VCF_MIN_COLUMNS = 10


class VcfExtractor(FormatExtractor):
    """Translate the first sample's ``GT`` indices into allele strings.

    Alleles are concatenated in GT order (``0/1`` with REF=A, ALT=G gives
    ``AG``). Multi-allelic ALT lists are supported; a missing (``.``) or
    out-of-range index rejects the record.
    """

    name = "vcf"
    label = "VCF"

    def extract(self, content: str, validator: MarkerValidator) -> ExtractionResult:
        result = ExtractionResult()

        for line in iter_data_lines(content):
            parts = line.split("\t")
            if len(parts) < VCF_MIN_COLUMNS:
                result.skipped += 1
                continue

            chrom, pos, marker_id, ref, alt = parts[:5]
            genotype = self._resolve_genotype(ref, alt, parts[8], parts[9])
            if genotype is None:
                result.skipped += 1
                continue

            result.add(validator.build_call(marker_id, chrom, pos, genotype))

        return result

    @staticmethod
    def _resolve_genotype(ref: str, alt: str, format_field: str, sample: str) -> str | None:
        format_keys = format_field.strip().split(":")
        if "GT" not in format_keys:
            return None

        sample_values = sample.strip().split(":")
        gt_index = format_keys.index("GT")
        if gt_index >= len(sample_values):
            return None

        alleles = [ref.strip()] + [item.strip() for item in alt.split(",")]
        resolved: list[str] = []
        for raw_index in GT_SEPARATOR.split(sample_values[gt_index]):
            # ASCII only; str.isdigit() also accepts digits int() cannot parse
            if GT_INDEX.fullmatch(raw_index) is None:
                return None
            index = int(raw_index)
            if index >= len(alleles) or alleles[index] in ("", "."):
                return None
            resolved.append(alleles[index])

        return "".join(resolved)
