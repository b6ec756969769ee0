"""Record-level validation for parsed genotype calls."""

from __future__ import annotations

import re

from genoscan.config import MAX_GENOTYPE_LENGTH
from genoscan.models import VariantCall

MARKER_ID_PATTERN = re.compile(r"^rs[0-9]{1,12}$", re.IGNORECASE)
CHROMOSOME_PATTERN = re.compile(r"^(?:[1-9]|1[0-9]|2[0-2]|X|Y|M|MT)$")
GENOTYPE_PATTERN = re.compile(r"^[ACGT\-0]+$")
NO_CALL_GENOTYPES = frozenset({"--", "00"})


def is_valid_marker_id(value: str | None) -> bool:
    """Return True for reference-SNP identifiers such as ``rs762551``."""

    return bool(value) and MARKER_ID_PATTERN.fullmatch(value) is not None


def normalize_chromosome(value: str | None) -> str | None:
    """Strip a ``chr`` prefix and return the canonical chromosome token."""

    if value is None:
        return None

    cleaned = value.strip().upper()
    if cleaned.startswith("CHR"):
        cleaned = cleaned[3:]

    return cleaned if CHROMOSOME_PATTERN.fullmatch(cleaned) else None


def sanitize_genotype(value: str | None, max_length: int = MAX_GENOTYPE_LENGTH) -> str | None:
    """Return an uppercase genotype or None for no-calls and malformed values."""

    if value is None:
        return None

    cleaned = value.strip().upper()
    if not cleaned or len(cleaned) > max_length:
        return None
    if cleaned in NO_CALL_GENOTYPES:
        return None
    if not GENOTYPE_PATTERN.fullmatch(cleaned):
        return None

    return cleaned


class MarkerValidator:
    """Build validated :class:`VariantCall` objects from raw extractor fields.

    Extractors hand every candidate record to :meth:`build_call`; anything that
    fails identifier, chromosome or genotype checks comes back as None so the
    caller can count it as skipped.
    """

    def __init__(self, max_genotype_length: int = MAX_GENOTYPE_LENGTH) -> None:
        self.max_genotype_length = max_genotype_length

    def build_call(
        self,
        marker_id: str | None,
        chromosome: str | None,
        position: str | None,
        genotype: str | None,
    ) -> VariantCall | None:
        cleaned_id = (marker_id or "").strip()
        if not is_valid_marker_id(cleaned_id):
            return None

        cleaned_chromosome = normalize_chromosome(chromosome)
        if cleaned_chromosome is None:
            return None

        cleaned_position = (position or "").strip()
        if not cleaned_position:
            return None

        cleaned_genotype = sanitize_genotype(genotype, self.max_genotype_length)
        if cleaned_genotype is None:
            return None

        return VariantCall(
            marker_id=cleaned_id.lower(),
            chromosome=cleaned_chromosome,
            position=cleaned_position,
            genotype=cleaned_genotype,
        )
