"""Genotype matching against reference interpretation tables."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

T = TypeVar("T")


def candidate_genotypes(genotype: str) -> tuple[str, ...]:
    """Return the lookup keys for a genotype in resolution order.

    Consumer arrays do not report a fixed allele order, so ``AG`` and ``GA``
    are the same call. Two-allele genotypes additionally try each allele's
    homozygous form, for tables that only enumerate some genotypes.
    """

    observed = genotype.upper()
    reversed_call = observed[::-1]
    candidates = [observed, reversed_call]

    if len(observed) == 2:
        first, second = observed[0], observed[1]
        candidates.extend([first + first, second + second])

    return tuple(dict.fromkeys(candidates))


def match_genotype(interpretations: Mapping[str, T], genotype: str) -> T | None:
    """Return the first interpretation whose key matches a candidate, else None."""

    for candidate in candidate_genotypes(genotype):
        match = interpretations.get(candidate)
        if match is not None:
            return match
    return None
