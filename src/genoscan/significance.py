"""Clinical-significance classification for pathogenic-variant tables."""

from __future__ import annotations

from dataclasses import dataclass

PATHOGENIC = "Pathogenic"
LIKELY_PATHOGENIC = "Likely Pathogenic"
RISK_FACTOR = "Risk Factor"
DRUG_RESPONSE = "Drug Response"
PROTECTIVE = "Protective"
UNKNOWN_SIGNIFICANCE = "unknown"

SIGNIFICANCE_ORDER: tuple[str, ...] = (
    PATHOGENIC,
    LIKELY_PATHOGENIC,
    RISK_FACTOR,
    DRUG_RESPONSE,
    PROTECTIVE,
)


@dataclass(frozen=True)
class SignificanceRule:
    """Substring rule mapping free-text significance onto a category.

    A rule matches when the lowercased text contains any ``any_of`` substring
    and none of the ``none_of`` substrings.
    """

    category: str
    any_of: tuple[str, ...]
    none_of: tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        lowered = text.lower()
        if not any(token in lowered for token in self.any_of):
            return False
        return not any(token in lowered for token in self.none_of)


DEFAULT_SIGNIFICANCE_RULES: tuple[SignificanceRule, ...] = (
    SignificanceRule(PATHOGENIC, any_of=("pathogenic",), none_of=("likely",)),
    SignificanceRule(LIKELY_PATHOGENIC, any_of=("likely_pathogenic", "likely pathogenic")),
    SignificanceRule(RISK_FACTOR, any_of=("risk",)),
    SignificanceRule(DRUG_RESPONSE, any_of=("drug",)),
    SignificanceRule(PROTECTIVE, any_of=("protective",)),
)


def classify_significance(
    text: str | None,
    rules: tuple[SignificanceRule, ...] = DEFAULT_SIGNIFICANCE_RULES,
) -> str:
    """Return the category of the first matching rule, or ``unknown``."""

    if not text:
        return UNKNOWN_SIGNIFICANCE

    for rule in rules:
        if rule.matches(text):
            return rule.category
    return UNKNOWN_SIGNIFICANCE


def significance_rank(category: str) -> int:
    """Sort key: listed categories by severity, anything else after them."""

    try:
        return SIGNIFICANCE_ORDER.index(category)
    except ValueError:
        return len(SIGNIFICANCE_ORDER)
