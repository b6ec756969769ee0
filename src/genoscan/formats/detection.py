"""Content-signature detection of consumer DNA export formats."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from genoscan.formats.common import iter_lines, is_skippable
from genoscan.models import FormatTag

HEADER_WINDOW_CHARS = 2000
FALLBACK_SCAN_LINES = 20
FALLBACK_MIN_COLUMNS = 4

_ROW_SPLIT = re.compile(r"[\t,]")
_ROW_MARKER = re.compile(r"^rs[0-9]+$", re.IGNORECASE)


def mentions_ancestry(header: str) -> bool:
    return "ancestrydna" in header


def mentions_myheritage(header: str) -> bool:
    return "myheritage" in header


def mentions_family_tree(header: str) -> bool:
    return "familytreedna" in header or "ftdna" in header


def has_vcf_header(header: str) -> bool:
    return "##fileformat=vcf" in header


def mentions_nebula(header: str) -> bool:
    return "nebula" in header


def has_rsid_header(header: str) -> bool:
    """23andMe-style ``# rsid`` header, or ``rsid`` alongside ``chromosome``."""

    if "# rsid" in header or "#rsid" in header:
        return True
    return "rsid" in header and "chromosome" in header


def has_rsid_rows(content: str) -> bool:
    """Look for a genotype-shaped row among the first data lines."""

    scanned = 0
    for line in iter_lines(content):
        if is_skippable(line):
            continue
        parts = _ROW_SPLIT.split(line)
        if len(parts) >= FALLBACK_MIN_COLUMNS and _ROW_MARKER.match(parts[0]):
            return True
        scanned += 1
        if scanned >= FALLBACK_SCAN_LINES:
            break
    return False


@dataclass(frozen=True)
class DetectionRule:
    """Header predicate paired with the format it identifies."""

    tag: FormatTag
    predicate: Callable[[str], bool]


DEFAULT_DETECTION_RULES: tuple[DetectionRule, ...] = (
    DetectionRule(FormatTag.ANCESTRY, mentions_ancestry),
    DetectionRule(FormatTag.MYHERITAGE, mentions_myheritage),
    DetectionRule(FormatTag.FAMILY_TREE_DNA, mentions_family_tree),
    DetectionRule(FormatTag.VCF, has_vcf_header),
    DetectionRule(FormatTag.NEBULA, mentions_nebula),
    DetectionRule(FormatTag.TWENTY_THREE_AND_ME, has_rsid_header),
)


class FormatDetector:
    """Classify raw export text with prioritized header rules.

    Rules run in order against the case-folded first ``header_window``
    characters; the first match wins. When none match, a row-shape scan
    decides between 23andMe and unknown. Detection is best effort: the parser
    copes with a wrong guess by reporting zero markers.
    """

    def __init__(
        self,
        rules: tuple[DetectionRule, ...] = DEFAULT_DETECTION_RULES,
        *,
        header_window: int = HEADER_WINDOW_CHARS,
    ) -> None:
        self.rules = rules
        self.header_window = header_window

    def detect(self, content: str) -> FormatTag:
        header = content[: self.header_window].lower()

        for rule in self.rules:
            if rule.predicate(header):
                return rule.tag

        if has_rsid_rows(content):
            return FormatTag.TWENTY_THREE_AND_ME

        return FormatTag.UNKNOWN
