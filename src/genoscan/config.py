"""Configuration contracts for genome parsing and reference lookups."""

from __future__ import annotations

from dataclasses import dataclass

MAX_FILE_SIZE_BYTES = 50 * 1024 * 1024
MAX_LINE_COUNT = 2_000_000
MAX_GENOTYPE_LENGTH = 10
DEFAULT_PROGRESS_INTERVAL = 10_000


@dataclass(frozen=True)
class ParserLimits:
    """Ceilings applied to uploaded genome files before any parsing work.

    Typical 23andMe exports are ~25MB and ~600K lines, so the defaults leave
    headroom for every supported vendor while bounding memory and CPU.
    """

    max_file_bytes: int = MAX_FILE_SIZE_BYTES
    max_line_count: int = MAX_LINE_COUNT
    max_genotype_length: int = MAX_GENOTYPE_LENGTH

    def __post_init__(self) -> None:
        if self.max_file_bytes < 1:
            raise ValueError("max_file_bytes must be >= 1")
        if self.max_line_count < 1:
            raise ValueError("max_line_count must be >= 1")
        if self.max_genotype_length < 1:
            raise ValueError("max_genotype_length must be >= 1")


@dataclass(frozen=True)
class FetchPolicy:
    """Timeout and retry settings for remote reference tables."""

    timeout: float = 30.0
    retries: int = 2
    retry_delay: float = 1.0

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")
        if self.retries < 0:
            raise ValueError("retries must be >= 0")
        if self.retry_delay < 0:
            raise ValueError("retry_delay must be >= 0")

    def backoff(self, attempt: int) -> float:
        """Return the delay before retrying after ``attempt`` (1-based) failed."""

        return self.retry_delay * attempt
