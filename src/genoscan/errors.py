"""Exceptions raised by genome parsing and reference lookups."""

from __future__ import annotations


class GenomeParseError(ValueError):
    """Raised when an uploaded genome file cannot produce a usable result."""


class InputTooLarge(GenomeParseError):
    """Raised when the input exceeds a configured size ceiling."""


class FileTooLarge(InputTooLarge):
    """Raised when the payload is larger than the byte ceiling."""

    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            f"File too large ({_as_mib(size_bytes)}MB). "
            f"Maximum allowed: {_as_mib(limit_bytes)}MB"
        )


class TooManyLines(InputTooLarge):
    """Raised when the payload has more lines than the line ceiling."""

    def __init__(self, line_count: int, limit: int) -> None:
        self.line_count = line_count
        self.limit = limit
        super().__init__(
            f"File has too many lines ({line_count:,}). Maximum allowed: {limit:,}"
        )


class UnrecognizedFormat(GenomeParseError):
    """Raised when no known export format matches, even after fallback."""

    def __init__(self) -> None:
        super().__init__("Unrecognized file format")


class NoValidMarkers(GenomeParseError):
    """Raised when the file parsed but yielded no usable marker."""

    def __init__(self, format_label: str) -> None:
        self.format_label = format_label
        super().__init__(f"No valid SNPs found in file (detected format: {format_label})")


class ResultTooLarge(GenomeParseError):
    """Raised when the parsed marker count exceeds expected limits."""

    def __init__(self, marker_count: int, limit: int) -> None:
        self.marker_count = marker_count
        self.limit = limit
        super().__init__(
            f"Parsed data exceeds expected limits ({marker_count:,} markers > {limit:,})"
        )


class SourceUnavailable(RuntimeError):
    """Raised when a reference table cannot be fetched or fails validation."""

    def __init__(self, source_id: str, reason: str) -> None:
        self.source_id = source_id
        self.reason = reason
        super().__init__(f"Reference source '{source_id}' unavailable: {reason}")


def _as_mib(size_bytes: int) -> int:
    return round(size_bytes / 1024 / 1024)
