"""Shared line handling for text-based genome exports."""

from __future__ import annotations

from collections.abc import Iterator


def iter_lines(content: str) -> Iterator[str]:
    """Yield each line without its terminator, tolerating CRLF files."""

    for line in content.split("\n"):
        yield line.rstrip("\r")


def is_skippable(line: str) -> bool:
    """Comment and blank lines never carry genotype data."""

    return line.startswith("#") or not line.strip()


def iter_data_lines(content: str) -> Iterator[str]:
    """Yield lines that are neither comments nor blank."""

    for line in iter_lines(content):
        if not is_skippable(line):
            yield line
