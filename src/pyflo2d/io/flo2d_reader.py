"""
FLO-2D file line-reading utilities.

FLO-2D input and output files are plain whitespace-separated tables with
no header and no comments. Every ``io/`` reader should import helpers
from this module rather than defining its own copy.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from pyflo2d.core.exceptions import MalformedRecordError, NotFoundError


def iter_records(filepath: Path) -> Iterator[tuple[int, list[str]]]:
    """Yield ``(line_number, fields)`` for every non-blank line of a file.

    Line numbers are 1-based. Blank lines (including a trailing one)
    carry no record and are skipped.
    """
    with open(filepath, "r") as f:
        for line_number, line in enumerate(f, start=1):
            parts = line.split()
            if not parts:
                continue
            yield line_number, parts


def require_file(filepath: Path, description: str) -> None:
    """Raise :class:`NotFoundError` when a mandatory file is missing."""
    if not filepath.is_file():
        raise NotFoundError(f"{description} not found: {filepath}", filepath=filepath)


def check_field_count(
    parts: list[str],
    expected: int,
    filepath: Path,
    line_number: int,
) -> None:
    """Raise :class:`MalformedRecordError` unless ``parts`` has ``expected`` fields."""
    if len(parts) != expected:
        raise MalformedRecordError(
            f"Expected {expected} fields, got {len(parts)}",
            filepath=filepath,
            line_number=line_number,
        )


def parse_int(
    value: str,
    context: str = "",
    filepath: Path | None = None,
    line_number: int | None = None,
) -> int:
    """Parse a string as an integer with descriptive error on failure.

    Parameters
    ----------
    value : str
        The string to parse.
    context : str
        Description of what was being parsed (for error messages).
    filepath : Path, optional
        Source file (for error messages).
    line_number : int, optional
        Line number in the source file (for error messages).
    """
    try:
        return int(value)
    except (ValueError, TypeError) as exc:
        msg = (
            f"Expected integer for {context}, got {value!r}"
            if context
            else f"Expected integer, got {value!r}"
        )
        raise MalformedRecordError(msg, filepath=filepath, line_number=line_number) from exc


def parse_float(
    value: str,
    context: str = "",
    filepath: Path | None = None,
    line_number: int | None = None,
) -> float:
    """Parse a string as a float with descriptive error on failure.

    Parameters
    ----------
    value : str
        The string to parse.
    context : str
        Description of what was being parsed (for error messages).
    filepath : Path, optional
        Source file (for error messages).
    line_number : int, optional
        Line number in the source file (for error messages).
    """
    try:
        return float(value)
    except (ValueError, TypeError) as exc:
        msg = (
            f"Expected number for {context}, got {value!r}"
            if context
            else f"Expected number, got {value!r}"
        )
        raise MalformedRecordError(msg, filepath=filepath, line_number=line_number) from exc
