"""Input collection for the list of sites to analyze."""

from __future__ import annotations

import sys
from pathlib import Path


def collect(raw_text: str) -> list[str]:
    """Normalize newline-separated identifiers.

    Lines are stripped and blank lines dropped. Order is preserved and
    duplicates are kept.

    Args:
        raw_text: Text as typed or read from a file

    Returns:
        List of identifiers (empty when nothing usable was entered)
    """
    return [line.strip() for line in raw_text.splitlines() if line.strip()]


def read_text(input_arg: str) -> str:
    """Read identifier text from a file path or '-' for stdin."""
    if input_arg == '-':
        return sys.stdin.read()

    path = Path(input_arg)
    try:
        return path.read_text(encoding='utf-8')
    except UnicodeDecodeError:
        return path.read_bytes().decode('utf-8', errors='replace')


def collect_from_file(input_arg: str) -> list[str]:
    """Collect identifiers from a file path or '-' for stdin."""
    return collect(read_text(input_arg))
