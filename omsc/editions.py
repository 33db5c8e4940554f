"""Edition label parsing."""

import re
from typing import Iterable, Optional

_INTEGER = re.compile(r'\d+')
_LEADING_INTEGER = re.compile(r'\s*(\d+)')


def extract_edition_number(label: str) -> Optional[int]:
    """
    Extract the first integer embedded in an edition label.

    Args:
        label: Free-text label (e.g., "Edition 42", "#7")

    Returns:
        Edition number, or None if the label holds no digits
    """
    match = _INTEGER.search(label or '')
    return int(match.group(0)) if match else None


def max_edition(labels: Iterable[str]) -> int:
    """Highest edition number among labels (0 if none parse)."""
    highest = 0
    for label in labels:
        number = extract_edition_number(label)
        if number is not None and number > highest:
            highest = number
    return highest


def parse_leading_int(value: str) -> int:
    """Parse the leading integer of a cell ("3rd" -> 3); 0 when absent."""
    match = _LEADING_INTEGER.match(value or '')
    return int(match.group(1)) if match else 0
