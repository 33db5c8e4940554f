"""Sanity checks for scraped rosters and history tables."""

from typing import Sequence

from .models import Entity, HistoryRow


def validate_roster(roster: Sequence[Entity], label: str) -> list[str]:
    """
    Check that a roster is usable as a set of unique entities.

    Checks:
    - No empty display names
    - Display names unique within the roster
    - Every entity has a flag key

    Args:
        roster: Extracted roster
        label: Roster name for messages (e.g., 'countries')

    Returns:
        List of warning messages (empty if valid)
    """
    warnings = []

    empty = sum(1 for entity in roster if not entity.name.strip())
    if empty:
        warnings.append(f'{label} roster has {empty} entries without a name')

    seen = set()
    duplicates = set()
    for entity in roster:
        if entity.name in seen:
            duplicates.add(entity.name)
        seen.add(entity.name)

    if duplicates:
        warnings.append(f'{label} roster has duplicate names: {", ".join(sorted(duplicates))}')

    missing_flags = sorted(entity.name for entity in roster if not entity.flag_key)
    if missing_flags:
        warnings.append(f'{label} roster has no flag image for: {", ".join(missing_flags)}')

    return warnings


def validate_history_tables(
    roster: Sequence[Entity],
    tables: Sequence[Sequence[HistoryRow]],
    label: str,
    required_columns: Sequence[str],
) -> list[str]:
    """
    Check that history tables carry the expected columns.

    Args:
        roster: Extracted roster
        tables: History tables, parallel to roster
        label: Roster name for messages
        required_columns: Headings every row must have

    Returns:
        List of warning messages (empty if valid)
    """
    warnings = []

    for index, rows in enumerate(tables):
        if not rows:
            continue
        missing = [column for column in required_columns if column not in rows[0].cells]
        if missing:
            owner = roster[index].name if index < len(roster) else f'table {index + 1}'
            warnings.append(f'{label}: {owner} table is missing columns: {", ".join(missing)}')

    return warnings
