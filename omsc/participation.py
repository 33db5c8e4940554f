"""Last-participation report: editions missed per entity."""

import logging
from typing import Callable, Optional, Sequence, Union

from .constants import EMPHASIS, UNKNOWN_FLAG
from .editions import extract_edition_number, max_edition
from .models import Entity, HistoryRow, ParticipationRecord

logger = logging.getLogger('omsc.participation')

SortKey = Callable[[ParticipationRecord], object]

PARTICIPATION_SORTS: dict[str, SortKey] = {
    'missed': lambda record: (-record.editions_missed, record.name.casefold()),
    'alphabetical': lambda record: record.name.casefold(),
}


def resolve_reference_edition(
    tables: Sequence[Sequence[HistoryRow]],
    current_edition: Optional[int] = None,
) -> int:
    """Explicit current edition, or the highest edition found in any row."""
    if current_edition:
        return current_edition
    return max_edition(row.edition for rows in tables for row in rows)


def compute_last_participation(
    roster: Sequence[Entity],
    tables: Sequence[Sequence[HistoryRow]],
    reference_edition: int,
    cap_at_reference: bool = True,
) -> list[ParticipationRecord]:
    """
    Find each entity's most recent edition.

    Every roster entity gets a record, with last edition 0 when it has no
    parseable rows. Tables pair with the roster by position.

    Args:
        roster: Entities in page order
        tables: History tables, parallel to roster
        reference_edition: The current edition
        cap_at_reference: Ignore editions after the reference edition

    Returns:
        ParticipationRecords in roster order
    """
    last: dict[str, int] = {entity.name: 0 for entity in roster}

    for entity, rows in zip(roster, tables):
        for row in rows:
            edition = extract_edition_number(row.edition)
            if edition is None:
                continue
            if cap_at_reference and edition > reference_edition:
                continue
            if edition > last[entity.name]:
                last[entity.name] = edition

    return [ParticipationRecord(name, edition, reference_edition) for name, edition in last.items()]


def format_participation(
    records: Sequence[ParticipationRecord],
    get_flag: Optional[Callable[[str], str]] = None,
    sort: Union[str, SortKey] = 'missed',
) -> str:
    """
    Render one line per entity: flag, name, last edition, editions missed.

    Entities in the current edition are emphasized and show no gap.

    Args:
        records: Participation records
        get_flag: Flag lookup by name (defaults to the placeholder glyph)
        sort: 'missed' (most missed first), 'alphabetical', or a key function

    Example:
        🇸🇪 Sweden 40 (+2)
        🇳🇴 **Norway 42**
    """
    get_flag = get_flag or (lambda _key: UNKNOWN_FLAG)
    sort_key = PARTICIPATION_SORTS[sort] if isinstance(sort, str) else sort

    lines = []
    for record in sorted(records, key=sort_key):
        text = f'{record.name} {record.last_edition}'
        if record.is_current:
            text = f'{EMPHASIS}{text}{EMPHASIS}'
        else:
            text += f' ({record.editions_missed:+d})'
        lines.append(f'{get_flag(record.name)} {text}\n')

    logger.debug(f'Formatted participation for {len(lines)} entities')
    return ''.join(lines)
