"""Aggregate statistics over per-entity history tables."""

import logging
import math
import re
from typing import Optional, Sequence

from .constants import (
    ESTABLISHED_THRESHOLD,
    GF_PLACE_COLUMN,
    GF_POINTS_COLUMN,
    POINTS_COLUMN,
    SF_POINTS_COLUMN,
    VETERAN_THRESHOLD,
)
from .editions import extract_edition_number, parse_leading_int
from .models import (
    CountryStats,
    Entity,
    HistoryRow,
    MemberStats,
    NotableTransition,
    Ranking,
    ScoreRecord,
)

logger = logging.getLogger('omsc.stats')

_POINTS = re.compile(r'\d+')


def round_one_decimal(value: float) -> float:
    """Round to one decimal place, halves away from zero (101 / 3 -> 33.7)."""
    scaled = math.floor(abs(value) * 10 + 0.5)
    return math.copysign(scaled, value) / 10


def within_ceiling(row: HistoryRow, ceiling: Optional[int]) -> bool:
    """True if the row's edition parses and is at or below the ceiling."""
    edition = extract_edition_number(row.edition)
    if edition is None:
        return False
    return ceiling is None or edition <= ceiling


def pair_tables(
    roster: Sequence[Entity],
    tables: Sequence[Sequence[HistoryRow]],
    track: str,
) -> list[tuple[Entity, Sequence[HistoryRow]]]:
    """Pair roster entities with their history tables by position."""
    if len(roster) != len(tables):
        logger.warning(
            f'{track}: {len(roster)} roster entries but {len(tables)} history tables; '
            f'pairing the first {min(len(roster), len(tables))}'
        )
    return list(zip(roster, tables))


def _country_row_included(row: HistoryRow, ceiling: Optional[int]) -> bool:
    points = row.get(POINTS_COLUMN)
    return within_ceiling(row, ceiling) and bool(_POINTS.fullmatch(points)) and int(points) != 0


def _member_row_included(row: HistoryRow, ceiling: Optional[int]) -> bool:
    has_points = bool(row.get(GF_POINTS_COLUMN).strip() or row.get(SF_POINTS_COLUMN).strip())
    return within_ceiling(row, ceiling) and has_points


def sort_descending(records: dict[str, ScoreRecord]) -> Ranking:
    return sorted(records.items(), key=lambda item: item[1].score, reverse=True)


def sort_ascending(records: dict[str, ScoreRecord]) -> Ranking:
    return sorted(records.items(), key=lambda item: item[1].score)


def aggregate_countries(
    roster: Sequence[Entity],
    tables: Sequence[Sequence[HistoryRow]],
    ceiling: Optional[int] = None,
) -> CountryStats:
    """
    Fold country history tables into total and average point rankings.

    A row counts when its edition parses, is within the ceiling, and its
    points cell is a non-zero digit string. Countries with no points are
    left out of both rankings.

    Args:
        roster: Countries in page order
        tables: History tables, parallel to roster
        ceiling: Highest edition to include (None for all)

    Returns:
        CountryStats with totals and averages sorted best first
    """
    totals: dict[str, ScoreRecord] = {}
    averages: dict[str, ScoreRecord] = {}

    for entity, rows in pair_tables(roster, tables, 'countries'):
        included = [row for row in rows if _country_row_included(row, ceiling)]
        total = sum(int(row.get(POINTS_COLUMN)) for row in included)
        if total == 0:
            continue

        average = round_one_decimal(total / len(included))
        logger.debug(f'{entity.name}: {total} points over {len(included)} editions ({average} avg)')
        totals[entity.name] = ScoreRecord(total, flag_key=entity.name)
        averages[entity.name] = ScoreRecord(average, flag_key=entity.name)

    return CountryStats(totals=sort_descending(totals), averages=sort_descending(averages))


def aggregate_members(
    roster: Sequence[Entity],
    tables: Sequence[Sequence[HistoryRow]],
    ceiling: Optional[int] = None,
    min_participations: int = 1,
    veteran_threshold: int = VETERAN_THRESHOLD,
    established_threshold: int = ESTABLISHED_THRESHOLD,
) -> MemberStats:
    """
    Fold member history tables into an average grand-final placement ranking.

    Rows count when their edition is within the ceiling and they carry
    grand-final or semi-final points; only grand-final placements feed the
    average. Appearance counts use every row, before filtering.

    Args:
        roster: Members in page order
        tables: History tables, parallel to roster
        ceiling: Highest edition to include (None for all)
        min_participations: Minimum grand-final placements to be ranked
        veteran_threshold: Appearances that make a member a veteran
        established_threshold: Appearances that make a member established

    Returns:
        MemberStats with placements sorted best (lowest) first and the
        status transitions reached on this run
    """
    placements: dict[str, ScoreRecord] = {}
    transitions: list[NotableTransition] = []

    for entity, rows in pair_tables(roster, tables, 'members'):
        included = [row for row in rows if _member_row_included(row, ceiling)]

        total_place = 0
        count = 0
        for row in included:
            place = parse_leading_int(row.get(GF_PLACE_COLUMN))
            if place:
                total_place += place
                count += 1

        appearances = len(rows)
        if appearances == veteran_threshold:
            transitions.append(NotableTransition(entity.name, 'veteran', appearances))
        elif appearances == established_threshold:
            transitions.append(NotableTransition(entity.name, 'established', appearances))

        if total_place == 0 or count < min_participations:
            continue

        placements[entity.name] = ScoreRecord(
            round_one_decimal(total_place / count),
            flag_key=entity.flag_key,
            veteran=appearances >= veteran_threshold,
            qualification_rate=round_one_decimal(count / len(included) * 100),
        )

    return MemberStats(placements=sort_ascending(placements), transitions=transitions)
