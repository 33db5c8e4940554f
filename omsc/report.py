"""Report generation: fetch pages, aggregate, format, write."""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .config import get_config, get_flag_overrides
from .constants import (
    GF_PLACE_COLUMN,
    GF_POINTS_COLUMN,
    OUTPUT_FILES,
    POINTS_COLUMN,
    SF_POINTS_COLUMN,
)
from .fetcher import WikiFetcher, parse_history_tables
from .flags import FlagLookup
from .leaderboard import COUNTRY_STYLE, MEMBER_STYLE, format_leaderboard
from .models import Entity, HistoryRow, NotableTransition
from .participation import (
    compute_last_participation,
    format_participation,
    resolve_reference_edition,
)
from .roster import extract_roster
from .schemas import ReportConfig
from .stats import aggregate_countries, aggregate_members
from .utils import write_text
from .validators import validate_history_tables, validate_roster

logger = logging.getLogger('omsc.report')

COUNTRY_COLUMNS = [POINTS_COLUMN]
MEMBER_COLUMNS = [GF_PLACE_COLUMN, GF_POINTS_COLUMN, SF_POINTS_COLUMN]


def load_track(
    pages_html: Mapping[str, str],
    pages: Sequence[str],
) -> tuple[list[Entity], list[list[HistoryRow]]]:
    """Concatenate the rosters and history tables of several pages, in page order."""
    roster: list[Entity] = []
    tables: list[list[HistoryRow]] = []
    for page in pages:
        html = pages_html[page]
        roster.extend(extract_roster(html))
        tables.extend(parse_history_tables(html))
    return roster, tables


def build_reports(
    pages_html: Mapping[str, str],
    config: ReportConfig,
    flags: FlagLookup,
    current_edition: Optional[int] = None,
) -> tuple[dict[str, str], list[NotableTransition]]:
    """
    Build every report from already-fetched page HTML.

    Args:
        pages_html: Page identifier -> HTML
        config: Report settings
        flags: Flag lookup
        current_edition: Edition ceiling and reference edition (None or 0 to infer)

    Returns:
        Tuple of (output file name -> report text, member status transitions)
    """
    # 0 means "not given" for both the ceiling and the reference edition
    current_edition = current_edition or None
    countries, country_tables = load_track(pages_html, config.country_pages)
    members, member_tables = load_track(pages_html, config.member_pages)
    logger.info(f'Extracted {len(countries)} countries and {len(members)} members')

    for warning in (
        validate_roster(countries, 'countries')
        + validate_roster(members, 'members')
        + validate_history_tables(countries, country_tables, 'countries', COUNTRY_COLUMNS)
        + validate_history_tables(members, member_tables, 'members', MEMBER_COLUMNS)
    ):
        logger.warning(warning)

    country_stats = aggregate_countries(countries, country_tables, ceiling=current_edition)
    member_stats = aggregate_members(
        members,
        member_tables,
        ceiling=current_edition,
        min_participations=config.min_participations,
        veteran_threshold=config.veteran_threshold,
        established_threshold=config.established_threshold,
    )

    reference_edition = resolve_reference_edition(country_tables, current_edition)
    logger.info(f'Reference edition: {reference_edition}')
    participation = compute_last_participation(
        countries,
        country_tables,
        reference_edition,
        cap_at_reference=config.cap_participation_at_reference,
    )

    reports = {
        OUTPUT_FILES['totals']: format_leaderboard(country_stats.totals, flags, COUNTRY_STYLE),
        OUTPUT_FILES['averages']: format_leaderboard(country_stats.averages, flags, COUNTRY_STYLE),
        OUTPUT_FILES['placements']: format_leaderboard(
            member_stats.placements,
            flags,
            MEMBER_STYLE,
            show_qualification_rate=config.show_qualification_rate,
        ),
        OUTPUT_FILES['participation']: format_participation(
            participation, flags, sort=config.participation_sort
        ),
    }
    return reports, member_stats.transitions


def generate_reports(
    current_edition: Optional[int] = None,
    output_dir: Optional[Path] = None,
    config: Optional[ReportConfig] = None,
    fetcher: Optional[WikiFetcher] = None,
    flags: Optional[FlagLookup] = None,
) -> list[Path]:
    """
    Fetch all source pages, build the reports, and write them.

    Nothing is written unless every page was fetched, and reports are
    staged beside the output directory so a failed write leaves no partial set.

    Raises:
        FetchError: If any source page could not be fetched

    Returns:
        Paths of the written report files
    """
    config = config or get_config()
    fetcher = fetcher or WikiFetcher(
        base_url=config.base_url,
        timeout=config.request_timeout,
        workers=config.fetch_workers,
    )
    flags = flags or FlagLookup(get_flag_overrides())
    output_dir = Path(output_dir or config.output_dir)

    pages_html = fetcher.fetch_pages(config.country_pages + config.member_pages)
    reports, transitions = build_reports(pages_html, config, flags, current_edition)

    for transition in transitions:
        logger.info(
            f'{transition.status.capitalize()}: {transition.name} '
            f'({transition.appearances} appearances)'
        )

    written = []
    output_dir.parent.mkdir(parents=True, exist_ok=True)
    staging = Path(tempfile.mkdtemp(prefix='.omsc-', dir=output_dir.parent))
    try:
        # every report is rendered to disk before any is moved into place
        for filename, text in reports.items():
            write_text(staging / filename, text, create_dirs=False)
        output_dir.mkdir(parents=True, exist_ok=True)
        for filename in reports:
            path = output_dir / filename
            os.replace(staging / filename, path)
            written.append(path)
            logger.info(f'Wrote {path}')
    finally:
        shutil.rmtree(staging, ignore_errors=True)
    return written
