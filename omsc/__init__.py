from .models import (
    Entity,
    HistoryRow,
    ScoreRecord,
    ParticipationRecord,
    NotableTransition,
    CountryStats,
    MemberStats,
)
from .editions import extract_edition_number, max_edition
from .roster import extract_roster, extract_flag_key, sort_roster
from .stats import aggregate_countries, aggregate_members, round_one_decimal
from .leaderboard import format_leaderboard, format_score
from .participation import (
    compute_last_participation,
    format_participation,
    resolve_reference_edition,
)
from .flags import FlagLookup
from .fetcher import WikiFetcher, FetchError, parse_history_tables
from .report import build_reports, generate_reports

__all__ = [
    # Models
    'Entity',
    'HistoryRow',
    'ScoreRecord',
    'ParticipationRecord',
    'NotableTransition',
    'CountryStats',
    'MemberStats',
    # Parsing
    'extract_edition_number',
    'max_edition',
    'extract_roster',
    'extract_flag_key',
    'sort_roster',
    # Aggregation
    'aggregate_countries',
    'aggregate_members',
    'round_one_decimal',
    # Formatting
    'format_leaderboard',
    'format_score',
    'compute_last_participation',
    'format_participation',
    'resolve_reference_edition',
    'FlagLookup',
    # Fetching
    'WikiFetcher',
    'FetchError',
    'parse_history_tables',
    # Reports
    'build_reports',
    'generate_reports',
]
