"""Ranked, medal-annotated leaderboard text."""

from typing import Callable, Optional, Sequence

from .constants import EMPHASIS, MEDALS, TIE_MARKER, UNKNOWN_FLAG, VERIFIED_BADGE
from .models import ScoreRecord

COUNTRY_STYLE = 'country'
MEMBER_STYLE = 'member'


def format_score(value: float) -> str:
    """Render whole numbers without a decimal part (34.0 -> '34')."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_leaderboard(
    ranking: Sequence[tuple[str, ScoreRecord]],
    get_flag: Optional[Callable[[str], str]] = None,
    style: str = COUNTRY_STYLE,
    show_qualification_rate: bool = False,
) -> str:
    """
    Render an ordered ranking as one line per entity.

    Rank advances by one per entity. An entity is tied when its score
    equals its successor's or its predecessor's; a tied entity shows the
    rank its tie-block started at, followed by an escaped dot and the tie
    marker. Only untied entities in the top three get a medal and
    emphasis.

    Args:
        ranking: (name, record) pairs, already sorted best first
        get_flag: Flag lookup by key (defaults to the placeholder glyph)
        style: COUNTRY_STYLE appends "points"; MEMBER_STYLE shows the
            verified badge and, optionally, the qualification rate
        show_qualification_rate: Append the member qualification rate

    Returns:
        Leaderboard text ("" for an empty ranking)

    Example:
        format_leaderboard([('A', ScoreRecord(100)), ('B', ScoreRecord(100)),
                            ('C', ScoreRecord(80))])
        # 1\\. (=) ❓ A - 100 points
        # 1\\. (=) ❓ B - 100 points
        # 🥉 **❓ C - 80 points**
    """
    get_flag = get_flag or (lambda _key: UNKNOWN_FLAG)
    is_member = style == MEMBER_STYLE

    lines = []
    rank = 1
    previous_score = None
    tie_count = 0

    for index, (name, record) in enumerate(ranking):
        score = record.score
        next_score = ranking[index + 1][1].score if index + 1 < len(ranking) else None
        ties_next = next_score == score
        points_equal = ties_next or previous_score == score
        is_podium = rank <= 3 and not points_equal

        if is_podium:
            line = f'{MEDALS[rank]} '
        elif points_equal:
            line = f'{rank - tie_count}\\. '
        else:
            line = f'{rank}. '

        if points_equal:
            line += f'{TIE_MARKER} '
        if is_podium:
            line += EMPHASIS

        flag_key = name if record.flag_key is None else record.flag_key
        line += f'{get_flag(flag_key or "")} {name} '

        if is_member and record.veteran:
            line += f'{VERIFIED_BADGE} '

        line += f'- {format_score(score)}'

        if not is_member:
            line += ' points'
        elif show_qualification_rate and record.qualification_rate is not None:
            line += f' ({format_score(record.qualification_rate)}% Q)'

        if is_podium:
            line += EMPHASIS
        lines.append(line + '\n')

        tie_count = tie_count + 1 if ties_next else 0
        previous_score = score
        rank += 1

    return ''.join(lines)
