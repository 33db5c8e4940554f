"""Roster extraction from wiki list pages."""

import logging
import re
import unicodedata
from functools import cmp_to_key
from typing import Iterable, Optional
from urllib.parse import unquote

from bs4 import BeautifulSoup

from .constants import ROSTER_BULLET
from .models import Entity

logger = logging.getLogger('omsc.roster')

_FLAG_PATH = re.compile(r'/Flag(.+?)/')
_IMAGE_SUFFIX = re.compile(r'\.(png|svg|jpe?g|gif)$', re.IGNORECASE)
_COMBINING_MARK = re.compile(r'[\u0300-\u036f]')
_LEADING_BULLET = re.compile(rf'^\s*{ROSTER_BULLET}\s*')


def extract_flag_key(src: Optional[str]) -> str:
    """
    Recover the flag key from a flag image path.

    Example:
        '/w/images/thumb/1/1a/FlagUnited_Kingdom.png/25px-FlagUnited_Kingdom.png'
        -> 'United Kingdom'

    Returns:
        Flag key, or "" if src is absent or doesn't match
    """
    if not src:
        return ''
    match = _FLAG_PATH.search(src)
    if not match:
        return ''
    key = _IMAGE_SUFFIX.sub('', match.group(1)).replace('_', ' ')
    return unquote(key).strip()


def _has_combining_mark(name: str) -> bool:
    return bool(_COMBINING_MARK.search(unicodedata.normalize('NFD', name)))


def compare_names(a: Entity, b: Entity) -> int:
    """
    Case-insensitive name comparison.

    Any pair where either name carries a combining diacritic compares
    equal, so accented names keep their relative position.
    """
    a_name = a.name.lower()
    b_name = b.name.lower()
    if _has_combining_mark(a_name) or _has_combining_mark(b_name):
        return 0
    return (a_name > b_name) - (a_name < b_name)


def sort_roster(entities: Iterable[Entity]) -> list[Entity]:
    """Deduplicate on (name, flag key), first occurrence wins, then sort by name."""
    unique = list(dict.fromkeys(entities))
    return sorted(unique, key=cmp_to_key(compare_names))


def extract_roster(html: str) -> list[Entity]:
    """
    Extract the bullet-listed roster from one page.

    Each roster entry is a span directly inside a paragraph containing
    the bullet glyph; the span holds the flag image.

    Args:
        html: Raw page HTML

    Returns:
        Deduplicated, name-sorted list of entities
    """
    soup = BeautifulSoup(html, 'html.parser')
    extracted: list[Entity] = []

    for paragraph in soup.find_all('p'):
        text = paragraph.get_text()
        if f'{ROSTER_BULLET} ' not in text:
            continue
        name = _LEADING_BULLET.sub('', text).replace('\n', '').strip()
        for span in paragraph.find_all('span', recursive=False):
            img = span.find('img')
            flag_key = extract_flag_key(img.get('src') if img else None)
            extracted.append(Entity(name=name, flag_key=flag_key))

    roster = sort_roster(extracted)
    logger.debug(f'Extracted {len(roster)} roster entries ({len(extracted)} before dedup)')
    return roster
