"""Flag emoji lookup."""

from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

import pycountry

from .constants import COUNTRY_ALIASES, UNKNOWN_FLAG

_REGIONAL_INDICATOR_A = 0x1F1E6


def flag_from_alpha_2(code: str) -> str:
    """Build a flag emoji from an ISO 3166-1 alpha-2 code."""
    return ''.join(chr(_REGIONAL_INDICATOR_A + ord(c) - ord('A')) for c in code.upper())


@lru_cache(maxsize=None)
def lookup_country_flag(name: str) -> Optional[str]:
    """
    Flag emoji for a country name, or None if unknown.

    Common names ("Brunei", "Cape Verde") resolve through COUNTRY_ALIASES;
    everything else goes to pycountry, which matches ISO names and codes.
    """
    key = (name or '').strip()
    if not key:
        return None
    alias = COUNTRY_ALIASES.get(key.lower())
    if alias:
        return flag_from_alpha_2(alias)
    try:
        country = pycountry.countries.lookup(key)
    except LookupError:
        return None
    return flag_from_alpha_2(country.alpha_2)


class FlagLookup:
    """Resolves flag glyphs: override table, then country lookup, then placeholder."""

    def __init__(self, overrides: Optional[Mapping[str, str]] = None):
        self.overrides = MappingProxyType(dict(overrides or {}))

    def get(self, key: str) -> str:
        return self.overrides.get(key) or lookup_country_flag(key) or UNKNOWN_FLAG

    __call__ = get
