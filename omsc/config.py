"""Report configuration management."""

from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .schemas import FlagOverrides, ReportConfig
from .utils import load_json, load_json_safe

DATA_DIR = Path(__file__).parent.parent / 'data'


@lru_cache(maxsize=1)
def get_config() -> ReportConfig:
    """
    Load report configuration from data/report_config.json.

    Configuration is cached after first load. A missing file yields the
    built-in defaults.

    Returns:
        ReportConfig object with validated settings

    Raises:
        ValueError: If config file has invalid structure
    """
    config_path = DATA_DIR / 'report_config.json'
    if not config_path.exists():
        return ReportConfig()
    return load_json(config_path, schema=ReportConfig)


@lru_cache(maxsize=1)
def get_flag_overrides() -> Mapping[str, str]:
    """Load the read-only flag override table from data/flag_overrides.json."""
    overrides = load_json_safe(DATA_DIR / 'flag_overrides.json', schema=FlagOverrides)
    return MappingProxyType(dict(overrides.root) if overrides is not None else {})


def clear_config_cache() -> None:
    """
    Clear the configuration caches.

    Use this if the config files are modified during runtime
    and you need to reload them.
    """
    get_config.cache_clear()
    get_flag_overrides.cache_clear()
