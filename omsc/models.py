"""Data models for OMSC statistics."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Entity:
    """A country or member as listed on a roster page."""
    name: str
    flag_key: str = ''


@dataclass
class HistoryRow:
    """One historical appearance, cells kept as raw strings."""
    edition: str
    cells: Dict[str, str] = field(default_factory=dict)

    def get(self, column: str) -> str:
        return self.cells.get(column, '')


@dataclass
class ScoreRecord:
    """Aggregate score for one entity; `score` is the sort key."""
    score: float
    flag_key: Optional[str] = None
    veteran: bool = False
    qualification_rate: Optional[float] = None


@dataclass
class ParticipationRecord:
    """Last attended edition for one entity."""
    name: str
    last_edition: int
    reference_edition: int

    @property
    def editions_missed(self) -> int:
        return self.reference_edition - self.last_edition

    @property
    def is_current(self) -> bool:
        return self.editions_missed == 0


@dataclass(frozen=True)
class NotableTransition:
    """A member reaching a status threshold on this run."""
    name: str
    status: str  # 'veteran' or 'established'
    appearances: int


# Ordered (name, record) pairs, best first
Ranking = List[Tuple[str, ScoreRecord]]


@dataclass
class CountryStats:
    """Country track aggregates."""
    totals: Ranking = field(default_factory=list)
    averages: Ranking = field(default_factory=list)


@dataclass
class MemberStats:
    """Member track aggregates."""
    placements: Ranking = field(default_factory=list)
    transitions: List[NotableTransition] = field(default_factory=list)
