"""Country frequency ranking and colour assignment.

Counts how many records name each country, keeps the top N (stable on
ties, so earlier-seen countries win), and colours them along a three-stop
gradient: rank 0 gets the low colour, the middle rank the mid colour and
the last rank the high colour.

Usage::

    from coauthorship.countries import tally_countries, rank_countries

    ranking = rank_countries(tally_countries(records))
    ranking.color_for("USA")     # '#ffcccc' if USA is the most frequent
    ranking.legend()             # ['USA (12)', 'China (9)', ...]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from coauthorship.config import DEFAULT_PALETTE, FALLBACK_COLOR
from coauthorship.records import Record
from coauthorship.scales import PiecewiseScale

logger = logging.getLogger(__name__)

TOP_N = 10


@dataclass(frozen=True)
class CountryEntry:
    """A ranked country with its record count and legend colour."""

    country: str
    count: int
    color: str

    @property
    def label(self) -> str:
        return f"{self.country} ({self.count})"


@dataclass(frozen=True)
class CountryRanking:
    """Top countries in rank order."""

    entries: tuple[CountryEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def color_for(self, country: str | None, fallback: str = FALLBACK_COLOR) -> str:
        """Ranked colour of *country*, or *fallback* if unranked or absent."""
        if country is None:
            return fallback
        for entry in self.entries:
            if entry.country == country:
                return entry.color
        return fallback

    def legend(self) -> list[str]:
        return [e.label for e in self.entries]


def tally_countries(records: Iterable[Record]) -> dict[str, int]:
    """Count records per country, in first-seen order. Absent countries are skipped."""
    counts: dict[str, int] = {}
    for record in records:
        if record.country:
            counts[record.country] = counts.get(record.country, 0) + 1
    return counts


def rank_countries(
    tally: dict[str, int],
    top_n: int = TOP_N,
    palette: tuple[str, str, str] = DEFAULT_PALETTE,
) -> CountryRanking:
    """Select the *top_n* most frequent countries and colour them.

    Args:
        tally: Country counts in first-seen order.
        top_n: Number of countries to keep.
        palette: ``(low, mid, high)`` colour stops.

    Returns:
        A ``CountryRanking`` of ``min(top_n, len(tally))`` entries.
    """
    ranked = sorted(tally.items(), key=lambda kv: kv[1], reverse=True)[:top_n]
    n = len(ranked)
    scale = PiecewiseScale(domain=(0, n // 2, n - 1), colors=tuple(palette))
    entries = tuple(
        CountryEntry(country=c, count=count, color=scale(rank))
        for rank, (c, count) in enumerate(ranked)
    )
    logger.debug("Ranked %d of %d countries", n, len(tally))
    return CountryRanking(entries=entries)
