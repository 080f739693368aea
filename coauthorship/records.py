"""Record parser for bibliographic export rows.

Turns one raw row (a mapping with ``Authors``, ``Publisher``,
``Authors with affiliations`` and ``Country`` fields, as found in
Scopus-style CSV exports) into a ``Record``. Parsing is lenient: missing
or mistyped fields become empty sequences or ``None``, numbers are read
as text, and nothing is validated beyond whitespace trimming.

Usage::

    from coauthorship.records import parse_record, resolve_affiliation

    rec = parse_record({"Authors": "Smith, Lee", "Publisher": "Elsevier"})
    rec.authors                          # ('Smith', 'Lee')
    resolve_affiliation(rec, "Smith")    # 'Unknown affiliation'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

AUTHORS_FIELD = "Authors"
PUBLISHER_FIELD = "Publisher"
AFFILIATIONS_FIELD = "Authors with affiliations"
COUNTRY_FIELD = "Country"

UNKNOWN_AFFILIATION = "Unknown affiliation"

# Existing exports render a missing second name token this way; keys built
# from short entries must stay identical to them.
MISSING_TOKEN = "undefined"


@dataclass(frozen=True)
class Record:
    """One parsed bibliographic entry.

    Args:
        authors: Author names in listed order (duplicates kept).
        publisher: Publisher string, possibly empty.
        affiliation_entries: Trimmed ``;``-separated affiliation segments.
        country: Country string, or None if absent.
    """

    authors: tuple[str, ...] = ()
    publisher: str = ""
    affiliation_entries: tuple[str, ...] = ()
    country: str | None = None


def _split_trimmed(text: str, sep: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in text.split(sep))


def _text(value) -> str:
    # Numbers from JSON exports read as their text; lists, objects and
    # booleans count as absent.
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def parse_record(raw: Mapping) -> Record:
    """Parse one raw row into a ``Record``.

    Args:
        raw: Mapping of field name to value. Fields may be missing, None,
            or of a non-string type.

    Returns:
        The parsed record. Never raises for missing, blank or mistyped
        fields.
    """
    authors_text = _text(raw.get(AUTHORS_FIELD))
    authors = _split_trimmed(authors_text, ",") if authors_text.strip() else ()

    affiliations_text = _text(raw.get(AFFILIATIONS_FIELD))
    entries = _split_trimmed(affiliations_text, ";") if affiliations_text else ()

    country = _text(raw.get(COUNTRY_FIELD)) or None

    return Record(
        authors=authors,
        publisher=_text(raw.get(PUBLISHER_FIELD)),
        affiliation_entries=entries,
        country=country,
    )


def affiliation_map(record: Record) -> dict[str, str]:
    """Map constructed author keys to affiliation text for one record.

    Each entry is split on commas; the first two tokens joined by a space
    form the key and every token after the first forms the value. Entries
    with a single token map to ``"Unknown affiliation"``. Later entries
    overwrite earlier ones with the same key.
    """
    mapping: dict[str, str] = {}
    for entry in record.affiliation_entries:
        if not entry:
            continue
        tokens = _split_trimmed(entry, ",")
        second = tokens[1] if len(tokens) > 1 else MISSING_TOKEN
        key = f"{tokens[0]} {second}"
        if len(tokens) > 1:
            mapping[key] = ", ".join(tokens[1:])
        else:
            mapping[key] = UNKNOWN_AFFILIATION
    return mapping


def resolve_affiliation(record: Record, name: str) -> str:
    """Affiliation for *name* in *record*, or ``"Unknown affiliation"``."""
    return affiliation_map(record).get(name) or UNKNOWN_AFFILIATION
