"""Markdown summary of a co-authorship network.

Sections:
- Overview counts (records, authors shown, isolated authors, pairs)
- Country legend (rank, country, records, colour)
- Most connected authors (by degree)
- Strongest collaborations (by co-authored record count)
"""

from __future__ import annotations

from typing import Sequence

from coauthorship.network import Network

TOP_AUTHORS = 10
TOP_PAIRS = 10

_DASH = "—"


def fmt_num(x: int | float | None) -> str:
    """Comma-separated number; integers without decimals, floats with one."""
    if x is None:
        return _DASH
    if isinstance(x, float):
        return f"{x:,.1f}"
    return f"{x:,}"


def md_table(
    headers: Sequence[str],
    rows: Sequence[Sequence],
    alignments: Sequence[str] | None = None,
) -> str:
    """Markdown table; ``alignments`` holds ``'l'``/``'r'``/``'c'`` per column.

    Returns ``""`` when there are no rows. Short rows are padded, long
    rows truncated to the header width.
    """
    if not rows:
        return ""
    n_cols = len(headers)
    marks = {"r": "---:", "c": ":---:"}
    seps = [marks.get(a, "---") for a in (alignments or ["l"] * n_cols)]

    lines = ["| " + " | ".join(headers) + " |", "| " + " | ".join(seps) + " |"]
    for row in rows:
        cells = [str(c).replace("|", "\\|") for c in row][:n_cols]
        cells += [""] * (n_cols - len(cells))
        lines.append("| " + " | ".join(cells) + " |")
    return "\n".join(lines)


def _overview(network: Network) -> list[str]:
    return [
        f"- Records: {fmt_num(len(network.records))}",
        f"- Authors shown: {fmt_num(len(network.shown.nodes))}",
        f"- Isolated authors (not shown): {fmt_num(network.isolated)}",
        f"- Co-author pairs: {fmt_num(len(network.shown.edges))}",
        f"- Countries: {fmt_num(len(network.country_counts))}",
    ]


def generate_summary(network: Network) -> str:
    """Render the full Markdown summary for *network*."""
    lines = ["# Co-authorship Network", "", "## Overview", ""]
    lines.extend(_overview(network))

    lines += ["", "## Countries", ""]
    legend = md_table(
        ["Rank", "Country", "Records", "Colour"],
        [
            [i + 1, e.country, fmt_num(e.count), f"`{e.color}`"]
            for i, e in enumerate(network.ranking.entries)
        ],
        ["r", "l", "r", "l"],
    )
    lines.append(legend or "_No country information._")

    degree = network.encoding.degree
    authors = sorted(network.shown.nodes, key=lambda n: degree[n.name], reverse=True)[:TOP_AUTHORS]
    lines += ["", "## Most Connected Authors", ""]
    table = md_table(
        ["Author", "Co-authors", "Affiliation", "Country"],
        [[n.name, fmt_num(degree[n.name]), n.affiliation, n.country or _DASH] for n in authors],
        ["l", "r", "l", "l"],
    )
    lines.append(table or "_No co-authorships._")

    pairs = sorted(network.shown.edges, key=lambda e: e.weight, reverse=True)[:TOP_PAIRS]
    lines += ["", "## Strongest Collaborations", ""]
    table = md_table(
        ["Authors", "Records", "Publishers"],
        [
            [f"{e.source} & {e.target}", fmt_num(e.weight), ", ".join(dict.fromkeys(e.publishers))]
            for e in pairs
        ],
        ["l", "r", "l"],
    )
    lines.append(table or "_No co-authorships._")

    return "\n".join(lines) + "\n"
