"""Shared pytest configuration and fixtures for coauthorship tests."""

import sys
from pathlib import Path

import pytest

# Ensure the coauthorship package is importable when running from the repo root
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def two_paper_rows():
    """A-B on one paper, B-C on another, both from the US."""
    return [
        {"Authors": "A, B", "Publisher": "P1", "Country": "US"},
        {"Authors": "B, C", "Publisher": "P2", "Country": "US"},
    ]


@pytest.fixture
def mixed_rows():
    """Rows with repeated pairs, a solo author, affiliations and several countries."""
    return [
        {
            "Authors": "Smith, Lee, Kim",
            "Publisher": "Elsevier",
            "Authors with affiliations": "Smith, MIT, Cambridge; Lee, ETH, Zurich",
            "Country": "USA",
        },
        {
            "Authors": "Lee, Smith",
            "Publisher": "Springer",
            "Authors with affiliations": "Lee, Oxford, UK",
            "Country": "UK",
        },
        {"Authors": "Solo", "Publisher": "Wiley", "Country": "Japan"},
        {"Authors": "Kim, Park", "Publisher": "IEEE", "Country": "Korea"},
        {"Authors": "Park, Cho", "Publisher": "IEEE", "Country": "Korea"},
        {"Authors": "Cho, Kim", "Publisher": "ACM"},
    ]
