"""Tests for coauthorship.records: lenient record parsing.

Parsing never fails on missing or blank fields: authors and affiliation
entries fall back to empty sequences, the publisher to "", the country to
None. Affiliation keys are built from the first two comma tokens of each
entry, exactly as existing exports expect.
"""

from coauthorship.records import (
    Record,
    UNKNOWN_AFFILIATION,
    affiliation_map,
    parse_record,
    resolve_affiliation,
)


class TestParseRecord:
    """Field extraction and trimming."""

    def test_authors_split_and_trimmed(self):
        rec = parse_record({"Authors": " Smith J ,Lee K,  Kim S "})
        assert rec.authors == ("Smith J", "Lee K", "Kim S")

    def test_missing_authors_is_empty(self):
        assert parse_record({}).authors == ()

    def test_blank_authors_is_empty(self):
        assert parse_record({"Authors": "   "}).authors == ()

    def test_blank_author_token_kept_positionally(self):
        rec = parse_record({"Authors": "A, , B"})
        assert rec.authors == ("A", "", "B")

    def test_duplicate_authors_kept(self):
        assert parse_record({"Authors": "A, A"}).authors == ("A", "A")

    def test_publisher_raw(self):
        assert parse_record({"Publisher": " Elsevier "}).publisher == " Elsevier "

    def test_missing_publisher_is_empty_string(self):
        assert parse_record({"Authors": "A"}).publisher == ""

    def test_affiliation_entries_split_on_semicolon(self):
        rec = parse_record({"Authors with affiliations": "Smith, J, MIT; Lee, K, ETH ;"})
        assert rec.affiliation_entries == ("Smith, J, MIT", "Lee, K, ETH", "")

    def test_missing_affiliations_is_empty(self):
        assert parse_record({"Authors": "A"}).affiliation_entries == ()

    def test_country(self):
        assert parse_record({"Country": "Japan"}).country == "Japan"

    def test_missing_or_empty_country_is_none(self):
        assert parse_record({}).country is None
        assert parse_record({"Country": ""}).country is None

    def test_none_values_tolerated(self):
        rec = parse_record({"Authors": None, "Publisher": None,
                            "Authors with affiliations": None, "Country": None})
        assert rec == Record()

    def test_list_fields_treated_as_absent(self):
        rec = parse_record({"Authors": ["A", "B"], "Authors with affiliations": ["A, X"],
                            "Country": {"name": "Japan"}, "Publisher": ["P"]})
        assert rec == Record()

    def test_numeric_fields_read_as_text(self):
        rec = parse_record({"Authors": "A, B", "Publisher": 2020, "Country": 7})
        assert rec.publisher == "2020"
        assert rec.country == "7"

    def test_boolean_field_treated_as_absent(self):
        assert parse_record({"Publisher": True}).publisher == ""


class TestAffiliationMap:
    """Name keys built from the first two tokens of each entry."""

    def test_key_and_value(self):
        rec = Record(affiliation_entries=("Smith, J, MIT, Cambridge",))
        assert affiliation_map(rec) == {"Smith J": "J, MIT, Cambridge"}

    def test_single_token_entry_uses_placeholder_key(self):
        rec = Record(affiliation_entries=("Smith",))
        assert affiliation_map(rec) == {"Smith undefined": UNKNOWN_AFFILIATION}

    def test_empty_entries_skipped(self):
        rec = Record(affiliation_entries=("", "Lee, K, ETH"))
        assert affiliation_map(rec) == {"Lee K": "K, ETH"}

    def test_later_entry_overwrites(self):
        rec = Record(affiliation_entries=("Lee, K, ETH", "Lee, K, Oxford"))
        assert affiliation_map(rec) == {"Lee K": "K, Oxford"}

    def test_resolve_matching_author(self):
        rec = parse_record({
            "Authors": "Smith J, Lee K",
            "Authors with affiliations": "Smith, J, MIT; Lee, K, ETH",
        })
        assert resolve_affiliation(rec, "Smith J") == "J, MIT"
        assert resolve_affiliation(rec, "Lee K") == "K, ETH"

    def test_resolve_unmatched_author(self):
        rec = parse_record({"Authors": "Smith", "Authors with affiliations": "Smith, MIT"})
        assert resolve_affiliation(rec, "Smith") == UNKNOWN_AFFILIATION

    def test_resolve_empty_affiliation_text_falls_back(self):
        rec = Record(affiliation_entries=("Smith, ",))
        assert resolve_affiliation(rec, "Smith ") == UNKNOWN_AFFILIATION
