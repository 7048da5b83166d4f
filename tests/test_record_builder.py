"""
Tests for RawRow and the record builder.
"""

from datetime import date, datetime

import pytest
from gs1_labels import RawRow, build_record, LabelRecord, InvalidRecordError


class TestRawRow:
    """Case-insensitive, trimmed row mapping."""

    def test_case_insensitive_lookup(self):
        row = RawRow({"GTIN": " 123 ", "Lot": "A"})
        assert row["gtin"] == "123"
        assert row["GTIN"] == "123"
        assert "LOT" in row
        assert "expiry" not in row

    def test_from_pairs_uses_shorter_sequence(self):
        row = RawRow.from_pairs(["gtin", "lot", "expiry"], ["1", "A"])
        assert dict(row) == {"gtin": "1", "lot": "A"}

        row = RawRow.from_pairs(["gtin"], ["1", "extra", "cells"])
        assert dict(row) == {"gtin": "1"}

    def test_none_values_become_empty(self):
        assert RawRow({"mfg": None})["mfg"] == ""


class TestBuildRecord:
    """Required/optional column rules."""

    def test_end_to_end_row(self):
        record = build_record({"gtin": "12345678901231", "lot": "ABC1", "expiry": "2025-01-31"})
        assert record == LabelRecord(
            gtin="12345678901231",
            lot="ABC1",
            expiry=date(2025, 1, 31),
            manufacture=None,
        )

    def test_exp_synonym(self):
        record = build_record({"gtin": "1", "lot": "A", "exp": "2025-01-31"})
        assert record.expiry == date(2025, 1, 31)

    def test_mfg_synonym(self):
        record = build_record({"gtin": "1", "lot": "A", "expiry": "2025-01-31", "mfg": "2024-01-31"})
        assert record.manufacture == date(2024, 1, 31)

    def test_mixed_case_headers(self):
        record = build_record(RawRow({"GTIN": "1", "LOT": "A", "Expiry": "2025-01-31", "Manufacture": "2024-12-01"}))
        assert record.manufacture == date(2024, 12, 1)

    @pytest.mark.parametrize("row", [
        {"lot": "A", "expiry": "2025-01-31"},
        {"gtin": "1", "expiry": "2025-01-31"},
        {"gtin": "1", "lot": "A"},
    ])
    def test_missing_required_column(self, row):
        assert build_record(row) is None

    def test_unparseable_expiry(self):
        assert build_record({"gtin": "1", "lot": "A", "expiry": "soon"}) is None

    def test_empty_gtin_or_lot(self):
        assert build_record({"gtin": " ", "lot": "A", "expiry": "2025-01-31"}) is None
        assert build_record({"gtin": "1", "lot": "", "expiry": "2025-01-31"}) is None

    def test_unparseable_manufacture_is_absent(self):
        record = build_record({"gtin": "1", "lot": "A", "expiry": "2025-01-31", "manufacture": "n/a"})
        assert record is not None
        assert record.manufacture is None

    def test_blank_manufacture_is_absent(self):
        record = build_record({"gtin": "1", "lot": "A", "expiry": "2025-01-31", "manufacture": ""})
        assert record.manufacture is None

    def test_day_zero_expiry(self):
        record = build_record({"gtin": "1", "lot": "A", "expiry": "2025-06-00"})
        assert record.expiry_is_day_zero
        assert record.expiry == date(2025, 6, 1)
        assert record.resolved_expiry == date(2025, 6, 30)

    def test_serial_expiry(self):
        record = build_record({"gtin": "1", "lot": "A", "expiry": "45658"})
        assert record.expiry == date(2025, 1, 1)


class TestLabelRecord:
    """Construction invariants."""

    def test_trims_identifiers(self):
        record = LabelRecord(" 123 ", " LOT ", date(2025, 1, 1))
        assert record.gtin == "123"
        assert record.lot == "LOT"

    @pytest.mark.parametrize("gtin, lot", [("", "A"), ("  ", "A"), ("1", ""), ("1", "   ")])
    def test_empty_identifiers_rejected(self, gtin, lot):
        with pytest.raises(InvalidRecordError):
            LabelRecord(gtin, lot, date(2025, 1, 1))

    def test_time_of_day_dropped(self):
        record = LabelRecord("1", "A", datetime(2025, 1, 31, 13, 45), datetime(2024, 1, 1, 8, 0))
        assert record.expiry == date(2025, 1, 31)
        assert type(record.expiry) is date
        assert type(record.manufacture) is date

    def test_day_zero_normalized_to_first(self):
        record = LabelRecord("1", "A", date(2024, 2, 17), expiry_is_day_zero=True)
        assert record.expiry == date(2024, 2, 1)
        assert record.resolved_expiry == date(2024, 2, 29)

    def test_value_equality(self):
        assert LabelRecord("1", "A", date(2025, 1, 1)) == LabelRecord("1", "A", date(2025, 1, 1))

    def test_immutable(self):
        record = LabelRecord("1", "A", date(2025, 1, 1))
        with pytest.raises(AttributeError):
            record.lot = "B"
