"""
Integration tests for reading label batches from CSV and Excel files.
"""

import zipfile
from datetime import date, datetime

import pytest
from openpyxl import Workbook

from gs1_labels import (
    LabelRecord,
    TabularLabelSource,
    TextDecoding,
    UnreadableSourceError,
    UnsupportedSourceError,
    build_human_readable,
    read_labels,
)
from gs1_labels.core.sources import DelimitedTextRows, WorkbookRows, cell_to_text


def _write(path, text, encoding="utf-8"):
    path.write_bytes(text.encode(encoding))
    return path


class TestDelimitedSource:
    """CSV-like batches."""

    def test_end_to_end_csv(self, tmp_path):
        path = _write(tmp_path / "batch.csv", "gtin,lot,expiry\n12345678901231,ABC1,2025-01-31\n")
        records = list(TabularLabelSource(path).read())
        assert records == [LabelRecord("12345678901231", "ABC1", date(2025, 1, 31))]
        assert build_human_readable(records[0]) == "(01)12345678901231(17)250131(10)ABC1"

    def test_semicolon_quotes_and_invalid_rows(self, tmp_path):
        path = _write(tmp_path / "batch.csv", (
            "GTIN;Lot;Exp;Mfg\r\n"
            '12345678901231;"LOT;1";06/05/2025;2024-06-05\r\n'
            "\r\n"
            "12345678901231;LOT2;not-a-date;\r\n"
            "12345678901231;LOT3\r\n"
            "   \r\n"
            "12345678901231;LOT4;2025-06-00;garbage\r\n"
        ))
        source = TabularLabelSource(path)
        records = list(source.read())

        assert [r.lot for r in records] == ["LOT;1", "LOT4"]
        assert records[0].expiry == date(2025, 6, 5)
        assert records[0].manufacture == date(2024, 6, 5)
        assert records[1].expiry_is_day_zero
        assert records[1].manufacture is None

        assert source.stats.rows_read == 4
        assert source.stats.records_built == 2
        assert source.stats.rows_skipped == 2
        assert source.stats.records_built == source.stats.rows_read - source.stats.rows_skipped

    def test_tab_separated(self, tmp_path):
        path = _write(tmp_path / "batch.tsv", "gtin\tlot\texpiry\n0123\tL 1\t20250131\n")
        records = list(read_labels(path))
        assert records[0].lot == "L 1"
        assert records[0].expiry == date(2025, 1, 31)

    def test_delimiter_and_columns_recorded(self, tmp_path):
        path = _write(tmp_path / "batch.txt", "Gtin|Lot|Expiry\n1|A|2025-01-31\n")
        provider = DelimitedTextRows(path)
        rows = list(provider.iter_rows())
        assert provider.delimiter == "|"
        assert provider.columns == ["gtin", "lot", "expiry"]
        assert rows[0].row_number == 2

    def test_utf8_bom_header(self, tmp_path):
        path = _write(tmp_path / "batch.csv", "gtin,lot,expiry\n1,A,2025-01-31\n", encoding="utf-8-sig")
        assert len(list(read_labels(path))) == 1

    def test_cp1252_file(self, tmp_path):
        path = _write(tmp_path / "batch.csv", "gtin,lot,expiry\n1,LOTé,2025-01-31\n", encoding="cp1252")
        assert TextDecoding().detect(path) == "cp1252"
        assert [r.lot for r in read_labels(path)] == ["LOTé"]

    def test_utf8_file(self, tmp_path):
        path = _write(tmp_path / "batch.csv", "gtin,lot,expiry\n1,LOTé,2025-01-31\n")
        assert TextDecoding().detect(path) == "utf-8"

    def test_empty_file(self, tmp_path):
        path = _write(tmp_path / "batch.csv", "")
        assert list(read_labels(path)) == []

    def test_header_only(self, tmp_path):
        path = _write(tmp_path / "batch.csv", "gtin,lot,expiry\n")
        assert list(read_labels(path)) == []

    def test_extra_cells_ignored(self, tmp_path):
        path = _write(tmp_path / "batch.csv", "gtin,lot,expiry\n1,A,2025-01-31,extra,cells\n")
        assert len(list(read_labels(path))) == 1


class TestSourceLifecycle:
    """Laziness, re-reading and I/O failures."""

    def test_lazy_single_pass(self, tmp_path):
        lines = ["gtin,lot,expiry"] + [f"1,LOT{i},2025-01-31" for i in range(100)]
        path = _write(tmp_path / "batch.csv", "\n".join(lines) + "\n")
        source = TabularLabelSource(path)
        records = source.read()
        first = next(records)
        assert first.lot == "LOT0"
        assert source.stats.rows_read == 1
        records.close()

    def test_read_again_reopens(self, tmp_path):
        path = _write(tmp_path / "batch.csv", "gtin,lot,expiry\n1,A,2025-01-31\n2,B,2025-02-28\n")
        source = TabularLabelSource(path)
        assert list(source.read()) == list(source.read())
        assert list(source) == list(source.read())

    def test_missing_file_raises_on_iteration(self, tmp_path):
        source = TabularLabelSource(tmp_path / "missing.csv")
        with pytest.raises(FileNotFoundError):
            list(source.read())

    @pytest.mark.parametrize("name", ["batch.pdf", "batch.xls", "batch"])
    def test_unsupported_extension(self, tmp_path, name):
        with pytest.raises(UnsupportedSourceError):
            TabularLabelSource(tmp_path / name)

    def test_blank_path_rejected(self):
        with pytest.raises(ValueError):
            TabularLabelSource("  ")


class TestWorkbookSource:
    """Excel workbook batches share the record rules."""

    def _workbook(self, path, rows):
        wb = Workbook()
        ws = wb.active
        for row in rows:
            ws.append(row)
        wb.save(path)
        return path

    def test_workbook_rows(self, tmp_path):
        path = self._workbook(tmp_path / "batch.xlsx", [
            ["GTIN", "Lot", "Expiry", "Manufacture"],
            [12345678901231, "ABC1", datetime(2025, 1, 31), None],
            ["00012345678905", "LOT42", "2025-06-00", "2025-01-01"],
            [None, None, None, None],
            ["123", "X", "garbage", None],
            [12345678901231, "SER", 45658, None],
        ])
        source = TabularLabelSource(path)
        records = list(source.read())

        assert records[0] == LabelRecord("12345678901231", "ABC1", date(2025, 1, 31))
        assert records[1].expiry_is_day_zero
        assert records[1].manufacture == date(2025, 1, 1)
        assert records[2].expiry == date(2025, 1, 1)
        assert len(records) == 3
        assert source.stats.rows_skipped == 1

    def test_workbook_matches_csv(self, tmp_path):
        csv_path = _write(tmp_path / "batch.csv", "gtin,lot,expiry,mfg\n12345678901231,A1,2025-01-31,2024-01-31\n")
        xlsx_path = self._workbook(tmp_path / "batch.xlsx", [
            ["gtin", "lot", "expiry", "mfg"],
            ["12345678901231", "A1", "2025-01-31", "2024-01-31"],
        ])
        assert list(read_labels(csv_path)) == list(read_labels(xlsx_path))

    def test_header_columns_lowercased(self, tmp_path):
        path = self._workbook(tmp_path / "batch.xlsx", [[" GTIN ", "LOT", "EXP"], ["1", "A", "2025-01-31"]])
        provider = WorkbookRows(path)
        rows = list(provider.iter_rows())
        assert provider.columns == ["gtin", "lot", "exp"]
        assert rows[0]["exp"] == "2025-01-31"

    def test_empty_workbook(self, tmp_path):
        path = self._workbook(tmp_path / "batch.xlsx", [])
        assert list(read_labels(path)) == []

    def test_corrupt_workbook(self, tmp_path):
        path = _write(tmp_path / "batch.xlsx", "gtin,lot,expiry\n1,A,2025-01-31\n")
        with pytest.raises(UnreadableSourceError):
            list(read_labels(path))

    def test_zip_without_workbook_parts(self, tmp_path):
        path = tmp_path / "batch.xlsx"
        with zipfile.ZipFile(path, "w") as archive:
            archive.writestr("readme.txt", "not a workbook")
        with pytest.raises(UnreadableSourceError):
            list(read_labels(path))

    def test_unknown_sheet(self, tmp_path):
        path = self._workbook(tmp_path / "batch.xlsx", [["gtin", "lot", "expiry"]])
        with pytest.raises(UnreadableSourceError, match="Labels"):
            list(read_labels(path, sheet_name="Labels"))


class TestCellToText:
    """Workbook cell normalization."""

    @pytest.mark.parametrize("value, expected", [
        (None, ""),
        (12345678901231, "12345678901231"),
        (12345678901231.0, "12345678901231"),
        (45658.5, "45658.5"),
        (datetime(2025, 1, 31, 10, 0), "2025-01-31"),
        (date(2025, 1, 31), "2025-01-31"),
        ("  LOT  ", "LOT"),
    ])
    def test_values(self, value, expected):
        assert cell_to_text(value) == expected
