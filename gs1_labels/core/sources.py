"""
Label sources: lazy readers that turn batch files into LabelRecords.

Two row providers feed the same record builder:
- DelimitedTextRows  (.csv, .txt, .tsv, .tab) - delimiter sniffed from the header
- WorkbookRows       (.xlsx, .xlsm)           - first sheet row is the header

Files are read incrementally and the handle is released as soon as the
record sequence is exhausted or abandoned. A sequence cannot be resumed;
calling read() again re-opens the file.
"""

from __future__ import annotations

import codecs
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Union

from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..exceptions import UnreadableSourceError, UnsupportedSourceError
from ..models import LabelRecord
from .delimited import detect_delimiter, parse_delimited_line
from .record_builder import RawRow, build_record


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DELIMITED_EXTENSIONS = frozenset({".csv", ".txt", ".tsv", ".tab"})
WORKBOOK_EXTENSIONS = frozenset({".xlsx", ".xlsm"})

_BOMS: Tuple[Tuple[bytes, str], ...] = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


class TextDecoding:
    """
    Chooses the text encoding of a delimited batch file.

    Codec availability is checked once, when the instance is built, so a
    misconfigured candidate fails at startup instead of mid-batch. The
    instance holds no mutable state and can be shared freely.

    Detection order: byte-order mark, then each candidate in turn (the
    whole file must decode), then the fallback, which accepts any bytes.
    """

    def __init__(
        self,
        candidates: Sequence[str] = ("utf-8", "cp1252"),
        fallback: str = "latin-1",
        chunk_size: int = 64 * 1024
    ):
        self.candidates: Tuple[str, ...] = tuple(codecs.lookup(name).name for name in candidates)
        self.fallback: str = codecs.lookup(fallback).name
        self.chunk_size = chunk_size

    def detect(self, path: PathLike) -> str:
        with open(path, "rb") as handle:
            head = handle.read(4)
        for bom, encoding in _BOMS:
            if head.startswith(bom):
                return encoding

        for encoding in self.candidates:
            if self._decodes_cleanly(path, encoding):
                return encoding
        logger.warning("No candidate encoding fits %s, reading as %s", path, self.fallback)
        return self.fallback

    def _decodes_cleanly(self, path: PathLike, encoding: str) -> bool:
        decoder = codecs.getincrementaldecoder(encoding)()
        with open(path, "rb") as handle:
            try:
                for chunk in iter(lambda: handle.read(self.chunk_size), b""):
                    decoder.decode(chunk)
                decoder.decode(b"", final=True)
            except UnicodeDecodeError:
                return False
        return True


DEFAULT_DECODING = TextDecoding()


def cell_to_text(value: Any) -> str:
    """
    Render a workbook cell value as the text a CSV export would hold.

    Dates become ISO dates, integral numbers lose their ".0" so numeric
    GTINs and serial dates survive, empty cells become "".
    """
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.isoformat()
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


class RowProvider(ABC):
    """Produces header-keyed RawRows from one source file."""

    def __init__(self, path: PathLike):
        self.path = Path(path)

    @abstractmethod
    def iter_rows(self) -> Iterator[RawRow]:
        """Yield one RawRow per data row, skipping blank rows."""


class DelimitedTextRows(RowProvider):
    """Rows of a delimited text file whose first line is the header."""

    def __init__(self, path: PathLike, decoding: TextDecoding = DEFAULT_DECODING):
        super().__init__(path)
        self.decoding = decoding
        self.delimiter: Optional[str] = None
        self.columns: List[str] = []

    def iter_rows(self) -> Iterator[RawRow]:
        encoding = self.decoding.detect(self.path)
        with open(self.path, "r", encoding=encoding, newline="") as handle:
            header = handle.readline()
            if not header:
                return
            header = header.rstrip("\r\n")
            self.delimiter = detect_delimiter(header)
            self.columns = [name.lower() for name in parse_delimited_line(header, self.delimiter)]
            logger.debug(
                "%s: encoding=%s delimiter=%r columns=%s",
                self.path.name, encoding, self.delimiter, self.columns,
            )

            for line_number, line in enumerate(handle, start=2):
                line = line.rstrip("\r\n")
                if not line.strip():
                    continue
                cells = parse_delimited_line(line, self.delimiter)
                yield RawRow.from_pairs(self.columns, cells, row_number=line_number)


class WorkbookRows(RowProvider):
    """Rows of a spreadsheet workbook sheet whose first row is the header."""

    def __init__(self, path: PathLike, sheet_name: Optional[str] = None):
        super().__init__(path)
        self.sheet_name = sheet_name
        self.columns: List[str] = []

    def iter_rows(self) -> Iterator[RawRow]:
        try:
            workbook = load_workbook(self.path, read_only=True, data_only=True)
        except (BadZipFile, InvalidFileException, KeyError) as e:
            # KeyError: a zip archive without the workbook parts
            raise UnreadableSourceError(f"{self.path} is not a readable workbook: {e}") from e
        try:
            if self.sheet_name and self.sheet_name not in workbook.sheetnames:
                raise UnreadableSourceError(f"{self.path} has no sheet named '{self.sheet_name}'")
            sheet = workbook[self.sheet_name] if self.sheet_name else workbook.active
            rows = sheet.iter_rows(values_only=True)
            header = next(rows, None)
            if header is None:
                return
            self.columns = [cell_to_text(value).lower() for value in header]

            for row_number, values in enumerate(rows, start=2):
                cells = [cell_to_text(value) for value in values]
                if not any(cells):
                    continue
                yield RawRow.from_pairs(self.columns, cells, row_number=row_number)
        finally:
            workbook.close()


def row_provider_for(
    path: PathLike,
    decoding: TextDecoding = DEFAULT_DECODING,
    sheet_name: Optional[str] = None
) -> RowProvider:
    """Pick the row provider for a file by its extension."""
    suffix = Path(path).suffix.lower()
    if suffix in DELIMITED_EXTENSIONS:
        return DelimitedTextRows(path, decoding=decoding)
    if suffix in WORKBOOK_EXTENSIONS:
        return WorkbookRows(path, sheet_name=sheet_name)
    supported = ", ".join(sorted(DELIMITED_EXTENSIONS | WORKBOOK_EXTENSIONS))
    raise UnsupportedSourceError(
        f"Unsupported label source '{suffix or path}' (expected one of: {supported})"
    )


@dataclass
class SourceStats:
    """Counters for one read pass."""
    rows_read: int = 0
    records_built: int = 0
    rows_skipped: int = 0


class TabularLabelSource:
    """
    Lazy, forward-only sequence of LabelRecords read from a batch file.

    Example:
        >>> source = TabularLabelSource("batch.csv")
        >>> records = list(source.read())
        >>> source.stats.rows_skipped
        0
    """

    def __init__(
        self,
        path: PathLike,
        decoding: TextDecoding = DEFAULT_DECODING,
        sheet_name: Optional[str] = None
    ):
        if not str(path).strip():
            raise ValueError("Label source path is required")
        self.path = Path(path)
        self.provider = row_provider_for(self.path, decoding=decoding, sheet_name=sheet_name)
        self.stats = SourceStats()

    def read(self) -> Iterator[LabelRecord]:
        """Yield a record per valid row; invalid rows are counted and skipped."""
        stats = SourceStats()
        self.stats = stats
        rows = self.provider.iter_rows()
        try:
            for row in rows:
                stats.rows_read += 1
                record = build_record(row)
                if record is None:
                    stats.rows_skipped += 1
                    continue
                stats.records_built += 1
                yield record
        finally:
            rows.close()

        logger.info(
            "%s: %d rows read, %d records, %d skipped",
            self.path.name, stats.rows_read, stats.records_built, stats.rows_skipped,
        )

    def __iter__(self) -> Iterator[LabelRecord]:
        return self.read()


def read_labels(path: PathLike, **kwargs: Any) -> Iterator[LabelRecord]:
    """Shortcut for TabularLabelSource(path, **kwargs).read()."""
    return TabularLabelSource(path, **kwargs).read()
