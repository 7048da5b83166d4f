"""
Turns one raw source row into a validated LabelRecord.

Column rules (names are case-insensitive):
- required: gtin, lot, expiry (or exp)
- optional: manufacture (or mfg)

A row that breaks a required rule is reported as None so the caller can
skip it; one bad line must not abort a batch of thousands.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, Mapping, Optional, Sequence, Tuple

from ..exceptions import InvalidRecordError
from ..models import LabelRecord
from .dates import parse_flexible_date


logger = logging.getLogger(__name__)

GTIN_COLUMNS: Tuple[str, ...] = ("gtin",)
LOT_COLUMNS: Tuple[str, ...] = ("lot",)
EXPIRY_COLUMNS: Tuple[str, ...] = ("expiry", "exp")
MANUFACTURE_COLUMNS: Tuple[str, ...] = ("manufacture", "mfg")


class RawRow(Mapping[str, str]):
    """
    Case-insensitive, read-only mapping of column name to trimmed cell text.

    Lives only between reading a source row and building a record from it.
    """

    __slots__ = ("_values", "row_number")

    def __init__(self, values: Mapping[str, str], row_number: int = 0):
        self._values: Dict[str, str] = {
            str(key).strip().lower(): ("" if value is None else str(value).strip())
            for key, value in values.items()
        }
        self.row_number = row_number

    @classmethod
    def from_pairs(
        cls,
        columns: Sequence[str],
        cells: Sequence[str],
        row_number: int = 0
    ) -> "RawRow":
        """Zip column names with cells, stopping at the shorter sequence."""
        return cls(dict(zip(columns, cells)), row_number=row_number)

    def __getitem__(self, key: str) -> str:
        return self._values[key.strip().lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.strip().lower() in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"RawRow(row={self.row_number}, {self._values!r})"


def _first_present(row: Mapping[str, str], names: Iterable[str]) -> Optional[str]:
    for name in names:
        if name in row:
            return row[name]
    return None


def build_record(row: Mapping[str, str]) -> Optional[LabelRecord]:
    """
    Build a LabelRecord from a raw row.

    Args:
        row: Column name -> cell text (a RawRow, or any mapping with
            lower-case keys)

    Returns:
        The record, or None when the row is missing a required column,
        has an empty GTIN or lot, or carries an unparseable expiry.
        An unparseable manufacture date is treated as absent.
    """
    if not isinstance(row, RawRow):
        row = RawRow(row)
    row_number = getattr(row, "row_number", 0)

    gtin = _first_present(row, GTIN_COLUMNS)
    lot = _first_present(row, LOT_COLUMNS)
    expiry_raw = _first_present(row, EXPIRY_COLUMNS)

    if gtin is None or lot is None or expiry_raw is None:
        logger.debug("Row %s skipped: missing required column", row_number)
        return None

    expiry = parse_flexible_date(expiry_raw)
    if expiry is None:
        logger.debug("Row %s skipped: unparseable expiry %r", row_number, expiry_raw)
        return None

    manufacture = None
    manufacture_raw = _first_present(row, MANUFACTURE_COLUMNS)
    if manufacture_raw:
        parsed = parse_flexible_date(manufacture_raw)
        if parsed is not None:
            manufacture = parsed.value
        else:
            logger.debug(
                "Row %s: ignoring unparseable manufacture date %r",
                row_number, manufacture_raw,
            )

    try:
        return LabelRecord(
            gtin=gtin,
            lot=lot,
            expiry=expiry.value,
            manufacture=manufacture,
            expiry_is_day_zero=expiry.day_zero,
        )
    except InvalidRecordError as e:
        logger.debug("Row %s skipped: %s", row_number, e)
        return None
