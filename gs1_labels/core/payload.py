"""
GS1 payload encoding for label records.

Two renderings of the same element string:

- Human readable (printed under the symbol), AI codes in parentheses:
      (01)00012345678905(17)2025-06(11)250101(10)LOT42

- Machine payload (handed to the barcode generator), bare AI codes with
  GS (ASCII 29, 0x1D) separators:
      <GS>01000123456789051725063010LOT42<GS>11250101

GS1 rule applied by the machine form: a GS starts the string (FNC1 in
first position) and precedes every AI that follows a variable-length
field. Of the AIs used here only (10) is variable length.

Only AIs (01), (10), (11) and (17) are produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple

from ..exceptions import InvalidRecordError
from ..models import LabelRecord


logger = logging.getLogger(__name__)

GS = "\x1d"

GTIN_LENGTH = 14

AI_GTIN = "01"
AI_BATCH_LOT = "10"
AI_PROD_DATE = "11"
AI_EXPIRY = "17"

# AI -> fixed value length; None marks a variable-length field
AI_FIXED_LENGTHS: Dict[str, Optional[int]] = {
    AI_GTIN: 14,
    AI_BATCH_LOT: None,
    AI_PROD_DATE: 6,
    AI_EXPIRY: 6,
}


@dataclass(frozen=True)
class Gs1Payloads:
    """Both renderings of one record."""
    human_readable: str
    machine: str


def pad_gtin(gtin: str) -> str:
    """
    Left-pad a GTIN with zeros to 14 characters.

    Longer input is passed through unchanged; that is a data-quality
    problem for the caller to report, not an encoding failure.
    """
    value = gtin.strip()
    if len(value) > GTIN_LENGTH:
        logger.warning("GTIN %r is longer than %d digits, passing through unpadded", value, GTIN_LENGTH)
        return value
    return value.rjust(GTIN_LENGTH, "0")


def format_machine_date(value: date) -> str:
    """Format a date as GS1 YYMMDD."""
    return value.strftime("%y%m%d")


def format_human_expiry(record: LabelRecord) -> str:
    """
    Expiry as printed on the label.

    Day-zero expiries show only the month (YYYY-MM) because the day was
    never specified; everything else uses the YYMMDD machine form.
    """
    if record.expiry_is_day_zero:
        return record.expiry.strftime("%Y-%m")
    return format_machine_date(record.expiry)


def _check_record(record: LabelRecord) -> None:
    if record is None:
        raise InvalidRecordError("Label record is required")
    if not (record.gtin or "").strip():
        raise InvalidRecordError("GTIN is required")
    if not (record.lot or "").strip():
        raise InvalidRecordError("Lot is required")


def element_sequence(record: LabelRecord, human: bool = False) -> List[Tuple[str, str]]:
    """
    Ordered (AI, value) pairs for a record.

    The human-readable order keeps the lot last; the machine order puts the
    manufacture date after the lot so the variable-length lot is followed by
    a GS only when another AI actually comes after it.
    """
    _check_record(record)
    gtin = pad_gtin(record.gtin)

    if human:
        elements = [
            (AI_GTIN, gtin),
            (AI_EXPIRY, format_human_expiry(record)),
        ]
        if record.manufacture is not None:
            elements.append((AI_PROD_DATE, format_machine_date(record.manufacture)))
        elements.append((AI_BATCH_LOT, record.lot))
        return elements

    elements = [
        (AI_GTIN, gtin),
        (AI_EXPIRY, format_machine_date(record.resolved_expiry)),
        (AI_BATCH_LOT, record.lot),
    ]
    if record.manufacture is not None:
        elements.append((AI_PROD_DATE, format_machine_date(record.manufacture)))
    return elements


def build_human_readable(record: LabelRecord) -> str:
    """
    Human-readable GS1 text: AI codes in parentheses, no separators.

    Example:
        (01)12345678901231(17)250131(10)ABC1
    """
    return "".join(f"({ai}){value}" for ai, value in element_sequence(record, human=True))


def build_machine_payload(record: LabelRecord) -> str:
    """
    Machine GS1 element string for the barcode generator.

    Starts with GS and inserts a GS before any AI whose predecessor is
    variable length. Day-zero expiries encode the month's last day.
    """
    parts = [GS]
    previous_variable = False
    for ai, value in element_sequence(record):
        if previous_variable:
            parts.append(GS)
        parts.append(ai)
        parts.append(value)
        previous_variable = AI_FIXED_LENGTHS[ai] is None
    return "".join(parts)


def build_payloads(record: LabelRecord) -> Gs1Payloads:
    """Encode both payload forms for one record."""
    return Gs1Payloads(
        human_readable=build_human_readable(record),
        machine=build_machine_payload(record),
    )


def display_machine_payload(payload: str) -> str:
    """Make GS characters visible, e.g. for logs and reports."""
    return payload.replace(GS, "<GS>")
