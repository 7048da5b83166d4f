"""
Data-quality checks for label records.

These checks never drop a row: the record builder only enforces the
structural rules (GTIN, lot and expiry present, expiry parseable). The
findings here are surfaced as warnings in reports and on the CLI:
- GTIN: numeric, at most 14 digits, GS1 Mod10 check digit
- Lot: 1-20 characters from GS1 character set 82
- Dates: manufacture date not after expiry
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..models import LabelRecord


@dataclass
class ValidationResult:
    """Result of a validation operation."""
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)

    def merge(self, other: "ValidationResult") -> None:
        self.valid = self.valid and other.valid
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.meta.update(other.meta)

    @property
    def messages(self) -> List[str]:
        return self.errors + self.warnings


# GS1 Character Set 82 (AI 10 values)
CSET82 = frozenset(
    '!"%&\'()*+,-./0123456789:;<=>?'
    'ABCDEFGHIJKLMNOPQRSTUVWXYZ_'
    'abcdefghijklmnopqrstuvwxyz'
)

NUMERIC = frozenset('0123456789')

GTIN_LENGTH = 14
LOT_MAX_LENGTH = 20


def calculate_check_digit_mod10(digits: str) -> int:
    """
    GS1 Mod10 check digit for a numeric key without its last digit.

    Weights run 3, 1, 3, ... from the rightmost digit.

    Raises:
        ValueError: digits is empty or not numeric
    """
    if not digits or not digits.isdigit():
        raise ValueError("Input must be a non-empty numeric string")
    weighted = sum(int(d) * (3 if i % 2 == 0 else 1) for i, d in enumerate(reversed(digits)))
    return -weighted % 10


def validate_check_digit(value: str) -> ValidationResult:
    """Check that the last digit of a numeric key is its Mod10 check digit."""
    if not value or not value.isdigit() or len(value) < 2:
        return ValidationResult(valid=False, errors=["Check digit needs at least two digits"])

    expected = calculate_check_digit_mod10(value[:-1])
    if int(value[-1]) != expected:
        return ValidationResult(
            valid=False,
            errors=[f"Check digit mismatch: expected {expected}, got {value[-1]}"],
        )
    return ValidationResult(valid=True)


def validate_gtin(value: str) -> ValidationResult:
    """
    Validate a GTIN as it will be encoded in AI (01).

    GTIN-8/12/13 are accepted and checked in their zero-padded GTIN-14
    form. Values longer than 14 digits are reported as errors because the
    encoder passes them through unpadded.
    """
    result = ValidationResult(valid=True)
    gtin = (value or "").strip()

    if not gtin:
        result.valid = False
        result.errors.append("GTIN is empty")
        return result

    if not all(c in NUMERIC for c in gtin):
        result.valid = False
        result.errors.append("GTIN contains non-numeric characters")
        return result

    if len(gtin) > GTIN_LENGTH:
        result.valid = False
        result.errors.append(f"GTIN has {len(gtin)} digits, maximum is {GTIN_LENGTH}")
        return result

    if len(gtin) not in (8, 12, 13, 14):
        result.warnings.append(f"GTIN has unusual length {len(gtin)}")

    padded = gtin.zfill(GTIN_LENGTH)
    result.meta['gtin14'] = padded
    result.merge(validate_check_digit(padded))
    return result


def validate_lot(value: str) -> ValidationResult:
    """
    Validate a batch/lot number for AI (10).

    Args:
        value: Lot text

    Returns:
        ValidationResult
    """
    result = ValidationResult(valid=True)
    lot = (value or "").strip()

    if not lot:
        result.valid = False
        result.errors.append("Lot is empty")
        return result

    invalid_chars = sorted(set(lot) - CSET82)
    if invalid_chars:
        result.valid = False
        result.errors.append(f"Lot contains characters outside GS1 CSET82: {''.join(invalid_chars)!r}")

    if len(lot) > LOT_MAX_LENGTH:
        result.valid = False
        result.errors.append(f"Lot length {len(lot)} exceeds maximum {LOT_MAX_LENGTH}")

    return result


def validate_record(record: LabelRecord) -> ValidationResult:
    """
    Run every data-quality check on a record.

    Returns:
        Aggregated ValidationResult; errors and warnings are both
        informational for the caller
    """
    result = ValidationResult(valid=True)
    result.merge(validate_gtin(record.gtin))
    result.merge(validate_lot(record.lot))

    if record.manufacture is not None and record.manufacture > record.resolved_expiry:
        result.warnings.append(
            f"Manufacture date {record.manufacture.isoformat()} is after expiry "
            f"{record.resolved_expiry.isoformat()}"
        )

    if record.expiry_is_day_zero:
        result.meta['expiry_day_zero'] = True

    return result
