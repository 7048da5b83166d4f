"""
Validation modules for GS1 label records.
"""

from .validators import (
    validate_check_digit,
    validate_gtin,
    validate_lot,
    validate_record,
    calculate_check_digit_mod10,
    ValidationResult,
    CSET82,
    NUMERIC,
)

__all__ = [
    "validate_check_digit",
    "validate_gtin",
    "validate_lot",
    "validate_record",
    "calculate_check_digit_mod10",
    "ValidationResult",
    "CSET82",
    "NUMERIC",
]
