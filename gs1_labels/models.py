"""
Plain data types shared by the sources, encoders and page composer.

All types are immutable; a LabelRecord has no identity beyond its values.
"""

from __future__ import annotations

import math
from calendar import monthrange
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from .exceptions import InvalidRecordError


def _as_date(value: date) -> date:
    # datetime is a subclass of date, drop the time-of-day part
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class LabelRecord:
    """
    One validated GS1 label payload.

    Attributes:
        gtin: Global Trade Item Number as found in the source (trimmed)
        lot: Batch/lot number (trimmed)
        expiry: Expiry date; first of the month for day-zero expiries
        manufacture: Optional manufacture date
        expiry_is_day_zero: True when the source wrote the expiry as YYYY-MM-00
    """
    gtin: str
    lot: str
    expiry: date
    manufacture: Optional[date] = None
    expiry_is_day_zero: bool = False

    def __post_init__(self) -> None:
        gtin = (self.gtin or "").strip()
        lot = (self.lot or "").strip()
        if not gtin:
            raise InvalidRecordError("GTIN is required")
        if not lot:
            raise InvalidRecordError("Lot is required")

        expiry = _as_date(self.expiry)
        if self.expiry_is_day_zero:
            expiry = expiry.replace(day=1)

        # frozen dataclass: normalized values go through object.__setattr__
        object.__setattr__(self, "gtin", gtin)
        object.__setattr__(self, "lot", lot)
        object.__setattr__(self, "expiry", expiry)
        if self.manufacture is not None:
            object.__setattr__(self, "manufacture", _as_date(self.manufacture))

    @property
    def resolved_expiry(self) -> date:
        """Expiry to encode in a barcode: last day of the month for day-zero."""
        if self.expiry_is_day_zero:
            last_day = monthrange(self.expiry.year, self.expiry.month)[1]
            return self.expiry.replace(day=last_day)
        return self.expiry


@dataclass(frozen=True)
class RectMm:
    """Axis-aligned rectangle in millimetres (origin top-left)."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def offset(self, dx: float, dy: float) -> "RectMm":
        return RectMm(self.x + dx, self.y + dy, self.width, self.height)

    def intersects(self, other: "RectMm") -> bool:
        """True if the interiors overlap; shared edges do not count."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def as_tuple(self) -> tuple:
        return (self.x, self.y, self.width, self.height)


# A slot is just a rectangle on the page; it never references a record.
PageSlot = RectMm


@dataclass(frozen=True)
class LabelLayout:
    """
    Physical geometry of one label, in millimetres.

    The barcode and text rectangles are relative to the label's own origin.
    One instance configures a whole batch.
    """
    width_mm: float
    height_mm: float
    barcode_rect: RectMm = field(default_factory=lambda: RectMm(0, 0, 0, 0))
    text_rect: RectMm = field(default_factory=lambda: RectMm(0, 0, 0, 0))

    def __post_init__(self) -> None:
        if not (self.width_mm > 0 and math.isfinite(self.width_mm)):
            raise ValueError(f"Label width must be a positive finite number, got {self.width_mm}")
        if not (self.height_mm > 0 and math.isfinite(self.height_mm)):
            raise ValueError(f"Label height must be a positive finite number, got {self.height_mm}")

    def barcode_area(self, slot: RectMm) -> RectMm:
        """Barcode rectangle translated onto a page slot."""
        return self.barcode_rect.offset(slot.x, slot.y)

    def text_area(self, slot: RectMm) -> RectMm:
        """Text rectangle translated onto a page slot."""
        return self.text_rect.offset(slot.x, slot.y)
