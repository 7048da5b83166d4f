"""
Page grid composition.

Computes where label instances go on a physical page. Geometry only:
slots carry no reference to records, the caller pairs them with its
pending records in slot order (row-major, left to right, top to bottom).
"""

from __future__ import annotations

import math
from typing import List

from ..models import LabelLayout, PageSlot, RectMm


DEFAULT_MARGIN_MM = 2.0

# Batches are printed on label sheets at most two labels wide.
DEFAULT_MAX_COLUMNS = 2


class GridSlotComposer:
    """
    Lays labels out in a centred grid of at most ``max_columns`` columns.

    Args:
        margin_mm: Gap between labels and from the top edge. Negative or
            non-finite values are clamped to 0.
        max_columns: Column cap, at least 1.
    """

    def __init__(self, margin_mm: float = DEFAULT_MARGIN_MM, max_columns: int = DEFAULT_MAX_COLUMNS):
        margin = float(margin_mm)
        self.margin_mm = margin if math.isfinite(margin) and margin > 0 else 0.0
        self.max_columns = max(1, int(max_columns))

    def column_count(self, page_width_mm: float, layout: LabelLayout) -> int:
        fitting = math.floor((page_width_mm + self.margin_mm) / (layout.width_mm + self.margin_mm))
        return min(self.max_columns, max(1, fitting))

    def compose(
        self,
        page_width_mm: float,
        page_height_mm: float,
        layout: LabelLayout
    ) -> List[PageSlot]:
        """
        Compute label slots for one page.

        Returns:
            Non-overlapping rectangles inside the page, row-major. Empty if
            not even one label fits or the page size is not a finite number.
        """
        if not (math.isfinite(page_width_mm) and math.isfinite(page_height_mm)):
            return []

        margin = self.margin_mm
        columns = self.column_count(page_width_mm, layout)
        span = columns * layout.width_mm + (columns - 1) * margin
        start_x = max(margin, (page_width_mm - span) / 2.0)
        step_x = layout.width_mm + margin
        step_y = layout.height_mm + margin

        slots: List[PageSlot] = []
        row = 0
        y = margin
        while y + layout.height_mm <= page_height_mm:
            for column in range(columns):
                x = start_x + column * step_x
                if x + layout.width_mm > page_width_mm:
                    continue
                slots.append(RectMm(x, y, layout.width_mm, layout.height_mm))
            row += 1
            # y from the row index, not a running sum
            y = margin + row * step_y
        return slots

    def __call__(self, page_width_mm: float, page_height_mm: float, layout: LabelLayout) -> List[PageSlot]:
        return self.compose(page_width_mm, page_height_mm, layout)


def compose_page_slots(
    page_width_mm: float,
    page_height_mm: float,
    layout: LabelLayout,
    margin_mm: float = DEFAULT_MARGIN_MM
) -> List[PageSlot]:
    """Functional shortcut for GridSlotComposer(margin_mm).compose(...)."""
    return GridSlotComposer(margin_mm).compose(page_width_mm, page_height_mm, layout)
