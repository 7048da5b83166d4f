"""
Batch pagination: pairs pending records with page slots.

Mirrors what a print job does page by page: compose the slots for the
printable area, hand out records in queue order one per slot, and start a
new page while records remain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from .core.composer import GridSlotComposer
from .layouts import DEFAULT_LAYOUT, DEFAULT_MARGIN_MM, PAGE_INSET_MM, LayoutConfig, printable_area
from .models import LabelLayout, LabelRecord, PageSlot


@dataclass(frozen=True)
class Placement:
    """One record assigned to one slot (slot coordinates are page-relative)."""
    slot: PageSlot
    record: LabelRecord


@dataclass
class PagePlan:
    page_number: int
    placements: List[Placement] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.placements)


def plan_pages(records: Iterable[LabelRecord], slots: List[PageSlot]) -> Iterator[PagePlan]:
    """
    Distribute records over pages that all share the same slot list.

    Raises:
        ValueError: Records are pending but the page has no slots
    """
    page: Optional[PagePlan] = None
    page_number = 0
    for record in records:
        if not slots:
            raise ValueError("No label slot fits on the page")
        if page is None:
            page_number += 1
            page = PagePlan(page_number)
        page.placements.append(Placement(slots[len(page.placements)], record))
        if len(page.placements) == len(slots):
            yield page
            page = None
    if page is not None:
        yield page


def paginate(
    records: Iterable[LabelRecord],
    page_width_mm: float,
    page_height_mm: float,
    layout: LabelLayout = DEFAULT_LAYOUT,
    margin_mm: float = DEFAULT_MARGIN_MM,
    page_inset_mm: float = PAGE_INSET_MM
) -> Iterator[PagePlan]:
    """
    Lay a batch out on physical pages.

    The inset is removed from every side of the page before composing,
    then added back so slot coordinates are relative to the page corner.
    """
    width, height = printable_area(page_width_mm, page_height_mm, page_inset_mm)
    composer = GridSlotComposer(margin_mm)
    slots = [slot.offset(page_inset_mm, page_inset_mm) for slot in composer.compose(width, height, layout)]
    return plan_pages(records, slots)


def paginate_with_config(
    records: Iterable[LabelRecord],
    page_width_mm: float,
    page_height_mm: float,
    config: LayoutConfig
) -> Iterator[PagePlan]:
    return paginate(
        records,
        page_width_mm,
        page_height_mm,
        layout=config.layout,
        margin_mm=config.margin_mm,
        page_inset_mm=config.page_inset_mm,
    )
