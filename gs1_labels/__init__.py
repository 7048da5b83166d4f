"""
GS1 Label Batch Toolkit

Reads label batches (GTIN, lot, expiry, optional manufacture date) from
loosely formatted CSV exports and spreadsheet workbooks, encodes each
record as GS1 element strings for AIs (01), (17), (11) and (10), and
computes label placements on a physical page.

Rendering the barcode symbol and printing are left to the caller: this
package produces records, payload strings and slot rectangles.
"""

from .exceptions import Gs1LabelError, InvalidRecordError, UnreadableSourceError, UnsupportedSourceError
from .models import LabelRecord, LabelLayout, RectMm, PageSlot
from .core.delimited import detect_delimiter, parse_delimited_line
from .core.dates import parse_flexible_date, ParsedDate, last_day_of_month
from .core.record_builder import build_record, RawRow
from .core.sources import TabularLabelSource, TextDecoding, read_labels
from .core.payload import (
    GS,
    Gs1Payloads,
    pad_gtin,
    format_machine_date,
    format_human_expiry,
    build_human_readable,
    build_machine_payload,
    build_payloads,
)
from .core.composer import GridSlotComposer, compose_page_slots
from .layouts import DEFAULT_LAYOUT, LayoutConfig, load_layout_config, page_size_mm
from .batch import PagePlan, Placement, paginate

__version__ = "1.0.0"
__all__ = [
    "Gs1LabelError",
    "InvalidRecordError",
    "UnsupportedSourceError",
    "UnreadableSourceError",
    "LabelRecord",
    "LabelLayout",
    "RectMm",
    "PageSlot",
    "detect_delimiter",
    "parse_delimited_line",
    "parse_flexible_date",
    "ParsedDate",
    "last_day_of_month",
    "build_record",
    "RawRow",
    "TabularLabelSource",
    "TextDecoding",
    "read_labels",
    "GS",
    "Gs1Payloads",
    "pad_gtin",
    "format_machine_date",
    "format_human_expiry",
    "build_human_readable",
    "build_machine_payload",
    "build_payloads",
    "GridSlotComposer",
    "compose_page_slots",
    "DEFAULT_LAYOUT",
    "LayoutConfig",
    "load_layout_config",
    "page_size_mm",
    "PagePlan",
    "Placement",
    "paginate",
]
