"""
Default label geometry, page sizes and the optional layout override file.

The override file is JSON with nested numeric fields, all optional:

    {
      "label": {
        "width_mm": 25, "height_mm": 20,
        "barcode": {"x": 5.5, "y": 1.5, "width": 10, "height": 10},
        "text": {"x": 1.5, "y": 13, "width": 22, "height": 7}
      },
      "margin_mm": 2,
      "page_inset_mm": 5
    }

Anything missing or malformed falls back to the defaults below; loading
never fails.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from reportlab.lib.pagesizes import A4, A5, LEGAL, LETTER, landscape
from reportlab.lib.units import mm

from .models import LabelLayout, RectMm


logger = logging.getLogger(__name__)

# Baseline 25x20mm label with a centred DataMatrix and text underneath.
DEFAULT_LAYOUT = LabelLayout(
    width_mm=25.0,
    height_mm=20.0,
    barcode_rect=RectMm(5.5, 1.5, 10.0, 10.0),
    text_rect=RectMm(1.5, 13.0, 22.0, 7.0),
)

DEFAULT_MARGIN_MM = 2.0

# Unprintable border kept clear on every side of the physical page.
PAGE_INSET_MM = 5.0

DEFAULT_CONFIG_PATH = Path("layout.json")


def _points_to_mm(size: Tuple[float, float]) -> Tuple[float, float]:
    return (round(size[0] / mm, 2), round(size[1] / mm, 2))


PAGE_SIZES_MM: Dict[str, Tuple[float, float]] = {
    "a4": _points_to_mm(A4),
    "a5": _points_to_mm(A5),
    "letter": _points_to_mm(LETTER),
    "legal": _points_to_mm(LEGAL),
}


def page_size_mm(name: str, landscape_orientation: bool = False) -> Tuple[float, float]:
    """
    Width and height of a named page size in millimetres.

    Raises:
        KeyError: Unknown page name
    """
    key = name.strip().lower()
    if key not in PAGE_SIZES_MM:
        raise KeyError(f"Unknown page size '{name}' (known: {', '.join(sorted(PAGE_SIZES_MM))})")
    if landscape_orientation:
        width_pt, height_pt = landscape(tuple(v * mm for v in PAGE_SIZES_MM[key]))
        return _points_to_mm((width_pt, height_pt))
    return PAGE_SIZES_MM[key]


def printable_area(page_width_mm: float, page_height_mm: float, inset_mm: float = PAGE_INSET_MM) -> Tuple[float, float]:
    """Page size left after removing the inset on all four sides."""
    return (
        max(0.0, page_width_mm - 2 * inset_mm),
        max(0.0, page_height_mm - 2 * inset_mm),
    )


@dataclass(frozen=True)
class LayoutConfig:
    """Effective layout settings for a batch."""
    layout: LabelLayout = DEFAULT_LAYOUT
    margin_mm: float = DEFAULT_MARGIN_MM
    page_inset_mm: float = PAGE_INSET_MM
    source: Optional[Path] = field(default=None, compare=False)


def _number(node: Dict[str, Any], key: str, default: float, minimum: float = 0.0) -> float:
    value = node.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        logger.warning("Layout config: %s=%r is not a number, using %s", key, value, default)
        return default
    if not math.isfinite(value):
        logger.warning("Layout config: %s=%r is not finite, using %s", key, value, default)
        return default
    if value < minimum:
        logger.warning("Layout config: %s=%r is below %s, using %s", key, value, minimum, default)
        return default
    return float(value)


def _section(node: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = node.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        logger.warning("Layout config: '%s' must be an object, ignoring it", key)
        return {}
    return value


def _rect(node: Dict[str, Any], default: RectMm) -> RectMm:
    return RectMm(
        x=_number(node, "x", default.x),
        y=_number(node, "y", default.y),
        width=_number(node, "width", default.width),
        height=_number(node, "height", default.height),
    )


def layout_config_from_dict(data: Dict[str, Any], source: Optional[Path] = None) -> LayoutConfig:
    """Build a LayoutConfig from parsed JSON, field by field with fallbacks."""
    if not isinstance(data, dict):
        logger.warning("Layout config: top level must be an object, using defaults")
        return LayoutConfig(source=source)

    label = _section(data, "label")
    width = _number(label, "width_mm", DEFAULT_LAYOUT.width_mm)
    height = _number(label, "height_mm", DEFAULT_LAYOUT.height_mm)
    if not (width > 0 and height > 0):
        logger.warning("Layout config: label size must be positive, using default size")
        width, height = DEFAULT_LAYOUT.width_mm, DEFAULT_LAYOUT.height_mm

    layout = LabelLayout(
        width_mm=width,
        height_mm=height,
        barcode_rect=_rect(_section(label, "barcode"), DEFAULT_LAYOUT.barcode_rect),
        text_rect=_rect(_section(label, "text"), DEFAULT_LAYOUT.text_rect),
    )
    return LayoutConfig(
        layout=layout,
        margin_mm=_number(data, "margin_mm", DEFAULT_MARGIN_MM),
        page_inset_mm=_number(data, "page_inset_mm", PAGE_INSET_MM),
        source=source,
    )


def load_layout_config(path: Optional[Union[str, Path]] = None) -> LayoutConfig:
    """
    Load layout overrides, falling back to defaults on any problem.

    Args:
        path: JSON file; defaults to ./layout.json

    Returns:
        LayoutConfig (defaults when the file is absent or unreadable)
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.is_file():
        if path is not None:
            logger.warning("Layout config %s not found, using defaults", config_path)
        return LayoutConfig()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Layout config %s unreadable (%s), using defaults", config_path, e)
        return LayoutConfig()

    return layout_config_from_dict(data, source=config_path)
