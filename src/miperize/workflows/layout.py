"""Layout attribute computation for framework tags."""

from __future__ import annotations

import re
from typing import Optional

from bs4.element import Tag

from ..core.keys import K_LAYOUT, K_WIDTH, LAYOUT_FIXED, LAYOUT_RESPONSIVE

# Below this width a responsive layout stretches the media and looks broken.
FIXED_LAYOUT_MAX_WIDTH = 300

_NUMERIC = re.compile(r"^\d+(?:\.\d+)?$")


def parse_dimension(value: Optional[str]) -> Optional[float]:
    """Parse a width/height attribute; non-numeric values ("auto", "50px") give None."""

    if value is None:
        return None
    text = str(value).strip()
    if not _NUMERIC.match(text):
        return None
    return float(text)


def compute_layout(width: Optional[str], default_layout: Optional[str]) -> str:
    parsed = parse_dimension(width)
    if parsed is not None and parsed < FIXED_LAYOUT_MAX_WIDTH:
        return LAYOUT_FIXED
    return default_layout or LAYOUT_RESPONSIVE


def apply_layout(tag: Tag, default_layout: Optional[str]) -> None:
    """Set ``layout`` on ``tag`` unless the element already carries one."""

    if tag.get(K_LAYOUT):
        return
    tag[K_LAYOUT] = compute_layout(tag.get(K_WIDTH), default_layout)


__all__ = ["FIXED_LAYOUT_MAX_WIDTH", "apply_layout", "compute_layout", "parse_dimension"]
