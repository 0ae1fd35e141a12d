"""Layout arithmetic for the photo grid.

Pure-maths helpers that keep the drawing code in ``pdf_generator.py``
focused on content rather than coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass

PHOTOS_PER_PAGE = 4
GRID_COLUMNS = 2


@dataclass(frozen=True)
class GridSlot:
    index: int   # position in the photo list, 0-based
    page: int    # photo page, 0-based
    col: int
    row: int


def photo_page_count(photo_count: int) -> int:
    """ceil(photo_count / 4)."""
    return -(-photo_count // PHOTOS_PER_PAGE)


def grid_slot(index: int) -> GridSlot:
    local = index % PHOTOS_PER_PAGE
    return GridSlot(
        index=index,
        page=index // PHOTOS_PER_PAGE,
        col=local % GRID_COLUMNS,
        row=local // GRID_COLUMNS,
    )


def fit_rect_preserve_aspect(
    src_w: float,
    src_h: float,
    box_x: float,
    box_y: float,
    box_w: float,
    box_h: float,
) -> tuple[float, float, float, float]:
    """Return (x, y, w, h) centred inside the box while preserving src aspect."""
    if src_w <= 0 or src_h <= 0:
        return box_x, box_y, box_w, box_h
    src_ratio = src_w / src_h
    box_ratio = box_w / box_h if box_h else src_ratio
    if box_ratio > src_ratio:
        h = box_h
        w = h * src_ratio
        x = box_x + (box_w - w) / 2
        y = box_y
    else:
        w = box_w
        h = w / src_ratio
        x = box_x
        y = box_y + (box_h - h) / 2
    return x, y, w, h
