from .text_fit import fit_text, fold_to_latin1, ELLIPSIS
from .geometry import (
    GridSlot, grid_slot, photo_page_count,
    fit_rect_preserve_aspect, PHOTOS_PER_PAGE
)

__all__ = [
    "fit_text", "fold_to_latin1", "ELLIPSIS",
    "GridSlot", "grid_slot", "photo_page_count",
    "fit_rect_preserve_aspect", "PHOTOS_PER_PAGE"
]
