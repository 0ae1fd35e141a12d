"""Width-aware text helpers shared by the PDF primitives."""

from typing import Callable

ELLIPSIS = "..."

# Characters core PDF fonts cannot encode, with their closest Latin-1 stand-in
_LATIN1_FOLD = {
    "•": "·",  # bullet -> middle dot
    "–": "-",
    "—": "-",
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "…": "...",
}


def fit_text(text: str, max_width: float, measure: Callable[[str], float]) -> str:
    """
    Return *text* unchanged if it fits in *max_width*, otherwise the longest
    prefix that still fits together with an ellipsis.

    Widths are re-measured after every removed character, since glyph
    widths differ per character.
    """
    if measure(text) <= max_width:
        return text
    shortened = text
    while shortened and measure(shortened + ELLIPSIS) > max_width:
        shortened = shortened[:-1]
    shortened = shortened.rstrip()
    if not shortened and measure(ELLIPSIS) > max_width:
        return ""
    return shortened + ELLIPSIS


def fold_to_latin1(text: str) -> str:
    """Make *text* encodable in a core (Latin-1) PDF font."""
    for src, dst in _LATIN1_FOLD.items():
        text = text.replace(src, dst)
    return text.encode("latin-1", "replace").decode("latin-1")
