"""Greedy word wrapping against measured text width."""

from dataclasses import dataclass
from typing import Callable, Optional

from .canvas import Color, Font, Surface

EM_DASH = "—"
ATTRIBUTION_MARKER = f" {EM_DASH} "


@dataclass(frozen=True)
class DrawnLine:
    """A line of text as painted, with its anchor position."""

    text: str
    x: float
    y: float


def break_lines(text: str, measure: Callable[[str], float], max_width: float) -> list[str]:
    """Split ``text`` into lines no wider than ``max_width``.

    Words are separated by single spaces. A word is appended while
    ``measure(line + word + " ")`` fits; otherwise the current line is
    flushed (if it has any words) and the word starts a new one. A single
    word wider than the budget stays whole on its own line. Lines keep
    their trailing space; callers strip it when drawing.
    """
    lines = []
    line = ""
    for word in text.split(" "):
        test_line = f"{line}{word} "
        if measure(test_line) > max_width and line:
            lines.append(line)
            line = f"{word} "
        else:
            line = test_line
    lines.append(line)
    return lines


def _split_off_attribution(text: str) -> tuple[str, Optional[str]]:
    """Split a trailing " — author" attribution off the end of ``text``."""
    head, marker, author = text.rstrip().rpartition(ATTRIBUTION_MARKER)
    if not marker:
        return text, None
    return head, f"{EM_DASH} {author}"


def wrap_text(
    surface: Surface,
    text: str,
    x: float,
    y: float,
    max_width: float,
    line_height: float,
    font: Font,
    fill: Color,
    align: str = "left",
    split_attribution: bool = False,
) -> list[DrawnLine]:
    """Paint ``text`` wrapped to ``max_width``, one line every ``line_height``.

    There is no vertical bound: too much text paints past the intended
    region. With ``split_attribution`` a trailing em-dash attribution is
    always painted whole on its own final line.
    """
    attribution = None
    if split_attribution:
        text, attribution = _split_off_attribution(text)

    lines = []
    if text.strip() or attribution is None:
        lines = break_lines(text, lambda candidate: surface.measure(candidate, font), max_width)
    if attribution is not None:
        lines.append(attribution)

    drawn = []
    for line in lines:
        line = line.rstrip()
        surface.text(x, y, line, font, fill, align=align)
        drawn.append(DrawnLine(line, x, y))
        y += line_height
    return drawn
