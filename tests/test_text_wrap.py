"""Tests for greedy word wrapping."""

from quotecard.canvas import Surface
from quotecard.text import EM_DASH, break_lines, wrap_text


def test_break_lines_greedy() -> None:
    """Words accumulate until the measured line would exceed the budget."""
    lines = break_lines("aaa bbb ccc", len, 8)

    assert lines == ["aaa bbb ", "ccc "]


def test_break_lines_never_exceed_width_unless_single_word() -> None:
    """Every multi-word line fits within max_width."""
    text = "the quick brown fox jumps over the lazy dog and keeps on running far away"
    for max_width in (6, 10, 15, 25, 40):
        for line in break_lines(text, len, max_width):
            stripped = line.rstrip()
            assert len(stripped) <= max_width or " " not in stripped


def test_single_long_word_kept_whole() -> None:
    """A word wider than the budget is not split."""
    assert break_lines("supercalifragilistic", len, 5) == ["supercalifragilistic "]


def test_empty_text_yields_one_blank_line() -> None:
    assert break_lines("", len, 10) == [" "]


def test_wrap_text_advances_by_line_height(fonts) -> None:
    """Drawn lines start at y and step by line_height, trailing space trimmed."""
    surface = Surface(400, 400)
    font = fonts.get("sans", 20)

    drawn = wrap_text(surface, "one two three four five six seven eight", 10, 50, 120, 30, font, "#000000")

    assert len(drawn) > 1
    assert [line.y for line in drawn] == [50 + 30 * i for i in range(len(drawn))]
    assert all(not line.text.endswith(" ") for line in drawn)
    assert " ".join(line.text for line in drawn) == "one two three four five six seven eight"


def test_wrap_text_split_attribution(fonts) -> None:
    """The em-dash attribution is moved onto its own final line."""
    surface = Surface(800, 400)
    font = fonts.get("serif-italic", 20)

    drawn = wrap_text(
        surface, f"Loved it {EM_DASH} Ana", 10, 50, 700, 30, font, "#000000", split_attribution=True
    )

    assert [line.text for line in drawn] == ["Loved it", f"{EM_DASH} Ana"]


def test_wrap_text_without_attribution_marker(fonts) -> None:
    surface = Surface(800, 400)
    font = fonts.get("serif-italic", 20)

    drawn = wrap_text(surface, "No author here", 10, 50, 700, 30, font, "#000000", split_attribution=True)

    assert [line.text for line in drawn] == ["No author here"]


class CharWidthSurface(Surface):
    """Surface measuring text as one unit per character."""

    def measure(self, text, font):
        return len(text)


def test_attribution_stays_whole_when_dash_ends_a_line(fonts) -> None:
    """An em-dash that would fit at the end of a line still leads the author."""
    surface = CharWidthSurface(200, 200)
    font = fonts.get("serif-italic", 12)

    drawn = wrap_text(
        surface, f"aaaa bbbb {EM_DASH} Ana", 0, 20, 12, 20, font, "#000000", split_attribution=True
    )

    assert [line.text for line in drawn] == ["aaaa bbbb", f"{EM_DASH} Ana"]


def test_attribution_only_comment(fonts) -> None:
    surface = Surface(400, 200)

    drawn = wrap_text(
        surface, f" {EM_DASH} Ana", 10, 50, 300, 30, fonts.get("serif-italic", 20), "#000000",
        split_attribution=True,
    )

    assert [line.text for line in drawn] == [f"{EM_DASH} Ana"]
