"""Vector shape helpers: rounded rectangles, circular clips and glyphs."""

from contextlib import contextmanager
from typing import Iterator, Sequence, Union

from PIL import Image, ImageDraw

from .canvas import Color, Surface, to_rgba

Point = tuple[float, float]

PLATFORM_RED = "#FF0000"

_CURVE_STEPS = 10


def _quadratic(p0: Point, control: Point, p1: Point, steps: int = _CURVE_STEPS) -> list[Point]:
    points = []
    for i in range(1, steps + 1):
        t = i / steps
        u = 1 - t
        points.append((
            u * u * p0[0] + 2 * u * t * control[0] + t * t * p1[0],
            u * u * p0[1] + 2 * u * t * control[1] + t * t * p1[1],
        ))
    return points


def rounded_rect_path(x: float, y: float, w: float, h: float, radius: float) -> list[Point]:
    """Closed outline of a rectangle with quadratic-curve corners.

    The radius is not checked against the box; more than half the shorter
    side gives a self-intersecting outline.
    """
    right, bottom = x + w, y + h
    points: list[Point] = [(x + radius, y), (right - radius, y)]
    points += _quadratic((right - radius, y), (right, y), (right, y + radius))
    points.append((right, bottom - radius))
    points += _quadratic((right, bottom - radius), (right, bottom), (right - radius, bottom))
    points.append((x + radius, bottom))
    points += _quadratic((x + radius, bottom), (x, bottom), (x, bottom - radius))
    points.append((x, y + radius))
    points += _quadratic((x, y + radius), (x, y), (x + radius, y))
    return points


def path_mask(size: tuple[int, int], points: Sequence[Point]) -> Image.Image:
    """Canvas-sized L mask with the polygon filled."""
    mask = Image.new("L", size, 0)
    ImageDraw.Draw(mask).polygon(list(points), fill=255)
    return mask


def fill_path(surface: Surface, points: Sequence[Point], fill: Union[Color, Image.Image]) -> None:
    """Fill the polygon with a color or a canvas-sized gradient image."""
    surface.fill_mask(path_mask(surface.size, points), fill)


def stroke_path(surface: Surface, points: Sequence[Point], color: Color, width: int = 1) -> None:
    surface.line([*points, points[0]], color, width)


def circle_mask(size: tuple[int, int], cx: float, cy: float, r: float) -> Image.Image:
    mask = Image.new("L", size, 0)
    ImageDraw.Draw(mask).ellipse((cx - r, cy - r, cx + r, cy + r), fill=255)
    return mask


@contextmanager
def circular_clip(surface: Surface, cx: float, cy: float, r: float) -> Iterator[Surface]:
    """Clip image painting to a circle; the previous clip is restored on exit."""
    with surface.clip(circle_mask(surface.size, cx, cy, r)):
        yield surface


def platform_glyph(
    surface: Surface, x: float, y: float, w: float, h: float, fill: Color = PLATFORM_RED
) -> None:
    """Solid "play" triangle in the right half of the box."""
    surface.draw.polygon(
        [(x + w / 2, y), (x + w, y + h / 2), (x + w / 2, y + h)],
        fill=to_rgba(fill),
    )


def checkmark(surface: Surface, cx: float, cy: float, size: float, fill: Color, width: int = 3) -> None:
    surface.line(
        [
            (cx - size * 0.35, cy),
            (cx - size * 0.1, cy + size * 0.28),
            (cx + size * 0.38, cy - size * 0.3),
        ],
        fill,
        width,
    )


def stat_glyph(surface: Surface, kind: str, x: float, cy: float, size: float, fill: Color) -> None:
    """Icon for a stat value, drawn in the ``size`` square left-aligned at x.

    kind: "views" (play), "likes" (thumb) or "comments" (speech bubble).
    """
    ink = to_rgba(fill)
    draw = surface.draw
    if kind == "views":
        draw.polygon(
            [(x + size * 0.2, cy - size * 0.4), (x + size * 0.9, cy), (x + size * 0.2, cy + size * 0.4)],
            fill=ink,
        )
    elif kind == "likes":
        # cuff, palm, raised thumb
        draw.rectangle((x + size * 0.08, cy - size * 0.05, x + size * 0.26, cy + size * 0.4), fill=ink)
        draw.rounded_rectangle(
            (x + size * 0.32, cy - size * 0.1, x + size * 0.9, cy + size * 0.4),
            radius=size * 0.1,
            fill=ink,
        )
        draw.polygon(
            [
                (x + size * 0.36, cy - size * 0.08),
                (x + size * 0.5, cy - size * 0.45),
                (x + size * 0.64, cy - size * 0.4),
                (x + size * 0.6, cy - size * 0.08),
            ],
            fill=ink,
        )
    elif kind == "comments":
        draw.rounded_rectangle(
            (x + size * 0.05, cy - size * 0.4, x + size * 0.95, cy + size * 0.2),
            radius=size * 0.15,
            fill=ink,
        )
        draw.polygon(
            [(x + size * 0.25, cy + size * 0.15), (x + size * 0.25, cy + size * 0.45), (x + size * 0.5, cy + size * 0.15)],
            fill=ink,
        )
    else:
        raise ValueError(f"Unknown stat glyph: {kind}")
