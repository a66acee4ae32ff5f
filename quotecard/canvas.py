"""Raster surface and font lookup for card rendering.

The surface is an opaque RGB Pillow image drawn through an RGBA ImageDraw,
so translucent fills and text blend onto what is already painted. Image
placement and mask fills honour a clip stack pushed with ``Surface.clip``.
"""

import base64
import io
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence, Union

import numpy as np
from PIL import Image, ImageChops, ImageColor, ImageDraw, ImageFilter, ImageFont

from .errors import SurfaceUnavailableError
from .utils import get_logger

logger = get_logger(__name__)

Color = Union[str, tuple[int, ...]]
Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]
GradientStops = Sequence[tuple[float, Color]]

_ALIGN_ANCHOR = {"left": "l", "center": "m", "right": "r"}
_BASELINE_ANCHOR = {"alphabetic": "s", "middle": "m", "top": "a", "bottom": "d"}


def to_rgba(color: Color, alpha: Optional[float] = None) -> tuple[int, int, int, int]:
    """Normalize a color name, hex string or tuple to an RGBA tuple.

    ``alpha`` (0.0-1.0) overrides whatever alpha the color carried.
    """
    if isinstance(color, str):
        rgba = ImageColor.getcolor(color, "RGBA")
    elif len(color) == 3:
        rgba = (*color, 255)
    else:
        rgba = tuple(color)
    if alpha is not None:
        rgba = (*rgba[:3], round(255 * alpha))
    return rgba


# ----------------------------------------------------------------------
# Gradients
# ----------------------------------------------------------------------


def _paint_stops(t: np.ndarray, stops: GradientStops) -> Image.Image:
    offsets = [offset for offset, _ in stops]
    colors = np.array([to_rgba(color) for _, color in stops], dtype=np.float64)
    channels = [np.interp(t, offsets, colors[:, c]) for c in range(4)]
    rgba = np.stack(channels, axis=-1)
    return Image.fromarray(np.clip(np.rint(rgba), 0, 255).astype(np.uint8), "RGBA")


def linear_gradient(
    size: tuple[int, int],
    start: tuple[float, float],
    end: tuple[float, float],
    stops: GradientStops,
) -> Image.Image:
    """RGBA image of a linear gradient along the start->end axis."""
    width, height = size
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
    dx, dy = end[0] - start[0], end[1] - start[1]
    length_sq = dx * dx + dy * dy or 1.0
    t = ((xs - start[0]) * dx + (ys - start[1]) * dy) / length_sq
    return _paint_stops(np.clip(t, 0.0, 1.0), stops)


def radial_gradient(
    size: tuple[int, int],
    center: tuple[float, float],
    inner_radius: float,
    outer_radius: float,
    stops: GradientStops,
) -> Image.Image:
    """RGBA image of a radial gradient between two concentric circles."""
    width, height = size
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
    distance = np.hypot(xs - center[0], ys - center[1])
    span = (outer_radius - inner_radius) or 1.0
    t = np.clip((distance - inner_radius) / span, 0.0, 1.0)
    gradient = _paint_stops(t, stops)
    # Nothing is painted outside the outer circle
    outside = Image.fromarray(((distance <= outer_radius) * 255).astype(np.uint8), "L")
    gradient.putalpha(ImageChops.multiply(gradient.getchannel("A"), outside))
    return gradient


# ----------------------------------------------------------------------
# Fonts
# ----------------------------------------------------------------------


class FontBook:
    """Resolves named faces to Pillow fonts, caching per (face, size).

    Each face lists candidate files; the project fonts directory is searched
    first, then Pillow's system font lookup, then Pillow's built-in default.
    """

    FACES: dict[str, list[str]] = {
        "sans": ["Inter-Regular.ttf", "DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Arial.ttf"],
        "sans-bold": ["Inter-SemiBold.ttf", "DejaVuSans-Bold.ttf", "LiberationSans-Bold.ttf", "Arial Bold.ttf"],
        "serif": ["DejaVuSerif.ttf", "LiberationSerif-Regular.ttf", "Georgia.ttf"],
        "serif-bold": ["DejaVuSerif-Bold.ttf", "LiberationSerif-Bold.ttf", "Georgia Bold.ttf"],
        "serif-italic": ["DejaVuSerif-Italic.ttf", "LiberationSerif-Italic.ttf", "Georgia Italic.ttf"],
    }

    def __init__(self, fonts_dir: Optional[Path] = None):
        self.fonts_dir = fonts_dir
        self._cache: dict[tuple[str, int], Font] = {}

    def get(self, face: str, size: int) -> Font:
        key = (face, size)
        if key not in self._cache:
            self._cache[key] = self._load(face, size)
        return self._cache[key]

    def _load(self, face: str, size: int) -> Font:
        candidates = self.FACES.get(face, self.FACES["sans"])
        for name in candidates:
            paths = [str(self.fonts_dir / name)] if self.fonts_dir else []
            paths.append(name)
            for path in paths:
                try:
                    return ImageFont.truetype(path, size)
                except OSError:
                    continue
        logger.warning(f"No TrueType font found for face '{face}', using Pillow default")
        return ImageFont.load_default(size)


# ----------------------------------------------------------------------
# Surface
# ----------------------------------------------------------------------


class Surface:
    """Mutable raster owned by exactly one render pass."""

    def __init__(self, width: int, height: int, background: Color = "#ffffff"):
        if width <= 0 or height <= 0:
            raise SurfaceUnavailableError(f"Invalid surface size {width}x{height}")
        try:
            self.image = Image.new("RGB", (width, height), to_rgba(background)[:3])
        except (ValueError, MemoryError) as e:
            raise SurfaceUnavailableError(f"Unable to allocate {width}x{height} raster: {e}") from e
        self.draw = ImageDraw.Draw(self.image, "RGBA")
        self._clips: list[Image.Image] = []

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    # -- clipping ------------------------------------------------------

    @contextmanager
    def clip(self, mask: Image.Image) -> Iterator["Surface"]:
        """Restrict image/mask painting to ``mask`` (L, canvas-sized)."""
        if self._clips:
            mask = ImageChops.multiply(self._clips[-1], mask)
        self._clips.append(mask)
        try:
            yield self
        finally:
            self._clips.pop()

    def _clipped_alpha(self, alpha: Image.Image, origin: tuple[int, int]) -> Image.Image:
        if not self._clips:
            return alpha
        x, y = origin
        region = self._clips[-1].crop((x, y, x + alpha.width, y + alpha.height))
        return ImageChops.multiply(alpha, region)

    # -- painting ------------------------------------------------------

    def fill(self, color: Color) -> None:
        self.draw.rectangle((0, 0, self.width, self.height), fill=to_rgba(color))

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None:
        self.draw.rectangle((x, y, x + w - 1, y + h - 1), fill=to_rgba(color))

    def fill_circle(self, cx: float, cy: float, r: float, color: Color) -> None:
        self.draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=to_rgba(color))

    def stroke_circle(self, cx: float, cy: float, r: float, color: Color, width: int = 1) -> None:
        self.draw.ellipse((cx - r, cy - r, cx + r, cy + r), outline=to_rgba(color), width=width)

    def line(self, points: Sequence[tuple[float, float]], color: Color, width: int = 1) -> None:
        self.draw.line(list(points), fill=to_rgba(color), width=width, joint="curve")

    def paint(self, layer: Image.Image, origin: tuple[int, int] = (0, 0)) -> None:
        """Composite an RGBA layer at ``origin`` through the active clip."""
        layer = layer.convert("RGBA")
        alpha = self._clipped_alpha(layer.getchannel("A"), origin)
        self.image.paste(layer.convert("RGB"), origin, alpha)

    def fill_mask(self, mask: Image.Image, fill: Union[Color, Image.Image]) -> None:
        """Paint a color or a canvas-sized RGBA image through an L mask."""
        if isinstance(fill, Image.Image):
            layer = fill.convert("RGBA")
        else:
            layer = Image.new("RGBA", self.size, to_rgba(fill))
        layer.putalpha(ImageChops.multiply(layer.getchannel("A"), mask))
        self.paint(layer)

    def draw_image(self, image: Image.Image, x: float, y: float, w: float, h: float) -> None:
        """Stretch ``image`` into the box (x, y, w, h)."""
        size = (max(1, round(w)), max(1, round(h)))
        resized = image.convert("RGBA").resize(size, Image.LANCZOS)
        self.paint(resized, (round(x), round(y)))

    def cover_image(
        self,
        image: Image.Image,
        x: float,
        y: float,
        w: float,
        h: float,
        blur: float = 0,
    ) -> None:
        """Scale ``image`` to cover the box, centred and cropped to it."""
        box_w, box_h = max(1, round(w)), max(1, round(h))
        scale = max(box_w / image.width, box_h / image.height)
        scaled_w = max(box_w, round(image.width * scale))
        scaled_h = max(box_h, round(image.height * scale))
        layer = image.convert("RGBA").resize((scaled_w, scaled_h), Image.LANCZOS)
        left, top = (scaled_w - box_w) // 2, (scaled_h - box_h) // 2
        layer = layer.crop((left, top, left + box_w, top + box_h))
        if blur:
            layer = layer.filter(ImageFilter.GaussianBlur(blur))
        self.paint(layer, (round(x), round(y)))

    def shadow(
        self,
        mask: Image.Image,
        color: Color = (0, 0, 0, 77),
        blur: float = 15,
        offset: tuple[int, int] = (0, 0),
    ) -> None:
        """Paint a blurred, offset copy of ``mask`` in ``color``."""
        shifted = mask
        if offset != (0, 0):
            shifted = Image.new("L", mask.size, 0)
            shifted.paste(mask, offset)
        if blur:
            # Canvas shadowBlur is roughly twice the Gaussian sigma
            shifted = shifted.filter(ImageFilter.GaussianBlur(blur / 2))
        self.fill_mask(shifted, color)

    # -- text ----------------------------------------------------------

    def measure(self, text: str, font: Font) -> float:
        return font.getlength(text)

    def text(
        self,
        x: float,
        y: float,
        text: str,
        font: Font,
        fill: Color,
        align: str = "left",
        baseline: str = "alphabetic",
    ) -> None:
        anchor = _ALIGN_ANCHOR[align] + _BASELINE_ANCHOR[baseline]
        self.draw.text((x, y), text, font=font, fill=to_rgba(fill), anchor=anchor)

    def text_mask(
        self,
        x: float,
        y: float,
        text: str,
        font: Font,
        align: str = "left",
        baseline: str = "alphabetic",
    ) -> Image.Image:
        """Canvas-sized L mask of the text, for shadows and glows."""
        mask = Image.new("L", self.size, 0)
        anchor = _ALIGN_ANCHOR[align] + _BASELINE_ANCHOR[baseline]
        ImageDraw.Draw(mask).text((x, y), text, font=font, fill=255, anchor=anchor)
        return mask

    # -- pixel access --------------------------------------------------

    def pixels(self) -> np.ndarray:
        """Copy of the raster as an (H, W, 3) uint8 array."""
        return np.array(self.image)

    def put_pixels(self, array: np.ndarray) -> None:
        self.image.paste(Image.fromarray(array.astype(np.uint8), "RGB"))

    # -- export --------------------------------------------------------

    def to_png_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, "PNG")
        return buffer.getvalue()

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self.to_png_bytes()).decode("ascii")
        return f"data:image/png;base64,{encoded}"


def decode_data_uri(uri: str) -> bytes:
    """Bytes of a base64 ``data:`` URI."""
    header, _, payload = uri.partition(",")
    if not header.startswith("data:") or ";base64" not in header:
        raise ValueError("Not a base64 data URI")
    return base64.b64decode(payload)
