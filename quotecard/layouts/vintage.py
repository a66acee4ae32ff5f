"""Vintage paper card: framed beige sheet, paper grain and a stamp seal."""

import numpy as np

from ..models import LayoutId
from ..shapes import path_mask, platform_glyph, rounded_rect_path, stroke_path
from ..text import EM_DASH, wrap_text
from .base import LayoutRenderer, RenderPass
from .registry import register_layout

PAPER = "#f5f5dc"
INK = "#654321"
SEPIA = "#8b4513"

FRAME_INSET = 40
GRAIN_INSET = 60
GRAIN_AMPLITUDE = 12
SEAL_CENTER_Y = 860


@register_layout(LayoutId.VINTAGE.value)
class VintageLayout(LayoutRenderer):
    width = 1024
    height = 1024
    background = PAPER

    def stages(self):
        return [
            self.draw_paper,
            self.draw_frame,
            self.draw_grain,
            self.draw_comment,
            self.draw_seal,
            self.draw_footer,
        ]

    async def draw_paper(self, rp: RenderPass) -> None:
        surface = rp.surface
        surface.fill(PAPER)
        if not rp.params.background_image_url:
            return
        image = await self.load(rp.params.background_image_url, "background")
        if image is None:
            return
        window = rounded_rect_path(100, 100, rp.width - 200, rp.height - 200, 30)
        with surface.clip(path_mask(surface.size, window)):
            surface.cover_image(image, 100, 100, rp.width - 200, rp.height - 200)
        rp.has_background_image = True

    async def draw_frame(self, rp: RenderPass) -> None:
        inset = FRAME_INSET
        outer = rounded_rect_path(inset, inset, rp.width - 2 * inset, rp.height - 2 * inset, 30)
        stroke_path(rp.surface, outer, SEPIA, 4)
        inner_inset = inset + 12
        inner = rounded_rect_path(
            inner_inset, inner_inset, rp.width - 2 * inner_inset, rp.height - 2 * inner_inset, 22
        )
        stroke_path(rp.surface, inner, (139, 69, 19, 128), 2)

    async def draw_grain(self, rp: RenderPass) -> None:
        """Nudge every RGB channel inside the frame by a small random delta."""
        rng = np.random.default_rng(self.seed(rp))
        pixels = rp.surface.pixels().astype(np.int16)
        region = pixels[GRAIN_INSET:rp.height - GRAIN_INSET, GRAIN_INSET:rp.width - GRAIN_INSET]
        region += rng.integers(
            -GRAIN_AMPLITUDE, GRAIN_AMPLITUDE + 1, size=region.shape, dtype=np.int16
        )
        rp.surface.put_pixels(np.clip(pixels, 0, 255))

    async def draw_comment(self, rp: RenderPass) -> None:
        wrap_text(
            rp.surface,
            f"{rp.comment.text} {EM_DASH} {rp.comment.author_name}",
            120,
            300,
            rp.width - 240,
            60,
            self.font("serif-italic", 42),
            INK,
            split_attribution=True,
        )

    async def draw_seal(self, rp: RenderPass) -> None:
        cx = rp.width / 2
        drawn = await self.draw_avatar(
            rp,
            rp.video.channel_thumbnail_url,
            cx,
            SEAL_CENTER_Y,
            50,
            element="channel",
            backing=PAPER,
            backing_radius=58,
            ring=(SEPIA, 58, 3),
        )
        if drawn:
            rp.surface.stroke_circle(cx, SEAL_CENTER_Y, 54, (139, 69, 19, 153), 1)

    async def draw_footer(self, rp: RenderPass) -> None:
        platform_glyph(rp.surface, rp.width / 2 - 130, 940, 40, 40)
        rp.surface.text(
            rp.width / 2 - 70, 972, rp.video.channel_title, self.font("serif-bold", 30), SEPIA
        )
