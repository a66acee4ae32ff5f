"""Modern quote card: pastel gradient, noise grain, oversized quote marks."""

import numpy as np

from ..canvas import linear_gradient
from ..models import LayoutId
from ..shapes import platform_glyph
from ..text import EM_DASH, wrap_text
from .base import LayoutRenderer, RenderPass
from .registry import register_layout

GRADIENT_STOPS = [(0, "#f3e8ff"), (0.3, "#dbeafe"), (0.6, "#f0fdf4"), (1, "#fef3c7")]
# Grey speckle strength on every other pixel of every other row
NOISE_ALPHA = 0.01
QUOTE_MARK_OFFSET = 450


@register_layout(LayoutId.MODERN.value)
class ModernLayout(LayoutRenderer):
    """Quote-style card.

    Honors both ``text_size_px`` and ``comment_anchor_px``: the comment is
    drawn at the anchor and the quotation marks are placed relative to it.
    Text switches to white when a background image was painted.
    """

    width = 1200
    height = 1200
    dynamic_text = True

    def stages(self):
        return [
            self.draw_gradient,
            self.draw_noise,
            self.draw_backdrop,
            self.draw_commenter_avatar,
            self.draw_quote_marks,
            self.draw_comment,
            self.draw_attribution,
            self.draw_channel_avatar,
            self.draw_footer,
        ]

    @staticmethod
    def text_color(rp: RenderPass) -> str:
        return "#ffffff" if rp.has_background_image else "#1F2937"

    async def draw_gradient(self, rp: RenderPass) -> None:
        rp.surface.paint(
            linear_gradient(rp.surface.size, (0, 0), (rp.width, rp.height), GRADIENT_STOPS)
        )

    async def draw_noise(self, rp: RenderPass) -> None:
        rng = np.random.default_rng(self.seed(rp))
        pixels = rp.surface.pixels().astype(np.float64)
        grid = pixels[::2, ::2]
        speckle = rng.integers(0, 255, size=grid.shape[:2]).astype(np.float64)[..., None]
        pixels[::2, ::2] = grid * (1 - NOISE_ALPHA) + speckle * NOISE_ALPHA
        rp.surface.put_pixels(np.clip(np.rint(pixels), 0, 255))

    async def draw_backdrop(self, rp: RenderPass) -> None:
        if not rp.params.background_image_url:
            return
        image = await self.load(rp.params.background_image_url, "background")
        if image is None:
            return
        rp.surface.cover_image(image, 0, 0, rp.width, rp.height, blur=8)
        rp.surface.fill((0, 0, 0, 128))
        rp.has_background_image = True

    async def draw_commenter_avatar(self, rp: RenderPass) -> None:
        await self.draw_avatar(
            rp, rp.comment.author_profile_image_url, rp.width / 2, 200, 60, element="commenter"
        )

    async def draw_quote_marks(self, rp: RenderPass) -> None:
        surface = rp.surface
        font = self.font("serif-bold", 300)
        anchor = rp.params.comment_anchor_px
        marks = [
            ("“", rp.width / 2 - QUOTE_MARK_OFFSET, anchor - 100),
            ("”", rp.width / 2 + QUOTE_MARK_OFFSET, anchor + 400),
        ]
        for glyph, x, y in marks:
            mask = surface.text_mask(x, y, glyph, font, align="center")
            surface.shadow(mask, (0, 0, 0, 51), blur=10, offset=(5, 5))
            surface.text(x, y, glyph, font, self.text_color(rp), align="center")

    async def draw_comment(self, rp: RenderPass) -> None:
        size = rp.params.text_size_px
        wrap_text(
            rp.surface,
            rp.comment.text,
            rp.width / 2,
            rp.params.comment_anchor_px,
            1000,
            max(60, int(size * 1.4)),
            self.font("serif-italic", size),
            self.text_color(rp),
            align="center",
        )

    async def draw_attribution(self, rp: RenderPass) -> None:
        rp.surface.text(
            rp.width / 2,
            350,
            f"{EM_DASH} {rp.comment.author_name}",
            self.font("serif-bold", 36),
            self.text_color(rp),
            align="center",
        )
        rp.surface.line([(rp.width / 2 - 200, 400), (rp.width / 2 + 200, 400)], "#dbeafe", 3)

    async def draw_channel_avatar(self, rp: RenderPass) -> None:
        await self.draw_avatar(
            rp, rp.video.channel_thumbnail_url, rp.width / 2, 900, 70, element="channel"
        )

    async def draw_footer(self, rp: RenderPass) -> None:
        platform_glyph(rp.surface, rp.width / 2 - 130, 1005, 45, 45)
        rp.surface.text(
            rp.width / 2 - 70, 1040, rp.video.channel_title, self.font("sans-bold", 30),
            self.text_color(rp),
        )
