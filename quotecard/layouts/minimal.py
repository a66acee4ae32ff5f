"""Minimal card: dark full-bleed backdrop with centered white type."""

from ..models import LayoutId
from ..shapes import platform_glyph
from ..text import wrap_text
from .base import LayoutRenderer, RenderPass
from .registry import register_layout


@register_layout(LayoutId.MINIMAL.value)
class MinimalLayout(LayoutRenderer):
    width = 1200
    height = 1200
    background = "#000000"

    def stages(self):
        return [
            self.draw_backdrop,
            self.draw_commenter,
            self.draw_comment,
            self.draw_channel,
            self.draw_footer,
        ]

    async def draw_backdrop(self, rp: RenderPass) -> None:
        surface = rp.surface
        surface.fill("#000000")
        if rp.params.background_image_url:
            image = await self.load(rp.params.background_image_url, "background")
            if image is not None:
                rp.has_background_image = True
                surface.cover_image(image, 0, 0, rp.width, rp.height, blur=5)
        surface.fill((0, 0, 0, 128))

    async def draw_commenter(self, rp: RenderPass) -> None:
        await self.draw_avatar(
            rp, rp.comment.author_profile_image_url, rp.width / 2, 200, 60, element="commenter"
        )
        rp.surface.text(
            rp.width / 2, 350, rp.comment.author_name, self.font("sans-bold", 36), "#ffffff",
            align="center",
        )

    async def draw_comment(self, rp: RenderPass) -> None:
        wrap_text(
            rp.surface, rp.comment.text, rp.width / 2, 600, 1000, 60,
            self.font("sans-bold", 48), "#ffffff", align="center",
        )

    async def draw_channel(self, rp: RenderPass) -> None:
        await self.draw_avatar(
            rp, rp.video.channel_thumbnail_url, rp.width / 2, 900, 70, element="channel"
        )
        wrap_text(
            rp.surface, rp.video.title, rp.width / 2, 1050, 1000, 40,
            self.font("sans-bold", 30), "#ffffff", align="center",
        )

    async def draw_footer(self, rp: RenderPass) -> None:
        platform_glyph(rp.surface, rp.width / 2 - 130, 1100, 45, 45)
        rp.surface.text(
            rp.width / 2 - 70, 1135, rp.video.channel_title, self.font("sans-bold", 30), "#ffffff"
        )
