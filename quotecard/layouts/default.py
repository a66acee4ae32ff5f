"""Default card: gradient page, header band, comment card and footer."""

from ..canvas import linear_gradient, radial_gradient
from ..models import LayoutId
from ..shapes import fill_path, path_mask, platform_glyph, rounded_rect_path
from ..text import wrap_text
from .base import LayoutRenderer, RenderPass
from .registry import register_layout

AVATAR_CENTER_Y = 320
COMMENT_CARD = (110, 520, 340, 40)  # x, y, height, radius


@register_layout(LayoutId.DEFAULT.value)
class DefaultLayout(LayoutRenderer):
    """Channel-branded card with the selected comment in a white panel.

    Honors ``text_size_px`` for the comment body; the anchor is fixed.
    """

    width = 1050
    height = 1090
    dynamic_text = True

    def stages(self):
        return [
            self.draw_page,
            self.draw_header_band,
            self.draw_channel_avatar,
            self.draw_heading,
            self.draw_comment_card,
            self.draw_title,
            self.draw_footer,
        ]

    async def draw_page(self, rp: RenderPass) -> None:
        rp.surface.paint(linear_gradient(
            rp.surface.size, (0, 0), (rp.width, rp.height), [(0, "#ace0f9"), (1, "#fff1eb")]
        ))

    async def draw_header_band(self, rp: RenderPass) -> None:
        surface = rp.surface
        band = rounded_rect_path(90, 70, rp.width - 180, 270, 45)
        background_url = rp.params.background_image_url

        if not background_url:
            fill_path(surface, band, linear_gradient(
                surface.size, (0, 0), (rp.width, 0), [(0, "#f87171"), (1, "#dc2626")]
            ))
            return

        image = await self.load(background_url, "background")
        if image is None:
            return
        rp.has_background_image = True
        with surface.clip(path_mask(surface.size, band)):
            surface.cover_image(image, 75, 55, rp.width - 150, 300)

    async def draw_channel_avatar(self, rp: RenderPass) -> None:
        await self.draw_avatar(
            rp,
            rp.video.channel_thumbnail_url,
            rp.width / 2,
            AVATAR_CENTER_Y,
            90,
            element="channel",
            backing_radius=93,
            shadow=((0, 0, 0, 77), 15),
            ring=("#ffffff", 93, 7),
        )

    async def draw_heading(self, rp: RenderPass) -> None:
        rp.surface.text(
            rp.width / 2, 480, self.heading, self.font("sans-bold", 56), "#1F2937", align="center"
        )

    async def draw_comment_card(self, rp: RenderPass) -> None:
        surface = rp.surface
        x, y, h, radius = COMMENT_CARD
        card = rounded_rect_path(x, y, rp.width - 2 * x, h, radius)
        surface.shadow(path_mask(surface.size, card), (0, 0, 0, 26), blur=15, offset=(0, 5))
        fill_path(surface, card, "#ffffff")

        # Commenter avatar with a soft red glow
        surface.paint(radial_gradient(
            surface.size, (185, 605), 45, 60, [(0, (220, 38, 38, 102)), (1, (220, 38, 38, 0))]
        ))
        await self.draw_avatar(
            rp,
            rp.comment.author_profile_image_url,
            185,
            605,
            45,
            element="commenter",
            backing="#dc2626",
            backing_radius=47,
        )

        surface.text(255, 600, rp.comment.author_name, self.font("sans-bold", 40), "#1F2937")
        size = rp.params.text_size_px
        wrap_text(
            surface,
            rp.comment.text,
            275,
            645,
            rp.width - 370,
            round(size * 1.2),
            self.font("sans", size),
            "#4B5563",
        )

    async def draw_title(self, rp: RenderPass) -> None:
        wrap_text(
            rp.surface,
            rp.video.title,
            rp.width / 2,
            925,
            rp.width - 210,
            38,
            self.font("sans-bold", 26),
            "#1F2937",
            align="center",
        )

    async def draw_footer(self, rp: RenderPass) -> None:
        platform_glyph(rp.surface, rp.width / 2 - 130, 1005, 45, 45)
        rp.surface.text(
            rp.width / 2 - 70, 1040, rp.video.channel_title, self.font("sans-bold", 30), "#4B5563"
        )
