"""Social feed card: video banner, channel block, stat row and comment."""

from typing import Sequence

from PIL import Image

from ..canvas import Font, linear_gradient
from ..models import LayoutId
from ..shapes import checkmark, fill_path, rounded_rect_path, stat_glyph
from ..text import wrap_text
from .base import LayoutRenderer, RenderPass
from .registry import register_layout

INK = "#0f0f0f"
MUTED = "#606060"
DIVIDER = "#e5e7eb"

STAT_ICON_SIZE = 32
STAT_ICON_GAP = 16
STAT_GUTTER = 80

CHANNEL_AVATAR_SIZE = 80
COMMENTER_AVATAR_SIZE = 72
AVATAR_SHADOW = ((0, 0, 0, 38), 12)


def banner_height(width: int) -> int:
    return int(width * 9 / 20)


def stat_row_layout(
    value_widths: Sequence[float],
    canvas_width: int,
    icon_size: float = STAT_ICON_SIZE,
    icon_gap: float = STAT_ICON_GAP,
    gutter: float = STAT_GUTTER,
) -> list[float]:
    """Left edge of each stat group so the whole row is centered.

    Each group is icon + gap + value; groups are separated by ``gutter``.
    """
    total = sum(icon_size + icon_gap + w for w in value_widths)
    total += gutter * max(0, len(value_widths) - 1)

    positions = []
    x = (canvas_width - total) / 2
    for width in value_widths:
        positions.append(x)
        x += icon_size + icon_gap + width + gutter
    return positions


def verified_badge_center(canvas_width: int, name_width: float, content_top: float) -> tuple[float, float]:
    """Badge sits 25px right of the centered channel name's right edge."""
    return canvas_width / 2 + name_width / 2 + 25, content_top + 92


@register_layout(LayoutId.SOCIAL.value)
class SocialLayout(LayoutRenderer):
    """Feed-style card modeled on a video watch page.

    The thumbnail falls back to the configured placeholder and then to a
    plain gradient; channel and commenter text are drawn even when their
    avatars cannot be loaded.
    """

    width = 1024
    height = 1024

    def stages(self):
        return [
            self.draw_banner,
            self.draw_content_card,
            self.draw_channel,
            self.draw_stats,
            self.draw_comments_header,
            self.draw_comment,
        ]

    def content_top(self, rp: RenderPass) -> int:
        return banner_height(rp.width) + 40

    def stats_y(self, rp: RenderPass) -> int:
        return self.content_top(rp) + 180

    def comments_top(self, rp: RenderPass) -> int:
        return self.stats_y(rp) + 60

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def draw_banner(self, rp: RenderPass) -> None:
        surface = rp.surface
        surface.fill("#ffffff")
        th = banner_height(rp.width)

        image = await self.load(rp.video.video_thumbnail_url, "thumbnail", fallback="thumbnail")
        if image is not None:
            surface.cover_image(image, 0, 0, rp.width, th)
        else:
            banner = linear_gradient((rp.width, th), (0, 0), (0, th), [(0, "#f1f5f9"), (1, "#e2e8f0")])
            surface.paint(banner)

        # Scrim under the caption
        gh = th * 0.3
        scrim = linear_gradient(
            (rp.width, round(gh)), (0, 0), (0, gh), [(0, (0, 0, 0, 0)), (1, (0, 0, 0, 204))]
        )
        surface.paint(scrim, (0, round(th - gh)))
        wrap_text(
            surface,
            rp.video.title,
            rp.width / 2,
            th - gh / 2,
            rp.width - 100,
            50,
            self.font("sans-bold", 34),
            "#ffffff",
            align="center",
        )
        self._draw_duration_badge(rp)

    def _draw_duration_badge(self, rp: RenderPass) -> None:
        if not rp.video.duration:
            return
        font = self.font("sans-bold", 20)
        bw = rp.surface.measure(rp.video.duration, font) + 40
        fill_path(rp.surface, rounded_rect_path(rp.width - bw - 30, 20, bw, 38, 6), (0, 0, 0, 217))
        rp.surface.text(rp.width - bw / 2 - 30, 46, rp.video.duration, font, "#ffffff", align="center")

    async def draw_content_card(self, rp: RenderPass) -> None:
        surface = rp.surface
        th = banner_height(rp.width)
        mask = Image.new("L", surface.size, 0)
        mask.paste(255, (0, th, rp.width, rp.height))
        surface.shadow(mask, (0, 0, 0, 31), blur=16, offset=(0, 4))
        surface.fill_rect(0, th, rp.width, rp.height - th, "#ffffff")

    async def draw_channel(self, rp: RenderPass) -> None:
        surface = rp.surface
        cs = self.content_top(rp)
        r = CHANNEL_AVATAR_SIZE / 2
        await self.draw_avatar(
            rp,
            rp.video.channel_thumbnail_url,
            rp.width / 2,
            cs + r,
            r,
            element="channel",
            fallback="channel",
            shadow=AVATAR_SHADOW,
        )

        name_font = self.font("sans-bold", 28)
        surface.text(rp.width / 2, cs + 100, rp.video.channel_title, name_font, INK, align="center")
        if rp.video.is_verified:
            name_width = surface.measure(rp.video.channel_title, name_font)
            bx, by = verified_badge_center(rp.width, name_width, cs)
            surface.fill_circle(bx, by, 12, MUTED)
            checkmark(surface, bx, by, 14, "#ffffff", 3)

        surface.text(
            rp.width / 2, cs + 130, rp.video.published_at, self.font("sans", 20), MUTED, align="center"
        )

    async def draw_stats(self, rp: RenderPass) -> None:
        surface = rp.surface
        y = self.stats_y(rp)
        font = self.font("sans-bold", 24)
        stats = [
            ("views", f"{rp.video.view_count} views", "#FF0000"),
            ("likes", rp.video.like_count, "#065FD4"),
            ("comments", rp.video.comment_count, "#065FD4"),
        ]
        widths = [surface.measure(value, font) for _, value, _ in stats]
        positions = stat_row_layout(widths, rp.width)

        for index, ((kind, value, color), x, width) in enumerate(zip(stats, positions, widths)):
            stat_glyph(surface, kind, x, y, STAT_ICON_SIZE, color)
            surface.text(x + STAT_ICON_SIZE + STAT_ICON_GAP, y, value, font, INK, baseline="middle")
            if index < len(stats) - 1:
                next_x = x + STAT_ICON_SIZE + STAT_ICON_GAP + width + STAT_GUTTER
                surface.fill_rect(next_x - STAT_GUTTER / 2, y - 15, 2, 30, "#E5E7EB")

    async def draw_comments_header(self, rp: RenderPass) -> None:
        surface = rp.surface
        top = self.comments_top(rp)
        surface.line([(rp.width * 0.2, top - 20), (rp.width * 0.8, top - 20)], DIVIDER, 2)
        self._centered_label(rp, "Comments", self.font("sans-bold", 28), top + 10)

    def _centered_label(self, rp: RenderPass, label: str, font: Font, baseline_y: float) -> None:
        icon, gap = 28, 10
        label_width = rp.surface.measure(label, font)
        x = (rp.width - (icon + gap + label_width)) / 2
        stat_glyph(rp.surface, "comments", x, baseline_y - 10, icon, INK)
        rp.surface.text(x + icon + gap, baseline_y, label, font, INK)

    async def draw_comment(self, rp: RenderPass) -> None:
        surface = rp.surface
        comment_y = self.comments_top(rp) + 50
        r = COMMENTER_AVATAR_SIZE / 2
        await self.draw_avatar(
            rp,
            rp.comment.author_profile_image_url,
            rp.width / 2,
            comment_y + r,
            r,
            element="commenter",
            fallback="profile",
            shadow=AVATAR_SHADOW,
        )

        surface.text(
            rp.width / 2,
            comment_y + COMMENTER_AVATAR_SIZE + 30,
            rp.comment.author_name,
            self.font("sans-bold", 24),
            INK,
            align="center",
        )
        wrap_text(
            surface,
            rp.comment.text,
            rp.width / 2,
            comment_y + COMMENTER_AVATAR_SIZE + 70,
            rp.width - 100,
            40,
            self.font("sans", 26),
            INK,
            align="center",
        )
