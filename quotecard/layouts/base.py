"""Common interface and helpers shared by every card layout."""

import zlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from PIL import Image

from ..canvas import Color, FontBook, Surface
from ..errors import ImageLoadError, SurfaceUnavailableError
from ..images import ImageLoader
from ..models import Comment, RenderParameters, RenderResult, VideoMetadata
from ..shapes import circle_mask, circular_clip
from ..utils import get_logger

logger = get_logger(__name__)

DEFAULT_HEADING = "What are viewers saying?"


@dataclass
class RenderPass:
    """Inputs and target of a single render, handed to every stage."""

    surface: Surface
    comment: Comment
    video: VideoMetadata
    params: RenderParameters
    has_background_image: bool = False

    @property
    def width(self) -> int:
        return self.surface.width

    @property
    def height(self) -> int:
        return self.surface.height


Stage = Callable[[RenderPass], Awaitable[None]]


class LayoutRenderer(ABC):
    """Draws one card design onto a caller-owned surface.

    Subclasses declare their canvas size and implement ``stages``; each
    stage is an async method taking the RenderPass. A stage that raises is
    logged and skipped so the remaining stages still draw.
    """

    name: str = ""
    width: int = 1024
    height: int = 1024
    background: Color = "#ffffff"
    # Whether text_size_px / comment_anchor_px are honoured
    dynamic_text: bool = False

    def __init__(
        self,
        loader: ImageLoader,
        fonts: FontBook,
        fallback_images: Optional[dict[str, str]] = None,
        heading: str = DEFAULT_HEADING,
    ):
        self.loader = loader
        self.fonts = fonts
        self.fallback_images = fallback_images or {}
        self.heading = heading

    @abstractmethod
    def stages(self) -> list[Stage]:
        """Ordered drawing stages for this layout."""

    async def render(
        self,
        surface: Surface,
        comment: Comment,
        video: VideoMetadata,
        params: RenderParameters,
    ) -> RenderResult:
        """Run every stage against ``surface`` and encode the result.

        Raises:
            SurfaceUnavailableError: the surface cannot be drawn or encoded
        """
        render_pass = RenderPass(surface, comment, video, params)
        for stage in self.stages():
            try:
                await stage(render_pass)
            except SurfaceUnavailableError:
                raise
            except Exception:
                logger.exception(f"[{self.name}] stage {stage.__name__} failed, continuing")

        try:
            encoded = surface.to_data_uri()
        except (OSError, ValueError) as e:
            raise SurfaceUnavailableError(f"Unable to encode {self.name} card: {e}") from e
        logger.debug(f"[{self.name}] rendered {surface.width}x{surface.height} card")
        return RenderResult(encoded_image=encoded)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def font(self, face: str, size: int):
        return self.fonts.get(face, size)

    async def load(
        self, url: str, element: str, fallback: Optional[str] = None
    ) -> Optional[Image.Image]:
        """Acquire an image for ``element``, or None when it cannot be had.

        ``fallback`` names an entry of ``fallback_images`` (profile, channel,
        thumbnail), not a URL.
        """
        fallback_url = self.fallback_images.get(fallback) if fallback else None
        if not url and not fallback_url:
            logger.warning(f"[{self.name}] no image URL for {element}, skipping")
            return None
        try:
            return await self.loader.acquire(url or fallback_url, fallback_url)
        except ImageLoadError as e:
            logger.warning(f"[{self.name}] {element} image omitted: {e}")
            return None

    async def draw_avatar(
        self,
        rp: RenderPass,
        url: str,
        cx: float,
        cy: float,
        radius: float,
        element: str,
        fallback: Optional[str] = None,
        backing: Optional[Color] = "#ffffff",
        backing_radius: Optional[float] = None,
        shadow: Optional[tuple[Color, float]] = None,
        ring: Optional[tuple[Color, float, int]] = None,
    ) -> bool:
        """Circular avatar: optional shadow, backing disc, clipped image, ring.

        Nothing is drawn when the image is unavailable. Returns whether the
        avatar was painted.
        """
        image = await self.load(url, element, fallback)
        if image is None:
            return False

        surface = rp.surface
        outer = backing_radius or radius
        if shadow:
            color, blur = shadow
            surface.shadow(circle_mask(surface.size, cx, cy, outer), color, blur)
        if backing:
            surface.fill_circle(cx, cy, outer, backing)
        with circular_clip(surface, cx, cy, radius):
            surface.draw_image(image, cx - radius, cy - radius, radius * 2, radius * 2)
        if ring:
            color, ring_radius, width = ring
            surface.stroke_circle(cx, cy, ring_radius, color, width)
        return True

    def seed(self, rp: RenderPass) -> int:
        """Stable RNG seed derived from the card content."""
        key = "\x1f".join([
            self.name,
            rp.comment.text,
            rp.comment.author_name,
            rp.video.title,
            rp.video.channel_title,
            rp.params.background_image_url,
        ])
        return zlib.crc32(key.encode("utf-8"))
