"""Render orchestration: one pass per input change, newest pass wins.

Every pass gets its own surface and a generation token. Passes are never
cancelled; a pass that finishes after a newer one started is discarded
instead of being committed to the preview.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

from .canvas import FontBook, Surface, decode_data_uri
from .errors import QuoteCardError
from .images import ImageLoader
from .layouts import LayoutRenderer, get_layout_class
from .layouts.base import DEFAULT_HEADING
from .models import Comment, LayoutId, RenderParameters, RenderResult, VideoMetadata
from .utils import get_logger

logger = get_logger(__name__)

DOWNLOAD_NAME_FORMAT = "quote-card-%Y%m%d-%H%M%S.png"


@dataclass
class RenderState:
    """What a viewer of the preview can observe."""

    is_generating: bool = False
    preview_data_uri: Optional[str] = None
    error_message: Optional[str] = None


class RenderOrchestrator:
    """Owns the current inputs and drives layout renders for them."""

    def __init__(
        self,
        loader: ImageLoader,
        fonts: FontBook,
        fallback_images: Optional[dict[str, str]] = None,
        heading: str = DEFAULT_HEADING,
        surface_factory: Callable[..., Surface] = Surface,
    ):
        self.loader = loader
        self.fonts = fonts
        self.fallback_images = fallback_images or {}
        self.heading = heading
        self.surface_factory = surface_factory

        self.comment: Optional[Comment] = None
        self.video: Optional[VideoMetadata] = None
        self.params = RenderParameters()
        self.state = RenderState()

        self._generation = 0
        self._layouts: dict[str, LayoutRenderer] = {}
        self._tasks: set[asyncio.Task] = set()

    @classmethod
    def from_settings(cls, settings) -> "RenderOrchestrator":
        """Build an orchestrator wired to the configured loader, fonts and fallbacks."""
        loader = ImageLoader(
            timeout=settings.image_timeout_s,
            max_retries=settings.image_max_retries,
        )
        return cls(
            loader=loader,
            fonts=FontBook(settings.fonts_dir),
            fallback_images=settings.fallback_images,
            heading=settings.card_heading,
        )

    def layout_for(self, layout_id: Union[str, LayoutId]) -> LayoutRenderer:
        """Renderer for ``layout_id``; unknown ids get the default layout."""
        if isinstance(layout_id, LayoutId):
            layout_id = layout_id.value
        cls = get_layout_class(layout_id)
        if cls.name not in self._layouts:
            self._layouts[cls.name] = cls(
                self.loader, self.fonts, self.fallback_images, heading=self.heading
            )
        return self._layouts[cls.name]

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def update(
        self,
        comment: Optional[Comment] = None,
        video: Optional[VideoMetadata] = None,
        params: Optional[RenderParameters] = None,
    ) -> Optional[asyncio.Task]:
        """Merge changed inputs and start a fresh pass in the running loop.

        Returns the scheduled task, or None while comment or video is unset.
        """
        if comment is not None:
            self.comment = comment
        if video is not None:
            self.video = video
        if params is not None:
            self.params = params

        if self.comment is None or self.video is None:
            return None

        task = asyncio.create_task(self.render())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait for every scheduled pass, stale ones included."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def render(self) -> RenderResult:
        """Run one pass for the current inputs and commit it if still newest."""
        if self.comment is None or self.video is None:
            raise QuoteCardError("A comment and video metadata are required to render")

        self._generation += 1
        generation = self._generation
        comment, video, params = self.comment, self.video, self.params
        self.state.is_generating = True

        try:
            result = await self._render_pass(comment, video, params)
        except Exception as e:
            if generation == self._generation:
                self.state.is_generating = False
                self.state.error_message = f"Failed to generate image: {e}"
            raise

        if generation != self._generation:
            logger.debug(f"Discarding stale render generation {generation} (latest {self._generation})")
            return result

        self.state.is_generating = False
        if result.ok:
            self.state.preview_data_uri = result.encoded_image
            self.state.error_message = None
        else:
            self.state.preview_data_uri = None
            self.state.error_message = result.error_message
        return result

    async def _render_pass(
        self, comment: Comment, video: VideoMetadata, params: RenderParameters
    ) -> RenderResult:
        layout = self.layout_for(params.layout_id)
        logger.info(f"Rendering '{layout.name}' card ({layout.width}x{layout.height})")
        try:
            surface = self.surface_factory(layout.width, layout.height, layout.background)
            return await layout.render(surface, comment, video, params)
        except QuoteCardError as e:
            logger.error(f"Render failed: {e}")
            return RenderResult(error_message=f"Failed to generate image: {e}")

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def download(self, directory: Path, now: Optional[datetime] = None) -> Path:
        """Write the current preview as a timestamped PNG in ``directory``."""
        if not self.state.preview_data_uri:
            raise QuoteCardError("No rendered card to download")

        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / (now or datetime.now()).strftime(DOWNLOAD_NAME_FORMAT)
        path.write_bytes(decode_data_uri(self.state.preview_data_uri))
        logger.info(f"Saved card: {path}")
        return path
