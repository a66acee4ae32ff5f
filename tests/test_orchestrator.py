"""Tests for render orchestration and download."""

import asyncio
import io
from datetime import datetime

import pytest
from PIL import Image

from quotecard.canvas import decode_data_uri
from quotecard.errors import QuoteCardError, SurfaceUnavailableError
from quotecard.layouts.default import DefaultLayout
from quotecard.models import RenderParameters, RenderResult
from quotecard.orchestrator import RenderOrchestrator


class ScriptedOrchestrator(RenderOrchestrator):
    """Orchestrator whose passes finish after scripted delays."""

    def __init__(self, delays, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delays = list(delays)
        self.completed: list[str] = []

    async def _render_pass(self, comment, video, params):
        await asyncio.sleep(self.delays.pop(0))
        self.completed.append(params.layout_id)
        return RenderResult(encoded_image=f"data:image/png;base64,{params.layout_id}")


def test_stale_generation_is_discarded(loader, fonts, comment, video) -> None:
    """A slow early pass finishing last never overwrites the newer preview."""
    orchestrator = ScriptedOrchestrator([0.05, 0.0], loader, fonts)

    async def scenario():
        orchestrator.update(comment=comment, video=video, params=RenderParameters(layout_id="minimal"))
        orchestrator.update(params=RenderParameters(layout_id="social"))
        await orchestrator.drain()

    asyncio.run(scenario())

    assert orchestrator.completed == ["social", "minimal"]
    assert orchestrator.state.preview_data_uri.endswith("social")
    assert orchestrator.state.is_generating is False
    assert orchestrator.state.error_message is None


def test_update_waits_for_comment_and_video(loader, fonts, comment) -> None:
    orchestrator = RenderOrchestrator(loader, fonts)

    async def scenario():
        return orchestrator.update(comment=comment)

    assert asyncio.run(scenario()) is None
    assert orchestrator.state.preview_data_uri is None


def test_render_requires_inputs(loader, fonts) -> None:
    orchestrator = RenderOrchestrator(loader, fonts)

    with pytest.raises(QuoteCardError):
        asyncio.run(orchestrator.render())


def test_real_render_commits_latest_layout(loader, fonts, comment, video) -> None:
    orchestrator = RenderOrchestrator(loader, fonts)

    async def scenario():
        orchestrator.update(comment=comment, video=video, params=RenderParameters(layout_id="default"))
        orchestrator.update(params=RenderParameters(layout_id="vintage"))
        await orchestrator.drain()

    asyncio.run(scenario())

    image = Image.open(io.BytesIO(decode_data_uri(orchestrator.state.preview_data_uri)))
    assert image.size == (1024, 1024)


def test_unknown_layout_renders_default(loader, fonts) -> None:
    orchestrator = RenderOrchestrator(loader, fonts)

    assert isinstance(orchestrator.layout_for("retro"), DefaultLayout)
    assert orchestrator.layout_for("retro") is orchestrator.layout_for("default")


def test_surface_failure_sets_error_state(loader, fonts, comment, video) -> None:
    def no_surface(width, height, background):
        raise SurfaceUnavailableError("no raster available")

    orchestrator = RenderOrchestrator(loader, fonts, surface_factory=no_surface)
    orchestrator.comment, orchestrator.video = comment, video

    result = asyncio.run(orchestrator.render())

    assert not result.ok
    assert orchestrator.state.preview_data_uri is None
    assert "no raster available" in orchestrator.state.error_message
    assert orchestrator.state.is_generating is False


def test_download_writes_timestamped_png(tmp_path, loader, fonts, comment, video) -> None:
    orchestrator = RenderOrchestrator(loader, fonts)
    orchestrator.comment, orchestrator.video = comment, video
    asyncio.run(orchestrator.render())

    path = orchestrator.download(tmp_path / "cards", now=datetime(2024, 1, 2, 3, 4, 5))

    assert path.name == "quote-card-20240102-030405.png"
    assert path.read_bytes().startswith(b"\x89PNG\r\n\x1a\n")


def test_download_without_preview(tmp_path, loader, fonts) -> None:
    with pytest.raises(QuoteCardError):
        RenderOrchestrator(loader, fonts).download(tmp_path)


def test_unexpected_failure_clears_generating(loader, fonts, comment, video) -> None:
    def broken_surface(width, height, background):
        raise RuntimeError("raster backend crashed")

    orchestrator = RenderOrchestrator(loader, fonts, surface_factory=broken_surface)
    orchestrator.comment, orchestrator.video = comment, video

    with pytest.raises(RuntimeError):
        asyncio.run(orchestrator.render())

    assert orchestrator.state.is_generating is False
    assert "raster backend crashed" in orchestrator.state.error_message
