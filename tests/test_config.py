"""Tests for settings and request parameter bounds."""

import pytest
from pydantic import ValidationError

from quotecard.config import Settings
from quotecard.models import LayoutId, RenderParameters


def test_settings_defaults() -> None:
    config = Settings(_env_file=None)

    assert config.default_layout == "default"
    assert config.default_text_size == 42
    assert config.default_comment_position == 450
    assert config.image_max_retries == 2
    assert config.comments_max_results == 99
    assert set(config.fallback_images) == {"profile", "channel", "thumbnail"}
    assert config.fonts_dir == config.assets_dir / "fonts"


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("DEFAULT_TEXT_SIZE", "30")
    monkeypatch.setenv("CARD_HEADING", "Top comment")

    config = Settings(_env_file=None)

    assert config.default_text_size == 30
    assert config.card_heading == "Top comment"


def test_settings_reject_out_of_range_text_size(monkeypatch) -> None:
    monkeypatch.setenv("DEFAULT_TEXT_SIZE", "100")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_render_parameters_are_clamped() -> None:
    params = RenderParameters(text_size_px=5, comment_anchor_px=2000)

    assert params.text_size_px == 14
    assert params.comment_anchor_px == 800


def test_render_parameters_accept_layout_enum() -> None:
    assert RenderParameters(layout_id=LayoutId.VINTAGE).layout_id == "vintage"
