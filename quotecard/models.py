"""Value records exchanged between the collaborators and the renderers."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

TEXT_SIZE_RANGE = (14, 72)
COMMENT_ANCHOR_RANGE = (100, 800)


class LayoutId(str, Enum):
    """Available card layouts."""

    DEFAULT = "default"
    MINIMAL = "minimal"
    MODERN = "modern"
    VINTAGE = "vintage"
    SOCIAL = "social"


@dataclass(frozen=True)
class Comment:
    """A sanitized top-level comment."""

    text: str
    author_name: str
    author_profile_image_url: str


@dataclass(frozen=True)
class VideoMetadata:
    """Display-ready metadata for a YouTube video.

    Counts, publish date and duration arrive already formatted; renderers
    draw them verbatim.
    """

    title: str
    channel_title: str
    channel_thumbnail_url: str
    video_thumbnail_url: str
    view_count: str = "0"
    like_count: str = "0"
    comment_count: str = "0"
    published_at: str = ""
    duration: str = ""
    is_verified: bool = False


def _clamp(value: int, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return max(low, min(high, int(value)))


@dataclass(frozen=True)
class RenderParameters:
    """Tunable inputs for one render pass."""

    layout_id: str = LayoutId.DEFAULT.value
    background_image_url: str = ""
    text_size_px: int = 42
    comment_anchor_px: int = 450

    def __post_init__(self):
        layout_id = self.layout_id.value if isinstance(self.layout_id, LayoutId) else self.layout_id
        object.__setattr__(self, "layout_id", layout_id)
        object.__setattr__(self, "text_size_px", _clamp(self.text_size_px, TEXT_SIZE_RANGE))
        object.__setattr__(
            self, "comment_anchor_px", _clamp(self.comment_anchor_px, COMMENT_ANCHOR_RANGE)
        )


@dataclass(frozen=True)
class RenderResult:
    """Terminal value of a render pass: an encoded image or an error."""

    encoded_image: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.encoded_image is not None
