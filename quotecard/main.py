"""quotecard - render a YouTube comment as a shareable quote card."""

import argparse
import asyncio
import sys
from datetime import datetime
from pathlib import Path

from .adapters import YouTubeDataAPIAdapter
from .config import settings
from .errors import QuoteCardError
from .layouts import list_layouts
from .models import LayoutId, RenderParameters
from .orchestrator import RenderOrchestrator
from .utils import get_logger, setup_logging
from .video_url import require_video_id, thumbnail_url

logger = get_logger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a YouTube comment as a quote card PNG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m quotecard.main URL --list-comments          # Show numbered comments
  python -m quotecard.main URL --comment-index 3        # Default layout, 4th comment
  python -m quotecard.main URL --layout modern --text-size 48 --comment-position 500
  python -m quotecard.main URL --layout vintage --thumbnail-background
  python -m quotecard.main URL --background ~/Pictures/bg.jpg

Layouts:
  default  - gradient page, header band, comment card (honors --text-size)
  minimal  - dark full-bleed card with centered text
  modern   - pastel quote card (honors --text-size and --comment-position)
  vintage  - framed paper with a stamp seal
  social   - feed-style card with thumbnail, stats and comment
        """,
    )

    parser.add_argument("url", help="YouTube video URL")
    parser.add_argument(
        "--list-comments",
        action="store_true",
        help="List the fetched comments and exit",
    )
    parser.add_argument(
        "--comment-index",
        type=int,
        default=0,
        help="Index of the comment to render (see --list-comments)",
    )
    parser.add_argument(
        "--layout",
        choices=[layout.value for layout in LayoutId],
        default=settings.default_layout,
        help="Card layout",
    )
    background = parser.add_mutually_exclusive_group()
    background.add_argument(
        "--background",
        type=str,
        help="Background image URL or file path",
    )
    background.add_argument(
        "--thumbnail-background",
        action="store_true",
        help="Use the video thumbnail as background image",
    )
    parser.add_argument(
        "--text-size",
        type=int,
        default=settings.default_text_size,
        help="Comment text size in px (14-72, layouts that support it)",
    )
    parser.add_argument(
        "--comment-position",
        type=int,
        default=settings.default_comment_position,
        help="Vertical comment anchor in px (100-800, layouts that support it)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Override output directory",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    """
    Fetch metadata, pick a comment and render the card.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success)
    """
    start_time = datetime.now()

    if args.output_dir:
        settings.output_dir = args.output_dir
    settings.ensure_directories()

    try:
        video_id = require_video_id(args.url)
        youtube = YouTubeDataAPIAdapter(
            settings.youtube_api_key,
            verified_threshold=settings.verified_subscriber_threshold,
        )

        logger.info(f"Fetching comments and details for {video_id}...")
        comments, video = await asyncio.gather(
            asyncio.to_thread(youtube.get_comments, video_id, settings.comments_max_results),
            asyncio.to_thread(youtube.get_video_details, video_id),
        )

        if args.list_comments:
            for index, comment in enumerate(comments):
                print(f"[{index}] {comment.author_name}: {comment.text}")
            return 0

        if not comments:
            logger.error("Video has no comments to render")
            return 1
        if not 0 <= args.comment_index < len(comments):
            logger.error(f"Comment index {args.comment_index} out of range (0-{len(comments) - 1})")
            return 1

        if args.thumbnail_background:
            background_url = thumbnail_url(video_id)
        else:
            background_url = args.background or ""

        params = RenderParameters(
            layout_id=args.layout,
            background_image_url=background_url,
            text_size_px=args.text_size,
            comment_anchor_px=args.comment_position,
        )

        orchestrator = RenderOrchestrator.from_settings(settings)
        orchestrator.update(comment=comments[args.comment_index], video=video, params=params)
        await orchestrator.drain()

        if orchestrator.state.error_message:
            logger.error(orchestrator.state.error_message)
            return 1

        path = orchestrator.download(settings.output_dir)
        logger.info(f"Card written to {path}")
        logger.info(f"Elapsed time: {datetime.now() - start_time}")
        return 0

    except QuoteCardError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.exception(f"Card generation failed: {e}")
        return 1


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Setup logging
    log_level = "DEBUG" if args.debug else settings.log_level
    setup_logging(level=log_level, gcp_project_id=settings.gcp_project_id)

    logger.debug(f"Arguments: {args}")
    logger.debug(f"Registered layouts: {', '.join(list_layouts())}")

    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
