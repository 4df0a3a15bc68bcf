"""Stage 1: Content — resolve the article to render.

Reads:  settings.content_path (YAML article), if configured
Falls back to the built-in placeholder article otherwise.
"""
import logging

from models.content import PLACEHOLDER_CONTENT, Content
from settings import Settings

logger = logging.getLogger(__name__)


def run(settings: Settings) -> Content:
    """Load the configured article, or the placeholder when none is set.

    Raises FileNotFoundError if a content path is configured but missing.
    """
    if settings.content_path is None:
        logger.warning("No content file configured. Using placeholder article.")
        content = PLACEHOLDER_CONTENT
    else:
        if not settings.content_path.exists():
            logger.error("Content file not found: %s", settings.content_path)
            raise FileNotFoundError(f"Content file not found: {settings.content_path}")
        content = Content.load(settings.content_path)

    logger.info("Stage 1 complete")
    logger.info("  Title:    %s", content.title)
    logger.info("  Author:   %s", content.author)
    logger.info("  Sections: %d", len(content.sections))
    return content
