from contextlib import asynccontextmanager
import logging

from atsmatch.core.config.scoring import get_scoring_config
from atsmatch.taxonomy import get_default_keyword_index, get_default_skill_area_catalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    get_scoring_config()
    index = get_default_keyword_index()
    catalog = get_default_skill_area_catalog()
    logger.info(
        "startup_ready keywords=%s custom_keywords=%s skill_areas=%s",
        len(index.entries),
        len(index.custom_keywords),
        len(catalog.areas),
    )
    yield
