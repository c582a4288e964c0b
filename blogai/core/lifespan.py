from contextlib import asynccontextmanager
import logging

from blogai.ai.providers.cloudflare_runtime import runtime_from_settings
from blogai.storage.database import get_database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    db = get_database()
    db.connection()
    logger.info("config_db_ready path=%s", db.db_path)
    if runtime_from_settings() is None:
        logger.warning("worker_ai_runtime_unbound: set CF_ACCOUNT_ID and CF_API_TOKEN to enable worker-ai")
    yield
    db.close()
