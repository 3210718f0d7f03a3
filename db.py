import contextlib
import logging
from typing import AsyncIterator

from pymongo import MongoClient
from pymongo.database import Database

import config
from domain.documents import Document
from domain.repository import RecipeRepository


logger = logging.getLogger(__name__)


def mongo_client(cfg: config.Config | None = None) -> MongoClient[Document]:
    cfg = config.Config() if cfg is None else cfg
    return MongoClient(
        cfg.mongo_url,
        serverSelectionTimeoutMS=cfg.timeout_ms,
        connectTimeoutMS=cfg.timeout_ms,
    )


def recipes_repository(
    db: Database[Document],
    cfg: config.Config | None = None,
) -> RecipeRepository:
    cfg = config.Config() if cfg is None else cfg
    return RecipeRepository.from_database(db, collection_name=cfg.collection_name)


@contextlib.asynccontextmanager
async def connect(
    cfg: config.Config | None = None,
) -> AsyncIterator[RecipeRepository]:
    """Recipe repository over a fresh client, closed on exit."""
    cfg = config.Config() if cfg is None else cfg
    client = mongo_client(cfg)
    logger.info("Using %s, database %s", cfg.mongo_url, cfg.db_name)
    try:
        yield recipes_repository(client.get_database(cfg.db_name), cfg)
    finally:
        client.close()
        logger.info("Closed connection to %s", cfg.mongo_url)
