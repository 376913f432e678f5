#!/usr/bin/env python3
"""
Main entry point for the short link service.

Concurrency: requests are served with async I/O (FastAPI + asyncpg pool +
redis.asyncio). Set WORKERS > 1 for multi-process scaling; each worker has
its own database pool. The memory backend is per-process, so it only makes
sense with a single worker.

Usage:
    shortlinks-server

Environment variables:
    STORE_BACKEND - 'postgres' (default) or 'memory'
    DATABASE_URL - PostgreSQL connection URL
    DATABASE_CREATE_TABLES - Create the table on first use
    REDIS_URL - Redis connection URL (optional)
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from shortlinks.config import Config, load_config
from shortlinks.lib.database.base import ShortLinkStoreBase
from shortlinks.lib.database.memory import InMemoryShortLinkStore
from shortlinks.lib.database.postgres import PostgresShortLinkStore
from shortlinks.lib.database.cache import RedisCache
from shortlinks.lib.registry import LinkRegistry
from shortlinks.lib.shortcode import ShortCodeGenerator
from shortlinks.lib.common.logging_config import setup_logging
from shortlinks.web_app import create_app


def build_store(config: Config, logger: logging.Logger) -> ShortLinkStoreBase:
    """Create the store selected by configuration."""
    if config.store_backend == "memory":
        logger.warning("Using in-memory store; links are lost on restart")
        return InMemoryShortLinkStore(logger=logger)

    logger.info(f"Using PostgreSQL store at {config.database_url.rsplit('@', 1)[-1]}")
    return PostgresShortLinkStore(
        db_config=config.database_url,
        pool_max_size=config.database_pool_max_size,
        create_tables=config.database_create_tables,
        logger=logger,
    )


async def build_registry(config: Config, logger: logging.Logger) -> LinkRegistry:
    """Wire store, cache and generator into a registry."""
    store = build_store(config, logger)

    cache = None
    if config.redis_url:
        logger.info("Connecting to Redis cache")
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")

    generator = ShortCodeGenerator(
        default_length=config.short_code_length,
        fallback_length=config.fallback_code_length,
        strategy=config.code_strategy,
    )

    return LinkRegistry(
        store=store,
        cache=cache,
        generator=generator,
        logger=logger,
        max_collision_retries=config.max_collision_retries,
        max_insert_retries=config.max_insert_retries,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting short link service...")
    registry = await build_registry(config, logger)
    app.state.registry = registry
    logger.info("Service started successfully")

    yield

    logger.info("Shutting down short link service...")
    await registry.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Short Link Service")
    logger.debug(f"Configuration: {config.model_dump(exclude={'database_url', 'redis_url'})}")

    app = create_app(registry=None, config=config)
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=False,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
