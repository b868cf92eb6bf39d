#!/usr/bin/env python3
"""
MongoDB Bootstrap

Runs once against a freshly started MongoDB instance and provisions the
administrative credential and, for the fixed strategy, the sample namespace.

Usage:
    python -m mongo_bootstrap [--strategy fixed|env] [--uri URI] [--log-level LEVEL]

Environment Variables:
    MONGO_URI: MongoDB connection string
    MONGO_INITDB_ROOT_USERNAME: Root username (env strategy)
    MONGO_INITDB_ROOT_PASSWORD: Root password (env strategy)
    BOOTSTRAP_STRATEGY: fixed or env (default: env)
    BOOTSTRAP_FALLBACK_ENABLED: Use the fixed identity when the env identity is missing
    LOG_LEVEL: Logging level (default: INFO)
"""
import argparse
import asyncio
import logging
import sys
from typing import Optional

from pydantic import ValidationError
from pymongo.errors import PyMongoError

from mongo_bootstrap.config import Settings, get_bootstrap_config, get_settings
from mongo_bootstrap.database.connections import create_mongo_client, ping
from mongo_bootstrap.models.credential import BootstrapResult, BootstrapStrategy
from mongo_bootstrap.services.bootstrap_service import BootstrapService

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("mongo_bootstrap")


# ==================== Logging Setup ====================

def configure_logging(level: str) -> None:
    """Send package logs to stdout, replacing any handler set by a previous call."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    logger.handlers = [handler]
    numeric_level = logging.getLevelName(level.upper())
    logger.setLevel(numeric_level if isinstance(numeric_level, int) else logging.INFO)


# ==================== CLI ====================

def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mongo-bootstrap",
        description="Provision the MongoDB root user and sample namespace.",
    )
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in BootstrapStrategy],
        help="fixed: built-in admin user plus sample namespace; "
             "env: root user from MONGO_INITDB_ROOT_USERNAME/PASSWORD",
    )
    parser.add_argument("--uri", help="MongoDB connection string")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> Settings:
    """Settings from the environment, with command-line flags taking priority."""
    overrides = {}
    if args.strategy:
        overrides["bootstrap_strategy"] = args.strategy
    if args.uri:
        overrides["mongo_uri"] = args.uri
    if args.log_level:
        overrides["log_level"] = args.log_level

    if not overrides:
        return get_settings()
    return Settings(**overrides)


# ==================== Main Entry Point ====================

async def bootstrap(settings: Settings) -> BootstrapResult:
    """Connect, run the configured bootstrap and disconnect."""
    client = create_mongo_client(settings)
    try:
        await ping(client)
        logger.debug("Connected to MongoDB")
        service = BootstrapService(client)
        return await service.run(get_bootstrap_config(settings))
    finally:
        client.close()


def main(argv: Optional[list[str]] = None) -> int:
    """
    Run the bootstrap.

    Returns:
        0 on success (including a run with nothing to do), 1 on failure
    """
    args = parse_args(argv)

    try:
        settings = load_settings(args)
    except ValidationError as e:
        configure_logging("INFO")
        logger.error(f"Invalid bootstrap configuration: {e}")
        return 1

    configure_logging(settings.log_level)
    logger.debug(f"Bootstrap strategy: {settings.bootstrap_strategy.value}")

    try:
        result = asyncio.run(bootstrap(settings))
    except PyMongoError as e:
        logger.error(f"Bootstrap failed: {e}")
        return 1

    logger.debug(f"Bootstrap complete: {result.model_dump()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
