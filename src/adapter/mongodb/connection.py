"""Process-wide MongoDB client."""

import logging
import time

from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# Suppress verbose PyMongo driver logs
logging.getLogger('pymongo').setLevel(logging.WARNING)

# Seconds to wait after a failed connect before trying again
RETRY_AFTER_SECONDS = 30.0

_client: MongoClient | None = None
_last_failure: float | None = None


def reset_client() -> None:
    global _client, _last_failure
    if _client is not None:
        _client.close()
    _client = None
    _last_failure = None


def _connect(mongo_url: str) -> MongoClient:
    client = MongoClient(
        mongo_url,
        serverSelectionTimeoutMS=5000,
        connectTimeoutMS=5000,
        socketTimeoutMS=30000,
        maxPoolSize=10,
        retryWrites=True,
        retryReads=True,
        tz_aware=True,
    )
    try:
        client.admin.command('ping')
    except PyMongoError:
        client.close()
        raise
    return client


def get_mongodb_client(mongo_url: str | None) -> MongoClient | None:
    """Return a pinged client, or None while MongoDB is unreachable.

    A healthy cached client is reused. After a failed connect, further
    attempts are skipped for RETRY_AFTER_SECONDS.
    """
    global _client, _last_failure

    if not mongo_url:
        logger.error("MONGO_URL not configured")
        return None

    if _client is not None:
        try:
            _client.admin.command('ping')
            return _client
        except PyMongoError as e:
            logger.warning("MongoDB ping failed, reconnecting", extra={"error": str(e)[:200]})
            _client.close()
            _client = None

    now = time.monotonic()
    if _last_failure is not None and now - _last_failure < RETRY_AFTER_SECONDS:
        return None

    try:
        _client = _connect(mongo_url)
    except PyMongoError as e:
        _last_failure = now
        logger.error("MongoDB connection failed", extra={"error": str(e)[:200]})
        return None

    if _last_failure is not None:
        logger.info("MongoDB connection recovered")
    else:
        logger.info("MongoDB connected")
    _last_failure = None
    return _client
