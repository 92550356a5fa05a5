# config/database.py
from __future__ import annotations

import logging
import os
from typing import Optional
from urllib.parse import quote_plus

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from pymongo.server_api import ServerApi

from config.settings import DB_BOOTSTRAP_INDEXES

logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = "blog"


def _build_mongo_uri() -> str:
    """
    Build the MongoDB URI.
    Precedence:
      1. TEST_MONGODB_URI (for CI/tests)
      2. MONGODB_URI (full connection string)
      3. Individual parts: DB_USER / DB_PASSWORD / DB_HOST / DB_NAME
    """
    test_uri = os.getenv("TEST_MONGODB_URI")
    if test_uri:
        return test_uri

    uri = os.getenv("MONGODB_URI")
    if uri:
        return uri

    user = os.getenv("DB_USER", "").strip()
    pwd = os.getenv("DB_PASSWORD", "").strip()
    host = os.getenv("DB_HOST", "").strip()
    dbname = os.getenv("DB_NAME", DEFAULT_DB_NAME).strip()

    if not (user and pwd and host):
        raise RuntimeError(
            "Missing Mongo credentials. Set TEST_MONGODB_URI, MONGODB_URI or "
            "DB_USER/DB_PASSWORD/DB_HOST (and optionally DB_NAME)."
        )

    return (
        f"mongodb+srv://{user}:{quote_plus(pwd)}@{host}/{dbname}"
        f"?retryWrites=true&w=majority&tls=true"
    )


class MongoConnection:
    """
    Singleton MongoDB client & DB accessor.
    - Holds a single pooled client for the process, created on first use.
    - Offers helpers to get the DB and its collections.
    """

    _instance: Optional["MongoConnection"] = None

    def __new__(cls) -> "MongoConnection":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._client = None
        return cls._instance

    def _init_client(self) -> None:
        uri = _build_mongo_uri()
        # Plain mongodb:// URIs (local, CI) decide TLS themselves.
        kwargs = {"server_api": ServerApi("1")}
        if uri.startswith("mongodb+srv://"):
            kwargs["tls"] = True
        self._client = MongoClient(uri, **kwargs)
        self._db_name = os.getenv("DB_NAME", DEFAULT_DB_NAME)
        logger.info("MongoDB client created for database '%s'", self._db_name)

    @property
    def client(self) -> MongoClient:
        """Return the shared MongoClient instance."""
        if self._client is None:
            self._init_client()
        return self._client

    def ping(self) -> None:
        self.client.admin.command("ping")

    def db(self) -> Database:
        """Return the default database handle."""
        return self.client[self._db_name]

    def collection(self, name: str) -> Collection:
        """Return a collection handle from the default DB."""
        return self.db()[name]

    def close(self) -> None:
        """Close the client and reset the singleton (used in tests/shutdown)."""
        if getattr(self, "_client", None) is not None:
            self._client.close()
        type(self)._instance = None


# Module-level singleton accessor
mongodb = MongoConnection()


def bootstrap_indexes() -> None:
    """Create the indexes the blog queries rely on (DB_BOOTSTRAP_INDEXES=1)."""
    if not DB_BOOTSTRAP_INDEXES:
        return

    db = mongodb.db()
    db["users"].create_index("email", unique=True)
    db["users"].create_index("accountType")
    db["posts"].create_index([("user", ASCENDING), ("createdAt", DESCENDING)])
    db["posts"].create_index([("status", ASCENDING), ("category", ASCENDING)])
    db["comments"].create_index("post")
    db["views"].create_index([("user", ASCENDING), ("createdAt", ASCENDING)])
    db["views"].create_index("post")
    db["followers"].create_index(
        [("writerId", ASCENDING), ("followerId", ASCENDING)], unique=True
    )
    db["followers"].create_index([("writerId", ASCENDING), ("createdAt", ASCENDING)])
    logger.info("MongoDB indexes ensured")
