from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

logger = logging.getLogger(__name__)


@dataclass
class MongoConfig:
    uri: str
    database: str
    server_selection_timeout_ms: int = 5000
    socket_timeout_ms: int = 45000

    @property
    def redacted_uri(self) -> str:
        """URI with the password masked, safe for logs."""
        if "@" not in self.uri or "://" not in self.uri:
            return self.uri
        scheme, rest = self.uri.split("://", 1)
        credentials, host = rest.split("@", 1)
        if ":" in credentials:
            credentials = credentials.split(":", 1)[0] + ":****"
        return f"{scheme}://{credentials}@{host}"


class DatabaseConnection:
    """Singleton-like MongoDB client holder.

    Note: MongoClient keeps its own connection pool and is safe to share across
    Flask request threads, so one client is created lazily and reused.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: MongoConfig, client: Optional[MongoClient] = None):
        self._config = config
        self._client = client

    @classmethod
    def get_instance(cls, config: MongoConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> MongoConfig:
        return self._config

    @property
    def client(self) -> MongoClient:
        if self._client is None:
            logger.info("connecting to MongoDB at %s", self._config.redacted_uri)
            self._client = MongoClient(
                self._config.uri,
                serverSelectionTimeoutMS=self._config.server_selection_timeout_ms,
                socketTimeoutMS=self._config.socket_timeout_ms,
            )
        return self._client

    @property
    def database(self) -> Database:
        return self.client[self._config.database]

    def collection(self, name: str) -> Collection:
        return self.database[name]

    def ping(self) -> bool:
        self.client.admin.command("ping")
        return True

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
