# 📄 File: chatter/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Opens and closes the line to our MongoDB database and can tell whether the database is
# answering, so the app knows if it can safely read and save data.
#
# 🧪 Purpose (Technical Summary):
# Motor client lifecycle management: lazy client creation from settings, database handle access,
# ping-based health checks with exponential backoff, and orderly shutdown.
#
# 🔗 Dependencies:
# - motor (AsyncIOMotorClient)
# - pymongo (connection errors)
# - chatter/shared/config/settings.py (connection configuration)
#
# 🔄 Connected Modules / Calls From:
# - chatter/main.py (application lifespan)
# - chatter/api/health.py (detailed health check)

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class MongoConnectionManager:
    """
    Manages the MongoDB client used by every repository, with health
    monitoring and retry logic for the startup ping.
    """

    def __init__(
        self,
        uri: str,
        db_name: str,
        server_selection_timeout_ms: int = 5000,
        retry_attempts: int = 3,
        retry_delay: float = 1.0,
    ):
        self._uri = uri
        self._db_name = db_name
        self._server_selection_timeout_ms = server_selection_timeout_ms
        self._retry_attempts = retry_attempts
        self._retry_delay = retry_delay
        self._client: Optional[AsyncIOMotorClient] = None

    @property
    def database(self) -> AsyncIOMotorDatabase:
        """Handle for the configured database."""
        if self._client is None:
            raise RuntimeError("MongoDB client not initialized")
        return self._client[self._db_name]

    async def connect(self) -> AsyncIOMotorDatabase:
        """Create the client and verify the server answers a ping."""
        if self._client is not None:
            logger.warning("MongoDB client already initialized")
            return self.database

        logger.info(f"Connecting to MongoDB database '{self._db_name}'...")
        self._client = AsyncIOMotorClient(
            self._uri,
            serverSelectionTimeoutMS=self._server_selection_timeout_ms,
            tz_aware=True,
        )

        health = await self.health_check()
        if health["status"] != "healthy":
            # Repositories surface StoreUnavailableError per call; startup continues
            logger.error(f"MongoDB not reachable at startup: {health.get('error')}")
        else:
            logger.info("MongoDB connection established")
        return self.database

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform a ping against the server and return structured status.
        """
        if self._client is None:
            return {
                "status": "unhealthy",
                "error": "MongoDB client not initialized",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }

        for attempt in range(self._retry_attempts):
            try:
                await self._client.admin.command("ping")
                logger.debug("MongoDB health check passed")
                return {
                    "status": "healthy",
                    "database": self._db_name,
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                }
            except PyMongoError as e:
                logger.warning(
                    f"MongoDB health check failed (attempt {attempt + 1}/{self._retry_attempts}): {e}"
                )
                if attempt < self._retry_attempts - 1:
                    await asyncio.sleep(self._retry_delay * (2 ** attempt))

        return {
            "status": "unhealthy",
            "error": "MongoDB health check failed after all retry attempts",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    async def disconnect(self) -> None:
        """Close the client; safe to call when never connected."""
        if self._client is None:
            return
        self._client.close()
        self._client = None
        logger.info("MongoDB connection closed")
