# 📄 File: chatter/shared/infrastructure/database/migrations.py
#
# 🧭 Purpose (Layman Explanation):
# Keeps the database layout up to date by running the numbered upgrade scripts that have not
# run yet, before the app starts answering requests.
#
# 🧪 Purpose (Technical Summary):
# Startup driver for pymongo-migrate. Scripts in MIGRATIONS_DIR follow the pymongo-migrate
# format (``name``, ``dependencies``, ``upgrade(db)``, ``downgrade(db)``) and applied state is
# kept in the configured changelog collection. Status and downgrade are served by the
# ``pymongo-migrate`` CLI against the same directory and collection.
#
# 🔗 Dependencies:
# - pymongo-migrate (MongoMigrate)
# - pymongo (synchronous client the migrations run on)
# - chatter/shared/core/exceptions.py (MigrationError)
#
# 🔄 Connected Modules / Calls From:
# - chatter/main.py (lifespan, when RUN_MIGRATIONS_ON_STARTUP is enabled)
# - migrations/versions/*.py

import logging
from pathlib import Path
from typing import Union

from pymongo import MongoClient
from pymongo_migrate.mongo_migrate import MongoMigrate
from starlette.concurrency import run_in_threadpool

from chatter.shared.config.settings import Settings
from chatter.shared.core.exceptions import MigrationError

logger = logging.getLogger(__name__)


class MigrationRunner:
    """
    Applies pending migration scripts against one database.

    Args:
        client: Synchronous client the scripts run on
        db_name: Database the scripts run against
        migrations_dir: Directory holding the scripts
        changelog_collection: Collection recording applied scripts
    """

    def __init__(
        self,
        client: MongoClient,
        db_name: str,
        migrations_dir: Union[str, Path],
        changelog_collection: str = "changelog",
    ):
        self.migrations_dir = Path(migrations_dir)
        self._migrate = MongoMigrate(
            client=client,
            database=db_name,
            migrations_dir=str(self.migrations_dir),
            migrations_collection=changelog_collection,
            logger=logger,
        )

    def up(self) -> None:
        """
        Apply every pending script in dependency order.

        Raises:
            MigrationError: If the directory is missing or a script fails; later scripts are not run
        """
        if not self.migrations_dir.is_dir():
            raise MigrationError(f"Migrations directory not found: {self.migrations_dir}")

        logger.info(f"Applying pending migrations from {self.migrations_dir}")
        try:
            self._migrate.upgrade()
        except Exception as e:
            logger.error(f"Migration failed: {e}")
            raise MigrationError(f"Could not apply migrations: {e}") from e
        logger.info("Database migrations up to date")


async def run_startup_migrations(settings: Settings) -> None:
    """Run pending migrations on a short-lived synchronous client."""
    client: MongoClient = MongoClient(
        settings.MONGODB_URI,
        serverSelectionTimeoutMS=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
        tz_aware=True,
    )
    try:
        runner = MigrationRunner(
            client,
            settings.DB_NAME,
            settings.MIGRATIONS_DIR,
            changelog_collection=settings.MIGRATIONS_CHANGELOG_COLLECTION,
        )
        await run_in_threadpool(runner.up)
    finally:
        client.close()
