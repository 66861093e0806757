# 📄 File: chatter/modules/user_management/infrastructure/database/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Points the shared database "filing clerk" at the users drawer of the database.
#
# 🧪 Purpose (Technical Summary):
# Binds the generic MongoRepository to the ``users`` collection and the User entity.
#
# 🔗 Dependencies:
# - motor (database handle)
# - chatter.shared.infrastructure.database.repository
#
# 🔄 Connected Modules / Calls From:
# - presentation/dependencies.py (per-request service wiring)
# - migrations/versions (collection name)

from motor.motor_asyncio import AsyncIOMotorDatabase

from chatter.shared.infrastructure.database.repository import MongoRepository

from ...domain.models.user import User

USERS_COLLECTION = "users"


def build_user_repository(database: AsyncIOMotorDatabase) -> MongoRepository[User]:
    """Repository for User documents stored in the ``users`` collection."""
    return MongoRepository(database[USERS_COLLECTION], User)
