"""Unique index on users.email

Revision ID: 001_users_email_index
Create Date: 2026-10-12
"""

import pymongo

name = "001_users_email_index"
dependencies = []

USERS_COLLECTION = "users"
EMAIL_INDEX_NAME = "ix_users_email"


def upgrade(db: "pymongo.database.Database"):
    db[USERS_COLLECTION].create_index(
        [("email", pymongo.ASCENDING)],
        name=EMAIL_INDEX_NAME,
        unique=True,
    )


def downgrade(db: "pymongo.database.Database"):
    db[USERS_COLLECTION].drop_index(EMAIL_INDEX_NAME)
