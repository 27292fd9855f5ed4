"""
Database module - Generic async MongoDB connection using Motor.

Provides reusable MongoDB connectivity for any project.

Usage:
    from common.database import MongoDB

    db = MongoDB()
    await db.connect(uri, database_name, indexes=INDEXES)
    repository = MongoCrudRepository(db.db)
"""

from common.database.mongodb import MongoDB, mask_uri

__all__ = ["MongoDB", "mask_uri"]
