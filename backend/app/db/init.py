from __future__ import annotations

from motor.motor_asyncio import AsyncIOMotorDatabase


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    await db["users"].create_index("email", sparse=True)
    await db["posts"].create_index([("board_id", 1), ("created_at", -1)])
    await db["posts"].create_index("author_id")
    await db["comments"].create_index([("post_id", 1), ("created_at", 1)])
    await db["comments"].create_index("author_id")
    await db["likes"].create_index([("post_id", 1), ("user_id", 1)], unique=True)
    await db["tourist_spots"].create_index("content_id", unique=True)
    await db["tourist_spots"].create_index([("location", "2dsphere")])
    await db["tourist_spots"].create_index("area_code")
