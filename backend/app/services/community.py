from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

logger = logging.getLogger(__name__)

POSTS_COL = "posts"
COMMENTS_COL = "comments"
LIKES_COL = "likes"
USERS_COL = "users"

DEFAULT_CATEGORY = "일반"
DEFAULT_LEVEL = "Lv.1"

MY_POSTS_BOARD = "my-posts"
COMMENTED_POSTS_BOARD = "commented-posts"
PHOTO_SHARE_BOARD = "2"

SORT_ORDERS: dict[str, list[tuple[str, int]]] = {
    "latest": [("created_at", -1)],
    "popular": [("likes", -1), ("views", -1)],
    "views": [("views", -1)],
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_relative_time(value: datetime, now: datetime | None = None) -> str:
    """'방금 전', 'N분 전' 형태의 상대 시간 문자열"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    now = now or _utcnow()
    minutes = int((now - value).total_seconds() // 60)
    if minutes < 1:
        return "방금 전"
    if minutes < 60:
        return f"{minutes}분 전"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}시간 전"
    days = hours // 24
    if days < 7:
        return f"{days}일 전"
    return value.astimezone(timezone.utc).strftime("%Y. %m. %d.")


def default_author(user_id: str) -> str:
    return f"사용자{user_id[-4:]}"


def _object_id(value: str, label: str) -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"잘못된 {label} ID") from exc


def _normalize_comment(doc: dict) -> dict:
    return {
        "id": str(doc["_id"]),
        "post_id": str(doc["post_id"]),
        "content": doc["content"],
        "author": doc["author"],
        "author_id": doc["author_id"],
        "author_level": doc.get("author_level", DEFAULT_LEVEL),
        "likes": doc.get("likes", 0),
        "created_at": doc["created_at"],
        "time_formatted": format_relative_time(doc["created_at"]),
    }


def _normalize_post(doc: dict, comments: list[dict] | None = None, comments_count: int | None = None) -> dict:
    comments = comments or []
    return {
        "id": str(doc["_id"]),
        "board_id": doc["board_id"],
        "title": doc["title"],
        "content": doc["content"],
        "category": doc.get("category", DEFAULT_CATEGORY),
        "author": doc["author"],
        "author_id": doc["author_id"],
        "author_level": doc.get("author_level", DEFAULT_LEVEL),
        "likes": doc.get("likes", 0),
        "views": doc.get("views", 0),
        "images": doc.get("images", []),
        "liked_by": doc.get("liked_by", []),
        "created_at": doc["created_at"],
        "updated_at": doc.get("updated_at"),
        "time_formatted": format_relative_time(doc["created_at"]),
        "comments": comments,
        "comments_count": len(comments) if comments_count is None else comments_count,
    }


async def _touch_user(db: AsyncIOMotorDatabase, user_id: str, name: str, level: str) -> None:
    now = _utcnow()
    await db[USERS_COL].update_one(
        {"_id": user_id},
        {
            "$setOnInsert": {"name": name, "level": level, "created_at": now},
            "$set": {"updated_at": now},
        },
        upsert=True,
    )


async def _comment_counts(db: AsyncIOMotorDatabase, post_ids: list[ObjectId]) -> dict[ObjectId, int]:
    """게시글별 댓글 수를 한 번의 집계로 계산"""
    if not post_ids:
        return {}
    pipeline = [
        {"$match": {"post_id": {"$in": post_ids}}},
        {"$group": {"_id": "$post_id", "count": {"$sum": 1}}},
    ]
    return {row["_id"]: row["count"] async for row in db[COMMENTS_COL].aggregate(pipeline)}


async def list_posts(
    db: AsyncIOMotorDatabase,
    board_id: str,
    *,
    sort: str = "latest",
    page: int = 1,
    limit: int = 10,
) -> list[dict]:
    order = SORT_ORDERS.get(sort, SORT_ORDERS["latest"])
    cursor = db[POSTS_COL].find({"board_id": board_id}).sort(order).skip((page - 1) * limit).limit(limit)
    docs = [doc async for doc in cursor]
    counts = await _comment_counts(db, [doc["_id"] for doc in docs])
    posts = [_normalize_post(doc, comments_count=counts.get(doc["_id"], 0)) for doc in docs]
    logger.info("게시글 목록 조회: board=%s sort=%s page=%s -> %d개", board_id, sort, page, len(posts))
    return posts


async def get_post(db: AsyncIOMotorDatabase, post_id: str) -> dict:
    """게시글 상세 조회 (조회수 1 증가)"""
    obj_id = _object_id(post_id, "게시글")
    doc = await db[POSTS_COL].find_one_and_update(
        {"_id": obj_id},
        {"$inc": {"views": 1}},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="게시글을 찾을 수 없습니다.")
    cursor = db[COMMENTS_COL].find({"post_id": obj_id}).sort("created_at", 1)
    comments = [_normalize_comment(comment) async for comment in cursor]
    return _normalize_post(doc, comments=comments)


async def create_post(db: AsyncIOMotorDatabase, payload: dict[str, Any]) -> dict:
    now = _utcnow()
    user_id = payload["user_id"]
    author = payload.get("author") or default_author(user_id)
    level = payload.get("author_level") or DEFAULT_LEVEL
    doc = {
        "board_id": str(payload["board_id"]),
        "title": payload["title"].strip(),
        "content": payload["content"].strip(),
        "category": payload.get("category") or DEFAULT_CATEGORY,
        "author": author,
        "author_id": user_id,
        "author_level": level,
        "images": payload.get("images") or [],
        "likes": 0,
        "views": 0,
        "liked_by": [],
        "created_at": now,
        "updated_at": now,
    }
    result = await db[POSTS_COL].insert_one(doc)
    doc["_id"] = result.inserted_id
    await _touch_user(db, user_id, author, level)
    logger.info("게시글 작성 완료: %s (board=%s)", result.inserted_id, doc["board_id"])
    return _normalize_post(doc)


async def create_comment(db: AsyncIOMotorDatabase, payload: dict[str, Any]) -> dict:
    post_obj_id = _object_id(payload["post_id"], "게시글")
    if not await db[POSTS_COL].find_one({"_id": post_obj_id}, {"_id": 1}):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="게시글을 찾을 수 없습니다.")

    user_id = payload["user_id"]
    author = payload.get("author") or default_author(user_id)
    level = payload.get("author_level") or DEFAULT_LEVEL
    doc = {
        "post_id": post_obj_id,
        "content": payload["content"].strip(),
        "author": author,
        "author_id": user_id,
        "author_level": level,
        "likes": 0,
        "created_at": _utcnow(),
    }
    result = await db[COMMENTS_COL].insert_one(doc)
    doc["_id"] = result.inserted_id
    await _touch_user(db, user_id, author, level)
    return _normalize_comment(doc)


async def toggle_like(db: AsyncIOMotorDatabase, post_id: str, user_id: str) -> tuple[int, bool]:
    """좋아요가 있으면 취소하고, 없으면 추가합니다. (좋아요 수, 좋아요 여부) 반환"""
    obj_id = _object_id(post_id, "게시글")
    if not await db[POSTS_COL].find_one({"_id": obj_id}, {"_id": 1}):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="게시글을 찾을 수 없습니다.")

    removed = await db[LIKES_COL].delete_one({"post_id": obj_id, "user_id": user_id})
    if removed.deleted_count:
        update = {"$inc": {"likes": -1}, "$pull": {"liked_by": user_id}}
        liked = False
    else:
        try:
            await db[LIKES_COL].insert_one({"post_id": obj_id, "user_id": user_id, "created_at": _utcnow()})
        except DuplicateKeyError:
            # 동시 요청으로 이미 추가된 경우
            doc = await db[POSTS_COL].find_one({"_id": obj_id}, {"likes": 1})
            return (doc or {}).get("likes", 0), True
        update = {"$inc": {"likes": 1}, "$addToSet": {"liked_by": user_id}}
        liked = True

    doc = await db[POSTS_COL].find_one_and_update({"_id": obj_id}, update, return_document=ReturnDocument.AFTER)
    return (doc or {}).get("likes", 0), liked


async def count_posts(db: AsyncIOMotorDatabase, board_id: str, user_id: str | None = None) -> int:
    if board_id == MY_POSTS_BOARD:
        if not user_id:
            return 0
        return await db[POSTS_COL].count_documents({"author_id": user_id})
    if board_id == COMMENTED_POSTS_BOARD:
        if not user_id:
            return 0
        post_ids = await db[COMMENTS_COL].distinct("post_id", {"author_id": user_id})
        if not post_ids:
            return 0
        return await db[POSTS_COL].count_documents({"_id": {"$in": post_ids}})
    return await db[POSTS_COL].count_documents({"board_id": board_id})


async def get_summary(db: AsyncIOMotorDatabase) -> dict:
    posts_by_board: dict[str, int] = {}
    cursor = db[POSTS_COL].aggregate([{"$group": {"_id": "$board_id", "count": {"$sum": 1}}}])
    async for row in cursor:
        posts_by_board[str(row["_id"])] = row["count"]
    return {
        "total_posts": await db[POSTS_COL].count_documents({}),
        "total_users": await db[USERS_COL].count_documents({}),
        "total_comments": await db[COMMENTS_COL].count_documents({}),
        "posts_by_board": posts_by_board,
    }
