from fastapi import APIRouter, Depends, Query, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from ...dependencies import get_mongo_db
from ...schemas.community import (
    BoardStatsResponse,
    CommentCreate,
    CommentResponse,
    CommunitySummary,
    LikeResponse,
    LikeToggle,
    PostCreate,
    PostListResponse,
    PostResponse,
    PostSort,
)
from ...services import community as community_service

router = APIRouter()


@router.get("/posts/{board_id}", response_model=PostListResponse, summary="게시판 글 목록")
async def list_posts(
    board_id: str,
    sort: PostSort = "latest",
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=50),
    db: AsyncIOMotorDatabase = Depends(get_mongo_db),
) -> PostListResponse:
    posts = await community_service.list_posts(db, board_id, sort=sort, page=page, limit=limit)
    return PostListResponse(posts=posts, total=len(posts))


@router.get("/photo-share", response_model=PostListResponse, summary="사진 공유 게시판 글 목록")
async def list_photo_share_posts(
    sort: PostSort = "latest",
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=50),
    db: AsyncIOMotorDatabase = Depends(get_mongo_db),
) -> PostListResponse:
    posts = await community_service.list_posts(
        db, community_service.PHOTO_SHARE_BOARD, sort=sort, page=page, limit=limit
    )
    return PostListResponse(posts=posts, total=len(posts))


@router.get("/post/{post_id}", response_model=PostResponse, summary="게시글 상세")
async def get_post(post_id: str, db: AsyncIOMotorDatabase = Depends(get_mongo_db)) -> PostResponse:
    post = await community_service.get_post(db, post_id)
    return PostResponse(post=post)


@router.post("/posts", response_model=PostResponse, status_code=status.HTTP_201_CREATED, summary="게시글 작성")
async def create_post(payload: PostCreate, db: AsyncIOMotorDatabase = Depends(get_mongo_db)) -> PostResponse:
    post = await community_service.create_post(db, payload.model_dump())
    return PostResponse(post=post, message="게시글이 작성되었습니다.")


@router.post("/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED, summary="댓글 작성")
async def create_comment(payload: CommentCreate, db: AsyncIOMotorDatabase = Depends(get_mongo_db)) -> CommentResponse:
    comment = await community_service.create_comment(db, payload.model_dump())
    return CommentResponse(comment=comment, message="댓글이 작성되었습니다.")


@router.post("/like/{post_id}", response_model=LikeResponse, summary="좋아요 토글")
async def toggle_like(
    post_id: str,
    payload: LikeToggle,
    db: AsyncIOMotorDatabase = Depends(get_mongo_db),
) -> LikeResponse:
    likes, liked = await community_service.toggle_like(db, post_id, payload.user_id)
    return LikeResponse(
        likes=likes,
        is_liked=liked,
        message="좋아요를 눌렀습니다." if liked else "좋아요를 취소했습니다.",
    )


@router.get("/stats/{board_id}", response_model=BoardStatsResponse, summary="게시판 글 수")
async def board_stats(
    board_id: str,
    user_id: str | None = Query(default=None, alias="userId"),
    db: AsyncIOMotorDatabase = Depends(get_mongo_db),
) -> BoardStatsResponse:
    count = await community_service.count_posts(db, board_id, user_id)
    return BoardStatsResponse(board_id=board_id, count=count)


@router.get("/summary", response_model=CommunitySummary, summary="커뮤니티 전체 통계")
async def summary(db: AsyncIOMotorDatabase = Depends(get_mongo_db)) -> CommunitySummary:
    return CommunitySummary(**await community_service.get_summary(db))
