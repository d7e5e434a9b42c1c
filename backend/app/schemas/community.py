from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PostSort = Literal["latest", "popular", "views"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PostCreate(_CamelModel):
    board_id: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    category: str | None = None
    author: str | None = None
    author_level: str | None = None
    images: list[str] = Field(default_factory=list)


class CommentCreate(_CamelModel):
    post_id: str = Field(min_length=1)
    content: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    author: str | None = None
    author_level: str | None = None


class LikeToggle(_CamelModel):
    user_id: str = Field(min_length=1)


class CommentOut(_CamelModel):
    id: str
    post_id: str
    content: str
    author: str
    author_id: str
    author_level: str
    likes: int = 0
    created_at: datetime
    time_formatted: str


class PostOut(_CamelModel):
    id: str
    board_id: str
    title: str
    content: str
    category: str
    author: str
    author_id: str
    author_level: str
    likes: int = 0
    views: int = 0
    images: list[str] = Field(default_factory=list)
    liked_by: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime | None = None
    time_formatted: str
    comments: list[CommentOut] = Field(default_factory=list)
    comments_count: int = 0


class PostListResponse(BaseModel):
    success: bool = True
    posts: list[PostOut]
    total: int


class PostResponse(BaseModel):
    success: bool = True
    post: PostOut
    message: str | None = None


class CommentResponse(BaseModel):
    success: bool = True
    comment: CommentOut
    message: str


class LikeResponse(_CamelModel):
    success: bool = True
    likes: int
    is_liked: bool
    message: str


class BoardStatsResponse(_CamelModel):
    success: bool = True
    board_id: str
    count: int


class CommunitySummary(_CamelModel):
    total_posts: int
    total_users: int
    total_comments: int
    posts_by_board: dict[str, int]
