"""Pydantic schemas for Post API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from domain.entities.post import Comment, Like, Post


class PostCreate(BaseModel):
    """Schema for creating a Post."""

    model_config = ConfigDict(str_strip_whitespace=True)

    text: str = Field(..., min_length=1)


class CommentCreate(BaseModel):
    """Schema for commenting on a Post."""

    model_config = ConfigDict(str_strip_whitespace=True)

    text: str = Field(..., min_length=1)


class LikeResponse(BaseModel):
    """Schema for a like."""

    id: UUID
    user_id: UUID
    created_at: datetime

    @classmethod
    def from_entity(cls, like: Like) -> "LikeResponse":
        return cls(id=like.id, user_id=like.user_id, created_at=like.created_at)


class CommentResponse(BaseModel):
    """Schema for a comment."""

    id: UUID
    user_id: UUID
    text: str
    name: str
    avatar: str | None
    created_at: datetime

    @classmethod
    def from_entity(cls, comment: Comment) -> "CommentResponse":
        return cls(
            id=comment.id,
            user_id=comment.user_id,
            text=comment.text,
            name=comment.name,
            avatar=comment.avatar,
            created_at=comment.created_at,
        )


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "789e4567-e89b-12d3-a456-426614174000",
                "user_id": "123e4567-e89b-12d3-a456-426614174000",
                "text": "Shipped the new profile page today",
                "name": "Ada Lovelace",
                "avatar": "//www.gravatar.com/avatar/0c1b...?s=200&r=pg&d=mm",
                "likes": [],
                "comments": [],
                "created_at": "2026-01-28T10:00:00",
            }
        },
    )

    id: UUID
    user_id: UUID
    text: str
    name: str
    avatar: str | None
    likes: list[LikeResponse] = []
    comments: list[CommentResponse] = []
    created_at: datetime

    @classmethod
    def from_entity(cls, post: Post) -> "PostResponse":
        return cls(
            id=post.id,
            user_id=post.user_id,
            text=post.text,
            name=post.name,
            avatar=post.avatar,
            likes=[LikeResponse.from_entity(like) for like in post.likes],
            comments=[CommentResponse.from_entity(c) for c in post.comments],
            created_at=post.created_at,
        )
