"""Post API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_post_service
from api.schemas.common import MessageResponse
from api.schemas.post import (
    CommentCreate,
    CommentResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "",
    response_model=PostResponse,
    summary="Create a post",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Create a post signed with the caller's current name and avatar."""
    post = await service.create(user.id, body.text)
    return PostResponse.from_entity(post)


@router.get(
    "",
    response_model=list[PostResponse],
    summary="List all posts",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    """Get every post, newest first."""
    posts = await service.get_all(user.id)
    return [PostResponse.from_entity(p) for p in posts]


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    post = await service.get_by_id(post_id, user.id)
    return PostResponse.from_entity(post)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={401: {"description": "Not the author, or no such post"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    """Delete one of the caller's posts."""
    await service.delete(post_id, user.id)
    return MessageResponse(message="Post removed")


@router.put(
    "/like/{post_id}",
    response_model=list[LikeResponse],
    summary="Like a post",
    responses={
        404: {"description": "Post not found"},
        409: {"description": "Post already liked"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    likes = await service.like(post_id, user.id)
    return [LikeResponse.from_entity(like) for like in likes]


@router.put(
    "/unlike/{post_id}",
    response_model=list[LikeResponse],
    summary="Unlike a post",
    responses={
        400: {"description": "Post has not yet been liked"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def unlike_post(
    request: Request,
    post_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[LikeResponse]:
    likes = await service.unlike(post_id, user.id)
    return [LikeResponse.from_entity(like) for like in likes]


@router.post(
    "/comments/{post_id}",
    response_model=list[CommentResponse],
    summary="Comment on a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: UUID,
    body: CommentCreate,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    """Add a comment at the top of the post's comments."""
    comments = await service.add_comment(post_id, user.id, body.text)
    return [CommentResponse.from_entity(c) for c in comments]


@router.delete(
    "/comments/{post_id}/{comment_id}",
    response_model=list[CommentResponse],
    summary="Delete a comment",
    responses={
        401: {"description": "Not the comment's author"},
        404: {"description": "Post or comment not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_comment(
    request: Request,
    post_id: UUID,
    comment_id: UUID,
    user: CurrentUser,
    service: PostService = Depends(get_post_service),
) -> list[CommentResponse]:
    comments = await service.remove_comment(post_id, comment_id, user.id)
    return [CommentResponse.from_entity(c) for c in comments]
