"""Post service layer: feed, likes and comments."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    PostAlreadyLikedError,
    PostNotFoundError,
    PostNotLikedError,
)
from domain.entities.post import Comment, Like, Post
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.identity import require_token_user

logger = structlog.get_logger()


class PostService:
    """Service layer for Post business logic.

    Every mutation is read-modify-write on the whole post; concurrent writers
    to the same post can lose updates.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post carrying a snapshot of the author's name and avatar."""
        async with self._uow_factory() as uow:
            author = await require_token_user(uow, user_id)
            post = Post(
                user_id=user_id,
                text=text,
                name=author.name,
                avatar=author.avatar,
            )
            created = await uow.posts.create(post)
            await uow.commit()

        logger.info("post_created", post_id=str(created.id), user_id=str(user_id))
        return created

    async def get_all(self, user_id: UUID) -> list[Post]:
        """Get every post, newest first."""
        async with self._uow_factory() as uow:
            await require_token_user(uow, user_id)
            return await uow.posts.get_all()  # type: ignore[no-any-return]

    async def get_by_id(self, post_id: UUID, user_id: UUID) -> Post:
        """Get a single post."""
        async with self._uow_factory() as uow:
            await require_token_user(uow, user_id)
            return await self._require_post(uow, post_id)

    async def delete(self, post_id: UUID, user_id: UUID) -> None:
        """Delete a post. Only its author may do so.

        A missing post is reported the same way as a foreign one.
        """
        async with self._uow_factory() as uow:
            post = await uow.posts.get(post_id)
            if not post or post.user_id != user_id:
                raise AuthorizationError()

            await uow.posts.delete(post_id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post_id), user_id=str(user_id))

    async def like(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Like a post once."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if post.is_liked_by(user_id):
                raise PostAlreadyLikedError(str(post_id))

            post.add_like(user_id)
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.likes

    async def unlike(self, post_id: UUID, user_id: UUID) -> list[Like]:
        """Withdraw the caller's like."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if not post.remove_like(user_id):
                raise PostNotLikedError(str(post_id))

            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.likes

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> list[Comment]:
        """Prepend a comment carrying a snapshot of the author."""
        async with self._uow_factory() as uow:
            author = await require_token_user(uow, user_id)
            post = await self._require_post(uow, post_id)

            post.add_comment(
                Comment(
                    user_id=user_id,
                    text=text,
                    name=author.name,
                    avatar=author.avatar,
                )
            )
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.comments

    async def remove_comment(
        self, post_id: UUID, comment_id: UUID, user_id: UUID
    ) -> list[Comment]:
        """Remove a comment. Only its author may do so."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)

            comment = post.get_comment(comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))
            if comment.user_id != user_id:
                raise AuthorizationError()

            post.remove_comment(comment_id)
            updated = await uow.posts.update(post)
            await uow.commit()
            return updated.comments

    async def _require_post(self, uow: IUnitOfWork, post_id: UUID) -> Post:
        post = await uow.posts.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post
