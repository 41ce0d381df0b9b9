"""Post domain entities.

``name`` and ``avatar`` on posts and comments are snapshots of the author at
write time. They are not re-synced when the user record changes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Like:
    """A user's like on a post."""

    user_id: UUID
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Comment:
    """A comment on a post."""

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a feed post."""

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar: str | None = None
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def is_liked_by(self, user_id: UUID) -> bool:
        return any(like.user_id == user_id for like in self.likes)

    def add_like(self, user_id: UUID) -> Like:
        """Prepend a like. Callers check is_liked_by first."""
        like = Like(user_id=user_id)
        self.likes.insert(0, like)
        return like

    def remove_like(self, user_id: UUID) -> bool:
        """Drop the user's like. Returns False if they had not liked the post."""
        remaining = [like for like in self.likes if like.user_id != user_id]
        if len(remaining) == len(self.likes):
            return False
        self.likes = remaining
        return True

    def add_comment(self, comment: Comment) -> None:
        """Insert as the most recent comment."""
        self.comments.insert(0, comment)

    def get_comment(self, comment_id: UUID) -> Comment | None:
        return next((c for c in self.comments if c.id == comment_id), None)

    def remove_comment(self, comment_id: UUID) -> bool:
        """Drop the comment with this id. Returns False if there is none."""
        remaining = [c for c in self.comments if c.id != comment_id]
        if len(remaining) == len(self.comments):
            return False
        self.comments = remaining
        return True
