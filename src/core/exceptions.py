"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Ownership errors (401)
    NOT_AUTHORIZED = "NOT_AUTHORIZED"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    EXPERIENCE_NOT_FOUND = "EXPERIENCE_NOT_FOUND"
    EDUCATION_NOT_FOUND = "EDUCATION_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    POST_NOT_LIKED = "POST_NOT_LIKED"

    # Conflict errors (409)
    POST_ALREADY_LIKED = "POST_ALREADY_LIKED"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "No token, authorization denied",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Caller does not own the resource."""

    def __init__(self, message: str = "User not authorized") -> None:
        super().__init__(
            error_code=ErrorCode.NOT_AUTHORIZED,
            message=message,
            status_code=401,
        )


class UserAlreadyExistsError(AppException):
    """Email is already registered."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.USER_ALREADY_EXISTS,
            message="User already exists",
            status_code=400,
        )


class InvalidCredentialsError(AppException):
    """Login failed. Deliberately silent about which field was wrong."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_CREDENTIALS,
            message="Invalid credentials",
            status_code=400,
        )


class UserNotFoundError(AppException):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class ProfileNotFoundError(AppException):
    """No profile for this user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="There is no profile for this user",
            status_code=404,
            details={"user_id": user_id},
        )


class ExperienceNotFoundError(AppException):
    """Experience entry not found on the profile."""

    def __init__(self, experience_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.EXPERIENCE_NOT_FOUND,
            message=f"Experience not found: {experience_id}",
            status_code=404,
            details={"experience_id": experience_id},
        )


class EducationNotFoundError(AppException):
    """Education entry not found on the profile."""

    def __init__(self, education_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.EDUCATION_NOT_FOUND,
            message=f"Education not found: {education_id}",
            status_code=404,
            details={"education_id": education_id},
        )


class PostNotFoundError(AppException):
    """Post not found."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_FOUND,
            message=f"Post not found: {post_id}",
            status_code=404,
            details={"post_id": post_id},
        )


class CommentNotFoundError(AppException):
    """Comment not found on the post."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.COMMENT_NOT_FOUND,
            message=f"Comment not found: {comment_id}",
            status_code=404,
            details={"comment_id": comment_id},
        )


class PostAlreadyLikedError(AppException):
    """Caller already likes the post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_ALREADY_LIKED,
            message="Post already liked",
            status_code=409,
            details={"post_id": post_id},
        )


class PostNotLikedError(AppException):
    """Caller has not liked the post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_LIKED,
            message="Post has not yet been liked",
            status_code=400,
            details={"post_id": post_id},
        )


class UpstreamServiceError(AppException):
    """A third-party call failed. The cause is logged, never returned."""

    def __init__(self, service: str) -> None:
        super().__init__(
            error_code=ErrorCode.UPSTREAM_ERROR,
            message=f"{service} request failed",
            status_code=502,
        )
