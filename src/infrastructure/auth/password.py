"""Password hashing backed by passlib's bcrypt handler."""

from passlib.hash import bcrypt

from core.config import settings


class BcryptPasswordHasher:
    """Salted bcrypt hashing with a configurable cost factor."""

    def __init__(self, rounds: int = settings.bcrypt_rounds) -> None:
        self._handler = bcrypt.using(rounds=rounds)

    def hash(self, password: str) -> str:
        return self._handler.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Return False for malformed hashes instead of raising."""
        try:
            return self._handler.verify(password, password_hash)
        except ValueError:
            return False
