from functools import lru_cache

from passlib.context import CryptContext

DEFAULT_BCRYPT_ROUNDS = 10


@lru_cache
def _password_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Return a salted bcrypt hash of ``password``."""
    return _password_context(rounds).hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    # bcrypt hashes carry their own cost, any context can verify them
    try:
        return _password_context(DEFAULT_BCRYPT_ROUNDS).verify(plain, hashed)
    except (ValueError, TypeError):
        return False
