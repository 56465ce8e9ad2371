"""Password hashing.

Hashes use ``pbkdf2_sha256`` through passlib. passlib's ``verify`` compares
digests in constant time; ``verify_password_or_dummy`` extends that to the
unknown-username path so both login failures cost the same.
"""

from functools import lru_cache

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


@lru_cache
def _dummy_hash() -> str:
    return pwd_context.hash("doorsign-timing-equalizer")


def verify_password_or_dummy(plain_password: str, hashed_password: str | None) -> bool:
    """Verify against the stored hash, or burn one dummy verification.

    Returns False whenever hashed_password is None.
    """
    if hashed_password is None:
        pwd_context.verify(plain_password, _dummy_hash())
        return False
    return verify_password(plain_password, hashed_password)
