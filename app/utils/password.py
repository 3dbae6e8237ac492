"""비밀번호/인증번호 해싱 유틸리티 모듈.

Hashing utilities for admin passwords and SMS one-time codes.
Uses bcrypt directly; neither secret is ever stored in plain text.
"""

import bcrypt


def hash_password(password: str) -> str:
    """평문 비밀번호(또는 인증번호)를 bcrypt 해시로 변환합니다.

    Hash a plain text secret using bcrypt with a random salt.

    Args:
        password: 평문 비밀번호 (Plain text secret to hash)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문과 bcrypt 해시를 비교 검증합니다.

    Verify a plain text secret against a bcrypt hash (constant-time).

    Returns:
        bool: 일치하면 True (True if the secret matches the hash)
    """
    return bcrypt.checkpw(
        plain_password.encode("utf-8"), hashed_password.encode("utf-8")
    )
