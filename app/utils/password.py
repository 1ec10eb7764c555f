"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing and verification utility module (bcrypt).
Member passwords are stored only as bcrypt hashes and are never reversed.
"""

import bcrypt

# bcrypt 입력 최대 길이 (Maximum password length in bytes accepted by bcrypt)
BCRYPT_MAX_BYTES: int = 72


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plaintext password with a fresh random salt, so two members
    with the same password get different hashes.

    Args:
        password: 평문 비밀번호 (Plaintext password)

    Returns:
        str: bcrypt 해시 문자열 (``$2b$12$...``, ~60 chars)
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호가 저장된 해시와 일치하는지 확인합니다.

    Check a plaintext password against a stored bcrypt hash.
    A malformed stored hash counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False
