# src/services/users/passwords.py
"""
Хэширование паролей (PBKDF2-SHA256).

Формат хранения: pbkdf2_sha256$<итерации>$<соль hex>$<хэш hex>
"""

from __future__ import annotations

import hashlib
import secrets

ALGORITHM = "pbkdf2_sha256"
ITERATIONS = 390_000
SALT_BYTES = 16


def hash_password(password: str, *, iterations: int = ITERATIONS, salt: bytes | None = None) -> str:
    """Возвращает строку для колонки users.password."""
    salt = salt if salt is not None else secrets.token_bytes(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"

