from __future__ import annotations

import bcrypt

from statuspage.core.config import get_settings


def hash_password(password: str, *, rounds: int | None = None) -> str:
    # The cost factor is embedded in the hash, so old hashes verify after it changes.
    salt = bcrypt.gensalt(rounds=rounds or get_settings().password_hash_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, encoded: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), encoded.encode("utf-8"))
    except ValueError:
        # Not a bcrypt hash.
        return False
