from __future__ import annotations

from typing import Any

import bcrypt

from .config import DEFAULT_AUTH_CONFIG, AuthConfig

_admins: dict[str, str] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def load_admin(config: AuthConfig = DEFAULT_AUTH_CONFIG) -> None:
    """Register the configured admin account, replacing any previous one."""
    _admins.clear()
    _admins[config.admin_username] = _hash_password(config.admin_password)


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Verify admin credentials. Returns ``{username, role}`` or ``None``."""
    hashed = _admins.get(username)
    if hashed and _verify_password(password, hashed):
        return {"username": username, "role": "admin"}
    return None


load_admin()
