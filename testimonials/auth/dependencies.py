from __future__ import annotations

from fastapi import HTTPException, Request


def require_admin(request: Request) -> dict:
    """Raise 401 unless an admin is logged in on this session."""
    user = request.session.get("user")
    if not user or user.get("role") != "admin":
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
