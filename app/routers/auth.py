# app/routers/auth.py
import jwt
from fastapi import HTTPException, Request

from app.services.auth import decode_jwt


def get_current_user_id(request: Request) -> int:
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        raise HTTPException(401, "missing bearer token")
    try:
        payload = decode_jwt(auth.split(" ", 1)[1])
        return int(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise HTTPException(401, "invalid token")
