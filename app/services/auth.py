import time, jwt
from typing import Any, Dict

from app.config import settings


def create_jwt(user_id: int) -> str:
    payload = {"sub": str(user_id), "iat": int(time.time())}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

def decode_jwt(token: str) -> Dict[str, Any]:
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
