from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

JWT_ALG = "HS256"


def create_client_token(client_id: str, secret: str, ttl_sec: int = 60 * 60) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": client_id,
        "exp": now + timedelta(seconds=ttl_sec),
        "iat": now,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALG)


def verify_client_token(token: str, secret: str) -> Optional[str]:
    try:
        data = jwt.decode(token, secret, algorithms=[JWT_ALG])
        return data.get("sub")
    except JWTError:
        return None
