from typing import Optional

from pydantic import BaseModel


class TokenPayload(BaseModel):
    """Payload for Bearer Access Token"""
    sub: str  # caller identity, opaque to this service
    email: Optional[str] = None
    exp: Optional[int] = None
    iat: Optional[int] = None
