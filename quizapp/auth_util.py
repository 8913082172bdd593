from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union

from jose import jwt

from quizapp.config import settings
from quizapp.schema.auth_schema import TokenPayload


def create_access_token(
    subject: Union[str, Any], email: Optional[str] = None, expires_delta: timedelta = None
) -> str:
    """
    Creates an access token.

    Tokens are normally minted by the identity provider; this helper signs
    them with the same key and claims so local tooling can produce one.

    Parameters:
        subject (Union[str, Any]): The caller identity the token is issued for.
        email (str, optional): Email claim copied into the token.
        expires_delta (timedelta, optional): The expiration time for the access token. Defaults to None.

    Returns:
        str: The encoded access token.
    """
    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {"exp": expire, "iat": now, "sub": str(subject)}
    if email:
        to_encode["email"] = email
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> TokenPayload:
    """
    Verify a bearer token and return its payload.

    Raises:
        jose.JWTError: When the signature or expiry check fails.
        pydantic.ValidationError: When the payload lacks a subject.
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    return TokenPayload(**payload)
