from typing import Optional

from fastapi import Depends, Security
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from pydantic import ValidationError

from quizapp.auth_util import decode_access_token
from quizapp.log import get_logger
from quizapp.schema.auth_schema import TokenPayload

log = get_logger(__name__)

# tokens come from the external identity provider
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def get_token(token: Optional[str] = Security(oauth2_scheme)) -> Optional[TokenPayload]:
    """
    Decode the bearer token if one was sent.

    A missing or unverifiable token yields None; routes that need a caller
    decide what to do about it.
    """
    if not token:
        return None
    try:
        return decode_access_token(token)
    except (JWTError, ValidationError) as e:
        log.debug("Rejected bearer token: %s", e)
        return None


def get_optional_user_id(token: Optional[TokenPayload] = Depends(get_token)) -> Optional[str]:
    return token.sub if token else None
