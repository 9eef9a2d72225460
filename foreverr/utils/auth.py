"""
Access token verification

Tokens are HS256 JWTs issued by the hosted auth provider and signed with the
project's JWT secret. `sub` holds the user id.
"""

from typing import Dict

import jwt

from foreverr.config import settings
from foreverr.utils.exceptions import UnauthorizedError
from foreverr.utils.logger import logger


def extract_bearer_token(authorization: str) -> str:
    if not authorization:
        raise UnauthorizedError("Unauthorized")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Unauthorized")
    return token.strip()


def verify_access_token(token: str) -> Dict:
    try:
        claims = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=["HS256"],
            audience=settings.jwt_audience,
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.info(f" Rejected access token: {e}")
        raise UnauthorizedError("Unauthorized")

    return claims
