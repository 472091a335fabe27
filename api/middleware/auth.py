"""
Bearer-token authentication.

Verifies the session token on each request and exposes the caller as an
AuthenticatedUser.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_auth_service
from modules.auth.exceptions import AuthenticationFailedError, MissingTokenError
from modules.auth.interfaces import IAuthService
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser

logger = logging.getLogger(__name__)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user. Every token
    failure (bad signature, wrong type, expiry) is reported to the client
    as the same generic error.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()

    try:
        return await auth.authenticate(credentials.credentials)
    except AuthenticationError as e:
        logger.info(f"Rejected bearer token: {e.code}")
        raise AuthenticationFailedError() from e

