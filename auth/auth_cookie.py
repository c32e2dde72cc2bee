import logging
from typing import List, Optional

import jwt
from fastapi import Depends, HTTPException, Request
from fastapi.security import APIKeyCookie
from starlette import status

from config import SESSION_COOKIE_NAME
from db.models import Role
from schemas.user import TokenPayload
from util import decode_jwt

logger = logging.getLogger(__name__)


class JWTCookie(APIKeyCookie):
    """
    세션 쿠키에 담긴 JWT 토큰을 검증하고 토큰의 payload를 반환합니다.
    `auto_error=False`이면 토큰이 없거나 유효하지 않을 때 401 대신 `None`을 반환합니다.
    """

    def __init__(self, auto_error: bool = True):
        super(JWTCookie, self).__init__(name=SESSION_COOKIE_NAME, scheme_name='Session cookie', auto_error=False)
        self.verify_error = auto_error

    async def __call__(self, request: Request) -> Optional[TokenPayload]:
        token = await super(JWTCookie, self).__call__(request)

        if not token:
            if self.verify_error:
                raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Not authenticated')
            return None

        try:
            return decode_jwt(token)
        except jwt.InvalidTokenError as e:
            logger.info('Rejected session token: %s', e)
            if self.verify_error:
                raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Not authenticated')
            return None


get_current_user = JWTCookie()
get_optional_user = JWTCookie(auto_error=False)


class RoleChecker:
    """
    현재 유저의 role이 허용된 role 목록에 없으면 403을 반환합니다.
    """

    def __init__(self, allowed_roles: List[Role]):
        self.allowed_roles = allowed_roles

    def __call__(self, current_user: TokenPayload = Depends(get_current_user)) -> TokenPayload:
        if current_user.role not in self.allowed_roles:
            logger.warning('User %s with role %s denied, requires %s', current_user.id, current_user.role.value,
                           [role.value for role in self.allowed_roles])
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Forbidden')

        return current_user


require_buyer = RoleChecker([Role.BUYER])
require_seller = RoleChecker([Role.SELLER])
require_admin = RoleChecker([Role.ADMIN])
