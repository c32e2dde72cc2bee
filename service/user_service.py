import logging
from typing import Optional, Tuple

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette import status

from db.models import User, Role
from repository.user_repository import UserRepository
from schemas.user import RegisterUser, LoginUser, TokenPayload
from util import encode_jwt, hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, session: Session):
        self.repository = UserRepository(session)

    def register(self, new_user: RegisterUser) -> Tuple[User, str]:
        """
        새 유저를 만듭니다. 회원가입으로 만들어지는 유저는 항상 BUYER입니다.
        """
        if self.repository.exist_by_email(new_user.email):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail='Email already exists')

        try:
            user = self.repository.create(new_user, hash_password(new_user.password), Role.BUYER)
        except IntegrityError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail='Email already exists')

        logger.info('Registered user %s', user.id)
        return user, encode_jwt(user.id, user.user_role)

    def login(self, login_user: LoginUser) -> Tuple[User, str]:
        user = self.repository.get_by_email(login_user.email)

        if not user or not verify_password(login_user.password, user.password):
            logger.info('Failed login attempt for %s', login_user.email)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid credentials')

        return user, encode_jwt(user.id, user.user_role)

    def me(self, current_user: Optional[TokenPayload]) -> Optional[User]:
        """
        세션의 주인을 반환합니다. 세션이 없거나 유효하지 않으면 에러 대신 `None`을 반환합니다.
        """
        if current_user is None:
            return None

        return self.repository.get_by_id(current_user.id)
