from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from starlette import status

from auth.auth_cookie import get_optional_user
from auth.session import set_session_cookie, clear_session_cookie
from db.database import get_db
from schemas import user
from schemas.base import OkOutput
from service.user_service import UserService

auth_router = APIRouter(
    prefix='/auth',
    tags=['인증']
)


@auth_router.post('/register', name='회원가입', status_code=status.HTTP_201_CREATED, response_model=user.AuthOutput,
                  responses={
                      409: {
                          "description": "같은 `email`을 가진 유저가 이미 존재하는 경우",
                          "content": {
                              "application/json": {
                                  "example": {"message": "Email already exists"}
                              }
                          }
                      },
                      400: {
                          "description": "입력값이 유효하지 않은 경우",
                          "content": {
                              "application/json": {
                                  "example": {"message": "String should have at least 6 characters"}
                              }
                          }
                      }
                  })
def register(new_user: user.RegisterUser, response: Response, db: Session = Depends(get_db)):
    """
    새 계정을 만들고 바로 로그인합니다. 회원가입으로 만들어진 계정의 role은 항상 `BUYER`입니다.
    세션 쿠키의 유효기간은 30분입니다.
    """
    user_service = UserService(db)
    created_user, token = user_service.register(new_user)
    set_session_cookie(response, token)
    return user.AuthOutput(user=user.UserBase.model_validate(created_user))


@auth_router.post('/login', name='로그인', response_model=user.AuthOutput, responses={
    401: {
        "description": "잘못된 로그인 정보",
        "content": {
            "application/json": {
                "example": {"message": "Invalid credentials"}
            }
        }
    }
})
def login(login_user: user.LoginUser, response: Response, db: Session = Depends(get_db)):
    """
    입력한 `email`과 `password`로 로그인합니다.
    로그인에 성공하면 JWT 토큰을 HTTP-only 세션 쿠키로 설정합니다. 토큰의 유효기간은 생성 시점부터 30분입니다.
    """
    user_service = UserService(db)
    logged_in_user, token = user_service.login(login_user)
    set_session_cookie(response, token)
    return user.AuthOutput(user=user.UserBase.model_validate(logged_in_user))


@auth_router.post('/logout', name='로그아웃', response_model=OkOutput)
def logout(response: Response):
    clear_session_cookie(response)
    return OkOutput(ok=True)


@auth_router.get('/me', name='내 정보 조회', response_model=user.MeOutput)
def me(current_user: Annotated[Optional[user.TokenPayload], Depends(get_optional_user)],
       db: Session = Depends(get_db)):
    """
    현재 세션의 유저 정보를 반환합니다. 로그인하지 않았거나 세션이 만료된 경우 `user`는 `null`입니다.
    """
    user_service = UserService(db)
    current = user_service.me(current_user)
    return user.MeOutput(user=user.UserBase.model_validate(current) if current else None)
