from fastapi import Response

from config import SESSION_COOKIE_NAME, COOKIE_SECURE, ACCESS_TOKEN_EXPIRE_MINUTES


def set_session_cookie(response: Response, token: str):
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path='/',
        httponly=True,
        samesite='lax',
        secure=COOKIE_SECURE,
    )


def clear_session_cookie(response: Response):
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path='/',
        httponly=True,
        samesite='lax',
        secure=COOKIE_SECURE,
    )
