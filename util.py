import datetime
import hashlib
import hmac
import math
import secrets

import jwt

from config import JWT_SECRET, JWT_ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from db.models import Role
from schemas.user import TokenPayload

PBKDF2_ITERATIONS = 260000


def encode_jwt(id, role):
    payload = {
        'sub': str(id),
        'role': Role(role).value,
        'exp': datetime.datetime.now(datetime.UTC) + datetime.timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    }
    jwt_token = jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)
    return jwt_token


def decode_jwt(token) -> TokenPayload:
    """
    토큰의 서명과 만료 시간을 검증하고 `(id, role)`을 꺼냅니다.
    subject가 양의 정수가 아니거나 role이 알 수 없는 값이면 `jwt.InvalidTokenError`를 발생시킵니다.
    """
    payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM], options={'require': ['sub', 'exp']})

    try:
        _id = int(payload['sub'])
        role = Role(payload.get('role'))
    except (TypeError, ValueError):
        raise jwt.InvalidTokenError('Malformed token payload')

    if _id <= 0:
        raise jwt.InvalidTokenError('Malformed token payload')

    return TokenPayload(id=_id, role=role, exp=payload['exp'])


def hash_password(password: str) -> str:
    """
    유저의 비밀번호를 암호화하는 함수입니다. `pbkdf2_sha256$반복횟수$salt$hash` 형태로 저장합니다.
    """
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt.encode('utf-8'), PBKDF2_ITERATIONS)

    return f'pbkdf2_sha256${PBKDF2_ITERATIONS}${salt}${digest.hex()}'


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        algorithm, iterations, salt, expected = hashed_password.split('$')
    except ValueError:
        return False

    if algorithm != 'pbkdf2_sha256':
        return False

    digest = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt.encode('utf-8'), int(iterations))
    return hmac.compare_digest(digest.hex(), expected)


def to_number(value):
    """
    쿼리 파라미터 문자열을 숫자로 바꿉니다. 숫자가 아니면 `None`을 반환합니다.
    """
    if value is None or value == '':
        return None

    try:
        number = float(value)
    except ValueError:
        return None

    if not math.isfinite(number):
        return None

    return int(number) if number.is_integer() else number


def clamp(n, minimum, maximum):
    return max(minimum, min(maximum, n))
