import datetime

import jwt
import pytest

from config import JWT_SECRET
from db.models import Role
from util import encode_jwt, decode_jwt, hash_password, verify_password, to_number, clamp


def _token(payload):
    return jwt.encode(payload, JWT_SECRET, algorithm='HS256')


def _expiry(minutes=30):
    return datetime.datetime.now(datetime.UTC) + datetime.timedelta(minutes=minutes)


class TestJWT:
    def test_encode_jwt(self):
        token = encode_jwt(1, Role.SELLER)

        payload = decode_jwt(token)
        assert payload.id == 1
        assert payload.role == Role.SELLER

    def test_token_expires_after_30_minutes(self):
        token = encode_jwt(1, Role.BUYER)

        raw = jwt.decode(token, JWT_SECRET, algorithms=['HS256'])
        remaining = raw['exp'] - datetime.datetime.now(datetime.UTC).timestamp()
        assert 29 * 60 < remaining <= 30 * 60

    def test_decode_jwt_should_reject_expired_token(self):
        token = _token({'sub': '1', 'role': 'BUYER', 'exp': _expiry(-1)})

        with pytest.raises(jwt.InvalidTokenError):
            decode_jwt(token)

    @pytest.mark.parametrize('sub', ['abc', '0', '-3', '1.5'])
    def test_decode_jwt_should_reject_invalid_subject(self, sub):
        token = _token({'sub': sub, 'role': 'BUYER', 'exp': _expiry()})

        with pytest.raises(jwt.InvalidTokenError):
            decode_jwt(token)

    def test_decode_jwt_should_reject_unknown_role(self):
        token = _token({'sub': '1', 'role': 'SUPERUSER', 'exp': _expiry()})

        with pytest.raises(jwt.InvalidTokenError):
            decode_jwt(token)

    def test_decode_jwt_should_reject_wrong_signature(self):
        token = jwt.encode({'sub': '1', 'role': 'ADMIN', 'exp': _expiry()}, 'another-secret', algorithm='HS256')

        with pytest.raises(jwt.InvalidTokenError):
            decode_jwt(token)


class TestPassword:
    def test_verify_password(self):
        hashed = hash_password('Password123!')

        assert hashed != 'Password123!'
        assert verify_password('Password123!', hashed)
        assert not verify_password('password123!', hashed)

    def test_hash_password_uses_random_salt(self):
        assert hash_password('same') != hash_password('same')

    def test_verify_password_should_reject_unknown_format(self):
        assert not verify_password('Password123!', '71b3b26aaa319e0cdf6fdb8429c112b0')


class TestQueryHelpers:
    @pytest.mark.parametrize('value, expected', [
        ('10', 10),
        ('10.5', 10.5),
        ('abc', None),
        ('', None),
        (None, None),
        ('inf', None),
    ])
    def test_to_number(self, value, expected):
        assert to_number(value) == expected

    def test_clamp(self):
        assert clamp(0, 1, 50) == 1
        assert clamp(100, 1, 50) == 50
        assert clamp(20, 1, 50) == 20
