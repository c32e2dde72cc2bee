"""
애플리케이션 설정값입니다. 환경 변수와 `.env` 파일에서 한 번만 읽어옵니다.
"""

import os

from dotenv import load_dotenv

load_dotenv()

ENVIRONMENT = os.environ.get('environment', 'dev')

DATABASE_URL = os.environ.get('DATABASE_URL', 'sqlite:///./stayhub.db')

JWT_SECRET = os.environ.get('JWT_SECRET', 'dev_secret_change_me')
JWT_ALGORITHM = 'HS256'
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get('ACCESS_TOKEN_EXPIRE_MINUTES', '30'))

SESSION_COOKIE_NAME = 'stayhub_session'
COOKIE_SECURE = os.environ.get('COOKIE_SECURE', 'false').lower() in ('1', 'true', 'yes')

CORS_ORIGINS = [origin.strip() for origin in os.environ.get('CORS_ORIGINS', 'http://localhost:3000').split(',')
                if origin.strip()]

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
