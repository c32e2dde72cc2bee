import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from config import CORS_ORIGINS, LOG_LEVEL
from db.database import engine, Base
from db.db_uploader import init_data
from routers import api

logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    Base.metadata.create_all(bind=engine)
    init_data()
    yield


description = """
단기 숙소 예약 마켓플레이스 API
구매자는 숙소를 검색하고 예약하며, 판매자는 숙소와 예약 상태를 관리하고, 어드민은 예약 통계를 조회합니다.

아래와 같은 ENDPOINT를 지원합니다
## 인증

* **회원가입**
* **로그인 / 로그아웃**
* **내 정보 조회**

## 숙소
* **숙소 검색**
* **숙소 상세 조회**
* **숙소 등록 / 수정 / 삭제**

## 예약
* **숙소 예약**
* **내 예약 조회**
* **예약 취소**
* **내 숙소의 예약 조회 / 상태 변경 / 삭제**

## 어드민
* **예약 통계**
* **기간별 예약 리포트**
* **판매자 목록**
"""
tags_metadata = [
    {
        'name': '인증',
        'description': '회원가입과 세션 쿠키 기반 **로그인** API'
    },
    {
        'name': '숙소',
        'description': '숙소 검색과 판매자의 숙소 관리 API'
    },
    {
        'name': '예약',
        'description': '구매자의 예약 API'
    },
    {
        'name': '판매자',
        'description': '판매자의 예약 관리 API'
    },
    {
        'name': '어드민',
        'description': '어드민 통계 API'
    }
]

app = FastAPI(
    title='StayHub API',
    description=description,
    summary='단기 숙소 예약 처리 시스템',
    openapi_tags=tags_metadata,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['GET', 'POST', 'PATCH', 'PUT', 'DELETE', 'OPTIONS'],
    allow_headers=['Content-Type', 'Authorization'],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={'message': str(exc.detail)},
                        headers=getattr(exc, 'headers', None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get('msg', 'Invalid input') if errors else 'Invalid input'
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST,
                        content={'message': message.removeprefix('Value error, ')})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception('Unhandled error on %s %s', request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={'message': 'Internal server error'})


app.include_router(api.router)


if __name__ == '__main__':
    uvicorn.run('main:app')
