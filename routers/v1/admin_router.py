from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from auth.auth_cookie import require_admin
from db.database import get_db
from schemas import admin, user
from service.admin_service import AdminService

admin_router = APIRouter(
    prefix='/admin',
    tags=['어드민']
)


@admin_router.get('/metrics', name='예약 통계', response_model=admin.AdminMetrics)
def get_metrics(current_user: Annotated[user.TokenPayload, Depends(require_admin)],
                db: Session = Depends(get_db)):
    """
    전체 예약 수, 판매자별 예약 수, 월별 매출을 반환합니다.
    어드민 전용 API 입니다.
    """
    admin_service = AdminService(db)
    return admin_service.get_metrics()


@admin_router.get('/reports/reservations', name='기간별 예약 리포트', response_model=admin.ReservationsReport,
                  responses={
                      400: {
                          "description": "`from`/`to`가 없거나 유효하지 않은 경우, `from`이 `to`보다 늦은 경우",
                          "content": {
                              "application/json": {
                                  "example": {"message": "\"from\" must not be after \"to\""}
                              }
                          }
                      }
                  })
def get_reservations_report(current_user: Annotated[user.TokenPayload, Depends(require_admin)],
                            db: Session = Depends(get_db),
                            date_from: Annotated[Optional[str], Query(alias='from', description='시작 일시 (ISO 8601)')] = None,
                            date_to: Annotated[Optional[str], Query(alias='to', description='종료 일시 (ISO 8601)')] = None):
    """
    시작 일시가 `from` 이후이고 종료 일시가 `to` 이전인 예약을 시작 일시 순으로 반환합니다.
    """
    admin_service = AdminService(db)
    return admin_service.get_reservations_report(date_from, date_to)


@admin_router.get('/sellers', name='판매자 목록', response_model=admin.SellersOutput)
def get_sellers(current_user: Annotated[user.TokenPayload, Depends(require_admin)],
                db: Session = Depends(get_db)):
    admin_service = AdminService(db)
    return admin_service.get_sellers()
