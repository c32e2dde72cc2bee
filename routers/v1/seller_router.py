from typing import Annotated, List

from fastapi import APIRouter, Depends
from fastapi.params import Path
from sqlalchemy.orm import Session

from auth.auth_cookie import require_seller
from db.database import get_db
from schemas import reservation, user
from schemas.base import OkOutput, MAX_ID
from service.reservation_service import ReservationService

seller_router = APIRouter(
    prefix='/seller',
    tags=['판매자']
)

SELLER_RESERVATION_RESPONSES = {
    403: {
        "description": "다른 판매자의 숙소에 대한 예약인 경우",
        "content": {
            "application/json": {
                "example": {"message": "Forbidden"}
            }
        }
    },
    404: {
        "description": "`reservation_id`값을 가진 예약이 없는 경우",
        "content": {
            "application/json": {
                "example": {"message": "Reservation not found"}
            }
        }
    }
}


@seller_router.get('/reservations', name='내 숙소의 예약 조회', response_model=List[reservation.SellerReservation])
def get_seller_reservations(current_user: Annotated[user.TokenPayload, Depends(require_seller)],
                            db: Session = Depends(get_db)):
    """
    자신의 숙소에 대한 모든 예약을 최신 시작 일시 순으로 반환합니다. 구매자 정보가 포함됩니다.
    """
    reservation_service = ReservationService(db)
    return reservation_service.get_seller_reservations(current_user.id)


@seller_router.patch('/reservations/{reservation_id}/status', name='예약 상태 변경',
                     response_model=reservation.ReservationBase, responses=SELLER_RESERVATION_RESPONSES)
def update_reservation_status(current_user: Annotated[user.TokenPayload, Depends(require_seller)],
                              update_status_request: reservation.UpdateReservationStatusInput,
                              db: Session = Depends(get_db),
                              reservation_id: int = Path(..., gt=0, le=MAX_ID, description='상태를 변경할 예약의 `id`')):
    """
    예약 상태를 `PENDING`, `CONFIRMED`, `CANCELLED` 중 하나로 변경합니다. 상태 전이에 제한은 없습니다.
    """
    reservation_service = ReservationService(db)
    return reservation_service.update_status_as_seller(current_user.id, reservation_id, update_status_request.status)


@seller_router.delete('/reservations/{reservation_id}', name='예약 삭제', response_model=OkOutput,
                      responses=SELLER_RESERVATION_RESPONSES)
def delete_reservation(current_user: Annotated[user.TokenPayload, Depends(require_seller)],
                       db: Session = Depends(get_db),
                       reservation_id: int = Path(..., gt=0, le=MAX_ID, description='삭제할 예약의 `id`')):
    reservation_service = ReservationService(db)
    return reservation_service.delete_as_seller(current_user.id, reservation_id)
