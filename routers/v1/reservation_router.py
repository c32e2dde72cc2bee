from typing import Annotated, List

from fastapi import APIRouter, Depends
from fastapi.params import Path
from sqlalchemy.orm import Session
from starlette import status

from auth.auth_cookie import get_current_user, require_buyer
from db.database import get_db
from schemas import reservation, user
from schemas.base import OkOutput, MAX_ID
from service.reservation_service import ReservationService

reservation_router = APIRouter(
    prefix='/reservations',
    tags=['예약']
)


@reservation_router.post('',
                         status_code=status.HTTP_201_CREATED,
                         response_model=reservation.ReservationWithProperty,
                         name='숙소 예약',
                         responses={
                             404: {
                                 "description": "`propertyId`값을 가진 숙소가 없는 경우",
                                 "content": {
                                     "application/json": {
                                         "example": {"message": "Property not found"}
                                     }
                                 }
                             },
                             400: {
                                 "description": "시작 일시가 종료 일시보다 늦거나 같은 경우",
                                 "content": {
                                     "application/json": {
                                         "example": {"message": "Start date must be before end date"}
                                     }
                                 }
                             },
                             409: {
                                 "description": "같은 숙소에 시작/종료 일시가 같은 예약이 이미 있는 경우",
                                 "content": {
                                     "application/json": {
                                         "example": {"message": "A reservation for the same period already exists"}
                                     }
                                 }
                             },
                             403: {
                                 "description": "현재 유저가 구매자가 아닌 경우",
                                 "content": {
                                     "application/json": {
                                         "example": {"message": "Forbidden"}
                                     }
                                 }
                             }
                         })
def make_reservation(current_user: Annotated[user.TokenPayload, Depends(require_buyer)],
                     make_reservation_request: reservation.MakeReservationInput,
                     db: Session = Depends(get_db)):
    """
    숙소를 예약합니다. 총 가격은 1박 가격 x 박 수이며, 박 수는 기간을 일 단위로 올림한 값입니다.
    구매자 전용 API 입니다.
    """
    reservation_service = ReservationService(db)
    return reservation_service.make_reservation(current_user.id, make_reservation_request)


@reservation_router.get('/my',
                        name='내 예약 조회',
                        response_model=List[reservation.ReservationWithProperty])
def get_my_reservations(current_user: Annotated[user.TokenPayload, Depends(require_buyer)],
                        db: Session = Depends(get_db)):
    reservation_service = ReservationService(db)
    return reservation_service.get_my_reservations(current_user.id)


@reservation_router.get('/{reservation_id}',
                        name='예약 조회',
                        response_model=reservation.ReservationWithProperty,
                        responses={
                            403: {
                                "description": "다른 유저의 예약이거나 다른 판매자의 숙소에 대한 예약인 경우",
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
                        })
def get_reservation(current_user: Annotated[user.TokenPayload, Depends(get_current_user)],
                    db: Session = Depends(get_db),
                    reservation_id: int = Path(..., gt=0, le=MAX_ID, description='조회할 예약의 `id`')):
    reservation_service = ReservationService(db)
    return reservation_service.get_reservation(current_user, reservation_id)


@reservation_router.post('/{reservation_id}/cancel',
                         name='예약 취소',
                         response_model=OkOutput,
                         responses={
                             400: {
                                 "description": "예약이 이미 확정된 경우",
                                 "content": {
                                     "application/json": {
                                         "example": {"message": "A confirmed reservation cannot be cancelled"}
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
                         })
def cancel_reservation(current_user: Annotated[user.TokenPayload, Depends(require_buyer)],
                       db: Session = Depends(get_db),
                       reservation_id: int = Path(..., gt=0, le=MAX_ID, description='취소할 예약의 `id`')):
    """
    자신의 예약을 취소합니다. 확정된 예약은 취소할 수 없으며, 이미 취소된 예약을 다시 취소하면 그대로 성공합니다.
    구매자 전용 API 입니다.
    """
    reservation_service = ReservationService(db)
    return reservation_service.cancel_reservation(current_user.id, reservation_id)
