import datetime

import pytest

from db.models import Reservation, ReservationStatus, Role
from tests.conftest import BUYER_ID, OTHER_BUYER_ID, SELLER_ID, OTHER_SELLER_ID


@pytest.fixture()
def seller_reservations(test_db_with_properties, insert_reservation):
    return [
        insert_reservation(BUYER_ID, 1, datetime.datetime(2026, 1, 10), datetime.datetime(2026, 1, 13), '300.00'),
        insert_reservation(OTHER_BUYER_ID, 2, datetime.datetime(2026, 2, 1), datetime.datetime(2026, 2, 3),
                           '280.00'),
        insert_reservation(BUYER_ID, 3, datetime.datetime(2026, 3, 1), datetime.datetime(2026, 3, 2), '40.00'),
    ]


class TestSellerRoute:
    class TestGetSellerReservations:
        def test_get_seller_reservations_should_return_reservations_on_own_properties(self, test_client,
                                                                                      seller_reservations,
                                                                                      login_as):
            login_as(SELLER_ID, Role.SELLER)

            response = test_client.get("/api/v1/seller/reservations")

            assert response.status_code == 200, response.text
            data = response.json()
            assert [item['id'] for item in data] == [seller_reservations[1], seller_reservations[0]]
            assert data[0]['buyer'] == {'id': OTHER_BUYER_ID, 'name': 'Buyer Two', 'email': 'buyer2@stayhub.com'}
            assert data[0]['property']['name'] == 'Garden House'

        def test_get_seller_reservations_should_return_403_for_buyer(self, test_client, seller_reservations,
                                                                     login_as):
            login_as(BUYER_ID, Role.BUYER)

            response = test_client.get("/api/v1/seller/reservations")

            assert response.status_code == 403

    class TestUpdateReservationStatus:
        @pytest.mark.parametrize("initial, new_status", [
            (ReservationStatus.PENDING, 'CONFIRMED'),
            (ReservationStatus.CONFIRMED, 'PENDING'),
            (ReservationStatus.CANCELLED, 'CONFIRMED'),
        ])
        def test_update_status_should_allow_any_transition(self, initial, new_status, test_client,
                                                           test_db_with_properties, insert_reservation, login_as,
                                                           session):
            reservation_id = insert_reservation(BUYER_ID, 1, datetime.datetime(2026, 1, 10),
                                                datetime.datetime(2026, 1, 13), '300.00', initial)
            login_as(SELLER_ID, Role.SELLER)

            response = test_client.patch(f"/api/v1/seller/reservations/{reservation_id}/status",
                                         json={"status": new_status})

            assert response.status_code == 200, response.text
            assert response.json()['status'] == new_status
            assert session.get(Reservation, reservation_id).status == ReservationStatus(new_status)

        @pytest.mark.parametrize("body", [{"status": "DONE"}, {}])
        def test_update_status_should_return_400_for_invalid_status(self, body, test_client, seller_reservations,
                                                                    login_as):
            login_as(SELLER_ID, Role.SELLER)

            response = test_client.patch(f"/api/v1/seller/reservations/{seller_reservations[0]}/status", json=body)

            assert response.status_code == 400

        def test_update_status_should_return_403_for_other_sellers_property(self, test_client, seller_reservations,
                                                                            login_as, session):
            login_as(OTHER_SELLER_ID, Role.SELLER)

            response = test_client.patch(f"/api/v1/seller/reservations/{seller_reservations[0]}/status",
                                         json={"status": "CONFIRMED"})

            assert response.status_code == 403
            assert session.get(Reservation, seller_reservations[0]).status == ReservationStatus.PENDING

        def test_update_status_should_return_404_when_not_found(self, test_client, seller_reservations, login_as):
            login_as(SELLER_ID, Role.SELLER)

            response = test_client.patch("/api/v1/seller/reservations/100/status", json={"status": "CONFIRMED"})

            assert response.status_code == 404

    class TestDeleteReservation:
        def test_delete_reservation_success(self, test_client, seller_reservations, login_as, session):
            login_as(SELLER_ID, Role.SELLER)

            response = test_client.delete(f"/api/v1/seller/reservations/{seller_reservations[0]}")

            assert response.status_code == 200, response.text
            assert response.json() == {"ok": True}
            assert session.get(Reservation, seller_reservations[0]) is None
            assert session.query(Reservation).count() == 2

        def test_delete_reservation_should_return_403_for_other_sellers_property(self, test_client,
                                                                                 seller_reservations, login_as,
                                                                                 session):
            login_as(SELLER_ID, Role.SELLER)

            response = test_client.delete(f"/api/v1/seller/reservations/{seller_reservations[2]}")

            assert response.status_code == 403
            assert session.get(Reservation, seller_reservations[2]) is not None

        def test_delete_reservation_should_return_404_when_not_found(self, test_client, seller_reservations,
                                                                     login_as):
            login_as(SELLER_ID, Role.SELLER)

            response = test_client.delete("/api/v1/seller/reservations/100")

            assert response.status_code == 404
