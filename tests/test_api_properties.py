# Import testing tools
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from hotel_booking import models


# --- Catalog management ---

def test_add_property_and_room(client: TestClient, staff_headers, db_session: Session):
    response = client.post(
        "/add_property",
        json={"name": "Seaside Hotel", "address": "1 Beach Rd",
              "description": "By the sea", "contact_number": "+62111"},
        headers=staff_headers,
    )
    assert response.status_code == 201
    assert response.json()["message"] == "Property added successfully"
    property_id = response.json()["id"]

    response = client.post(
        "/add_room",
        json={"property_id": property_id, "room_name": "101", "room_type": "Deluxe",
              "price_per_night": 120.0, "status": "available"},
        headers=staff_headers,
    )
    assert response.status_code == 201
    assert response.json()["message"] == "Room added successfully"

    room = db_session.query(models.Room).filter(models.Room.id == response.json()["id"]).one()
    assert room.room_name == "101"
    assert room.property_id == property_id
    assert room.status == models.RoomStatus.AVAILABLE


def test_admin_may_manage_catalog(client: TestClient, headers_for):
    admin_headers = headers_for(models.UserRole.ADMIN)
    response = client.post("/add_property", json={"name": "Hill Inn", "address": "2 Hill St"},
                           headers=admin_headers)
    assert response.status_code == 201


def test_add_room_for_missing_property(client: TestClient, staff_headers):
    response = client.post(
        "/add_room",
        json={"property_id": 999, "room_name": "1", "room_type": "Single", "price_per_night": 50},
        headers=staff_headers,
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "Property not found"


def test_add_room_rejects_unknown_status(client: TestClient, staff_headers, make_room):
    room = make_room(price=80)
    response = client.post(
        "/add_room",
        json={"property_id": room.property_id, "room_name": "2", "room_type": "Single",
              "price_per_night": 50, "status": "haunted"},
        headers=staff_headers,
    )
    assert response.status_code == 400


def test_update_room_status(client: TestClient, staff_headers, make_room, db_session: Session):
    room = make_room(price=80)

    response = client.put("/update_room_status",
                          json={"room_id": room.id, "status": "under_maintenance"},
                          headers=staff_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Room status updated successfully"}
    db_session.refresh(room)
    assert room.status == models.RoomStatus.UNDER_MAINTENANCE


def test_update_status_of_missing_room(client: TestClient, staff_headers):
    response = client.put("/update_room_status", json={"room_id": 42, "status": "booked"},
                          headers=staff_headers)
    assert response.status_code == 404


def test_update_room_status_requires_put(client: TestClient, staff_headers):
    response = client.post("/update_room_status", json={"room_id": 1, "status": "booked"},
                           headers=staff_headers)
    assert response.status_code == 405


def test_customer_cannot_update_room_status(client: TestClient, customer_headers, make_room):
    room = make_room(price=80)
    response = client.put("/update_room_status", json={"room_id": room.id, "status": "booked"},
                          headers=customer_headers)
    assert response.status_code == 403


# --- Search ---

def test_search_filters_by_name_type_and_price(client: TestClient, customer_headers, make_room):
    seaside = make_room(price=100, room_type="Deluxe", property_name="Seaside Hotel", room_name="101")
    make_room(price=300, room_type="Deluxe Suite", property=seaside.property, room_name="102")
    make_room(price=90, room_type="Deluxe", property_name="Mountain Lodge", room_name="A1")

    response = client.post(
        "/search_rooms",
        json={"property_name": "seaside", "room_type": "deluxe", "min_price": 100, "max_price": 200},
        headers=customer_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["id"] == seaside.id
    assert data[0]["property_name"] == "Seaside Hotel"
    assert data[0]["price_per_night"] == 100
    assert data[0]["status"] == "available"


def test_search_empty_filters_match_everything(client: TestClient, customer_headers, make_room):
    first = make_room(price=100, property_name="Seaside Hotel")
    second = make_room(price=50, property_name="Mountain Lodge")

    response = client.post("/search_rooms", json={}, headers=customer_headers)

    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == [first.id, second.id]


def test_search_no_match_returns_message(client: TestClient, customer_headers, make_room):
    make_room(price=100)

    response = client.post("/search_rooms", json={"room_type": "Penthouse"}, headers=customer_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "No rooms found"}


def test_search_min_above_max_is_rejected_before_query(client: TestClient, customer_headers, mocker):
    search = mocker.patch("hotel_booking.routers.property_router.crud.search_rooms")

    response = client.post("/search_rooms", json={"min_price": 200, "max_price": 100},
                           headers=customer_headers)

    assert response.status_code == 400
    search.assert_not_called()


def test_staff_cannot_search(client: TestClient, staff_headers):
    response = client.post("/search_rooms", json={}, headers=staff_headers)
    assert response.status_code == 403


def test_search_treats_percent_and_underscore_literally(client: TestClient, customer_headers, make_room):
    make_room(price=100, room_type="Deluxe", property_name="Seaside Hotel")

    for body in ({"property_name": "e_s"}, {"room_type": "%"}):
        response = client.post("/search_rooms", json=body, headers=customer_headers)
        assert response.status_code == 200
        assert response.json() == {"message": "No rooms found"}, body
