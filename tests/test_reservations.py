from datetime import datetime, timezone

import pytest

from app.core import parse_date_time
from app.errors import SLOT_TAKEN, INVALID_DATETIME, INVALID_ID
from app.repository import Store

UTC = timezone.utc


@pytest.fixture()
def booking(make_user, time_block):
    user = make_user()
    return {"userId": user.id, "timeBlockId": time_block.id, "dateTime": "2030-01-01T10:00:00Z"}


def test_create_returns_joined_reservation(client, booking):
    response = client.post("/reservations", json=booking)
    assert response.status_code == 201
    body = response.json()
    assert body["userId"] == booking["userId"]
    assert body["timeBlockId"] == booking["timeBlockId"]
    assert parse_date_time(body["dateTime"]) == datetime(2030, 1, 1, 10, 0, tzinfo=UTC)
    # the offset survives the round trip
    assert body["dateTime"].endswith(("Z", "+00:00"))
    assert body["user"]["id"] == booking["userId"]
    assert "passwordHash" not in body["user"]
    assert parse_date_time(body["timeBlock"]["startTime"]) == datetime(2030, 1, 1, 9, 0, tzinfo=UTC)


def test_ids_may_be_strings(client, booking):
    booking = dict(booking, userId=str(booking["userId"]), timeBlockId=str(booking["timeBlockId"]))
    assert client.post("/reservations", json=booking).status_code == 201


def test_same_slot_twice_is_taken(client, booking):
    assert client.post("/reservations", json=booking).status_code == 201

    response = client.post("/reservations", json=booking)
    assert response.status_code == 400
    assert response.json() == {"error": SLOT_TAKEN}


def test_same_instant_in_another_offset_is_taken(client, booking):
    client.post("/reservations", json=booking)
    response = client.post("/reservations", json=dict(booking, dateTime="2030-01-01T12:00:00+02:00"))
    assert response.status_code == 400


def test_same_block_other_time_is_fine(client, booking):
    assert client.post("/reservations", json=booking).status_code == 201
    response = client.post("/reservations", json=dict(booking, dateTime="2030-01-01T10:15:00Z"))
    assert response.status_code == 201


@pytest.mark.parametrize("field", ["userId", "timeBlockId", "dateTime"])
def test_create_requires_fields(client, booking, field):
    del booking[field]
    response = client.post("/reservations", json=booking)
    assert response.status_code == 400
    assert "Missing required fields" in response.json()["error"]


def test_create_rejects_bad_date(client, booking):
    response = client.post("/reservations", json=dict(booking, dateTime="not-a-date"))
    assert response.status_code == 400
    assert response.json() == {"error": INVALID_DATETIME}


def test_create_rejects_unknown_references(client, booking):
    response = client.post("/reservations", json=dict(booking, userId=9999))
    assert response.status_code == 400
    response = client.post("/reservations", json=dict(booking, timeBlockId=9999))
    assert response.status_code == 400


def test_read(client, booking):
    created = client.post("/reservations", json=booking).json()

    response = client.get(f"/reservations/{created['id']}")
    assert response.status_code == 200
    assert response.json() == created


def test_read_bad_id_and_missing(client):
    response = client.get("/reservations/abc")
    assert response.status_code == 400
    assert response.json() == {"error": INVALID_ID}

    assert client.get("/reservations/999").status_code == 404


def test_update_moves_reservation(client, booking, store):
    created = client.post("/reservations", json=booking).json()
    other_block = store.create_time_block(datetime(2030, 1, 2, 9, 0), datetime(2030, 1, 2, 17, 0))

    response = client.put(
        f"/reservations/{created['id']}",
        json={"dateTime": "2030-01-02T11:00:00Z", "timeBlockId": other_block.id},
    )
    assert response.status_code == 200
    body = response.json()
    assert parse_date_time(body["dateTime"]) == datetime(2030, 1, 2, 11, 0, tzinfo=UTC)
    assert body["timeBlockId"] == other_block.id
    assert body["userId"] == created["userId"]


def test_update_to_slot_of_other_reservation_fails(client, booking):
    client.post("/reservations", json=booking)
    second = client.post("/reservations", json=dict(booking, dateTime="2030-01-01T11:00:00Z")).json()

    response = client.put(f"/reservations/{second['id']}", json={"dateTime": booking["dateTime"]})
    assert response.status_code == 400
    assert response.json() == {"error": SLOT_TAKEN}


def test_update_to_own_slot_succeeds(client, booking):
    created = client.post("/reservations", json=booking).json()

    response = client.put(
        f"/reservations/{created['id']}",
        json={"dateTime": booking["dateTime"], "timeBlockId": booking["timeBlockId"]},
    )
    assert response.status_code == 200
    assert response.json()["dateTime"] == created["dateTime"]


def test_update_only_time_block_checks_merged_slot(client, booking, store):
    first = client.post("/reservations", json=booking).json()
    other_block = store.create_time_block(datetime(2030, 1, 2, 9, 0), datetime(2030, 1, 2, 17, 0))
    second = client.post("/reservations", json=dict(booking, timeBlockId=other_block.id)).json()

    # moving the second one into the first one's block lands on the same date-time
    response = client.put(f"/reservations/{second['id']}", json={"timeBlockId": first["timeBlockId"]})
    assert response.status_code == 400


def test_update_errors(client, booking):
    created = client.post("/reservations", json=booking).json()

    assert client.put("/reservations/999", json={"dateTime": "2030-01-01T12:00:00Z"}).status_code == 404
    assert client.put("/reservations/xyz", json={}).status_code == 400

    response = client.put(f"/reservations/{created['id']}", json={"dateTime": "nope"})
    assert response.status_code == 400
    assert "update" in response.json()["error"]


def test_delete(client, booking):
    created = client.post("/reservations", json=booking).json()

    response = client.delete(f"/reservations/{created['id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["deletedReservation"]["id"] == created["id"]
    assert "deleted successfully" in body["message"]

    assert client.get(f"/reservations/{created['id']}").status_code == 404
    assert client.delete(f"/reservations/{created['id']}").status_code == 404
    assert client.delete("/reservations/abc").status_code == 400


def test_freed_slot_can_be_booked_again(client, booking):
    created = client.post("/reservations", json=booking).json()
    client.delete(f"/reservations/{created['id']}")
    assert client.post("/reservations", json=booking).status_code == 201


def test_unique_constraint_backs_the_check(store, make_user, time_block):
    from sqlalchemy.exc import IntegrityError

    user = make_user()
    slot = datetime(2030, 1, 1, 10, 0)
    store.create_reservation(user.id, time_block.id, slot)

    # what a request that raced past the conflict check would hit
    with pytest.raises(IntegrityError):
        store.create_reservation(user.id, time_block.id, slot)


@pytest.mark.parametrize("raw_id", ["99999999999999999999", "1_0", "+-1"])
def test_ids_outside_plain_64_bit_integers_are_rejected(client, raw_id):
    response = client.get(f"/reservations/{raw_id}")
    assert response.status_code == 400
    assert response.json() == {"error": INVALID_ID}


def test_huge_user_id_in_body_is_rejected(client, booking):
    response = client.post("/reservations", json=dict(booking, userId=10 ** 20))
    assert response.status_code == 400
    assert response.json() == {"error": INVALID_ID}


@pytest.fixture()
def no_conflict_check(monkeypatch):
    # let requests through to the database as if they had raced each other
    monkeypatch.setattr(Store, "find_reservation_conflict", lambda self, *args, **kwargs: None)


def test_create_race_is_reported_as_slot_taken(client, booking, no_conflict_check):
    assert client.post("/reservations", json=booking).status_code == 201

    response = client.post("/reservations", json=booking)
    assert response.status_code == 400
    assert response.json() == {"error": SLOT_TAKEN}


def test_update_race_is_reported_as_slot_taken(client, booking, no_conflict_check):
    client.post("/reservations", json=booking)
    second = client.post("/reservations", json=dict(booking, dateTime="2030-01-01T11:00:00Z")).json()

    response = client.put(f"/reservations/{second['id']}", json={"dateTime": booking["dateTime"]})
    assert response.status_code == 400
    assert response.json() == {"error": SLOT_TAKEN}

    # the losing request left the session usable
    assert client.get(f"/reservations/{second['id']}").status_code == 200
