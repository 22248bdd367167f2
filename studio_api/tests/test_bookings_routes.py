from datetime import date

from conftest import auth_headers, make_studio


def book(client, user, studio_id, start, end=None):
    body = {"itemId": studio_id, "date": start}
    if end is not None:
        body["endDate"] = end
    return client.post("/api/bookings", headers=auth_headers(user), json=body)


def test_booking_not_logged_in(client, studio):
    response = client.post("/api/bookings", json={"itemId": studio.id, "date": "2024-06-01"})
    assert response.status_code == 401


def test_booking_requires_studio_and_date(client, owner):
    response = client.post("/api/bookings", headers=auth_headers(owner), json={"date": "2024-06-01"})
    assert response.status_code == 400
    response = client.post("/api/bookings", headers=auth_headers(owner), json={"itemId": 1})
    assert response.status_code == 400


def test_single_day_booking(client, other_user, studio):
    response = book(client, other_user, studio.id, "2024-06-01")
    assert response.status_code == 201
    assert response.json()["id"]

    ranges = client.get(f"/api/items/{studio.id}/bookings").json()
    assert ranges == [{"date": "2024-06-01", "end_date": "2024-06-01"}]


def test_overlap_on_shared_day_conflicts(client, owner, other_user, studio):
    assert book(client, owner, studio.id, "2024-06-01", "2024-06-03").status_code == 201

    response = book(client, other_user, studio.id, "2024-06-03", "2024-06-05")
    assert response.status_code == 409
    assert response.json() == {"error": "Studio is already booked for all or part of this period"}


def test_adjacent_ranges_do_not_conflict(client, owner, studio):
    assert book(client, owner, studio.id, "2024-06-01", "2024-06-03").status_code == 201
    assert book(client, owner, studio.id, "2024-06-04", "2024-06-05").status_code == 201


def test_owner_block(client, session, owner, other_user):
    studio = make_studio(session, owner, status="reserved", reserved_until=date(2024, 7, 1))

    blocked = book(client, other_user, studio.id, "2024-06-15")
    assert blocked.status_code == 409
    assert blocked.json() == {"error": "Studio is reserved by its owner until 2024-07-01"}

    assert book(client, other_user, studio.id, "2024-07-02").status_code == 201


def test_end_before_start(client, owner, studio):
    response = book(client, owner, studio.id, "2024-06-05", "2024-06-01")
    assert response.status_code == 400


def test_booking_unknown_studio(client, owner):
    assert book(client, owner, 999, "2024-06-05").status_code == 404


def test_my_bookings(client, session, owner, other_user, studio):
    second_studio = make_studio(session, owner, name="Loft", city="Lyon", equipments="trepied")
    book(client, other_user, studio.id, "2024-06-01", "2024-06-02")
    book(client, other_user, second_studio.id, "2024-06-20")
    book(client, owner, studio.id, "2024-06-10")

    response = client.get("/api/bookings/my-bookings", headers=auth_headers(other_user))
    assert response.status_code == 200
    data = response.json()
    assert [b["date"] for b in data] == ["2024-06-20", "2024-06-01"]
    assert data[0]["studio_name"] == "Loft"
    assert data[0]["city"] == "Lyon"
    assert data[0]["equipments"] == "trepied"
    assert data[1]["end_date"] == "2024-06-02"
    assert data[1]["status"] == "confirmed"
