from datetime import timedelta

from checkin.utils.timeutils import utc_now

CHURCH = {"church_lat": 37.5665, "church_lng": 126.9780, "geofence_radius_m": 300}


def test_first_check_in_creates_attendee_and_log(client, count_rows):
    res = client.post("/api/check-in", json={"name": "홍길동", "phone": "1234"})

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["already_checked"] is False
    assert body["message"] == "출석이 완료되었습니다!"
    assert body["attendee_id"]
    assert count_rows("attendees") == 1
    assert count_rows("attendance_logs") == 1


def test_repeat_check_in_within_window_is_not_logged_twice(client, count_rows):
    first = client.post("/api/check-in", json={"name": "홍길동", "phone": "1234"}).json()
    second = client.post("/api/check-in", json={"name": "홍길동", "phone": "1234"}).json()

    assert second["success"] is True
    assert second["already_checked"] is True
    assert second["message"] == "이미 출석체크 되었습니다."
    assert second["attendee_id"] == first["attendee_id"]
    assert count_rows("attendance_logs") == 1


def test_check_in_after_window_logs_again(client, add_attendee, add_log, count_rows):
    attendee_id = add_attendee("홍길동", "1234")
    add_log(attendee_id, "홍길동", "1234", utc_now() - timedelta(minutes=61))

    body = client.post("/api/check-in", json={"name": "홍길동", "phone": "1234"}).json()

    assert body["already_checked"] is False
    assert body["attendee_id"] == attendee_id
    assert count_rows("attendance_logs") == 2


def test_same_name_different_phone_is_another_attendee(client, count_rows):
    a = client.post("/api/check-in", json={"name": "김철수", "phone": "1111"}).json()
    b = client.post("/api/check-in", json={"name": "김철수", "phone": "2222"}).json()

    assert a["attendee_id"] != b["attendee_id"]
    assert count_rows("attendees") == 2


def test_inputs_are_normalized(client, count_rows):
    client.post("/api/check-in", json={"name": "  홍  길동 ", "phone": "12-34"})
    body = client.post("/api/check-in", json={"name": "홍 길동", "phone": "1234"}).json()

    assert body["already_checked"] is True
    assert count_rows("attendees") == 1


def test_invalid_phone_is_rejected(client, count_rows):
    res = client.post("/api/check-in", json={"name": "홍길동", "phone": "12ab"})

    assert res.status_code == 400
    assert count_rows("attendees") == 0


def test_blank_name_is_rejected(client):
    res = client.post("/api/check-in", json={"name": "   ", "phone": "1234"})
    assert res.status_code == 400


def test_closed_session_rejects_without_writing(client, admin_client, count_rows):
    admin_client.post("/api/admin/session", json={"active": False})

    res = client.post("/api/check-in", json={"name": "홍길동", "phone": "1234"})

    assert res.status_code == 403
    assert res.json()["detail"] == "현재 출석체크 시간이 아닙니다."
    assert count_rows("attendees") == 0
    assert count_rows("attendance_logs") == 0


def test_geofence_requires_location(client, admin_client, count_rows):
    admin_client.put("/api/admin/settings", json={**CHURCH, "geofence_enabled": True})

    res = client.post("/api/check-in", json={"name": "홍길동", "phone": "1234"})

    assert res.status_code == 400
    assert count_rows("attendees") == 0


def test_geofence_rejects_far_location(client, admin_client, count_rows):
    admin_client.put("/api/admin/settings", json={**CHURCH, "geofence_enabled": True})

    res = client.post(
        "/api/check-in",
        json={"name": "홍길동", "phone": "1234", "latitude": 37.60, "longitude": 126.9780},
    )

    assert res.status_code == 403
    assert "300m" in res.json()["detail"]
    assert count_rows("attendance_logs") == 0


def test_geofence_accepts_nearby_location(client, admin_client):
    admin_client.put("/api/admin/settings", json={**CHURCH, "geofence_enabled": True})

    res = client.post(
        "/api/check-in",
        json={"name": "홍길동", "phone": "1234", "latitude": 37.5670, "longitude": 126.9780},
    )

    assert res.status_code == 200
    body = res.json()
    assert body["already_checked"] is False
    assert 40 < body["distance_m"] < 70


def test_geofence_without_church_coordinates_is_skipped(client, admin_client):
    admin_client.put("/api/admin/settings", json={"geofence_enabled": True})

    res = client.post("/api/check-in", json={"name": "홍길동", "phone": "1234"})

    assert res.status_code == 200


def test_public_settings_reflect_toggles(client, admin_client):
    assert client.get("/api/settings/public").json()["session_active"] is True

    admin_client.post("/api/admin/session", json={"active": False})
    body = client.get("/api/settings/public").json()

    assert body["session_active"] is False
    assert body["geofence_enabled"] is False
    assert body["meeting_title"]


def test_register_attendee_returns_stable_id(client, count_rows):
    first = client.post("/api/attendees/register", json={"name": "홍길동", "phone": "1234"})
    second = client.post("/api/attendees/register", json={"name": "홍길동", "phone": "1234"})

    assert first.status_code == 200
    assert first.json()["data"]["id"] == second.json()["data"]["id"]
    assert count_rows("attendees") == 1
    assert count_rows("attendance_logs") == 0


def test_attendee_pass_is_png(client):
    attendee_id = client.post(
        "/api/attendees/register", json={"name": "홍길동", "phone": "1234"}
    ).json()["data"]["id"]

    res = client.get(f"/api/attendees/{attendee_id}/pass.png")

    assert res.status_code == 200
    assert res.headers["content-type"] == "image/png"
    assert res.content.startswith(b"\x89PNG")


def test_attendee_pass_unknown_id(client):
    assert client.get("/api/attendees/nope/pass.png").status_code == 404
