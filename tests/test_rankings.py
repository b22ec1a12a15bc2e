from datetime import datetime, timezone

from checkin.services.ranking_service import (
    best_streak,
    collect_session_dates,
    current_streak,
)

# 19:00 KST on three meeting days
D1 = datetime(2026, 3, 3, 10, 0, tzinfo=timezone.utc)
D2 = datetime(2026, 3, 5, 10, 0, tzinfo=timezone.utc)
D3 = datetime(2026, 3, 10, 10, 0, tzinfo=timezone.utc)


def test_current_streak_counts_back_from_latest_session():
    sessions = ["2026-03-03", "2026-03-05", "2026-03-10"]

    assert current_streak(sessions, {"2026-03-05", "2026-03-10"}) == 2
    assert current_streak(sessions, {"2026-03-03", "2026-03-05"}) == 0
    assert current_streak([], set()) == 0


def test_best_streak_finds_longest_run():
    sessions = ["d1", "d2", "d3", "d4", "d5"]

    assert best_streak(sessions, {"d1", "d2", "d4"}) == 2
    assert best_streak(sessions, {"d2", "d3", "d4", "d5"}) == 4
    assert best_streak(sessions, set()) == 0


def test_session_dates_are_sorted_union():
    assert collect_session_dates([{"2026-03-05"}, {"2026-03-03", "2026-03-05"}]) == [
        "2026-03-03", "2026-03-05",
    ]


def _seed(add_attendee, add_log):
    people = {
        "A": ("이하나", "1111", [D1, D2, D3, D3.replace(minute=30)]),
        "B": ("김철수", "2222", [D1, D3]),
        "C": ("최민수", "3333", [D1, D2]),
        "E": ("박영희", "4444", [D1, D3]),
    }
    for name, phone, stamps in people.values():
        aid = add_attendee(name, phone)
        for ts in stamps:
            add_log(aid, name, phone, ts)


def test_rankings_order_and_ties(admin_client, add_attendee, add_log):
    _seed(add_attendee, add_log)

    body = admin_client.get("/api/admin/rankings").json()
    rows = [(i["rank"], i["name"], i["total_days"], i["current_streak"], i["best_streak"])
            for i in body["items"]]

    assert body["session_dates"] == ["2026-03-03", "2026-03-05", "2026-03-10"]
    assert rows == [
        (1, "이하나", 3, 3, 3),
        (2, "김철수", 2, 1, 1),
        (2, "박영희", 2, 1, 1),
        (4, "최민수", 2, 0, 2),
    ]
    assert body["items"][0]["attendance_rate"] == 1.0
    assert body["items"][0]["last_attended"] == "2026-03-10"


def test_rankings_date_range_and_limit(admin_client, add_attendee, add_log):
    _seed(add_attendee, add_log)

    body = admin_client.get(
        "/api/admin/rankings", params={"start": "2026-03-01", "end": "2026-03-05", "limit": 2}
    ).json()

    assert body["session_dates"] == ["2026-03-03", "2026-03-05"]
    assert len(body["items"]) == 2
    assert {i["name"] for i in body["items"]} == {"이하나", "최민수"}
    assert all(i["rank"] == 1 for i in body["items"])


def test_rankings_reject_inverted_range(admin_client):
    res = admin_client.get("/api/admin/rankings", params={"start": "2026-03-05", "end": "2026-03-01"})
    assert res.status_code == 400


def test_rankings_empty(admin_client):
    assert admin_client.get("/api/admin/rankings").json() == {"session_dates": [], "items": []}
