# tests/test_monthly_stats_api.py
from __future__ import annotations

import datetime as dt

import pytest

from conftest import auth_header
from salesboard.models.meeting import Meeting
from salesboard.models.offer import Offer
from salesboard.models.sale import Sale

UTC = dt.timezone.utc
AS_OF = "2026-10-15T12:00:00Z"


def at(year, month, day, hour=10):
    return dt.datetime(year, month, day, hour, tzinfo=UTC)


async def add_rows(db, *rows):
    db.add_all(rows)
    await db.commit()


@pytest.mark.asyncio
async def test_windows_follow_created_at_not_date(client, db, seller):
    await add_rows(
        db,
        # logged this month about a meeting held last month
        Meeting(name="A", date=dt.date(2026, 9, 28), time="09:00", profile_id=seller.id, created_at=at(2026, 10, 2)),
        # logged last month about a meeting booked for this month
        Meeting(name="B", date=dt.date(2026, 10, 5), time="09:00", profile_id=seller.id, created_at=at(2026, 9, 30)),
        Meeting(name="C", date=dt.date(2026, 9, 10), time="09:00", profile_id=seller.id, created_at=at(2026, 9, 10)),
        # outside both windows
        Meeting(name="D", date=dt.date(2026, 8, 1), time="09:00", profile_id=seller.id, created_at=at(2026, 8, 1)),
    )

    r = await client.get("/api/v1/meetings", params={"as_of": AS_OF}, headers=auth_header(seller))
    assert r.status_code == 200, r.text
    body = r.json()

    assert body["curr_month"] == 1
    assert body["prev_month"] == 2
    assert body["change"] == -50
    assert body["change_direction"] == "decrease"
    assert [m["name"] for m in body["meetings"]] == ["A"]
    assert body["meetings"][0]["profile"]["name"] == "Sara Säljare"


@pytest.mark.asyncio
async def test_offer_and_sale_totals_are_sums(client, db, seller, make_profile):
    other = await make_profile(name="Olle Annan")
    await add_rows(
        db,
        Offer(name="A", date=dt.date(2026, 10, 1), time="10:00", amount=3, profile_id=seller.id, created_at=at(2026, 10, 1)),
        Offer(name="B", date=dt.date(2026, 10, 2), time="10:00", amount=2, profile_id=other.id, created_at=at(2026, 10, 2)),
        Sale(name="C", date=dt.date(2026, 10, 3), time="10:00", revenue=9000, profile_id=seller.id, created_at=at(2026, 10, 3)),
        Sale(name="D", date=dt.date(2026, 10, 4), time="10:00", revenue=12000, profile_id=other.id, created_at=at(2026, 10, 4)),
    )
    headers = auth_header(seller)

    r = await client.get("/api/v1/offers", params={"as_of": AS_OF}, headers=headers)
    assert r.json()["curr_month"] == 5
    assert r.json()["prev_month"] == 0
    # growth from zero reads as curr * 100
    assert r.json()["change"] == 500

    r = await client.get("/api/v1/offers", params={"as_of": AS_OF, "profile_id": str(seller.id)}, headers=headers)
    assert r.json()["curr_month"] == 3
    assert len(r.json()["offers"]) == 1

    r = await client.get("/api/v1/sales", params={"as_of": AS_OF, "profile_id": str(seller.id)}, headers=headers)
    body = r.json()
    assert body["curr_month"] == 9000
    # the month's biggest deal is team-wide
    assert body["highest"]["name"] == "D"
    assert body["highest"]["profile"]["name"] == "Olle Annan"


@pytest.mark.asyncio
async def test_empty_month_sums_are_zero(client, seller):
    r = await client.get("/api/v1/sales", params={"as_of": AS_OF}, headers=auth_header(seller))
    assert r.status_code == 200, r.text
    body = r.json()
    assert (body["prev_month"], body["curr_month"], body["change"]) == (0, 0, 0)
    assert body["highest"] is None
    assert body["sales"] == []


@pytest.mark.asyncio
async def test_highest_sale_tie_goes_to_earliest(client, db, seller):
    await add_rows(
        db,
        Sale(name="Senare", date=dt.date(2026, 10, 1), time="10:00", revenue=5000, profile_id=seller.id, created_at=at(2026, 10, 9)),
        Sale(name="Tidigare", date=dt.date(2026, 10, 1), time="10:00", revenue=5000, profile_id=seller.id, created_at=at(2026, 10, 3)),
    )

    r = await client.get("/api/v1/sales", params={"as_of": AS_OF}, headers=auth_header(seller))
    assert r.json()["highest"]["name"] == "Tidigare"


@pytest.mark.asyncio
async def test_profile_stats_goal_progress(client, db, make_profile):
    profile = await make_profile(name="Greta Mål", sale_goal=10000, meeting_goal=4)
    await add_rows(
        db,
        Sale(name="A", date=dt.date(2026, 10, 1), time="10:00", revenue=25000, profile_id=profile.id, created_at=at(2026, 10, 1)),
        Sale(name="B", date=dt.date(2026, 9, 1), time="10:00", revenue=10000, profile_id=profile.id, created_at=at(2026, 9, 1)),
        Meeting(name="C", date=dt.date(2026, 10, 1), time="10:00", profile_id=profile.id, created_at=at(2026, 10, 1)),
    )

    r = await client.get(f"/api/v1/profiles/{profile.id}/stats", params={"as_of": AS_OF}, headers=auth_header(profile))
    assert r.status_code == 200, r.text
    body = r.json()

    assert body["window_start"].startswith("2026-10-01")
    assert body["sales"]["curr_month"] == 25000
    assert body["sales"]["prev_month"] == 10000
    assert body["sales"]["change"] == 150
    assert body["sales"]["goal_progress"] == 250
    assert body["sales"]["goal_progress_display"] == 100
    assert body["meetings"]["goal_progress"] == 25
    assert body["level_up"]["eligible"] is False


@pytest.mark.asyncio
async def test_profile_stats_unknown_profile(client, seller):
    r = await client.get("/api/v1/profiles/00000000-0000-0000-0000-000000000000/stats", headers=auth_header(seller))
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_dashboard(client, db, make_profile):
    top = await make_profile(name="Toppen", points=90000)
    mid = await make_profile(name="Mitten", points=50000)
    low = await make_profile(name="Botten", points=10000)
    await make_profile(name="Borta", points=999999, active=False)
    await make_profile(name="Sist", points=0)

    await add_rows(
        db,
        Sale(name="Stor", date=dt.date(2026, 10, 1), time="10:00", revenue=30000, profile_id=mid.id, created_at=at(2026, 10, 5)),
        Sale(name="Liten", date=dt.date(2026, 10, 1), time="10:00", revenue=3000, profile_id=low.id, created_at=at(2026, 10, 6)),
        Sale(name="Förra", date=dt.date(2026, 9, 1), time="10:00", revenue=99000, profile_id=top.id, created_at=at(2026, 9, 6)),
    )

    r = await client.get("/api/v1/dashboard", params={"as_of": AS_OF}, headers=auth_header(low))
    assert r.status_code == 200, r.text
    body = r.json()

    assert body["sales"]["curr_month"] == 33000
    assert body["sales"]["prev_month"] == 99000
    assert body["sales"]["change_direction"] == "decrease"
    assert body["highest_sale"]["name"] == "Stor"
    assert [p["name"] for p in body["top_profiles"]] == ["Toppen", "Mitten", "Botten"]


@pytest.mark.asyncio
async def test_leaderboard_lists_active_profiles_by_points(client, make_profile):
    a = await make_profile(name="A", points=10)
    await make_profile(name="B", points=30)
    await make_profile(name="C", points=20, active=False)

    r = await client.get("/api/v1/profiles", headers=auth_header(a))
    assert r.status_code == 200, r.text
    assert [p["name"] for p in r.json()] == ["B", "A"]


@pytest.mark.asyncio
async def test_settings_update_goals(client, db, seller):
    r = await client.patch(
        "/api/v1/profiles/me",
        json={"sale_goal": 20000, "avatar": "https://example.com/sara.png"},
        headers=auth_header(seller),
    )
    assert r.status_code == 200, r.text
    assert r.json()["sale_goal"] == 20000
    assert r.json()["avatar"] == "https://example.com/sara.png"

    # counters are not part of the settings form
    r = await client.patch("/api/v1/profiles/me", json={"points": 1000000}, headers=auth_header(seller))
    assert r.status_code == 422
