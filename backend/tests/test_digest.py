from __future__ import annotations

import datetime as dt

import pytest

from salesboard.core.config import settings
from salesboard.core.digest import DailyDigest, render_digest
from salesboard.core.windows import trailing_day
from salesboard.models.meeting import Meeting
from salesboard.models.offer import Offer
from salesboard.models.sale import Sale

UTC = dt.timezone.utc
AS_OF = dt.datetime(2026, 10, 19, 7, 0, tzinfo=UTC)


def test_render_digest_with_full_podium():
    text = render_digest(
        DailyDigest(
            window=trailing_day(AS_OF),
            meetings=4,
            offers=2,
            sales=3,
            order_value=42000,
            top_profiles=["Anna", "Bertil", "Cecilia"],
        )
    )

    assert "Igår utfärdades 3st affärer med ett ordervärde på 42000 SEK." in text
    assert "Det genomfördes 4 möten och skickades 2st offerter." in text
    assert "🥇 Anna\n🥈 Bertil\n🥉 Cecilia" in text


def test_render_digest_hides_partial_podium():
    text = render_digest(DailyDigest(window=trailing_day(AS_OF), top_profiles=["Anna"]))
    assert "Topplistan" not in text
    assert "Anna" not in text


@pytest.fixture()
def digest_token(monkeypatch):
    monkeypatch.setattr(settings, "DIGEST_TOKEN", "s3cret")
    return "s3cret"


@pytest.mark.asyncio
async def test_daily_digest_counts_last_24h(client, db, make_profile, digest_token, monkeypatch):
    posted = []

    async def fake_post(text, webhook_url=None):
        posted.append(text)
        return True

    monkeypatch.setattr("salesboard.api.v1.digest.post_to_slack", fake_post)

    a = await make_profile(name="Anna", points=30000)
    await make_profile(name="Bertil", points=20000)
    await make_profile(name="Cecilia", points=10000)
    await make_profile(name="David", points=0)

    yesterday = dt.datetime(2026, 10, 18, 15, 0, tzinfo=UTC)
    older = dt.datetime(2026, 10, 17, 15, 0, tzinfo=UTC)
    db.add_all([
        Meeting(name="M1", date=dt.date(2026, 10, 18), time="15:00", profile_id=a.id, created_at=yesterday),
        Meeting(name="M2", date=dt.date(2026, 10, 17), time="15:00", profile_id=a.id, created_at=older),
        # one row, even though it holds three offers
        Offer(name="O1", date=dt.date(2026, 10, 18), time="15:00", amount=3, profile_id=a.id, created_at=yesterday),
        Sale(name="S1", date=dt.date(2026, 10, 18), time="15:00", revenue=12000, profile_id=a.id, created_at=yesterday),
        Sale(name="S2", date=dt.date(2026, 10, 18), time="16:00", revenue=3000, profile_id=a.id, created_at=yesterday),
    ])
    await db.commit()

    r = await client.post(
        "/api/v1/digest/daily",
        params={"as_of": AS_OF.isoformat()},
        headers={"X-Digest-Token": digest_token},
    )
    assert r.status_code == 200, r.text
    body = r.json()

    assert (body["meetings"], body["offers"], body["sales"], body["order_value"]) == (1, 1, 2, 15000)
    assert body["top_profiles"] == ["Anna", "Bertil", "Cecilia"]
    assert body["posted"] is True
    assert posted == [body["text"]]


@pytest.mark.asyncio
async def test_daily_digest_requires_token(client, digest_token):
    r = await client.post("/api/v1/digest/daily")
    assert r.status_code == 403

    r = await client.post("/api/v1/digest/daily", headers={"X-Digest-Token": "wrong"})
    assert r.status_code == 403

    # latin-1 header values are refused, not crashed on
    r = await client.post("/api/v1/digest/daily", headers={"X-Digest-Token": "sécret".encode("latin-1")})
    assert r.status_code == 403
    assert r.json()["detail"]["error"] == "forbidden"


@pytest.mark.asyncio
async def test_daily_digest_disabled_without_token(client, monkeypatch):
    monkeypatch.setattr(settings, "DIGEST_TOKEN", None)

    r = await client.post("/api/v1/digest/daily", headers={"X-Digest-Token": "anything"})
    assert r.status_code == 404
