from __future__ import annotations

import datetime as dt

import pytest

from conftest import auth_header
from salesboard.models.sale import Sale, SaleService
from salesboard.models.service import Service


async def add_service(db, name: str, provision: str = "10") -> Service:
    service = Service(name=name, provision=provision)
    db.add(service)
    await db.commit()
    await db.refresh(service)
    return service


async def add_sale_using(db, profile, *services):
    sale = Sale(
        name="Kund AB",
        date=dt.date(2026, 10, 1),
        time="10:00",
        revenue=1000,
        profile_id=profile.id,
        services=[SaleService(service_id=s.id) for s in services],
    )
    db.add(sale)
    await db.commit()
    return sale


@pytest.mark.asyncio
async def test_services_listed_most_sold_first(client, db, seller):
    seo = await add_service(db, "SEO")
    web = await add_service(db, "Hemsida")
    await add_service(db, "Annonser")

    await add_sale_using(db, seller, web)
    await add_sale_using(db, seller, web, seo)
    await add_sale_using(db, seller, web)

    r = await client.get("/api/v1/services", headers=auth_header(seller))
    assert r.status_code == 200, r.text
    services = r.json()["services"]

    assert [(s["name"], s["sales_count"]) for s in services] == [
        ("Hemsida", 3),
        ("SEO", 1),
        ("Annonser", 0),
    ]


@pytest.mark.asyncio
async def test_service_writes_are_admin_only(client, seller):
    r = await client.post("/api/v1/services", json={"name": "SEO", "provision": "5"}, headers=auth_header(seller))
    assert r.status_code == 403
    assert r.json()["detail"]["error"] == "forbidden"


@pytest.mark.asyncio
async def test_admin_updates_and_deletes_unused_service(client, db, admin):
    service = await add_service(db, "SEO", "5")
    headers = auth_header(admin)

    r = await client.put(f"/api/v1/services/{service.id}", json={"provision": "7.5"}, headers=headers)
    assert r.status_code == 200, r.text
    assert r.json() == {"id": str(service.id), "name": "SEO", "provision": "7.5"}

    r = await client.delete(f"/api/v1/services/{service.id}", headers=headers)
    assert r.status_code == 204

    r = await client.get("/api/v1/services", headers=headers)
    assert r.json()["services"] == []


@pytest.mark.asyncio
async def test_service_in_use_cannot_be_deleted(client, db, admin, seller):
    service = await add_service(db, "Hemsida")
    await add_sale_using(db, seller, service)

    r = await client.delete(f"/api/v1/services/{service.id}", headers=auth_header(admin))
    assert r.status_code == 409
    assert r.json()["detail"]["error"] == "service_in_use"


@pytest.mark.asyncio
@pytest.mark.parametrize("provision", ["abc", "101", "-1"])
async def test_invalid_provision_is_rejected(client, admin, provision):
    r = await client.post("/api/v1/services", json={"name": "X", "provision": provision}, headers=auth_header(admin))
    assert r.status_code == 422
