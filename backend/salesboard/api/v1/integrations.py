# salesboard/api/v1/integrations.py
"""
Webhooks from Cling (quotes and signed agreements).

Cling posts the whole document; the salesperson is identified by the
document owner's email rather than a bearer token.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.core.errors import not_authenticated
from salesboard.core.notifications import post_to_slack, sale_message
from salesboard.core.points import RecordKind
from salesboard.crud.records import create_record
from salesboard.db.session import get_db
from salesboard.models.offer import Offer
from salesboard.models.profile import Profile
from salesboard.models.sale import Sale, SaleService
from salesboard.models.service import Service
from salesboard.schemas.integrations import ClingDocument, ClingWebhook, ClingWebhookResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/integrations/cling", tags=["integrations"])

CLING_INVOICE = "1 månad"


async def _profile_for(db: AsyncSession, doc: ClingDocument) -> Profile:
    email = Profile.normalize_email(doc.company_user.email)
    profile = (await db.execute(select(Profile).where(Profile.email == email))).scalar_one_or_none()
    if profile is None or not profile.active:
        logger.warning("Cling webhook for unknown profile %s", email)
        raise not_authenticated()
    return profile


@router.post("/offer", response_model=ClingWebhookResult)
async def cling_offer(payload: ClingWebhook, db: AsyncSession = Depends(get_db)):
    """A sent quote counts as one offer."""
    doc = payload.data
    profile = await _profile_for(db, doc)

    offer = Offer(
        name=doc.client_names,
        date=doc.record_date,
        time=doc.record_time,
        amount=1,
    )
    offer = await create_record(db, RecordKind.OFFER, profile, offer)
    return ClingWebhookResult(status="created", record_id=str(offer.id))


@router.post("/sale", response_model=ClingWebhookResult)
async def cling_sale(
    payload: ClingWebhook,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
):
    """
    A signed agreement becomes a sale worth the sum of its articles. Documents
    without any value are acknowledged and dropped.
    """
    doc = payload.data
    profile = await _profile_for(db, doc)

    revenue = doc.revenue_sek
    if not revenue:
        return ClingWebhookResult(status="ignored")

    services = []
    if doc.template is not None:
        service = (
            await db.execute(select(Service).where(Service.name == doc.template.name).limit(1))
        ).scalar_one_or_none()
        if service is not None:
            services.append(SaleService(service_id=service.id, subscription=""))

    sale = Sale(
        name=doc.client_names,
        date=doc.record_date,
        time=doc.record_time,
        amount=1,
        revenue=revenue,
        invoice=CLING_INVOICE,
        customer=None,
        services=services,
    )
    sale = await create_record(db, RecordKind.SALE, profile, sale)

    background_tasks.add_task(post_to_slack, sale_message(profile.name, sale.revenue))
    return ClingWebhookResult(status="created", record_id=str(sale.id))
