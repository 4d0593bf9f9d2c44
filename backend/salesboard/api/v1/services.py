from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from salesboard.api.deps.profiles import require_admin
from salesboard.api.v1.auth import get_current_profile
from salesboard.core.errors import SERVICE_IN_USE, api_error, not_found
from salesboard.crud.records import commit_or_fail
from salesboard.db.session import get_db
from salesboard.models.profile import Profile
from salesboard.models.sale import SaleService
from salesboard.models.service import Service
from salesboard.schemas.service import ServiceCreate, ServiceListOut, ServiceOut, ServiceUpdate, ServiceUsageOut

router = APIRouter(prefix="/services", tags=["services"])


async def _get_service_or_404(db: AsyncSession, service_id: uuid.UUID) -> Service:
    service = await db.get(Service, service_id)
    if not service:
        raise not_found("Service")
    return service


@router.get("", response_model=ServiceListOut)
async def list_services(
    db: AsyncSession = Depends(get_db),
    _: Profile = Depends(get_current_profile),
):
    """
    Service catalogue, most sold first.
    """
    sales_count = func.count(SaleService.id).label("sales_count")
    stmt = (
        select(Service, sales_count)
        .outerjoin(SaleService, SaleService.service_id == Service.id)
        .group_by(Service.id)
        .order_by(sales_count.desc(), Service.name.asc())
    )
    rows = (await db.execute(stmt)).all()

    return ServiceListOut(
        services=[
            ServiceUsageOut(id=s.id, name=s.name, provision=s.provision, sales_count=int(n or 0))
            for s, n in rows
        ]
    )


@router.post("", response_model=ServiceOut, status_code=status.HTTP_201_CREATED)
async def create_service(
    payload: ServiceCreate,
    db: AsyncSession = Depends(get_db),
    _: Profile = Depends(require_admin),
):
    service = Service(name=payload.name, provision=payload.provision)
    db.add(service)
    await commit_or_fail(db, "create service")
    await db.refresh(service)
    return service


@router.put("/{service_id}", response_model=ServiceOut)
async def update_service(
    service_id: uuid.UUID,
    payload: ServiceUpdate,
    db: AsyncSession = Depends(get_db),
    _: Profile = Depends(require_admin),
):
    service = await _get_service_or_404(db, service_id)

    for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(service, field, value)

    await commit_or_fail(db, "update service")
    await db.refresh(service)
    return service


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service(
    service_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _: Profile = Depends(require_admin),
):
    service = await _get_service_or_404(db, service_id)

    in_use = await db.scalar(
        select(func.count()).select_from(SaleService).where(SaleService.service_id == service.id)
    )
    if in_use:
        raise api_error(
            status.HTTP_409_CONFLICT,
            SERVICE_IN_USE,
            f"Service is attached to {in_use} sale(s) and cannot be deleted",
        )

    await db.delete(service)
    await commit_or_fail(db, "delete service")
    return None
