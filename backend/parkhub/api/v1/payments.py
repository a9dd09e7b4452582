# backend/parkhub/api/v1/payments.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
from uuid import UUID
from datetime import datetime

from parkhub.api.dependencies import PageParams, pagination, require_permission
from parkhub.core.constants import PaymentMethod, PaymentStatus
from parkhub.core.context import RequestContext
from parkhub.core.rbac import Permission
from parkhub.db.database import get_db
from parkhub.schemas.common import ApiResponse, Page
from parkhub.schemas.payment import PaymentCreate, PaymentRead, PaymentStatusUpdate, Receipt
from parkhub.services.payment_service import PaymentService

router = APIRouter()


@router.post("", response_model=ApiResponse[PaymentRead], status_code=status.HTTP_201_CREATED)
async def create_payment(
    payment_in: PaymentCreate,
    ctx: RequestContext = Depends(require_permission(Permission.PAYMENT_CREATE)),
    db: AsyncSession = Depends(get_db)
):
    payment = await PaymentService(db).create(ctx, payment_in)
    return ApiResponse(data=PaymentRead.model_validate(payment), message="Payment created successfully")


@router.get("", response_model=ApiResponse[Page[PaymentRead]])
async def list_payments(
    payment_status: Optional[PaymentStatus] = Query(None, alias="status"),
    method: Optional[PaymentMethod] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    paging: PageParams = Depends(pagination),
    ctx: RequestContext = Depends(require_permission(Permission.PAYMENT_VIEW)),
    db: AsyncSession = Depends(get_db)
):
    payments, total = await PaymentService(db).list(
        ctx,
        status=payment_status.value if payment_status else None,
        method=method.value if method else None,
        start_date=start_date,
        end_date=end_date,
        page=paging.page,
        limit=paging.limit,
    )
    return ApiResponse(
        data=Page.build([PaymentRead.model_validate(p) for p in payments], total, paging.page, paging.limit)
    )


@router.get("/{payment_id}", response_model=ApiResponse[PaymentRead])
async def get_payment(
    payment_id: UUID,
    ctx: RequestContext = Depends(require_permission(Permission.PAYMENT_VIEW)),
    db: AsyncSession = Depends(get_db)
):
    payment = await PaymentService(db).get(ctx, payment_id)
    return ApiResponse(data=PaymentRead.model_validate(payment))


@router.get("/{payment_id}/receipt", response_model=ApiResponse[Receipt])
async def get_receipt(
    payment_id: UUID,
    ctx: RequestContext = Depends(require_permission(Permission.PAYMENT_VIEW)),
    db: AsyncSession = Depends(get_db)
):
    receipt = await PaymentService(db).receipt(ctx, payment_id)
    return ApiResponse(data=receipt, message="Receipt generated successfully")


@router.put("/{payment_id}/status", response_model=ApiResponse[PaymentRead])
async def update_payment_status(
    payment_id: UUID,
    status_in: PaymentStatusUpdate,
    ctx: RequestContext = Depends(require_permission(Permission.PAYMENT_MANAGE)),
    db: AsyncSession = Depends(get_db)
):
    payment = await PaymentService(db).update_status(ctx, payment_id, status_in.status)
    return ApiResponse(data=PaymentRead.model_validate(payment), message="Payment status updated successfully")
