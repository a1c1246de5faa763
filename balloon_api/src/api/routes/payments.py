from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.deps import get_current_active_user
from src.db.models.security import User
from src.db.session import get_async_session
from src.schemas.payments import PaymentIntentCreate, PaymentRead
from src.services.payments import PaymentService

router = APIRouter(prefix="/payments", tags=["Payments"])


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[PaymentRead],
    summary="List payments",
    description="The current user's payments; admins see all.",
)
async def list_payments(
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> List[PaymentRead]:
    return [PaymentRead.model_validate(p) for p in await PaymentService(session).list_payments(user)]


# PUBLIC_INTERFACE
@router.post(
    "/create-intent",
    response_model=PaymentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create payment intent",
    description="Record a pending mock payment intent with a generated `pi_` reference.",
)
async def create_intent(
    payload: PaymentIntentCreate,
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> PaymentRead:
    return PaymentRead.model_validate(await PaymentService(session).create_intent(payload, user))


# PUBLIC_INTERFACE
@router.post("/{payment_id}/complete", response_model=PaymentRead, summary="Complete payment")
async def complete_payment(
    payment_id: int = Path(..., description="Payment ID"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> PaymentRead:
    return PaymentRead.model_validate(await PaymentService(session).complete(payment_id, user))


# PUBLIC_INTERFACE
@router.post("/{payment_id}/cancel", response_model=PaymentRead, summary="Cancel payment")
async def cancel_payment(
    payment_id: int = Path(..., description="Payment ID"),
    user: User = Depends(get_current_active_user),
    session: AsyncSession = Depends(get_async_session),
) -> PaymentRead:
    return PaymentRead.model_validate(await PaymentService(session).cancel(payment_id, user))
