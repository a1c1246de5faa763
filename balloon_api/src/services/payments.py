from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import InvalidStateError, NotFoundError
from src.db.models.enums import PaymentStatus
from src.db.models.payments import Payment
from src.repositories.payments import PaymentRepository
from src.schemas.payments import PaymentIntentCreate
from src.services.base import BaseService

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "usd"


def new_reference() -> str:
    return f"pi_{uuid4().hex}"


class PaymentService(BaseService):
    """Mock payment intents kept in the local database. No external gateway is called."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.payments = PaymentRepository(session)

    async def list_payments(self, user: Any) -> List[Payment]:
        return await self.payments.list_payments(user_id=None if self.is_admin(user) else user.id)

    async def get_payment(self, payment_id: int, user: Any) -> Payment:
        payment = await self.payments.get_payment(payment_id)
        if not payment:
            raise NotFoundError("Payment not found")
        self.ensure_owner_or_admin(payment.user_id, user, "payment")
        return payment

    # PUBLIC_INTERFACE
    async def create_intent(self, payload: PaymentIntentCreate, user: Any) -> Payment:
        """Create a pending payment intent for the given amount (cents)."""
        await self.ensure_design_access(payload.design_id, user)

        payment = Payment(
            reference=new_reference(),
            user_id=user.id,
            design_id=payload.design_id,
            client_name=payload.client_name or "Unknown Client",
            amount=payload.amount,
            currency=DEFAULT_CURRENCY,
            status=PaymentStatus.PENDING,
        )
        await self.payments.add(payment)
        await self.commit_and_refresh(payment)
        logger.info("Created payment intent %s for %s cents", payment.reference, payment.amount)
        return payment

    async def _transition(self, payment_id: int, user: Any, target: PaymentStatus) -> Payment:
        payment = await self.get_payment(payment_id, user)
        if payment.status != PaymentStatus.PENDING:
            raise InvalidStateError(
                f"Only pending payments can be {target.value}; payment is {payment.status.value}"
            )
        payment.status = target
        if target == PaymentStatus.COMPLETED:
            payment.completed_at = datetime.now(tz=timezone.utc)
        await self.commit_and_refresh(payment)
        logger.info("Payment %s %s", payment.reference, target.value)
        return payment

    async def complete(self, payment_id: int, user: Any) -> Payment:
        return await self._transition(payment_id, user, PaymentStatus.COMPLETED)

    async def cancel(self, payment_id: int, user: Any) -> Payment:
        return await self._transition(payment_id, user, PaymentStatus.CANCELLED)
