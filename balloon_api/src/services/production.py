from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import InvalidStateError, NotFoundError
from src.db.models.enums import ProductionStatus
from src.db.models.production import Production
from src.repositories.designs import DesignRepository
from src.repositories.production import ProductionRepository
from src.schemas.production import ProductionCreate, ProductionUpdate
from src.services.base import BaseService
from src.services.inventory import InventoryService, requirement_lines

logger = logging.getLogger(__name__)


class ProductionService(BaseService):
    """
    Domain service for production runs.

    Starting a run consumes the design's balloons from inventory. The stock check,
    the decrements and the new production record are committed together.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.runs = ProductionRepository(session)

    async def list_production(self, status: Optional[ProductionStatus] = None) -> List[Production]:
        return await self.runs.list_production(status=status)

    async def list_for_design(self, design_id: int) -> List[Production]:
        return await self.runs.list_production(design_id=design_id)

    async def get_production(self, production_id: int) -> Production:
        run = await self.runs.get_production(production_id)
        if not run:
            raise NotFoundError("Production record not found")
        return run

    # PUBLIC_INTERFACE
    async def create_production(self, payload: ProductionCreate, user: Any) -> Production:
        """
        Create a production record for a design, consuming its material requirements.

        Parameters:
            payload: ProductionCreate request
            user: Authenticated user; must own the design or be an admin
        Returns:
            Created Production entity
        Raises:
            NotFoundError: unknown design
            InvalidStateError: design has no material requirements
            InsufficientInventoryError: any requirement is short; nothing is consumed
        """
        design = await DesignRepository(self.session).get_design(payload.design_id)
        if not design:
            raise NotFoundError("Design not found")
        self.ensure_owner_or_admin(design.user_id, user, "design")

        requirements = design.material_requirements or {}
        if not requirement_lines(requirements):
            raise InvalidStateError("Design has no material requirements")

        try:
            consumed = await InventoryService(self.session).consume(requirements)
            run = Production(
                design_id=design.id,
                status=payload.status,
                start_date=payload.start_date,
                notes=payload.notes,
            )
            await self.runs.add(run)
            await self.commit_and_refresh(run)
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Started production %s for design %s; consumed %d inventory lines",
            run.id, design.id, len(consumed),
        )
        return run

    async def update_production(self, production_id: int, payload: ProductionUpdate) -> Production:
        run = await self.get_production(production_id)
        changes = {
            k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None or k != "status"
        }
        if not changes:
            raise InvalidStateError("No valid fields to update")
        for field, value in changes.items():
            setattr(run, field, value)
        await self.commit_and_refresh(run)
        return run

    # PUBLIC_INTERFACE
    async def complete_production(self, production_id: int, actual_time: Optional[str] = None) -> Production:
        """Mark a run completed now, recording the time actually spent."""
        run = await self.get_production(production_id)
        run.status = ProductionStatus.COMPLETED
        run.completion_date = datetime.now(tz=timezone.utc)
        run.actual_time = actual_time or "Unknown"
        await self.commit_and_refresh(run)
        return run
