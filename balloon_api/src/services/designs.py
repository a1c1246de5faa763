from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.errors import InvalidStateError, NotFoundError
from src.db.models.designs import Design
from src.db.models.inventory import DesignAccessory
from src.db.models.orders import Order
from src.repositories.clients import ClientRepository
from src.repositories.designs import DesignAccessoryRepository, DesignRepository
from src.repositories.inventory import AccessoryRepository
from src.schemas.designs import DesignAccessoryCreate, DesignAccessoryRead, DesignCreate, DesignUpdate
from src.schemas.materials import AvailabilityReport, MaterialSummary
from src.services.base import BaseService
from src.services.inventory import InventoryService
from src.services.materials import calculate_material_requirements, color_analysis
from src.services.orders import OrderService

logger = logging.getLogger(__name__)

# Columns that cannot be cleared by an update.
_REQUIRED_FIELDS = {"client_name", "project_name", "event_type", "elements", "measurements", "scale"}


def apply_material_analysis(design: Design) -> MaterialSummary:
    """Recompute the derived material fields of a design from its elements."""
    summary = calculate_material_requirements(design.elements or [])
    design.material_requirements = {
        color: counts.model_dump() for color, counts in summary.requirements.items()
    }
    design.color_analysis = color_analysis(summary.requirements).model_dump()
    design.total_balloons = summary.total_balloons
    design.estimated_clusters = summary.estimated_clusters
    design.production_time = summary.production_time
    return summary


class DesignService(BaseService):
    """Design persistence plus the material estimate workflow around it."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.designs = DesignRepository(session)
        self.links = DesignAccessoryRepository(session)

    async def list_designs(self, user: Any, *, include_all: bool = False) -> List[Design]:
        owner = None if (include_all and self.is_admin(user)) else user.id
        return await self.designs.list_designs(user_id=owner)

    async def get_design(self, design_id: int, user: Any) -> Design:
        """Load a design the user owns (admins may load any)."""
        design = await self.designs.get_design(design_id)
        if not design:
            raise NotFoundError("Design not found")
        self.ensure_owner_or_admin(design.user_id, user, "design")
        return design

    # PUBLIC_INTERFACE
    async def create_design(self, payload: DesignCreate, user: Any) -> Design:
        """Persist a design with every submitted field and derive its material requirements."""
        if payload.client_id is not None and not await ClientRepository(self.session).get_client(payload.client_id):
            raise NotFoundError("Client not found")

        data = payload.model_dump()
        design = Design(user_id=user.id, **data)
        apply_material_analysis(design)
        await self.designs.add(design)
        await self.commit_and_refresh(design)
        logger.info("Created design %s with %s balloons", design.id, design.total_balloons)
        return design

    # PUBLIC_INTERFACE
    async def update_design(self, design_id: int, payload: DesignUpdate, user: Any) -> Design:
        """Apply a partial update; derived fields follow any change to elements."""
        design = await self.get_design(design_id, user)
        changes = {
            k: v
            for k, v in payload.model_dump(exclude_unset=True).items()
            if v is not None or k not in _REQUIRED_FIELDS
        }
        if not changes:
            raise InvalidStateError("No valid fields to update")

        for field, value in changes.items():
            setattr(design, field, value)
        if "elements" in changes:
            apply_material_analysis(design)
        await self.commit_and_refresh(design)
        return design

    async def delete_design(self, design_id: int, user: Any) -> None:
        design = await self.get_design(design_id, user)
        await self.designs.delete(design)
        await self.commit()
        logger.info("Deleted design %s", design_id)

    # PUBLIC_INTERFACE
    async def analyze(self, design_id: int, user: Any) -> Design:
        """Recompute and persist the design's material requirements."""
        design = await self.get_design(design_id, user)
        apply_material_analysis(design)
        await self.commit_and_refresh(design)
        return design

    async def materials(self, design_id: int, user: Any) -> MaterialSummary:
        design = await self.get_design(design_id, user)
        return calculate_material_requirements(design.elements or [])

    # PUBLIC_INTERFACE
    async def check_inventory(
        self, design_id: int, user: Any, override: Optional[Mapping[str, Any]] = None
    ) -> AvailabilityReport:
        """Compare the design's requirements (or an explicit override) with stock."""
        design = await self.get_design(design_id, user)
        requirements = override if override is not None else (design.material_requirements or {})
        return await InventoryService(self.session).check_availability(requirements)

    # PUBLIC_INTERFACE
    async def order_shortages(self, design_id: int, user: Any) -> Order:
        """Create a supplier order covering every shortage of the design."""
        report = await self.check_inventory(design_id, user)
        if not report.shortages:
            raise InvalidStateError("No shortages to order for this design")
        return await OrderService(self.session).create_shortage_order(design_id, report.shortages, user)

    # PUBLIC_INTERFACE
    async def add_accessory(self, design_id: int, payload: DesignAccessoryCreate, user: Any) -> DesignAccessoryRead:
        """Attach an accessory to a design; attaching it again adds to the quantity."""
        design = await self.get_design(design_id, user)
        accessory = await AccessoryRepository(self.session).get_accessory(payload.accessory_id)
        if not accessory:
            raise NotFoundError("Accessory not found")

        link = await self.links.get_link(design.id, accessory.id)
        if link:
            link.quantity += payload.quantity
        else:
            link = DesignAccessory(design_id=design.id, accessory_id=accessory.id, quantity=payload.quantity)
            await self.links.add(link)
        await self.commit_and_refresh(link)
        return DesignAccessoryRead(
            id=link.id,
            design_id=link.design_id,
            accessory_id=link.accessory_id,
            name=accessory.name,
            quantity=link.quantity,
        )

    async def list_accessories(self, design_id: int, user: Any) -> List[DesignAccessoryRead]:
        design = await self.get_design(design_id, user)
        rows = await self.links.list_for_design(design.id)
        return [
            DesignAccessoryRead(
                id=link.id,
                design_id=link.design_id,
                accessory_id=link.accessory_id,
                name=accessory.name,
                quantity=link.quantity,
            )
            for link, accessory in rows
        ]

