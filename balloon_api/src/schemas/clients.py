from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, EmailStr, Field


class ClientBase(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[str] = None
    event_type: Optional[str] = None
    budget: Optional[str] = None
    theme: Optional[str] = None
    colors: Optional[str] = None
    inspiration: Optional[str] = None
    birthdate: Optional[str] = None
    can_text: bool = False


class ClientCreate(ClientBase):
    """Intake form submission."""


class ClientUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    event_type: Optional[str] = None
    budget: Optional[str] = None
    theme: Optional[str] = None
    colors: Optional[str] = None
    inspiration: Optional[str] = None
    birthdate: Optional[str] = None
    can_text: Optional[bool] = None


class ClientRead(ClientBase):
    email: str
    id: int
    crm_synced: bool
    crm_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CRMResult(BaseModel):
    """Outcome of a CRM call. Failures are reported here, never raised."""
    success: bool
    contact_id: Optional[str] = None
    message: Optional[str] = None
    data: Optional[Any] = None


class CRMStatus(BaseModel):
    configured: bool
    provider: Optional[str] = None


class ClientSyncResponse(BaseModel):
    client: ClientRead
    crm: CRMResult


class CRMContact(BaseModel):
    """A contact as held by the CRM, mapped back to intake field names."""
    provider: str
    contact_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    event_type: Optional[str] = None
    budget: Optional[str] = None
    theme: Optional[str] = None
    colors: Optional[str] = None
    inspiration: Optional[str] = None
    birthdate: Optional[str] = None
    can_text: bool = False
