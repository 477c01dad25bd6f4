"""Lead capture (public) and lead management (admin)."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy import select

from portal.models import Admin, Lead
from portal.models.base import async_session_factory
from portal.models.lead import LEAD_STATUSES
from web.auth import require_admin_user

logger = logging.getLogger("edufly.leads")

router = APIRouter(prefix="/api", tags=["leads"])


class LeadCreate(BaseModel):
    name: str
    phone: str
    email: str
    purpose: str
    amount: Optional[int] = Field(default=None, ge=0)

    @field_validator("name", "phone", "email", "purpose")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class LeadResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    phone: str
    email: str
    purpose: str
    amount: Optional[int]
    status: str
    gateway: Optional[str] = None
    transaction_id: Optional[str] = None
    created_at: datetime


class LeadStatusUpdate(BaseModel):
    status: str
    # Set when the status change records a payment
    gateway: Optional[str] = None
    transaction_id: Optional[str] = None


@router.post("/leads", response_model=LeadResponse, status_code=201)
async def create_lead(body: LeadCreate):
    """Capture an enquiry from the public site form."""
    async with async_session_factory() as session:
        lead = Lead(**body.model_dump())
        session.add(lead)
        await session.commit()
        await session.refresh(lead)
    logger.info("New lead %s (%s)", lead.id, lead.purpose)
    return lead


@router.get("/admin/leads", response_model=list[LeadResponse])
async def list_leads(admin: Admin = Depends(require_admin_user)):
    """List leads, newest first (admin only)."""
    async with async_session_factory() as session:
        result = await session.execute(select(Lead).order_by(Lead.created_at.desc(), Lead.id.desc()))
        return result.scalars().all()


@router.patch("/admin/leads/{lead_id}/status", response_model=LeadResponse)
async def update_lead_status(
    lead_id: int, body: LeadStatusUpdate, admin: Admin = Depends(require_admin_user)
):
    """Set a lead's follow-up status (admin only)."""
    if body.status not in LEAD_STATUSES:
        raise HTTPException(400, "Invalid status")
    async with async_session_factory() as session:
        lead = await session.get(Lead, lead_id)
        if not lead:
            raise HTTPException(404, "Lead not found")
        lead.status = body.status
        if body.gateway is not None:
            lead.gateway = body.gateway
        if body.transaction_id is not None:
            lead.transaction_id = body.transaction_id
        await session.commit()
        return lead


@router.delete("/admin/leads/{lead_id}")
async def delete_lead(lead_id: int, admin: Admin = Depends(require_admin_user)):
    """Delete a lead (admin only)."""
    async with async_session_factory() as session:
        lead = await session.get(Lead, lead_id)
        if not lead:
            raise HTTPException(404, "Lead not found")
        await session.delete(lead)
        await session.commit()
    return {"message": "Lead deleted"}
