"""Lead repository: per-user listing, creation and updates."""

import datetime as dt
from decimal import Decimal

import uuid_utils
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from leadtrack.db.models_lead import LeadEntity


class LeadData(BaseModel):
    """Editable lead fields."""

    client: str
    title: str
    date: dt.date | None = None
    value: Decimal = Decimal(0)
    likelihood: int = 50
    status: str = "new"


async def list_leads(session: AsyncSession, user_id: str) -> list[LeadEntity]:
    """Return a user's leads, newest first."""
    stmt = (
        select(LeadEntity)
        .where(LeadEntity.user_id == user_id)
        .order_by(LeadEntity.created_at.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_lead(session: AsyncSession, lead_id: str) -> LeadEntity | None:
    """Look up a lead by primary key, regardless of owner."""
    stmt = select(LeadEntity).where(LeadEntity.id == lead_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def create_lead(
    session: AsyncSession, user_id: str, data: LeadData
) -> LeadEntity:
    """Insert a lead owned by ``user_id``."""
    lead = LeadEntity(
        id=str(uuid_utils.uuid7()),
        user_id=user_id,
        created_at=dt.datetime.now(dt.UTC),
        **data.model_dump(),
    )
    session.add(lead)
    await session.flush()
    return lead


async def update_lead(
    session: AsyncSession, lead: LeadEntity, data: LeadData
) -> LeadEntity:
    """Overwrite every editable field of ``lead``."""
    for field, value in data.model_dump().items():
        setattr(lead, field, value)
    await session.flush()
    return lead
