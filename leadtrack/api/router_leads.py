"""Lead endpoints, scoped to the signed-in user."""

import logging
from decimal import Decimal

from fastapi import APIRouter, status
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import JSONResponse

from leadtrack.api.deps import CurrentUser, DbSession
from leadtrack.api.schemas import LeadPayload, LeadResponse
from leadtrack.db.repo_lead import (
    LeadData,
    create_lead,
    get_lead,
    list_leads,
    update_lead,
)
from leadtrack.leads.summary import LeadSummary, summarize_leads
from leadtrack.notify.stubs import (
    NEW_LEAD_ACTION,
    notify_lead_event,
    status_changed_action,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/leads", tags=["leads"])


def _database_error() -> JSONResponse:
    return JSONResponse(
        {"error": "Database error"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _to_data(payload: LeadPayload) -> LeadData:
    return LeadData(
        client=payload.client,
        title=payload.title,
        date=payload.date,
        value=Decimal(str(payload.value)),
        likelihood=payload.likelihood,
        status=payload.status,
    )


@router.get("", response_model=None)
async def get_leads(
    user: CurrentUser, db: DbSession
) -> list[LeadResponse] | JSONResponse:
    """GET /api/leads -- the caller's leads, newest first."""
    try:
        leads = await list_leads(db, user.id)
    except SQLAlchemyError:
        logger.exception("Listing leads failed for user %s", user.id)
        await db.rollback()
        return _database_error()
    return [LeadResponse.model_validate(lead) for lead in leads]


@router.get("/summary", response_model=None)
async def get_summary(user: CurrentUser, db: DbSession) -> LeadSummary | JSONResponse:
    """GET /api/leads/summary -- dashboard totals and chart series."""
    try:
        leads = await list_leads(db, user.id)
    except SQLAlchemyError:
        logger.exception("Summarizing leads failed for user %s", user.id)
        await db.rollback()
        return _database_error()
    return summarize_leads(leads)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=None)
async def post_lead(
    payload: LeadPayload, user: CurrentUser, db: DbSession
) -> LeadResponse | JSONResponse:
    """POST /api/leads -- record a new opportunity."""
    try:
        lead = await create_lead(db, user.id, _to_data(payload))
    except SQLAlchemyError:
        logger.exception("Creating lead failed for user %s", user.id)
        await db.rollback()
        return _database_error()

    logger.info("New lead %s - %s (user %s)", lead.client, lead.title, user.id)
    notify_lead_event(lead, NEW_LEAD_ACTION)
    return LeadResponse.model_validate(lead)


@router.put("/{lead_id}", response_model=None)
async def put_lead(
    lead_id: str, payload: LeadPayload, user: CurrentUser, db: DbSession
) -> LeadResponse | JSONResponse:
    """PUT /api/leads/{id} -- replace a lead the caller owns."""
    try:
        lead = await get_lead(db, lead_id)
        if lead is None:
            return JSONResponse(
                {"error": "Lead not found"}, status_code=status.HTTP_404_NOT_FOUND
            )
        if lead.user_id != user.id:
            return JSONResponse(
                {"error": "Unauthorized"}, status_code=status.HTTP_403_FORBIDDEN
            )
        old_status = lead.status
        lead = await update_lead(db, lead, _to_data(payload))
    except SQLAlchemyError:
        logger.exception("Updating lead %s failed", lead_id)
        await db.rollback()
        return _database_error()

    logger.info("Updated lead %s - status %s", lead.client, lead.status)
    if lead.status != old_status:
        notify_lead_event(lead, status_changed_action(lead.status))
    return LeadResponse.model_validate(lead)
