"""Placeholder team notifications for lead events.

Neither channel is wired to a real service yet; both only log.
"""

import logging

from leadtrack.db.models_lead import LeadEntity

logger = logging.getLogger(__name__)

NEW_LEAD_ACTION = "New Opportunity Identified"


def status_changed_action(status: str) -> str:
    return f"Status Changed to {status}"


def send_teams_notification(lead: LeadEntity, action: str) -> None:
    """Chat notification stub."""
    logger.info("[Teams] Notification: %s for client %s", action, lead.client)


def send_email_notification(lead: LeadEntity, action: str) -> None:
    """Email notification stub."""
    logger.info("[Email] Sending email to team: %s for client %s", action, lead.client)


def notify_lead_event(lead: LeadEntity, action: str) -> None:
    """Fan a lead event out to every notification channel."""
    send_teams_notification(lead, action)
    send_email_notification(lead, action)
