"""Dashboard statistics computed over one user's leads."""

import math
from collections import Counter, defaultdict
from collections.abc import Iterable
from decimal import Decimal

from pydantic import BaseModel, Field

from leadtrack.db.models_lead import LeadEntity

CLOSED_STATUSES = ("won", "lost")
TOP_CLIENT_LIMIT = 5


class StatusCount(BaseModel):
    """Number of leads in one status and their share of all leads."""

    status: str
    count: int
    percentage: int


class ClientValue(BaseModel):
    """Summed opportunity value for one client."""

    client: str
    value: float


class LeadSummary(BaseModel):
    """Headline figures and chart series for the dashboard."""

    total_leads: int = 0
    active_value: float = 0.0
    win_rate: int = 0
    by_status: list[StatusCount] = Field(default_factory=list)
    top_clients: list[ClientValue] = Field(default_factory=list)


def _percent(part: int, whole: int) -> int:
    if whole == 0:
        return 0
    return math.floor(part * 100 / whole + 0.5)


def summarize_leads(leads: Iterable[LeadEntity]) -> LeadSummary:
    """Compute totals, win rate, status breakdown and top clients."""
    leads = list(leads)
    total = len(leads)

    statuses = Counter(lead.status for lead in leads)
    active_value = sum(
        (Decimal(lead.value) for lead in leads if lead.status not in CLOSED_STATUSES),
        Decimal(0),
    )
    won = statuses.get("won", 0)
    closed = won + statuses.get("lost", 0)

    by_client: dict[str, Decimal] = defaultdict(Decimal)
    for lead in leads:
        by_client[lead.client] += Decimal(lead.value)
    top = sorted(by_client.items(), key=lambda item: item[1], reverse=True)

    return LeadSummary(
        total_leads=total,
        active_value=float(active_value),
        win_rate=_percent(won, closed),
        by_status=[
            StatusCount(status=status, count=count, percentage=_percent(count, total))
            for status, count in statuses.items()
        ],
        top_clients=[
            ClientValue(client=client, value=float(value))
            for client, value in top[:TOP_CLIENT_LIMIT]
        ],
    )
