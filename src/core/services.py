import asyncio
import logging
from typing import Optional

from src.core.entities.gains import (
    GainsSummaryResponse,
    RealizedGainsResponse,
    UnrealizedGainsResponse,
)
from src.core.entities.session import ClientSession
from src.core.errors import AccessDeniedError, ClientNotSpecifiedError
from src.core.interfaces.datasource import IDataSource
from src.core.use_cases.realized_gains import RealizedGainsCalculator
from src.core.use_cases.unrealized_gains import UnrealizedGainsCalculator

logger = logging.getLogger(__name__)


def resolve_client_id(session: ClientSession, requested: Optional[int]) -> int:
    """
    Clients read their own book; admins read any client but must name one
    unless a client is bound to their session.
    """
    if requested is None:
        if session.client_id is None:
            raise ClientNotSpecifiedError(f"No client bound to user '{session.username}'; pass clientId")
        return session.client_id

    if not session.can_view(requested):
        raise AccessDeniedError(f"User '{session.username}' may not read client {requested}")
    return requested


class GainsService:
    def __init__(self, datasource: IDataSource):
        self.db = datasource

    async def realized_gains(self, session: ClientSession, client_id: int) -> RealizedGainsResponse:
        trades = await self.db.get_trades(session, client_id)
        report = RealizedGainsCalculator.compute(trades)
        logger.info(
            f"Realized gains for client {client_id}: {len(report.records)} records "
            f"from {len(trades)} trades, net {report.net_gain_loss}"
        )
        return report

    async def unrealized_gains(self, session: ClientSession, client_id: int) -> UnrealizedGainsResponse:
        holdings = await self.db.get_holdings(session, client_id)
        report = UnrealizedGainsCalculator.compute(holdings)
        logger.info(
            f"Unrealized gains for client {client_id}: {len(report.records)} holdings, "
            f"net {report.total_unrealized_gain_loss}"
        )
        return report

    async def summary(self, session: ClientSession, client_id: int) -> GainsSummaryResponse:
        # Independent snapshots, fetch both at once
        realized, unrealized = await asyncio.gather(
            self.realized_gains(session, client_id),
            self.unrealized_gains(session, client_id),
        )
        return GainsSummaryResponse(client_id=client_id, realized=realized, unrealized=unrealized)
