from typing import Dict, List, Optional, Tuple

from src.core.entities.holding import Holding
from src.core.entities.session import ClientSession, Role
from src.core.entities.trade import Trade
from src.core.errors import AuthenticationError
from src.core.interfaces.datasource import IDataSource


class LocalMockDataSource(IDataSource):
    """
    In-memory brokerage: fixed users, ledgers and holdings keyed by client id.
    """

    def __init__(
        self,
        users: Optional[Dict[str, Tuple[str, Role, Optional[int]]]] = None,
        trades: Optional[Dict[int, List[Trade]]] = None,
        holdings: Optional[Dict[int, List[Holding]]] = None,
    ):
        # username -> (password, role, client_id)
        self.users = users or {}
        self.trades = trades or {}
        self.holdings = holdings or {}

    async def authenticate(self, username: str, password: str) -> ClientSession:
        user = self.users.get(username)
        if user is None or user[0] != password:
            raise AuthenticationError(f"Bad credentials for {username}")
        _, role, client_id = user
        return ClientSession(username=username, password=password, role=role, client_id=client_id)

    async def get_trades(self, session: ClientSession, client_id: int) -> List[Trade]:
        return list(self.trades.get(client_id, []))

    async def get_holdings(self, session: ClientSession, client_id: int) -> List[Holding]:
        return list(self.holdings.get(client_id, []))
