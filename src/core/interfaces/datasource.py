from abc import ABC, abstractmethod
from typing import List

from src.core.entities.holding import Holding
from src.core.entities.session import ClientSession
from src.core.entities.trade import Trade


class IDataSource(ABC):
    @abstractmethod
    async def authenticate(self, username: str, password: str) -> ClientSession:
        """
        Resolves credentials into a session (role + bound client).
        Raises AuthenticationError when the credentials are rejected.
        """
        pass

    @abstractmethod
    async def get_trades(self, session: ClientSession, client_id: int) -> List[Trade]:
        """
        Returns the client's full trade ledger (executed, rejected, pending).
        """
        pass

    @abstractmethod
    async def get_holdings(self, session: ClientSession, client_id: int) -> List[Holding]:
        pass
