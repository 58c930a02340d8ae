import logging
from typing import Any, List, Optional, Tuple

import httpx
from pydantic import TypeAdapter, ValidationError

from src.core.entities.holding import Holding
from src.core.entities.session import ClientSession, Role
from src.core.entities.trade import Trade
from src.core.errors import AccessDeniedError, AuthenticationError, DataSourceError
from src.core.interfaces.datasource import IDataSource

logger = logging.getLogger(__name__)

_trades_adapter = TypeAdapter(List[Trade])
_holdings_adapter = TypeAdapter(List[Holding])


class BrokerageApiGateway(IDataSource):
    """
    Implementation of IDataSource for the brokerage REST API.
    Credentials from the session are forwarded as HTTP Basic auth on every call.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        :param base_url: API root, e.g. http://localhost:8080/api
        :param transport: Optional httpx transport (tests plug a MockTransport here).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        logger.info(f"BrokerageApiGateway initialized. URL: {self.base_url}")

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport)

    async def _request(
        self,
        method: str,
        path: str,
        auth=None,
        json: Any = None,
        rejected_statuses: Tuple[int, ...] = (401,),
    ) -> Any:
        """
        :param rejected_statuses: Statuses meaning the credentials were refused.
        A 403 outside of those means the session may not read the resource.
        """
        try:
            async with self._client() as client:
                resp = await client.request(method, path, auth=auth, json=json)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status in rejected_statuses:
                raise AuthenticationError(f"{method} {path} rejected with {status}") from e
            if status == 403:
                raise AccessDeniedError(f"{method} {path} forbidden for this session") from e
            logger.error(f"{method} {path} failed with {status}")
            raise DataSourceError(f"{method} {path} failed with {status}") from e
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise DataSourceError(f"{method} {path} failed: {e}") from e
        except ValueError as e:
            # Body was not JSON
            logger.error(f"{method} {path} returned a non-JSON body")
            raise DataSourceError(f"{method} {path} returned a non-JSON body") from e

    async def authenticate(self, username: str, password: str) -> ClientSession:
        """
        Uses the 'auth/login' endpoint to resolve role and bound client.
        Bad credentials come back as 400 from this endpoint.
        """
        payload = await self._request(
            "POST",
            "/auth/login",
            json={"username": username, "password": password},
            rejected_statuses=(400, 401, 403),
        )
        try:
            return ClientSession(
                username=payload.get("username") or username,
                password=password,
                role=Role(payload["role"]),
                client_id=payload.get("clientId"),
                full_name=payload.get("fullName"),
            )
        except (KeyError, ValueError, AttributeError) as e:
            logger.error(f"Malformed login response for {username}: {e}")
            raise DataSourceError(f"Malformed login response for {username}") from e

    async def get_trades(self, session: ClientSession, client_id: int) -> List[Trade]:
        raw = await self._request("GET", f"/trades/client/{client_id}", auth=session.basic_auth())
        try:
            return _trades_adapter.validate_python(raw)
        except ValidationError as e:
            # A bad record must not silently change reported gains
            logger.error(f"Malformed trade ledger for client {client_id}: {e}")
            raise DataSourceError(f"Malformed trade ledger for client {client_id}") from e

    async def get_holdings(self, session: ClientSession, client_id: int) -> List[Holding]:
        raw = await self._request("GET", f"/portfolio/client/{client_id}", auth=session.basic_auth())
        try:
            return _holdings_adapter.validate_python(raw)
        except ValidationError as e:
            logger.error(f"Malformed holdings for client {client_id}: {e}")
            raise DataSourceError(f"Malformed holdings for client {client_id}") from e
