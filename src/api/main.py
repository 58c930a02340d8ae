import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.security import HTTPBasic, HTTPBasicCredentials

# --- Imports ---
from src.config import Settings
from src.core.entities.gains import (
    GainsSummaryResponse,
    RealizedGainsResponse,
    UnrealizedGainsResponse,
)
from src.core.entities.holding import Holding
from src.core.entities.session import ClientSession
from src.core.entities.trade import Trade
from src.core.errors import (
    AccessDeniedError,
    AuthenticationError,
    ClientNotSpecifiedError,
    DataSourceError,
)
from src.core.interfaces.datasource import IDataSource
from src.core.services import GainsService, resolve_client_id
from src.core.use_cases.csv_export import (
    export_filename,
    realized_gains_to_csv,
    unrealized_gains_to_csv,
)
from src.infrastructure.gateways.brokerage_api import BrokerageApiGateway

settings = Settings.from_env()

# Setup Logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger("GainsTrace")

app = FastAPI(
    title="GainsTrace API",
    version="1.0.0",
    description="Realized and unrealized P/L reconstruction for brokerage clients",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

security = HTTPBasic()

# --- Error Mapping ---

@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError):
    return JSONResponse(
        status_code=401,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Basic"},
    )

@app.exception_handler(DataSourceError)
async def datasource_error_handler(request: Request, exc: DataSourceError):
    logger.error(f"Upstream failure on {request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"detail": str(exc)})

@app.exception_handler(AccessDeniedError)
async def access_denied_handler(request: Request, exc: AccessDeniedError):
    return JSONResponse(status_code=403, content={"detail": str(exc)})

@app.exception_handler(ClientNotSpecifiedError)
async def client_not_specified_handler(request: Request, exc: ClientNotSpecifiedError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})

# --- Dependency Injection ---

def get_datasource() -> IDataSource:
    return BrokerageApiGateway(settings.brokerage_api_url, timeout=settings.brokerage_api_timeout)

async def get_session(
    credentials: HTTPBasicCredentials = Depends(security),
    gateway: IDataSource = Depends(get_datasource),
) -> ClientSession:
    try:
        return await gateway.authenticate(credentials.username, credentials.password)
    except AuthenticationError:
        raise HTTPException(
            status_code=401,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

def get_service(gateway: IDataSource = Depends(get_datasource)) -> GainsService:
    return GainsService(gateway)

def _csv_response(content: str, kind: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(kind)}"'},
    )

# --- Endpoints ---

@app.get("/health")
async def health():
    return {"status": "healthy", "upstream": settings.brokerage_api_url}

@app.get("/v1/trades", response_model=List[Trade])
async def get_trades(
    clientId: Optional[int] = Query(None, description="Client id; defaults to the session's client"),
    session: ClientSession = Depends(get_session),
    gateway: IDataSource = Depends(get_datasource),
):
    client_id = resolve_client_id(session, clientId)
    return await gateway.get_trades(session, client_id)

@app.get("/v1/holdings", response_model=List[Holding])
async def get_holdings(
    clientId: Optional[int] = Query(None),
    session: ClientSession = Depends(get_session),
    gateway: IDataSource = Depends(get_datasource),
):
    client_id = resolve_client_id(session, clientId)
    return await gateway.get_holdings(session, client_id)

@app.get("/v1/gains/realized", response_model=RealizedGainsResponse)
async def get_realized_gains(
    clientId: Optional[int] = Query(None),
    session: ClientSession = Depends(get_session),
    service: GainsService = Depends(get_service),
):
    """
    Closed-position P/L: each executed sell against the average price of earlier buys.
    Most recent sell first.
    """
    client_id = resolve_client_id(session, clientId)
    return await service.realized_gains(session, client_id)

@app.get("/v1/gains/realized/csv")
async def download_realized_gains(
    clientId: Optional[int] = Query(None),
    session: ClientSession = Depends(get_session),
    service: GainsService = Depends(get_service),
):
    client_id = resolve_client_id(session, clientId)
    report = await service.realized_gains(session, client_id)
    return _csv_response(realized_gains_to_csv(report), "realized")

@app.get("/v1/gains/unrealized", response_model=UnrealizedGainsResponse)
async def get_unrealized_gains(
    clientId: Optional[int] = Query(None),
    session: ClientSession = Depends(get_session),
    service: GainsService = Depends(get_service),
):
    """
    Open-position P/L from current holdings, in portfolio order.
    """
    client_id = resolve_client_id(session, clientId)
    return await service.unrealized_gains(session, client_id)

@app.get("/v1/gains/unrealized/csv")
async def download_unrealized_gains(
    clientId: Optional[int] = Query(None),
    session: ClientSession = Depends(get_session),
    service: GainsService = Depends(get_service),
):
    client_id = resolve_client_id(session, clientId)
    report = await service.unrealized_gains(session, client_id)
    return _csv_response(unrealized_gains_to_csv(report), "unrealized")

@app.get("/v1/gains/summary", response_model=GainsSummaryResponse)
async def get_gains_summary(
    clientId: Optional[int] = Query(None),
    session: ClientSession = Depends(get_session),
    service: GainsService = Depends(get_service),
):
    client_id = resolve_client_id(session, clientId)
    return await service.summary(session, client_id)
