"""HTTP API serving address history pages.

Endpoints
---------
- GET /api/transactions
- GET /api/logs

Both take `chain`, `address`, `cursor`, `limit` and `sort`, and answer with
`{<records>: [...], pagination: {cursor, height}}`. A failed page answers
with the degraded body and an `error` string; its status stays 200 unless
`ServerConfig.strict_errors` is set.
"""

from __future__ import annotations

from typing import Literal

from eth_utils import is_address
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse

from chainpage.core.config import IndexerConfig, ServerConfig
from chainpage.core.errors import BatchDecodeError, IndexerError
from chainpage.core.interfaces import IRecordKind
from chainpage.core.models import Page
from chainpage.kinds import LOGS, TRANSACTIONS
from chainpage.paging.pager import PageRequest, PageService


def error_status(page: Page, strict: bool) -> int:
    if page.error is None or not strict:
        return 200
    if page.cause is not None and issubclass(page.cause, (IndexerError, BatchDecodeError)):
        return 502
    return 500


def create_app(
    indexer_config: IndexerConfig | None = None,
    server_config: ServerConfig | None = None,
    *,
    service: PageService | None = None,
) -> FastAPI:
    """Build the FastAPI app around one `PageService`."""
    server_config = server_config or ServerConfig()
    service = service or PageService(indexer_config or IndexerConfig())

    app = FastAPI(title="Address History API")
    app.state.page_service = service
    app.state.server_config = server_config

    async def serve_page(
        kind: IRecordKind,
        chain: int,
        address: str,
        cursor: int | None,
        limit: int,
        sort: Literal["asc", "desc"],
    ) -> JSONResponse:
        if not is_address(address):
            raise HTTPException(status_code=422, detail=f"invalid address: {address}")
        page = await service.fetch_page(
            kind,
            PageRequest(chain=chain, address=address, cursor=cursor, limit=limit, sort=sort),
        )
        return JSONResponse(content=page.to_dict(), status_code=error_status(page, server_config.strict_errors))

    @app.get("/api/transactions")
    async def get_transactions(
        chain: int = Query(..., gt=0, description="Numeric chain id"),
        address: str = Query(..., description="0x-prefixed 20-byte address"),
        cursor: int | None = Query(None, ge=0, description="Block to resume from; absent or 0 starts the range"),
        limit: int = Query(..., gt=0, description="Max records per page"),
        sort: Literal["asc", "desc"] = Query("desc"),
    ) -> JSONResponse:
        return await serve_page(TRANSACTIONS, chain, address, cursor, limit, sort)

    @app.get("/api/logs")
    async def get_logs(
        chain: int = Query(..., gt=0, description="Numeric chain id"),
        address: str = Query(..., description="0x-prefixed 20-byte address"),
        cursor: int | None = Query(None, ge=0, description="Block to resume from; absent or 0 starts the range"),
        limit: int = Query(..., gt=0, description="Max records per page"),
        sort: Literal["asc", "desc"] = Query("desc"),
    ) -> JSONResponse:
        return await serve_page(LOGS, chain, address, cursor, limit, sort)

    return app
