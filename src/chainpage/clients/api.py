"""Async client for the page API.

This is the consumer side of `/api/transactions` and `/api/logs`: it
requests one page and turns the JSON body back into typed records
(`gasPrice`/`value` become ints again).

Timeouts are disabled on purpose: a page request may stream for as long
as the indexer needs.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from chainpage.core.models import Sort


class PageApiError(RuntimeError):
    """The API answered with a degraded page carrying an error."""


class PaginationModel(BaseModel):
    cursor: int | None
    height: int | None


class TransactionModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    block_number: int = Field(alias="blockNumber")
    block_timestamp: int = Field(alias="blockTimestamp")
    from_: str = Field(alias="from")
    gas_price: int = Field(alias="gasPrice")
    hash: str
    input: str
    to: str | None = None
    transaction_index: int | None = Field(default=None, alias="transactionIndex")
    value: int
    status: int | None = None


class LogModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    block_number: int = Field(alias="blockNumber")
    block_timestamp: int = Field(alias="blockTimestamp")
    transaction_hash: str = Field(alias="transactionHash")
    log_index: int | None = Field(default=None, alias="logIndex")
    address: str
    topics: list[str]
    data: str


class AddressTransactions(BaseModel):
    transactions: list[TransactionModel]
    pagination: PaginationModel
    error: str | None = None


class AddressLogs(BaseModel):
    logs: list[LogModel]
    pagination: PaginationModel
    error: str | None = None


class PageApiClient:
    """Client for one chain of the page API.

    Parameters
    ----------
    base_url : str
        Application base URL; requests go to `{base_url}/api/...`.
    chain : int
        Chain id sent with every request.
    """

    def __init__(self, base_url: str, chain: int, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.chain = chain
        self.client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/api",
            timeout=None,
            transport=transport,
        )

    @staticmethod
    def default_sort() -> Sort:
        return "desc"

    async def _get(self, path: str, address: str, cursor: int | None, limit: int, sort: Sort) -> Any:
        r = await self.client.get(
            path,
            params={
                "chain": self.chain,
                "address": address,
                "cursor": cursor or 0,
                "limit": limit,
                "sort": sort,
            },
        )
        r.raise_for_status()
        return r.json()

    async def get_address_transactions(
        self,
        address: str,
        cursor: int | None,
        limit: int,
        sort: Sort,
    ) -> AddressTransactions:
        body = AddressTransactions.model_validate(await self._get("transactions", address, cursor, limit, sort))
        if body.error:
            raise PageApiError(body.error)
        return body

    async def get_address_logs(
        self,
        address: str,
        cursor: int | None,
        limit: int,
        sort: Sort,
    ) -> AddressLogs:
        body = AddressLogs.model_validate(await self._get("logs", address, cursor, limit, sort))
        if body.error:
            raise PageApiError(body.error)
        return body

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()
