import asyncio
import json
from datetime import datetime, timezone
from typing import cast

import click
from eth_utils import is_address
from rich.console import Console
from rich.table import Table

from .chains import CHAIN_NAMES, get_chain_name
from .core.config import IndexerConfig, ServerConfig
from .core.errors import CursorStalledError
from .core.interfaces import IRecordKind
from .core.models import Log, Page, Sort, Transaction
from .kinds import LOGS, TRANSACTIONS
from .log import setup_logging
from .paging.pager import PageRequest, PageService

console = Console()


@click.group()
@click.option("--log-level", default="INFO", show_default=True, help="loguru level for stderr output")
def cli(log_level: str) -> None:
    """chainpage: cursor-paginated address history over HyperSync."""
    setup_logging(log_level)


@cli.command("serve")
@click.option("--host", default=None, help="Bind host (default: CHAINPAGE_HOST or 127.0.0.1)")
@click.option("--port", type=int, default=None, help="Bind port (default: CHAINPAGE_PORT or 3000)")
def serve_cmd(host: str | None, port: int | None) -> None:
    """Serve /api/transactions and /api/logs."""
    import uvicorn

    from .api.server import create_app

    server_config = ServerConfig.from_env()
    app = create_app(IndexerConfig.from_env(), server_config)
    uvicorn.run(app, host=host or server_config.host, port=port or server_config.port)


@cli.command("chains")
def chains_cmd() -> None:
    """List known chains."""
    console.print("[bold]Available chains[/]:")
    for chain_id in CHAIN_NAMES:
        console.print(f"  {chain_id}: {get_chain_name(chain_id)}")


def _fmt_ts(ms: int) -> str:
    if not ms:
        return "-"
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def _render(page: Page, title: str) -> Table:
    table = Table(title=title, expand=True)
    if page.key == TRANSACTIONS.name:
        for col in ("block", "time (UTC)", "hash", "from", "to", "value", "status"):
            table.add_column(col, overflow="fold")
        for tx in cast(list[Transaction], page.records):
            table.add_row(
                str(tx.block_number),
                _fmt_ts(tx.block_timestamp),
                tx.hash,
                tx.from_,
                tx.to or "[dim]create[/]",
                tx.value,
                "-" if tx.status is None else str(tx.status),
            )
    else:
        for col in ("block", "time (UTC)", "tx hash", "index", "topic0", "topics"):
            table.add_column(col, overflow="fold")
        for lg in cast(list[Log], page.records):
            table.add_row(
                str(lg.block_number),
                _fmt_ts(lg.block_timestamp),
                lg.transaction_hash,
                "-" if lg.log_index is None else str(lg.log_index),
                lg.topics[0] if lg.topics else "-",
                str(len(lg.topics)),
            )
    return table


def _run_pages(
    kind: IRecordKind,
    chain: int,
    address: str,
    cursor: int | None,
    limit: int,
    sort: Sort,
    pages: int,
    as_json: bool,
) -> None:
    service = PageService(IndexerConfig.from_env())

    async def run() -> None:
        request = PageRequest(chain=chain, address=address, cursor=cursor, limit=limit, sort=sort)
        n = 0
        async for page in service.walk(kind, request, pages):
            n += 1
            if page.error is not None:
                raise click.ClickException(page.error)
            if as_json:
                click.echo(json.dumps(page.to_dict()))
            else:
                console.print(_render(page, f"{get_chain_name(chain)} {kind.name} • page {n}"))
                console.print(
                    f"[bold]pagination[/]: cursor={page.pagination.cursor}  height={page.pagination.height}"
                )

    try:
        asyncio.run(run())
    except CursorStalledError as e:
        raise click.ClickException(str(e)) from e


def _check_address(ctx: click.Context, param: click.Parameter, value: str) -> str:
    if not is_address(value):
        raise click.BadParameter(f"not a 20-byte hex address: {value}")
    return value


def _page_options(fn):
    fn = click.argument("address", callback=_check_address)(fn)
    fn = click.argument("chain", type=click.IntRange(min=1))(fn)
    fn = click.option("--cursor", type=click.IntRange(min=0), default=None, help="Block to resume from")(fn)
    fn = click.option("--limit", type=click.IntRange(min=1), default=25, show_default=True)(fn)
    fn = click.option("--sort", type=click.Choice(["asc", "desc"]), default="desc", show_default=True)(fn)
    fn = click.option("--pages", type=click.IntRange(min=1), default=1, show_default=True, help="Follow the cursor for N pages")(fn)
    fn = click.option("--json", "as_json", is_flag=True, help="Print raw page JSON instead of a table")(fn)
    return fn


@cli.command("transactions")
@_page_options
def transactions_cmd(
    chain: int,
    address: str,
    cursor: int | None,
    limit: int,
    sort: Sort,
    pages: int,
    as_json: bool,
) -> None:
    """Fetch transactions sent from or to ADDRESS on CHAIN."""
    _run_pages(TRANSACTIONS, chain, address, cursor, limit, sort, pages, as_json)


@cli.command("logs")
@_page_options
def logs_cmd(
    chain: int,
    address: str,
    cursor: int | None,
    limit: int,
    sort: Sort,
    pages: int,
    as_json: bool,
) -> None:
    """Fetch logs emitted by ADDRESS on CHAIN."""
    _run_pages(LOGS, chain, address, cursor, limit, sort, pages, as_json)


if __name__ == "__main__":
    cli()
