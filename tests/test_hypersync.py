from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from chainpage.clients import hypersync as hs
from chainpage.core.config import IndexerConfig
from chainpage.core.errors import BatchDecodeError, IndexerError
from chainpage.kinds import LOGS, TRANSACTIONS
from chainpage.paging.query import build_query

ADDRESS = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"


def _response(**data) -> SimpleNamespace:
    return SimpleNamespace(
        data=SimpleNamespace(
            blocks=data.get("blocks", []),
            transactions=data.get("transactions", []),
            logs=data.get("logs", []),
        ),
        archive_height=data.get("archive_height", 20_000_000),
        next_block=data.get("next_block", 19_999_000),
    )


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, None),
        ("", None),
        (17, 17),
        ("0x10", 16),
        ("0x", 0),
        ("42", 42),
        ("0x" + "f" * 64, 2**256 - 1),
    ],
)
def test_parse_int(raw, expected) -> None:
    assert hs.parse_int(raw) == expected


def test_parse_int_rejects_other_types() -> None:
    with pytest.raises(BatchDecodeError):
        hs.parse_int(1.5)
    with pytest.raises(BatchDecodeError):
        hs.parse_int(True)


def test_decode_response_transactions() -> None:
    tx = SimpleNamespace(
        block_number=100,
        transaction_index=2,
        hash="0xabc",
        from_=ADDRESS,
        to=None,
        input="0x60806040",
        value="0xde0b6b3a7640000",
        gas_price="0x3b9aca00",
        status=1,
    )
    batch = hs.decode_response(
        _response(blocks=[SimpleNamespace(number=100, timestamp="0x6553f100")], transactions=[tx])
    )

    assert batch.blocks[0].number == 100
    assert batch.blocks[0].timestamp == 0x6553F100
    raw = batch.transactions[0]
    assert raw.from_ == ADDRESS
    assert raw.to is None
    assert raw.value == 10**18
    assert raw.gas_price == 10**9
    assert batch.archive_height == 20_000_000
    assert batch.next_block == 19_999_000


def test_decode_response_logs_keep_null_topics() -> None:
    lg = SimpleNamespace(
        block_number=5,
        log_index=0,
        transaction_hash="0xdef",
        address=ADDRESS,
        data="0x",
        topics=["0xa", None, None, None],
    )
    batch = hs.decode_response(_response(logs=[lg]))

    assert batch.logs[0].topics == ("0xa", None, None, None)
    assert batch.transactions == []


def test_decode_response_without_block_number_fails() -> None:
    with pytest.raises(BatchDecodeError):
        hs.decode_response(_response(blocks=[SimpleNamespace(number=None, timestamp=1)]))


def test_decode_response_with_malformed_data_fails() -> None:
    with pytest.raises(BatchDecodeError):
        hs.decode_response(SimpleNamespace())


def test_to_hypersync_query_transactions() -> None:
    q = hs.to_hypersync_query(build_query(TRANSACTIONS, address=ADDRESS, cursor=500, sort="desc", limit=25))

    assert q.from_block == 0
    assert q.to_block == 501
    assert q.max_num_transactions == 25
    assert [t.from_ for t in q.transactions] == [[ADDRESS], None]
    assert [t.to for t in q.transactions] == [None, [ADDRESS]]


def test_to_hypersync_query_logs() -> None:
    q = hs.to_hypersync_query(build_query(LOGS, address=ADDRESS, cursor=None, sort="asc", limit=10))

    assert q.from_block == 0
    assert q.to_block is None
    assert q.max_num_logs == 10
    assert q.logs[0].address == [ADDRESS]


@pytest.mark.asyncio
async def test_receiver_decodes_and_ends() -> None:
    inner = MagicMock()
    inner.recv = AsyncMock(side_effect=[_response(), None])
    inner.close = AsyncMock()
    receiver = hs.HypersyncReceiver(inner)

    first = await receiver.recv()
    assert first is not None and first.archive_height == 20_000_000
    assert await receiver.recv() is None

    await receiver.close()
    await receiver.close()
    inner.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_receiver_wraps_transport_errors() -> None:
    inner = MagicMock()
    inner.recv = AsyncMock(side_effect=ConnectionError("reset"))
    receiver = hs.HypersyncReceiver(inner)

    with pytest.raises(IndexerError, match="reset"):
        await receiver.recv()


@pytest.mark.asyncio
async def test_indexer_opens_stream_with_direction_and_limit(monkeypatch) -> None:
    client = MagicMock()
    client.stream = AsyncMock(return_value=MagicMock())
    client_cls = MagicMock(return_value=client)
    monkeypatch.setattr(hs.hypersync, "HypersyncClient", client_cls)

    indexer = hs.HypersyncIndexer.for_chain(IndexerConfig(bearer_token="tok"), 8453)
    query = build_query(LOGS, address=ADDRESS, cursor=None, sort="desc", limit=7)
    receiver = await indexer.stream(query, reverse=True, limit=7)

    assert isinstance(receiver, hs.HypersyncReceiver)
    assert indexer.url == "https://8453.hypersync.xyz"
    client_config = client_cls.call_args.args[0]
    assert client_config.url == "https://8453.hypersync.xyz"
    assert client_config.bearer_token == "tok"
    _, stream_config = client.stream.call_args.args
    assert stream_config.reverse is True
    assert stream_config.max_num_logs == 7


@pytest.mark.asyncio
async def test_indexer_wraps_open_errors(monkeypatch) -> None:
    client = MagicMock()
    client.stream = AsyncMock(side_effect=RuntimeError("401 unauthorized"))
    monkeypatch.setattr(hs.hypersync, "HypersyncClient", MagicMock(return_value=client))

    indexer = hs.HypersyncIndexer("https://1.hypersync.xyz")
    query = build_query(TRANSACTIONS, address=ADDRESS, cursor=None, sort="asc", limit=1)

    with pytest.raises(IndexerError, match="401"):
        await indexer.stream(query, reverse=False, limit=1)
