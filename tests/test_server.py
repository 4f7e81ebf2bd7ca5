import pytest
from fakes import FakeIndexer, make_log, make_tx
from fastapi.testclient import TestClient

from chainpage.api.server import create_app
from chainpage.core.config import ServerConfig
from chainpage.core.errors import RecordMappingError

ADDRESS = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


@pytest.fixture
def indexer() -> FakeIndexer:
    return FakeIndexer(
        transactions=[make_tx(b) for b in (100, 99, 98)],
        logs=[make_log(b, topics=("0xa", "0xb", None, None)) for b in (100, 99, 98)],
    )


@pytest.fixture
def client(make_service, indexer) -> TestClient:
    return TestClient(create_app(service=make_service(indexer)))


def test_transactions_page(client: TestClient) -> None:
    r = client.get("/api/transactions", params={"chain": 1, "address": ADDRESS, "limit": 2, "sort": "desc"})

    assert r.status_code == 200
    body = r.json()
    assert [t["blockNumber"] for t in body["transactions"]] == [100, 99]
    assert body["pagination"] == {"cursor": 98, "height": 1000}
    assert "error" not in body
    tx = body["transactions"][0]
    assert tx["gasPrice"] == "1000000000"
    assert tx["value"] == "1"


def test_logs_page_follows_cursor(client: TestClient) -> None:
    first = client.get("/api/logs", params={"chain": 1, "address": ADDRESS, "limit": 2}).json()
    assert first["pagination"]["cursor"] == 98
    assert first["logs"][0]["topics"] == ["0xa", "0xb"]

    second = client.get(
        "/api/logs",
        params={"chain": 1, "address": ADDRESS, "limit": 2, "cursor": first["pagination"]["cursor"]},
    ).json()
    assert [lg["blockNumber"] for lg in second["logs"]] == [98]
    assert second["pagination"]["cursor"] == -1


def test_cursor_zero_starts_the_range(client: TestClient, indexer: FakeIndexer) -> None:
    r = client.get("/api/transactions", params={"chain": 1, "address": ADDRESS, "limit": 5, "cursor": 0})

    assert len(r.json()["transactions"]) == 3
    query, _, _ = indexer.queries[-1]
    assert query.to_block is None


def test_failure_keeps_status_200(make_service) -> None:
    app = create_app(service=make_service(FakeIndexer(transactions=[make_tx(1)], fail_after=0)))
    r = TestClient(app).get("/api/transactions", params={"chain": 1, "address": ADDRESS, "limit": 5})

    assert r.status_code == 200
    assert r.json() == {
        "transactions": [],
        "pagination": {"cursor": -1, "height": None},
        "error": "connection reset by peer",
    }


def test_strict_errors_map_to_gateway_status(make_service) -> None:
    app = create_app(
        server_config=ServerConfig(strict_errors=True),
        service=make_service(FakeIndexer(logs=[make_log(1)], fail_after=0)),
    )
    r = TestClient(app).get("/api/logs", params={"chain": 1, "address": ADDRESS, "limit": 5})

    assert r.status_code == 502
    assert r.json()["error"] == "connection reset by peer"


def test_strict_errors_map_other_failures_to_500(indexer_config) -> None:
    from chainpage.paging.pager import PageService

    def factory(config, chain):
        raise RecordMappingError("bad shape")

    app = create_app(server_config=ServerConfig(strict_errors=True), service=PageService(indexer_config, indexer_factory=factory))
    r = TestClient(app).get("/api/logs", params={"chain": 1, "address": ADDRESS, "limit": 5})

    assert r.status_code == 500
    assert r.json()["logs"] == []


@pytest.mark.parametrize(
    "params",
    [
        {"chain": 1, "address": "0x1234", "limit": 5},
        {"chain": 1, "address": ADDRESS, "limit": 0},
        {"chain": 0, "address": ADDRESS, "limit": 5},
        {"chain": 1, "address": ADDRESS, "limit": 5, "sort": "sideways"},
        {"chain": 1, "address": ADDRESS, "limit": 5, "cursor": -1},
        {"address": ADDRESS, "limit": 5},
    ],
)
def test_invalid_requests_are_rejected(client: TestClient, indexer: FakeIndexer, params) -> None:
    r = client.get("/api/transactions", params=params)

    assert r.status_code == 422
    assert indexer.queries == []
