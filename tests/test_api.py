import pytest
from fastapi.testclient import TestClient

from chainlens.api.status import MANUAL_FALLBACK_REASON
from chainlens.config import settings
from chainlens.main import create_app
from tests.fakes import FakeIndexer, FakeLLMProvider, make_supervisor

ADDRESS = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


def _client(provider=None, indexer=None):
    app = create_app(
        supervisor=make_supervisor(provider or FakeLLMProvider(reply="model reply")),
        data_provider=indexer or FakeIndexer(balances={"polygon": 1_500_000_000_000_000_000}, gas_gwei=12.5),
        configure_logging=False,
    )
    return TestClient(app)


@pytest.fixture
def client():
    with _client() as test_client:
        yield test_client


def test_root_and_health(client):
    assert client.get("/").json()["name"] == "Chainlens API"

    health = client.get("/healthz").json()
    assert health["status"] == "healthy"
    assert health["model"]["connected"] is True


def test_chat_uses_model(client):
    resp = client.post("/api/chat", json={"message": "hello there"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["response"] == "model reply"
    assert data["mcpConnected"] is True
    assert data["fallbackMode"] is False
    assert data["usedModel"] is True
    assert data["status"] == "AI Active"
    assert data["intent"] == "generalChat"


def test_chat_gas_answer(client):
    data = client.post("/api/chat", json={"message": "Show gas price on Ethereum"}).json()

    assert data["response"] == "⛽ Gas price on ETHEREUM: ~12.5 Gwei (estimate)"
    assert data["usedModel"] is False


def test_empty_chat_message_is_rejected(client):
    assert client.post("/api/chat", json={"message": ""}).status_code == 422


def test_force_fallback_and_restart(client):
    forced = client.post("/api/force-fallback").json()
    assert forced["success"] is True
    assert forced["mcp"]["fallbackActive"] is True
    assert forced["mcp"]["lastError"] == MANUAL_FALLBACK_REASON

    chat = client.post("/api/chat", json={"message": "hello there"}).json()
    assert chat["status"] == "Fallback Mode"
    assert chat["fallbackMode"] is True
    assert '**Your Query:** "hello there"' in chat["response"]

    restarted = client.post("/api/mcp-restart").json()
    assert restarted["success"] is True
    assert restarted["mcp"]["connected"] is True
    assert restarted["mcp"]["fallbackActive"] is False


def test_status_endpoints(client):
    mcp = client.get("/api/mcp-status").json()
    assert mcp["success"] is True
    assert mcp["mcp"]["state"] == "connected"
    assert mcp["mcp"]["maxRetries"] == settings.max_retries

    status = client.get("/api/status").json()
    assert status["server"]["status"] == "running"
    assert status["server"]["port"] == settings.port
    assert status["mcp"]["status"] == "active"
    assert status["mcp"]["fallbackMode"] is False


def test_startup_failure_serves_fallback():
    with _client(provider=FakeLLMProvider(fail=True)) as client:
        mcp = client.get("/api/mcp-status").json()["mcp"]
        chat = client.post("/api/chat", json={"message": "help"}).json()

    assert mcp["fallbackActive"] is True
    assert mcp["lastError"].startswith("Model initialization failed")
    assert chat["usedModel"] is False
    assert "Available Commands in Fallback Mode" in chat["response"]


def test_chains(client):
    chains = client.get("/api/chains").json()["chains"]

    assert len(chains) == 6
    assert chains[0] == {"id": "ethereum", "name": "Ethereum", "symbol": "ETH"}


def test_wallet_balance(client):
    data = client.get(f"/api/wallet/{ADDRESS}", params={"chain": "matic"}).json()

    assert data["chain"] == "polygon"
    assert data["balance"] == {"balance": "1.500000", "usdValue": 0}


def test_wallet_validation(client):
    assert client.get("/api/wallet/0x123").status_code == 400
    assert client.get(f"/api/wallet/{ADDRESS}", params={"chain": "solana"}).status_code == 400


def test_wallet_upstream_failure():
    with _client(indexer=FakeIndexer(failing={"ethereum"})) as client:
        resp = client.get(f"/api/wallet/{ADDRESS}")

    assert resp.status_code == 502


def test_gas_tiers(client):
    data = client.get("/api/gas/ethereum").json()

    assert data["chain"] == "ethereum"
    assert data["gasPrice"] == {"slow": 10, "standard": 13, "fast": 15, "baseFee": 11}


def test_analytics(client):
    data = client.get("/api/analytics").json()["data"]

    assert data["totalChains"] == 6
    assert data["reachableChains"] == 6
    assert data["chainDistribution"]["bsc"]["gasPrice"] == 12.5


def test_api_key_endpoints(client, monkeypatch):
    assert client.post("/api/test-key", json={"apiKey": ""}).status_code == 400
    assert client.post("/api/test-key", json={"apiKey": "good-key"}).json()["success"] is True
    assert client.post("/api/test-key", json={"apiKey": "bad"}).json()["success"] is False

    monkeypatch.setattr(settings, "tatum_api_key", "")
    current = client.get("/api/test-current-key").json()
    assert current["success"] is False
    assert current["message"] == "API key not configured"
