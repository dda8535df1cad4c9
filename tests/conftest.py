"""Shared fixtures: an in-memory journal API served through httpx.MockTransport."""
import json
from typing import Any

import httpx
import pytest

from trade_journal.client import JournalApiClient
from trade_journal.polling import PricePoller
from trade_journal.schemas import User
from trade_journal.session import InMemorySessionStorage, Navigator, SessionStore

BASE_URL = "http://journal.test/api"
TOKEN = "token-alice"


def _history(prices: list[float]) -> list[dict[str, Any]]:
    return [
        {"date": f"2024-03-{day:02d}T16:00:00", "price": price}
        for day, price in enumerate(prices, start=1)
    ]


class FakeJournalApi:
    """Minimal stand-in for the remote journal API.

    Authenticated routes require "Bearer <TOKEN>". `fail` forces a response for
    (method, path): {("GET", "/trades"): (500, {"message": "boom"})}.
    """

    def __init__(self) -> None:
        self.users = {"alice": "secret"}
        self.stocks: dict[int, dict[str, Any]] = {
            1: {"id": 1, "symbol": "AAPL", "name": "Apple Inc.", "price": 100.0,
                "description": "Consumer electronics"},
            2: {"id": 2, "symbol": "MSFT", "name": "Microsoft", "price": 200.0,
                "description": "Software"},
            3: {"id": 3, "symbol": "AMZN", "name": "Amazon", "price": 50.0,
                "description": "Retail"},
        }
        self.history: dict[int, list[dict[str, Any]]] = {
            1: _history([90.0, 92.0, 95.0, 98.0, 100.0]),
            2: _history([210.0, 205.0, 220.0, 250.0]),
            3: _history([50.0]),
        }
        self.trades: dict[int, dict[str, Any]] = {
            10: {"id": 10, "stockId": 1, "stockSymbol": "AAPL", "stockName": "Apple Inc.",
                 "entryPrice": 80.0, "pnl": 0.0, "date": "2024-03-01T10:00:00",
                 "isHolding": True},
            11: {"id": 11, "stockId": 2, "stockSymbol": "MSFT", "stockName": "Microsoft",
                 "entryPrice": 210.0, "pnl": -15.0, "date": "2024-03-02T10:00:00",
                 "isHolding": False},
        }
        self.alerts: dict[int, dict[str, Any]] = {
            30: {"id": 30, "stockId": 1, "stockSymbol": "AAPL", "stockName": "Apple Inc.",
                 "targetPrice": 150.0, "isAboveTarget": True, "isTriggered": False,
                 "createdAt": "2024-03-03T09:00:00"},
        }
        self.preferences: dict[str, Any] = {"email": "", "emailNotificationsEnabled": False}
        self.fail: dict[tuple[str, str], tuple[int, Any]] = {}
        self.requests: list[httpx.Request] = []
        self._next_id = 100

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def count(self, method: str, path: str) -> int:
        return sum(
            1 for r in self.requests
            if r.method == method and r.url.path == f"/api{path}"
        )

    def set_price(self, stock_id: int, price: float) -> None:
        self.stocks[stock_id]["price"] = price

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        method = request.method
        if (method, path) in self.fail:
            status, body = self.fail[(method, path)]
            if isinstance(body, str):
                return httpx.Response(status, text=body)
            return httpx.Response(status, json=body)

        body = json.loads(request.content) if request.content else None
        parts = path.strip("/").split("/")

        if parts[0] == "auth":
            return self._auth(parts[1], body)
        if request.headers.get("Authorization") != f"Bearer {TOKEN}":
            return httpx.Response(401, text="Unauthorized")

        if parts[0] == "stocks":
            return self._stocks(parts)
        if parts[0] == "trades":
            return self._trades(method, parts, body)
        if parts[0] == "pricealerts":
            return self._alerts(method, parts, body)
        if parts[0] == "notifications":
            if parts[1] == "test":
                return httpx.Response(200, json={"sent": True})
            if method == "POST":
                self.preferences = body
                return httpx.Response(200, json=body)
            return httpx.Response(200, json=self.preferences)
        return httpx.Response(404, json={"message": "Not found"})

    def _auth(self, action: str, body: dict[str, Any]) -> httpx.Response:
        username, password = body["username"], body["password"]
        if action == "register":
            if username in self.users:
                return httpx.Response(400, text="Username already exists")
            self.users[username] = password
        elif self.users.get(username) != password:
            return httpx.Response(401, text="Invalid username or password")
        return httpx.Response(200, json={"username": username, "token": TOKEN})

    def _stocks(self, parts: list[str]) -> httpx.Response:
        if len(parts) == 1:
            return httpx.Response(200, json=list(self.stocks.values()))
        if parts[1] == "prices":
            return httpx.Response(200, json=[
                {"id": s["id"], "symbol": s["symbol"], "price": s["price"]}
                for s in self.stocks.values()
            ])
        stock_id = int(parts[1])
        if stock_id not in self.stocks:
            return httpx.Response(404, json={"message": "Stock not found"})
        if len(parts) == 3:
            return httpx.Response(200, json=self.history.get(stock_id, []))
        return httpx.Response(200, json=self.stocks[stock_id])

    def _trades(self, method: str, parts: list[str], body: Any) -> httpx.Response:
        if len(parts) == 1:
            if method == "POST":
                stock = self.stocks[body["stockId"]]
                trade = {
                    "id": self._new_id(), "stockId": stock["id"],
                    "stockSymbol": stock["symbol"], "stockName": stock["name"],
                    "entryPrice": body["entryPrice"], "pnl": 0.0,
                    "date": "2024-03-10T10:00:00", "isHolding": body["isHolding"],
                }
                self.trades[trade["id"]] = trade
                return httpx.Response(201, json=trade)
            return httpx.Response(200, json=list(self.trades.values()))
        trade_id = int(parts[1])
        if trade_id not in self.trades:
            return httpx.Response(404, json={"message": "Trade not found"})
        if method == "PUT":
            self.trades[trade_id].update(pnl=body["pnl"], isHolding=body["isHolding"])
            return httpx.Response(204)
        if method == "DELETE":
            del self.trades[trade_id]
            return httpx.Response(204)
        return httpx.Response(200, json=self.trades[trade_id])

    def _alerts(self, method: str, parts: list[str], body: Any) -> httpx.Response:
        if len(parts) == 1:
            if method == "POST":
                stock = self.stocks[body["stockId"]]
                alert = {
                    "id": self._new_id(), "stockId": stock["id"],
                    "stockSymbol": stock["symbol"], "stockName": stock["name"],
                    "targetPrice": body["targetPrice"],
                    "isAboveTarget": body["isAboveTarget"], "isTriggered": False,
                    "createdAt": "2024-03-10T10:00:00",
                }
                self.alerts[alert["id"]] = alert
                return httpx.Response(201, json=alert)
            return httpx.Response(200, json=list(self.alerts.values()))
        self.alerts.pop(int(parts[1]), None)
        return httpx.Response(204)


class RecordingPoller(PricePoller):
    """PricePoller that never starts a background loop; tests drive it with poll_once()."""

    def _start(self) -> None:
        pass


@pytest.fixture
def api() -> FakeJournalApi:
    return FakeJournalApi()


@pytest.fixture
def storage() -> InMemorySessionStorage:
    return InMemorySessionStorage(User(username="alice", token=TOKEN))


@pytest.fixture
async def client(api: FakeJournalApi, storage: InMemorySessionStorage):
    async with JournalApiClient(BASE_URL, storage, transport=api.transport()) as journal:
        yield journal


@pytest.fixture
def navigator() -> Navigator:
    return Navigator()


@pytest.fixture
def session(client: JournalApiClient, storage: InMemorySessionStorage,
            navigator: Navigator) -> SessionStore:
    store = SessionStore(client, storage, navigator)
    store.load()
    return store


@pytest.fixture
def poller(client: JournalApiClient) -> RecordingPoller:
    return RecordingPoller(client.list_stock_prices)
