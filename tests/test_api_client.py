import json

import httpx
import pytest

from conftest import BASE_URL, TOKEN
from trade_journal.client import (AuthError, ClientErrorMapper,
                                  JournalApiClient, RequestFailed,
                                  ValidationError)
from trade_journal.schemas import (CreatePriceAlertRequest, CreateTradeRequest,
                                   LoginCredentials, NotificationPreferences)
from trade_journal.session import InMemorySessionStorage


async def test_authenticated_requests_carry_bearer_token(client, api):
    stocks = await client.list_stocks()
    assert [s.symbol for s in stocks] == ["AAPL", "MSFT", "AMZN"]
    assert api.requests[-1].headers["Authorization"] == f"Bearer {TOKEN}"


async def test_login_sends_no_token_and_returns_user(client, api):
    user = await client.login(LoginCredentials(username="alice", password="secret"))
    assert user.token == TOKEN
    request = api.requests[-1]
    assert "Authorization" not in request.headers
    assert json.loads(request.content) == {"username": "alice", "password": "secret"}


async def test_login_failure_is_request_failed_not_auth_error(client, api):
    handler_calls = []
    client.set_unauthorized_handler(lambda: handler_calls.append(1))
    with pytest.raises(RequestFailed) as excinfo:
        await client.login(LoginCredentials(username="alice", password="wrong"))
    assert excinfo.value.message == "Invalid username or password"
    assert excinfo.value.status_code == 401
    assert handler_calls == []


async def test_401_runs_unauthorized_handler_once(api):
    storage = InMemorySessionStorage()
    calls = []
    async with JournalApiClient(BASE_URL, storage, transport=api.transport()) as client:
        client.set_unauthorized_handler(lambda: calls.append("invalidated"))
        with pytest.raises(AuthError):
            await client.list_trades()
    assert calls == ["invalidated"]


async def test_error_message_prefers_json_message(client, api):
    api.fail[("GET", "/trades")] = (500, {"message": "database unavailable"})
    with pytest.raises(RequestFailed) as excinfo:
        await client.list_trades()
    assert excinfo.value.resource == "trades"
    assert excinfo.value.message == "database unavailable"
    assert excinfo.value.status_code == 500


async def test_error_message_falls_back_to_text_then_default(client, api):
    api.fail[("GET", "/pricealerts")] = (503, "maintenance")
    with pytest.raises(RequestFailed, match="maintenance"):
        await client.list_price_alerts()

    api.fail[("GET", "/pricealerts")] = (500, "")
    with pytest.raises(RequestFailed, match="Failed to fetch price alerts"):
        await client.list_price_alerts()


async def test_trade_bodies_are_camel_case(client, api):
    trade = await client.create_trade(CreateTradeRequest(stock_id=2, entry_price=200.0))
    assert json.loads(api.requests[-1].content) == {
        "stockId": 2, "entryPrice": 200.0, "isHolding": True,
    }
    await client.sell_trade(trade.id, 12.5)
    assert api.requests[-1].method == "PUT"
    assert json.loads(api.requests[-1].content) == {"pnl": 12.5, "isHolding": False}
    assert (await client.get_trade(trade.id)).is_holding is False


async def test_price_history_and_prices(client):
    history = await client.get_stock_history(1)
    assert [p.price for p in history] == [90.0, 92.0, 95.0, 98.0, 100.0]
    prices = await client.list_stock_prices()
    assert {p.id: p.price for p in prices} == {1: 100.0, 2: 200.0, 3: 50.0}


async def test_alerts_and_notifications(client, api):
    alert = await client.create_price_alert(
        CreatePriceAlertRequest(stock_id=1, target_price=120.0, is_above_target=False)
    )
    assert alert.is_above_target is False
    await client.delete_price_alert(alert.id)
    assert [a.id for a in await client.list_price_alerts()] == [30]

    prefs = NotificationPreferences(email="a@example.com", email_notifications_enabled=True)
    await client.update_notification_preferences(prefs)
    assert api.preferences == {"email": "a@example.com", "emailNotificationsEnabled": True}
    assert await client.get_notification_preferences() == prefs
    await client.send_test_notification()
    assert api.count("POST", "/notifications/test") == 1


async def test_missing_stock_is_404(client):
    with pytest.raises(RequestFailed) as excinfo:
        await client.get_stock(99)
    assert excinfo.value.status_code == 404


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (ValidationError("Please enter a valid price"), (422, "Please enter a valid price")),
        (RequestFailed("stocks", "Stock not found", 404), (404, "Stock not found")),
        (RequestFailed("trades", "boom", 500), (502, "boom")),
        (RequestFailed("trades", "Bad input", 400), (400, "Bad input")),
        (httpx.ReadTimeout("slow"), (504, "Request to Journal API timed out")),
        (httpx.ConnectError("down"), (502, "Journal API unreachable")),
        (RuntimeError("bug"), (500, "Internal server error")),
    ],
)
def test_error_mapper(exc, expected):
    assert ClientErrorMapper().to_http(exc) == expected
