"""Async HTTP client for the remote trade journal API."""
import logging
from collections.abc import Callable
from typing import Any

import httpx

from trade_journal.client.exceptions import AuthError, RequestFailed
from trade_journal.schemas import (CreatePriceAlertRequest, CreateTradeRequest,
                                   LoginCredentials, NotificationPreferences,
                                   PriceAlert, Stock, StockPrice,
                                   StockPricePoint, Trade, UpdateTradeRequest,
                                   User)
from trade_journal.session.storage import SessionStorage

logger = logging.getLogger(__name__)


async def _error_message(response: httpx.Response, default: str) -> str:
    """Pull a server-supplied message out of an error response."""
    await response.aread()
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    text = response.text.strip()
    return text or default


class JournalApiClient:
    """Client for the journal REST API (auth, stocks, trades, alerts, notifications).

    Every authenticated request reads the bearer token from the session storage
    right before it is sent. A 401 on an authenticated request calls the
    unauthorized handler (the session store's invalidate) and raises AuthError.

    No retries: a failed request fails the caller.
    """

    def __init__(
        self,
        base_url: str,
        session_storage: SessionStorage,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Root of the journal API (e.g. "http://localhost:5000/api").
            session_storage: Where the current user's token is read from.
            transport: Optional httpx transport (tests pass httpx.MockTransport).
        """
        self._session_storage = session_storage
        self._on_unauthorized: Callable[[], None] | None = None
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def set_unauthorized_handler(self, handler: Callable[[], None]) -> None:
        """Register the callback run once per 401 response."""
        self._on_unauthorized = handler

    def _auth_headers(self, path: str) -> dict[str, str]:
        user = self._session_storage.load()
        if user is None or not user.token:
            logger.warning("No token found for request: %s", path)
            return {}
        return {"Authorization": f"Bearer {user.token}"}

    async def _request(
        self,
        method: str,
        path: str,
        resource: str,
        failure: str,
        *,
        json: Any = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """Send a request and translate failures.

        Args:
            method: HTTP method.
            path: Path relative to the base URL.
            resource: Resource label carried by RequestFailed (e.g. "trades").
            failure: Default error message when the server sends none.
            json: Optional JSON body.
            authenticated: Attach the bearer token and apply the 401 rule.
        """
        headers = self._auth_headers(path) if authenticated else {}
        logger.debug("%s %s", method, path)
        response = await self._client.request(method, path, json=json, headers=headers)

        if authenticated and response.status_code == 401:
            logger.error("Unauthorized request: %s %s", method, path)
            if self._on_unauthorized is not None:
                self._on_unauthorized()
            raise AuthError()
        if response.is_error:
            message = await _error_message(response, failure)
            raise RequestFailed(resource, message, response.status_code)
        return response

    # ---- Auth ----
    async def login(self, credentials: LoginCredentials) -> User:
        response = await self._request(
            "POST", "/auth/login", "auth", "Login failed",
            json=credentials.to_api(), authenticated=False,
        )
        return User.model_validate(response.json())

    async def register(self, credentials: LoginCredentials) -> User:
        response = await self._request(
            "POST", "/auth/register", "auth", "Registration failed",
            json=credentials.to_api(), authenticated=False,
        )
        return User.model_validate(response.json())

    # ---- Stocks ----
    async def list_stocks(self) -> list[Stock]:
        response = await self._request("GET", "/stocks", "stocks", "Failed to fetch stocks")
        return [Stock.model_validate(item) for item in response.json()]

    async def get_stock(self, stock_id: int) -> Stock:
        response = await self._request(
            "GET", f"/stocks/{stock_id}", "stocks", "Failed to fetch stock"
        )
        return Stock.model_validate(response.json())

    async def list_stock_prices(self) -> list[StockPrice]:
        response = await self._request(
            "GET", "/stocks/prices", "stock prices", "Failed to fetch stock prices"
        )
        return [StockPrice.model_validate(item) for item in response.json()]

    async def get_stock_history(self, stock_id: int) -> list[StockPricePoint]:
        response = await self._request(
            "GET", f"/stocks/{stock_id}/history", "stock history",
            "Failed to fetch stock history",
        )
        return [StockPricePoint.model_validate(item) for item in response.json()]

    # ---- Trades ----
    async def list_trades(self) -> list[Trade]:
        response = await self._request("GET", "/trades", "trades", "Failed to fetch trades")
        return [Trade.model_validate(item) for item in response.json()]

    async def get_trade(self, trade_id: int) -> Trade:
        response = await self._request(
            "GET", f"/trades/{trade_id}", "trades", "Failed to fetch trade"
        )
        return Trade.model_validate(response.json())

    async def create_trade(self, trade: CreateTradeRequest) -> Trade:
        response = await self._request(
            "POST", "/trades", "trades", "Failed to create trade", json=trade.to_api()
        )
        return Trade.model_validate(response.json())

    async def update_trade(self, trade_id: int, update: UpdateTradeRequest) -> None:
        await self._request(
            "PUT", f"/trades/{trade_id}", "trades", "Failed to update trade",
            json=update.to_api(),
        )

    async def sell_trade(self, trade_id: int, pnl: float) -> None:
        """Close a holding, freezing its pnl."""
        await self._request(
            "PUT", f"/trades/{trade_id}", "trades", "Failed to sell trade",
            json=UpdateTradeRequest(pnl=pnl, is_holding=False).to_api(),
        )

    async def delete_trade(self, trade_id: int) -> None:
        await self._request(
            "DELETE", f"/trades/{trade_id}", "trades", "Failed to delete trade"
        )

    # ---- Notifications ----
    async def get_notification_preferences(self) -> NotificationPreferences:
        response = await self._request(
            "GET", "/notifications/preferences", "notification preferences",
            "Failed to fetch notification preferences",
        )
        return NotificationPreferences.model_validate(response.json())

    async def update_notification_preferences(
        self, preferences: NotificationPreferences
    ) -> None:
        """Overwrite the preferences singleton."""
        await self._request(
            "POST", "/notifications/preferences", "notification preferences",
            "Failed to update notification preferences",
            json=preferences.model_dump(mode="json", by_alias=True),
        )

    async def send_test_notification(self) -> None:
        await self._request(
            "POST", "/notifications/test", "notifications",
            "Failed to send test notification",
        )

    # ---- Price alerts ----
    async def list_price_alerts(self) -> list[PriceAlert]:
        response = await self._request(
            "GET", "/pricealerts", "price alerts", "Failed to fetch price alerts"
        )
        return [PriceAlert.model_validate(item) for item in response.json()]

    async def create_price_alert(self, alert: CreatePriceAlertRequest) -> PriceAlert:
        response = await self._request(
            "POST", "/pricealerts", "price alerts", "Failed to create price alert",
            json=alert.to_api(),
        )
        return PriceAlert.model_validate(response.json())

    async def delete_price_alert(self, alert_id: int) -> None:
        await self._request(
            "DELETE", f"/pricealerts/{alert_id}", "price alerts",
            "Failed to delete price alert",
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "JournalApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self.close()
