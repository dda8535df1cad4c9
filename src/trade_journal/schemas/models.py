"""Pydantic models for journal API entities (camelCase on the wire)."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes the API's camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_api(self) -> dict:
        """Serialize for a request body."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class LoginCredentials(CamelModel):
    username: str
    password: str


class User(CamelModel):
    """Authenticated user as returned by login/register."""

    username: str
    token: str


class Stock(CamelModel):
    id: int
    symbol: str
    name: str
    price: float
    description: str | None = None


class StockPrice(CamelModel):
    """Element of the lightweight price-list endpoint."""

    id: int
    symbol: str | None = None
    price: float


class StockPricePoint(CamelModel):
    date: datetime
    price: float


class Trade(CamelModel):
    """A position. Holdings track the live price; closed trades carry a frozen pnl."""

    id: int
    stock_id: int
    stock_symbol: str
    stock_name: str
    entry_price: float
    pnl: float = 0.0
    date: datetime
    is_holding: bool
    current_price: float | None = None


class CreateTradeRequest(CamelModel):
    stock_id: int
    entry_price: float
    is_holding: bool = True


class UpdateTradeRequest(CamelModel):
    pnl: float
    is_holding: bool


class PriceAlert(CamelModel):
    id: int
    stock_id: int
    stock_symbol: str
    stock_name: str
    target_price: float
    is_above_target: bool
    is_triggered: bool = False
    created_at: datetime


class CreatePriceAlertRequest(CamelModel):
    stock_id: int
    target_price: float
    is_above_target: bool


class NotificationPreferences(CamelModel):
    email: str = ""
    email_notifications_enabled: bool = False
