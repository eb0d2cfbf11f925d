"""
Request payload models for the LCX REST endpoints.

Every endpoint that takes caller input has a frozen Pydantic model here.
Validation happens when the model is built, before any request is signed or
sent, and failures surface as ``PayloadValidationError`` with a message in
the API's "Validation Error: ..." form.

Field names are snake_case; ``to_params()`` renders them with the camelCase
names the API uses in query strings and JSON bodies.

Example:
    >>> payload = validate_payload(OpenOrdersPayload, offset=1, pair="LCX/EUR")
    >>> payload.to_params()
    {'offset': 1, 'pair': 'LCX/EUR'}
"""

import math
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from lcx_client.exceptions import PayloadValidationError

MAX_CANCEL_ALL_ORDERS = 25


# =============================================================================
# ENUMS
# =============================================================================


class OrderSide(str, Enum):
    """Order direction."""

    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    """Order execution type."""

    LIMIT = "LIMIT"
    MARKET = "MARKET"


class OrderStatus(str, Enum):
    """Terminal order status filter for order history."""

    CANCEL = "CANCEL"
    CLOSED = "CLOSED"


# =============================================================================
# FIELD CHECKS
# =============================================================================


def _type_name(value: Any) -> str:
    return type(value).__name__


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _required_string(name: str, value: Any) -> str:
    if value is None or value == "":
        raise ValueError(f"Validation Error: '{name}' is required.")
    if not isinstance(value, str):
        raise ValueError(
            f"Validation Error: Expected '{name}' to be a string, "
            f"but received {_type_name(value)}"
        )
    return value


def _optional_string(name: str, value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(
            f"Validation Error: Expected '{name}' to be a string, "
            f"but received {_type_name(value)}"
        )
    return value


def _required_positive_int(name: str, value: Any) -> int:
    if value is None or (value == 0 and _is_number(value)):
        raise ValueError(f"Validation Error: '{name}' is required.")
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(
            f"Validation Error: Expected '{name}' to be an integer, "
            f"but received {_type_name(value)}"
        )
    if value < 0:
        raise ValueError(f"Validation Error: '{name}' must be a positive integer.")
    return value


def _optional_int(name: str, value: Any) -> Optional[int]:
    if value is None:
        return None
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(
            f"Validation Error: Expected '{name}' to be an integer, "
            f"but received {_type_name(value)}"
        )
    return value


def _positive_number(name: str, value: Any) -> Union[int, float]:
    if not _is_number(value) or value <= 0 or not math.isfinite(value):
        raise ValueError(
            f"Validation error: '{name}' should be a positive floating-point number."
        )
    return value


def _enum_member(name: str, enum_cls: Type[Enum], value: Any) -> Any:
    allowed = [member.value for member in enum_cls]
    if isinstance(value, enum_cls):
        return value
    if value not in allowed:
        expected = " or ".join(f"'{v}'" for v in allowed)
        raise ValueError(
            f"Validation Error: Invalid '{name}' value. "
            f"Expected {expected}, but received {value}"
        )
    return value


# =============================================================================
# BASE
# =============================================================================


class Payload(BaseModel):
    """Base class for endpoint payloads."""

    model_config = {"frozen": True, "extra": "forbid"}

    def to_params(self) -> Dict[str, Any]:
        """Render the payload with API field names, omitting absent values."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


P = TypeVar("P", bound=Payload)


def _format_error(error: Dict[str, Any]) -> str:
    name = ".".join(str(part) for part in error.get("loc", ())) or "payload"
    if error.get("type") == "value_error":
        return str(error["ctx"]["error"])
    if error.get("type") == "missing":
        return f"Validation Error: '{name}' is required."
    return f"Validation Error: '{name}' {error.get('msg', 'is invalid')}."


def validate_payload(model: Type[P], **fields: Any) -> P:
    """
    Build a payload model, translating Pydantic errors.

    Args:
        model: Payload class to instantiate.
        **fields: Field values by snake_case name.

    Returns:
        The validated payload.

    Raises:
        PayloadValidationError: On the first rule the input breaks.
    """
    try:
        return model(**fields)
    except ValidationError as e:
        first = e.errors()[0]
        loc = first.get("loc", ())
        field = str(loc[0]) if loc else None
        raise PayloadValidationError(_format_error(first), field=field) from e


# =============================================================================
# MARKET PAYLOADS
# =============================================================================


class PairPayload(Payload):
    """Payload for endpoints keyed by a single trading pair."""

    pair: str = Field(..., description="Market pair, e.g. 'LCX/EUR'")

    @field_validator("pair", mode="before")
    @classmethod
    def check_pair(cls, v: Any) -> str:
        return _required_string("pair", v)


class OrderBookPayload(PairPayload):
    """Order book request."""


class MarketPairPayload(PairPayload):
    """Pair details request."""


class MarketTickerPayload(PairPayload):
    """Single ticker request."""


class MarketKlinePayload(Payload):
    """Candle request; ``from_``/``to`` are epoch seconds."""

    pair: str
    resolution: str = Field(..., description="Candle resolution, e.g. '1D'")
    from_: int = Field(..., serialization_alias="from")
    to: int

    @field_validator("pair", "resolution", mode="before")
    @classmethod
    def check_strings(cls, v: Any, info: ValidationInfo) -> str:
        return _required_string(info.field_name, v)

    @field_validator("from_", "to", mode="before")
    @classmethod
    def check_bounds(cls, v: Any, info: ValidationInfo) -> int:
        name = "from" if info.field_name == "from_" else info.field_name
        return _required_positive_int(name, v)


class TradesPayload(Payload):
    """Recent trades request."""

    pair: str
    offset: int = Field(..., description="Page number, starting at 1")

    @field_validator("pair", mode="before")
    @classmethod
    def check_pair(cls, v: Any) -> str:
        return _required_string("pair", v)

    @field_validator("offset", mode="before")
    @classmethod
    def check_offset(cls, v: Any) -> int:
        return _required_positive_int("offset", v)


# =============================================================================
# TRADING PAYLOADS
# =============================================================================


class OrderCreatePayload(Payload):
    """
    New order.

    ``price`` may be omitted for market orders and is required for limit
    orders.
    """

    pair: str
    amount: Union[int, float]
    price: Optional[Union[int, float]] = None
    order_type: OrderType = Field(..., serialization_alias="orderType")
    side: OrderSide
    client_order_id: Optional[str] = Field(default=None, serialization_alias="clientOrderId")

    @field_validator("pair", mode="before")
    @classmethod
    def check_pair(cls, v: Any) -> str:
        return _required_string("pair", v)

    @field_validator("amount", mode="before")
    @classmethod
    def check_amount(cls, v: Any) -> Union[int, float]:
        if v is None:
            raise ValueError("Validation Error: 'amount' is required.")
        return _positive_number("amount", v)

    @field_validator("price", mode="before")
    @classmethod
    def check_price(cls, v: Any) -> Optional[Union[int, float]]:
        if v is None:
            return None
        return _positive_number("price", v)

    @field_validator("order_type", mode="before")
    @classmethod
    def check_order_type(cls, v: Any) -> Any:
        return _enum_member("orderType", OrderType, v)

    @field_validator("side", mode="before")
    @classmethod
    def check_side(cls, v: Any) -> Any:
        return _enum_member("side", OrderSide, v)

    @field_validator("client_order_id", mode="before")
    @classmethod
    def check_client_order_id(cls, v: Any) -> Optional[str]:
        return _optional_string("clientOrderId", v)

    @model_validator(mode="after")
    def check_limit_price(self) -> "OrderCreatePayload":
        """Limit orders need a price."""
        if self.order_type is OrderType.LIMIT and self.price is None:
            raise ValueError(
                "Validation error: 'price' is required for limit orders and "
                "should be a positive floating-point number."
            )
        return self


class OrderModifyPayload(Payload):
    """Change amount and price of a resting order."""

    order_id: str = Field(..., serialization_alias="orderId")
    amount: Union[int, float]
    price: Union[int, float]

    @field_validator("order_id", mode="before")
    @classmethod
    def check_order_id(cls, v: Any) -> str:
        return _required_string("orderId", v)

    @field_validator("amount", "price", mode="before")
    @classmethod
    def check_numbers(cls, v: Any, info: ValidationInfo) -> Union[int, float]:
        if v is None:
            raise ValueError(f"Validation Error: '{info.field_name}' is required.")
        return _positive_number(info.field_name, v)


class OrderCancelPayload(Payload):
    """Cancel one order."""

    order_id: str = Field(..., serialization_alias="orderId")

    @field_validator("order_id", mode="before")
    @classmethod
    def check_order_id(cls, v: Any) -> str:
        return _required_string("orderId", v)


class OrderCancelAllPayload(Payload):
    """Cancel between 1 and 25 orders in one call."""

    order_ids: List[str] = Field(..., serialization_alias="orderIds")

    @field_validator("order_ids", mode="before")
    @classmethod
    def check_order_ids(cls, v: Any) -> List[str]:
        if v is None:
            raise ValueError("Validation Error: 'orderIds' is required.")
        if not isinstance(v, (list, tuple)) or len(v) == 0:
            raise ValueError("The 'orderIds' parameter must be a non-empty array.")
        if len(v) > MAX_CANCEL_ALL_ORDERS:
            raise ValueError(
                f"You can cancel a maximum of {MAX_CANCEL_ALL_ORDERS} orders at a time."
            )
        for order_id in v:
            _required_string("orderIds", order_id)
        return list(v)

    def to_query(self) -> List[tuple]:
        """Repeated ``orderIds`` query parameters."""
        return [("orderIds", order_id) for order_id in self.order_ids]


class OrderDetailsPayload(Payload):
    """Single order lookup. The API spells this query key ``OrderId``."""

    order_id: str = Field(..., serialization_alias="OrderId")

    @field_validator("order_id", mode="before")
    @classmethod
    def check_order_id(cls, v: Any) -> str:
        return _required_string("orderId", v)


class HistoryPayload(Payload):
    """Paged, optionally filtered listing."""

    offset: int
    pair: Optional[str] = None
    from_date: Optional[int] = Field(default=None, serialization_alias="fromDate")
    to_date: Optional[int] = Field(default=None, serialization_alias="toDate")

    @field_validator("offset", mode="before")
    @classmethod
    def check_offset(cls, v: Any) -> int:
        return _required_positive_int("offset", v)

    @field_validator("pair", mode="before")
    @classmethod
    def check_pair(cls, v: Any) -> Optional[str]:
        return _optional_string("pair", v)

    @field_validator("from_date", "to_date", mode="before")
    @classmethod
    def check_dates(cls, v: Any, info: ValidationInfo) -> Optional[int]:
        name = "fromDate" if info.field_name == "from_date" else "toDate"
        return _optional_int(name, v)


class OpenOrdersPayload(HistoryPayload):
    """Open orders listing."""


class TradeHistoryPayload(HistoryPayload):
    """Own trade history listing."""


class OrderHistoryPayload(HistoryPayload):
    """Order history listing with side, status and type filters."""

    side: Optional[OrderSide] = None
    order_status: Optional[OrderStatus] = Field(default=None, serialization_alias="orderStatus")
    order_type: Optional[OrderType] = Field(default=None, serialization_alias="orderType")

    @field_validator("side", mode="before")
    @classmethod
    def check_side(cls, v: Any) -> Any:
        return None if v is None else _enum_member("side", OrderSide, v)

    @field_validator("order_status", mode="before")
    @classmethod
    def check_order_status(cls, v: Any) -> Any:
        return None if v is None else _enum_member("orderStatus", OrderStatus, v)

    @field_validator("order_type", mode="before")
    @classmethod
    def check_order_type(cls, v: Any) -> Any:
        return None if v is None else _enum_member("orderType", OrderType, v)


# =============================================================================
# ACCOUNT PAYLOADS
# =============================================================================


class CoinBalanceDetailsPayload(Payload):
    """Balance lookup for one coin."""

    coin: str

    @field_validator("coin", mode="before")
    @classmethod
    def check_coin(cls, v: Any) -> str:
        return _required_string("coin", v)
