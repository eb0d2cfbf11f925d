"""
Shared Pydantic data models for the LCX client.

Modules:
    payloads: REST request payloads and their validation rules
    connection: Realtime topics, subscriptions and connection state
    messages: Inbound realtime message variants

Example:
    >>> from lcx_client.models import Subscription, Topic
    >>> Subscription(topic=Topic.TICKER).to_wire()
    {'Topic': 'subscribe', 'Type': 'ticker'}
"""

from lcx_client.models.connection import ConnectionState, Subscription, Topic
from lcx_client.models.messages import (
    ClosedMessage,
    DataMessage,
    ErrorMessage,
    InboundMessage,
    StatusMessage,
)
from lcx_client.models.payloads import (
    CoinBalanceDetailsPayload,
    MarketKlinePayload,
    MarketPairPayload,
    MarketTickerPayload,
    OpenOrdersPayload,
    OrderBookPayload,
    OrderCancelAllPayload,
    OrderCancelPayload,
    OrderCreatePayload,
    OrderDetailsPayload,
    OrderHistoryPayload,
    OrderModifyPayload,
    OrderSide,
    OrderStatus,
    OrderType,
    TradeHistoryPayload,
    TradesPayload,
    validate_payload,
)

__all__ = [
    # Connection
    "ConnectionState",
    "Subscription",
    "Topic",
    # Messages
    "ClosedMessage",
    "DataMessage",
    "ErrorMessage",
    "InboundMessage",
    "StatusMessage",
    # Enums
    "OrderSide",
    "OrderStatus",
    "OrderType",
    # Payloads
    "CoinBalanceDetailsPayload",
    "MarketKlinePayload",
    "MarketPairPayload",
    "MarketTickerPayload",
    "OpenOrdersPayload",
    "OrderBookPayload",
    "OrderCancelAllPayload",
    "OrderCancelPayload",
    "OrderCreatePayload",
    "OrderDetailsPayload",
    "OrderHistoryPayload",
    "OrderModifyPayload",
    "TradeHistoryPayload",
    "TradesPayload",
    "validate_payload",
]
