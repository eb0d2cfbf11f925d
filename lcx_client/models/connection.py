"""
Realtime topics and connection state.

Models:
    ConnectionState: State of the single socket slot a client owns
    Topic: Closed set of realtime streams
    Subscription: A topic plus its pair, rendered to the wire message
"""

import json
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_validator


class ConnectionState(str, Enum):
    """
    Socket connection state.

    Attributes:
        IDLE: No socket.
        CONNECTING: Socket requested, not yet open.
        OPEN: Socket open, subscribe message not yet sent.
        SUBSCRIBED: Subscribe message sent; frames are being delivered.
        CLOSED: Ended by either side. Terminal.
        ERRORED: Ended by a transport failure. Terminal.
    """

    IDLE = "idle"
    CONNECTING = "connecting"
    OPEN = "open"
    SUBSCRIBED = "subscribed"
    CLOSED = "closed"
    ERRORED = "errored"

    @property
    def is_terminal(self) -> bool:
        """Check if the connection has ended."""
        return self in (ConnectionState.CLOSED, ConnectionState.ERRORED)

    @property
    def is_live(self) -> bool:
        """Check if a socket is currently held."""
        return self in (
            ConnectionState.CONNECTING,
            ConnectionState.OPEN,
            ConnectionState.SUBSCRIBED,
        )


class Topic(str, Enum):
    """Realtime stream names, as used in the subscribe message ``Type`` field."""

    TICKER = "ticker"
    ORDERBOOK = "orderbook"
    TRADE = "trade"
    USER_WALLETS = "user_wallets"
    USER_ORDERS = "user_orders"
    USER_TRADES = "user_trades"

    @property
    def is_private(self) -> bool:
        """User-scoped topics need credentials to open the connection."""
        return self in (Topic.USER_WALLETS, Topic.USER_ORDERS, Topic.USER_TRADES)

    @property
    def requires_pair(self) -> bool:
        return self in (Topic.ORDERBOOK, Topic.TRADE)


class Subscription(BaseModel):
    """
    One realtime subscription request.

    Example:
        >>> Subscription(topic=Topic.ORDERBOOK, pair="LCX/USDC").to_wire()
        {'Topic': 'subscribe', 'Type': 'orderbook', 'Pair': 'LCX/USDC'}
    """

    model_config = {"frozen": True, "extra": "forbid"}

    topic: Topic
    pair: Optional[str] = Field(
        default=None,
        description="Trading pair for order book and trade streams",
        min_length=1,
    )

    @model_validator(mode="after")
    def validate_pair(self) -> "Subscription":
        """Pair-scoped topics need a pair; the others must not carry one."""
        if self.topic.requires_pair and self.pair is None:
            raise ValueError(f"Topic '{self.topic.value}' requires a pair")
        if not self.topic.requires_pair and self.pair is not None:
            raise ValueError(f"Topic '{self.topic.value}' does not take a pair")
        return self

    def to_wire(self) -> Dict[str, Any]:
        """Build the subscribe message."""
        message: Dict[str, Any] = {"Topic": "subscribe", "Type": self.topic.value}
        if self.pair is not None:
            message["Pair"] = self.pair
        return message

    def encode(self) -> str:
        """Subscribe message as compact JSON text."""
        return json.dumps(self.to_wire(), separators=(",", ":"))
