import pytest

from lcx_client.exceptions import PayloadValidationError
from lcx_client.models.payloads import (
    MAX_CANCEL_ALL_ORDERS,
    MarketKlinePayload,
    OrderCancelAllPayload,
    OrderCreatePayload,
    OrderHistoryPayload,
    OrderModifyPayload,
    TradesPayload,
    validate_payload,
)


@pytest.mark.parametrize("count", [1, MAX_CANCEL_ALL_ORDERS])
def test_cancel_all_accepts_one_to_twenty_five_ids(count):
    ids = [f"order-{i}" for i in range(count)]
    payload = validate_payload(OrderCancelAllPayload, order_ids=ids)
    assert payload.to_query() == [("orderIds", i) for i in ids]


def test_cancel_all_rejects_empty_list():
    with pytest.raises(PayloadValidationError) as exc_info:
        validate_payload(OrderCancelAllPayload, order_ids=[])
    assert str(exc_info.value) == "The 'orderIds' parameter must be a non-empty array."


def test_cancel_all_rejects_twenty_six_ids():
    ids = [f"order-{i}" for i in range(MAX_CANCEL_ALL_ORDERS + 1)]
    with pytest.raises(PayloadValidationError) as exc_info:
        validate_payload(OrderCancelAllPayload, order_ids=ids)
    assert str(exc_info.value) == "You can cancel a maximum of 25 orders at a time."


def test_create_order_renders_api_names():
    payload = validate_payload(
        OrderCreatePayload,
        pair="LCX/USDC",
        amount=100,
        price=0.05,
        order_type="LIMIT",
        side="BUY",
        client_order_id="mine-1",
    )
    assert payload.to_params() == {
        "pair": "LCX/USDC",
        "amount": 100,
        "price": 0.05,
        "orderType": "LIMIT",
        "side": "BUY",
        "clientOrderId": "mine-1",
    }


def test_market_order_needs_no_price():
    payload = validate_payload(
        OrderCreatePayload, pair="LCX/USDC", amount=1.5, order_type="MARKET", side="SELL"
    )
    assert "price" not in payload.to_params()


def test_limit_order_requires_price():
    with pytest.raises(PayloadValidationError, match="'price' is required for limit orders"):
        validate_payload(OrderCreatePayload, pair="LCX/USDC", amount=1, order_type="LIMIT", side="BUY")


@pytest.mark.parametrize(
    "fields, message",
    [
        ({"pair": ""}, "Validation Error: 'pair' is required."),
        ({"pair": 5}, "Validation Error: Expected 'pair' to be a string, but received int"),
        ({"amount": -1}, "Validation error: 'amount' should be a positive floating-point number."),
        ({"amount": True}, "Validation error: 'amount' should be a positive floating-point number."),
        ({"amount": float("inf")}, "Validation error: 'amount' should be a positive floating-point number."),
        ({"side": "HOLD"}, "Validation Error: Invalid 'side' value. Expected 'BUY' or 'SELL', but received HOLD"),
    ],
)
def test_create_order_field_rules(fields, message):
    base = {"pair": "LCX/USDC", "amount": 1, "price": 1, "order_type": "LIMIT", "side": "BUY"}
    with pytest.raises(PayloadValidationError) as exc_info:
        validate_payload(OrderCreatePayload, **{**base, **fields})
    assert str(exc_info.value) == message
    assert exc_info.value.field == next(iter(fields))


def test_modify_order_requires_all_fields():
    with pytest.raises(PayloadValidationError, match="'price' is required"):
        validate_payload(OrderModifyPayload, order_id="abc", amount=1, price=None)


@pytest.mark.parametrize("offset", [0, None])
def test_offset_is_required(offset):
    with pytest.raises(PayloadValidationError) as exc_info:
        validate_payload(TradesPayload, pair="LCX/USDC", offset=offset)
    assert str(exc_info.value) == "Validation Error: 'offset' is required."


def test_offset_must_be_integer():
    with pytest.raises(PayloadValidationError, match="Expected 'offset' to be an integer"):
        validate_payload(TradesPayload, pair="LCX/USDC", offset=1.5)


def test_kline_renders_from_key():
    payload = validate_payload(
        MarketKlinePayload, pair="LCX/USDC", resolution="1D", from_=1700000000, to=1700086400
    )
    assert payload.to_params() == {
        "pair": "LCX/USDC",
        "resolution": "1D",
        "from": 1700000000,
        "to": 1700086400,
    }


def test_order_history_filters_use_api_names():
    payload = validate_payload(
        OrderHistoryPayload,
        offset=2,
        pair=None,
        from_date=1,
        to_date=None,
        side="SELL",
        order_status="CLOSED",
        order_type=None,
    )
    assert payload.to_params() == {
        "offset": 2,
        "fromDate": 1,
        "side": "SELL",
        "orderStatus": "CLOSED",
    }


def test_order_history_rejects_unknown_status():
    with pytest.raises(PayloadValidationError, match="Invalid 'orderStatus' value"):
        validate_payload(OrderHistoryPayload, offset=1, order_status="OPEN")


def test_unknown_fields_are_rejected():
    with pytest.raises(PayloadValidationError):
        validate_payload(TradesPayload, pair="LCX/USDC", offset=1, limit=10)
