"""
Tests for the button payload codec.
"""
import json
from decimal import Decimal

import pytest

from action_codec import (
    ActionType,
    AddToBasket,
    Back,
    DecodeStatus,
    Login,
    NextPage,
    PreviousPage,
    add_to_basket_action,
    decode_action,
    encode_action,
    next_page_action,
)


MUG_PAYLOAD = {
    "ActionType": "AddBasket",
    "ProductId": "p1",
    "ProductName": "Mug",
    "PictureUrl": "http://x/m.png",
    "UnitPrice": "9.99",
}


class TestDecodeSimpleActions:

    @pytest.mark.parametrize("wire, expected", [
        ("NextPage", NextPage),
        ("PreviousPage", PreviousPage),
        ("Login", Login),
        ("Back", Back),
    ])
    def test_decodes_each_variant(self, wire, expected):
        result = decode_action(json.dumps({"ActionType": wire}))
        assert result.status == DecodeStatus.ACTION
        assert isinstance(result.action, expected)

    def test_extra_fields_are_ignored(self):
        result = decode_action('{"ActionType": "NextPage", "Page": 4}')
        assert result.is_action
        assert result.action == NextPage()


class TestDecodeAddBasket:

    def test_decodes_all_fields(self):
        result = decode_action(json.dumps(MUG_PAYLOAD))
        assert result.is_action
        action = result.action
        assert isinstance(action, AddToBasket)
        assert action.product_id == "p1"
        assert action.product_name == "Mug"
        assert action.picture_url == "http://x/m.png"
        assert action.unit_price == Decimal("9.99")

    def test_decode_then_encode_keeps_required_fields(self):
        decoded = decode_action(json.dumps(MUG_PAYLOAD)).action
        assert json.loads(encode_action(decoded)) == MUG_PAYLOAD

    @pytest.mark.parametrize("missing", ["ProductId", "ProductName", "PictureUrl", "UnitPrice"])
    def test_missing_field_is_unrecognized(self, missing):
        payload = {k: v for k, v in MUG_PAYLOAD.items() if k != missing}
        result = decode_action(json.dumps(payload))
        assert result.status == DecodeStatus.UNRECOGNIZED_ACTION
        assert result.action is None

    @pytest.mark.parametrize("price", ["abc", "NaN", "Infinity", "-1.00", ""])
    def test_bad_price_is_unrecognized(self, price):
        payload = dict(MUG_PAYLOAD, UnitPrice=price)
        assert decode_action(json.dumps(payload)).status == DecodeStatus.UNRECOGNIZED_ACTION

    def test_numeric_price_accepted(self):
        payload = dict(MUG_PAYLOAD, UnitPrice=12.5)
        result = decode_action(json.dumps(payload))
        assert result.action.unit_price == Decimal("12.5")

    def test_quotes_in_product_name_survive(self):
        action = add_to_basket_action("p2", "12\" 'Tall' Mug", "http://x/t.png", "3.50")
        decoded = decode_action(encode_action(action)).action
        assert decoded == action


class TestDecodeMalformedInput:
    """Anything a user can type decodes to a status, never an exception."""

    @pytest.mark.parametrize("text", [
        "hello",
        "show me red mugs",
        "{ 'ActionType': 'NextPage' }",
        "{\"ActionType\": ",
        "3",
        "\"NextPage\"",
        "[1, 2, 3]",
        "null",
        "",
        None,
        "[" * 5000,
    ])
    def test_not_an_action(self, text):
        result = decode_action(text)
        assert result.status == DecodeStatus.NOT_AN_ACTION
        assert result.action is None

    @pytest.mark.parametrize("text", [
        "{}",
        '{"ActionType": "Checkout"}',
        '{"ActionType": 7}',
        '{"actiontype": "NextPage"}',
    ])
    def test_unrecognized_action(self, text):
        assert decode_action(text).status == DecodeStatus.UNRECOGNIZED_ACTION


class TestEncode:

    def test_next_page_payload(self):
        assert json.loads(encode_action(next_page_action())) == {"ActionType": "NextPage"}

    def test_action_types_match_wire_names(self):
        assert [t.value for t in ActionType] == ["NextPage", "PreviousPage", "AddBasket", "Login", "Back"]
