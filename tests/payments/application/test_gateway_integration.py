"""Tests for the payment gateway registry and the payment intent services."""

import pytest
from protean.exceptions import ValidationError
from storefront.payments.gateway import get_gateway, reset_gateway, set_gateway
from storefront.payments.gateway.fake_adapter import FakeGateway
from storefront.payments.gateway.port import PaymentGatewayError
from storefront.payments.intents import create_payment_intent, retrieve_payment_intent, to_cents


class TestFakeGateway:
    def test_create_intent(self):
        gateway = FakeGateway()
        intent = gateway.create_payment_intent(amount=5999, currency="usd", metadata={"user_id": "u1"})

        assert intent.id.startswith("pi_fake_")
        assert intent.client_secret.startswith(f"{intent.id}_secret_")
        assert intent.amount == 5999
        assert intent.status == "requires_payment_method"

    def test_configured_create_fails(self):
        gateway = FakeGateway()
        gateway.configure(should_succeed=False, failure_reason="Card declined")

        with pytest.raises(PaymentGatewayError, match="Card declined"):
            gateway.create_payment_intent(amount=100, currency="usd", metadata={})

    def test_retrieve_reports_configured_status(self):
        gateway = FakeGateway()
        intent = gateway.create_payment_intent(amount=100, currency="usd", metadata={})
        gateway.configure(should_succeed=True, intent_status="processing")

        assert gateway.retrieve_payment_intent(intent.id).status == "processing"

    def test_retrieve_unknown_intent(self):
        with pytest.raises(PaymentGatewayError):
            FakeGateway().retrieve_payment_intent("pi_missing")

    def test_calls_are_recorded(self):
        gateway = FakeGateway()
        gateway.create_payment_intent(amount=100, currency="usd", metadata={})
        assert gateway.calls[0]["method"] == "create_payment_intent"


class TestGatewayRegistry:
    def test_default_gateway_is_fake(self):
        assert isinstance(get_gateway(), FakeGateway)

    def test_set_gateway_override(self):
        custom = FakeGateway()
        set_gateway(custom)
        assert get_gateway() is custom

    def test_reset_gateway(self):
        custom = FakeGateway()
        set_gateway(custom)
        reset_gateway()
        assert get_gateway() is not custom


class TestCreatePaymentIntent:
    def test_amount_sent_in_cents(self):
        result = create_payment_intent(amount=59.99, user_id="cust-001")

        call = get_gateway().calls[-1]
        assert call["amount"] == 5999
        assert call["currency"] == "usd"
        assert call["metadata"]["user_id"] == "cust-001"
        assert result["payment_intent_id"].startswith("pi_fake_")
        assert result["client_secret"]

    def test_metadata_and_currency_passed_through(self):
        create_payment_intent(amount=10.0, user_id="cust-001", currency="eur", metadata={"cart": "c-1"})

        call = get_gateway().calls[-1]
        assert call["currency"] == "eur"
        assert call["metadata"] == {"user_id": "cust-001", "cart": "c-1"}

    @pytest.mark.parametrize("amount", [0, -5.0, None])
    def test_invalid_amount(self, amount):
        with pytest.raises(ValidationError) as exc:
            create_payment_intent(amount=amount, user_id="cust-001")
        assert exc.value.messages == {"amount": ["Invalid payment amount"]}

    def test_gateway_failure_becomes_validation_error(self):
        get_gateway().configure(should_succeed=False, failure_reason="Card declined")

        with pytest.raises(ValidationError) as exc:
            create_payment_intent(amount=10.0, user_id="cust-001")
        assert exc.value.messages["payment"] == ["Payment initialization failed: Card declined"]

    def test_to_cents_rounds(self):
        assert to_cents(19.999) == 2000
        assert to_cents(0.1 + 0.2) == 30


class TestRetrievePaymentIntent:
    def test_reports_status_amount_and_currency(self):
        intent_id = create_payment_intent(amount=25.5, user_id="cust-001")["payment_intent_id"]

        result = retrieve_payment_intent(intent_id)

        assert result == {
            "payment_status": "succeeded",
            "payment_intent_id": intent_id,
            "amount": 2550,
            "currency": "usd",
        }

    def test_blank_id(self):
        with pytest.raises(ValidationError):
            retrieve_payment_intent("")

    def test_unknown_intent(self):
        with pytest.raises(ValidationError) as exc:
            retrieve_payment_intent("pi_missing")
        assert exc.value.messages["payment"][0].startswith("Payment confirmation failed")
