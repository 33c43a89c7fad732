"""Unit tests for transaction schemas."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from payment_api.domain.models.transaction import TransactionStatus
from payment_api.schemas.transaction import (
    DescriptionPayload,
    PaymentMethodPayload,
    TransactionPayload,
    TransactionView,
)


class TestTransactionPayload:
    """Tests for payment payload models."""

    def test_minimal_payload(self, payment_payload):
        """Test a payload without server-owned fields."""
        assert payment_payload.id is None
        assert payment_payload.description.nsu is None
        assert payment_payload.description.status is None
        assert payment_payload.payment_method.id is None

    def test_payload_from_json(self):
        """Test parsing a client request body."""
        payload = TransactionPayload.model_validate(
            {
                "description": {
                    "value": "496.00",
                    "establishment": "PUC Minas",
                    "merchant_code": "00000000000000",
                    "date_time": "2024-01-15T10:30:00Z",
                },
                "payment_method": {"type": "AVISTA", "installments": 1},
            }
        )
        assert payload.description.value == Decimal("496.00")
        assert payload.description.date_time is not None
        assert payload.payment_method.type == "AVISTA"

    def test_payload_accepts_server_owned_fields_for_later_rejection(self):
        """Test server-owned fields parse so the service can reject them."""
        payload = TransactionPayload(
            id=1,
            description=DescriptionPayload(status="AUTHORIZED", nsu="1", authorization_code="2"),
            payment_method=PaymentMethodPayload(id=3),
        )
        assert payload.description.status == TransactionStatus.AUTHORIZED

    def test_description_required(self):
        """Test description is required."""
        with pytest.raises(ValidationError):
            TransactionPayload(payment_method=PaymentMethodPayload())

    def test_negative_value_rejected(self):
        """Test negative payment value fails validation."""
        with pytest.raises(ValidationError):
            DescriptionPayload(value=Decimal("-1"))

    def test_zero_installments_rejected(self):
        """Test installments must be at least one."""
        with pytest.raises(ValidationError):
            PaymentMethodPayload(installments=0)

    def test_value_beyond_column_scale_rejected(self):
        """Test amounts with more than two decimal places fail validation."""
        with pytest.raises(ValidationError):
            DescriptionPayload(value=Decimal("496.005"))

    def test_unknown_status_rejected(self):
        """Test status must be AUTHORIZED or DENIED."""
        with pytest.raises(ValidationError):
            DescriptionPayload(status="CANCELLED")


class TestTransactionView:
    """Tests for the transaction read model."""

    def test_view_from_entity(self, make_transaction):
        """Test view is built from ORM attributes."""
        view = TransactionView.model_validate(make_transaction(8))
        assert view.id == 8
        assert view.description.id == 8
        assert view.description.status == TransactionStatus.AUTHORIZED
        assert view.payment_method.installments == 1

    def test_view_serializes_status_as_string(self, make_transaction):
        """Test JSON output carries the status name."""
        data = TransactionView.model_validate(make_transaction(8)).model_dump(mode="json")
        assert data["description"]["status"] == "AUTHORIZED"
        assert data["description"]["nsu"] == "1234567890"

    def test_view_requires_identifier(self):
        """Test a view cannot be built without an id."""
        with pytest.raises(ValidationError):
            TransactionView.model_validate(
                {
                    "description": {
                        "id": 1,
                        "nsu": "1",
                        "authorization_code": "2",
                        "status": "AUTHORIZED",
                    },
                    "payment_method": {"id": 1},
                }
            )

    def test_view_renders_value_at_column_scale(self, make_transaction):
        """Test an in-memory Decimal("496") and a stored 496.00 render the same."""
        transaction = make_transaction(8)
        fresh = TransactionView.model_validate(transaction)
        transaction.description.value = Decimal("496.00")
        stored = TransactionView.model_validate(transaction)

        assert fresh.model_dump(mode="json") == stored.model_dump(mode="json")
        assert fresh.model_dump(mode="json")["description"]["value"] == "496.00"

    def test_view_is_frozen(self, make_transaction):
        """Test views cannot be changed after construction."""
        view = TransactionView.model_validate(make_transaction(8))
        with pytest.raises(ValidationError):
            view.description.nsu = "0"
