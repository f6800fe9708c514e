"""Unit tests for yoomoney_api.showcase.showcase module."""

import json

import pytest
from pydantic import ValidationError

from yoomoney_api.showcase import Amount, Group, Select, Showcase, parse_params


class TestShowcase:
    """Test showcase document parsing."""

    def test_parse(self, showcase_json):
        """Test that a showcase document is fully decoded."""
        showcase = Showcase.model_validate_json(json.dumps(showcase_json))

        assert showcase.title == "Mobile phone top-up"
        assert showcase.money_source == ["wallet", "payment-card"]
        assert showcase.hidden_fields == {"scid": "5551", "test": "true"}
        assert isinstance(showcase.form, Group)
        assert isinstance(showcase.form.items[1], Amount)
        assert isinstance(showcase.form.items[2], Select)
        assert showcase.errors == []

    def test_payment_parameters(self, showcase_json):
        """Test that hidden fields are overlaid by the form."""
        showcase_json["hidden_fields"]["phone"] = "hidden"
        showcase = Showcase.model_validate(showcase_json)

        assert showcase.is_valid()
        assert showcase.payment_parameters() == {
            "scid": "5551",
            "test": "true",
            "phone": "79001234567",
            "sum": "100.00",
            "operator": "mts"
        }

    def test_errors_alias(self, showcase_json):
        """Test that server remarks are read from ``error``."""
        showcase_json["error"] = [{"name": "sum", "alert": "Too much"}]
        showcase = Showcase.model_validate(showcase_json)

        assert showcase.errors[0].name == "sum"
        assert showcase.errors[0].alert == "Too much"

    def test_invalid_form(self, showcase_json):
        """Test validity of a form with an out-of-range amount."""
        showcase_json["form"][1]["value"] = "20000"
        assert not Showcase.model_validate(showcase_json).is_valid()

    def test_empty_showcase(self):
        """Test a document without a form."""
        showcase = Showcase.model_validate({"hidden_fields": None, "money_source": None})

        assert showcase.is_valid()
        assert showcase.payment_parameters() == {}


class TestParseParams:
    """Test decoding of final payment parameters."""

    def test_scalars_become_strings(self):
        """Test conversion of scalar values."""
        content = b'{"params": {"amount": "10", "count": 2, "flag": false, "skip": null}}'
        assert parse_params(content) == {"amount": "10", "count": "2", "flag": "false"}

    def test_missing_params(self):
        """Test that a body without params is rejected."""
        with pytest.raises(ValidationError):
            parse_params(b'{"status": "ok"}')
