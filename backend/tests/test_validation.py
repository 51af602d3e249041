"""
TurtleWatch Backend - Payload Validation Tests
===============================================

What we test:
    ✅ None and blank strings count as missing; 0 does not
    ✅ All missing fields are reported in one error, in order
    ✅ Enumerated values are normalized, defaulted and checked
"""

import pytest

from turtlewatch.exceptions import ValidationError
from turtlewatch.schemas.turtle import TurtleCreateRequest
from turtlewatch.services.turtle_service import TURTLE_SEXES
from turtlewatch.services.validation import is_missing, normalize_choice, require_fields


class TestIsMissing:

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_values(self, value):
        assert is_missing(value) is True

    @pytest.mark.parametrize("value", [0, 0.0, False, "x", "0"])
    def test_present_values(self, value):
        assert is_missing(value) is False


class TestRequireFields:

    def test_all_present(self):
        payload = TurtleCreateRequest(species="Chelonia mydas", health_condition="ok")
        require_fields(payload, ("species", "health_condition"))

    def test_zero_measurement_is_present(self):
        payload = TurtleCreateRequest(scl_max=0)
        require_fields(payload, ("scl_max",))

    def test_reports_every_missing_field(self):
        payload = TurtleCreateRequest(species="  ")
        with pytest.raises(ValidationError) as exc_info:
            require_fields(payload, ("species", "health_condition", "scl_max"))

        assert exc_info.value.message == (
            "Missing required fields: species, health_condition, scl_max"
        )
        assert exc_info.value.status_code == 400
        assert exc_info.value.context["missing"] == ["species", "health_condition", "scl_max"]


class TestNormalizeChoice:

    def test_lowercases(self):
        assert normalize_choice("MALE", TURTLE_SEXES, "unknown", "sex") == "male"

    def test_trims(self):
        assert normalize_choice("  Female ", TURTLE_SEXES, "unknown", "sex") == "female"

    @pytest.mark.parametrize("value", [None, "", "  "])
    def test_default_when_absent(self, value):
        assert normalize_choice(value, TURTLE_SEXES, "unknown", "sex") == "unknown"

    def test_rejects_unknown_value(self):
        with pytest.raises(ValidationError) as exc_info:
            normalize_choice("xyz", TURTLE_SEXES, "unknown", "sex")

        assert exc_info.value.field == "sex"
        assert "xyz" in exc_info.value.message
