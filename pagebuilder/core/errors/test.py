"""Tests for the error taxonomy."""

import pytest

from .lib import (
    CompilationError,
    ConfigurationError,
    ElementNotFoundError,
    PageBuilderError,
    StructuralViolation,
)


class TestErrors:
    """Error classes carry their diagnostic attributes."""

    @pytest.mark.unit
    def test_hierarchy(self):
        """Every error derives from PageBuilderError."""
        for cls in (
            ConfigurationError,
            CompilationError,
            StructuralViolation,
            ElementNotFoundError,
        ):
            assert issubclass(cls, PageBuilderError)

    @pytest.mark.unit
    def test_not_found_is_lookup_error(self):
        """ElementNotFoundError can be caught as LookupError."""
        with pytest.raises(LookupError):
            raise ElementNotFoundError("abc")

    @pytest.mark.unit
    def test_not_found_message(self):
        err = ElementNotFoundError("abc")
        assert err.element_id == "abc"
        assert "abc" in str(err)

    @pytest.mark.unit
    def test_configuration_error_defaults(self):
        err = ConfigurationError("boom")
        assert err.code == "build_failed"
        assert err.context == {}

    @pytest.mark.unit
    def test_structural_violation_attributes(self):
        err = StructuralViolation("cycle!", kind="cycle", node_id="n1")
        assert err.kind == "cycle"
        assert err.node_id == "n1"

    @pytest.mark.unit
    def test_compilation_error_attributes(self):
        err = CompilationError("bad", property_name="width", value=[1])
        assert err.property_name == "width"
        assert err.value == [1]
