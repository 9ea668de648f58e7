"""
Tests for type coercion.
"""

from datetime import date

import pytest
from fdl import TypeService, DeclaredType, CoercionError


@pytest.fixture
def types():
    return TypeService()


class TestBoolean:
    """Test boolean interpretation."""

    @pytest.mark.parametrize("text", ["true", "TRUE", "Yes", "y", "Y"])
    def test_true_values(self, types, text):
        """true/yes/y in any case are true."""
        assert types.as_boolean(text) is True

    @pytest.mark.parametrize("text", ["false", "False", "NO", "n"])
    def test_false_values(self, types, text):
        """false/no/n in any case are false."""
        assert types.as_boolean(text) is False

    @pytest.mark.parametrize("text", ["1", "0", "maybe", "", "t"])
    def test_invalid(self, types, text):
        """Anything else is an error."""
        with pytest.raises(CoercionError) as exc_info:
            types.as_boolean(text)
        assert str(exc_info.value) == f"impossible to interpret '{text}' as 'boolean' value."


class TestNumbers:
    """Test integer and decimal parsing."""

    @pytest.mark.parametrize("text,value", [("10", 10), ("-3", -3), ("+7", 7), (" 42 ", 42)])
    def test_integer(self, types, text, value):
        """Standard integer parse."""
        assert types.as_integer(text) == value

    @pytest.mark.parametrize("text", ["1.5", "abc", "", "1e3", "--1"])
    def test_invalid_integer(self, types, text):
        """Malformed integers raise CoercionError."""
        with pytest.raises(CoercionError):
            types.as_integer(text)

    @pytest.mark.parametrize("text,value", [
        ("11.2", 11.2), ("-0.5", -0.5), ("3", 3.0), (".5", 0.5), ("1e3", 1000.0),
    ])
    def test_decimal(self, types, text, value):
        """Standard decimal parse."""
        result = types.as_decimal(text)
        assert isinstance(result, float)
        assert result == value

    @pytest.mark.parametrize("text", ["abc", "1.2.3", "nan", "inf", ""])
    def test_invalid_decimal(self, types, text):
        """Malformed decimals raise CoercionError."""
        with pytest.raises(CoercionError):
            types.as_decimal(text)

    def test_coercion_error_is_value_error(self, types):
        """Callers may catch ValueError."""
        with pytest.raises(ValueError):
            types.as_integer("x")


class TestDates:
    """Test date parsing."""

    @pytest.mark.parametrize("text", [
        "1967-08-27",
        "1967-08-27T10:30:00",
        "08/27/1967",
        "27/08/1967",
        "08-27-1967",
        "1967/08/27",
        "Aug 27, 1967",
        "Aug 27 1967",
        "August 27, 1967",
        "27 Aug 1967",
        "27 August 1967",
        "1967-08-27 10:30:00",
        "1967-08-27T10:30:00Z",
        "August 27th, 1967",
        "27.08.1967",
    ])
    def test_guessed_formats(self, types, text):
        """Common human-readable formats are recognized."""
        assert types.as_date(text) == date(1967, 8, 27)

    def test_ambiguous_prefers_month_first(self, types):
        """When both orders are valid the month-first format wins."""
        assert types.as_date("01/02/2000") == date(2000, 1, 2)

    def test_explicit_format(self, types):
        """An explicit format is applied strictly."""
        assert types.as_date("01/02/2000", "%d/%m/%Y") == date(2000, 2, 1)

    def test_explicit_format_mismatch(self, types):
        """A value not matching the explicit format is an error."""
        with pytest.raises(CoercionError) as exc_info:
            types.as_date("2000-02-01", "%d/%m/%Y")
        assert str(exc_info.value) == "'2000-02-01' does not match the date format '%d/%m/%Y'."

    def test_unrecognized(self, types):
        """No matching format is an error."""
        with pytest.raises(CoercionError) as exc_info:
            types.as_date("someday")
        assert str(exc_info.value) == "unrecognized date format: 'someday'."

    def test_custom_formats(self):
        """Configured formats are tried before free-form parsing."""
        types = TypeService(["%d/%m/%Y"])
        assert types.as_date("01/02/2000") == date(2000, 2, 1)
        assert types.as_date("1967-08-27") == date(1967, 8, 27)


class TestCoerce:
    """Test declared type dispatch."""

    @pytest.mark.parametrize("text,declared,value", [
        ("yes", DeclaredType.BOOLEAN, True),
        ("10", DeclaredType.INTEGER, 10),
        ("2.5", DeclaredType.DECIMAL, 2.5),
    ])
    def test_coerce(self, types, text, declared, value):
        """Each declared type uses its own conversion."""
        assert types.coerce(text, declared) == value

    def test_coerce_failure(self, types):
        """Malformed annotated values raise CoercionError."""
        with pytest.raises(CoercionError):
            types.coerce("ten", DeclaredType.INTEGER)
