"""
Tests for the Variable Store.

These tests verify:
    - Case-insensitive identity
    - Creation policies (eager zero vs explicit init)
    - set/get semantics and range checks
    - Iteration order
    - VAR=VALUE initializer parsing
"""

import pytest
from barebones.errors import InitializerError
from barebones.store import (
    MAX_VALUE,
    InitPolicy,
    Variable,
    VariableStore,
    parse_initializer,
)


class TestLookup:
    """Test lookup_or_create."""

    def test_creates_on_first_lookup(self):
        """Should create a variable the first time a name is seen."""
        store = VariableStore()
        var = store.lookup_or_create("X")
        assert isinstance(var, Variable)
        assert var.name == "X"
        assert len(store) == 1

    def test_case_insensitive_identity(self):
        """Spellings that differ only in case are the same variable."""
        store = VariableStore()
        a = store.lookup_or_create("count")
        b = store.lookup_or_create("COUNT")
        c = store.lookup_or_create("Count")
        assert a is b is c
        assert len(store) == 1

    def test_first_spelling_kept(self):
        """The display name is the first spelling seen."""
        store = VariableStore()
        store.lookup_or_create("Total")
        assert store.lookup_or_create("TOTAL").name == "Total"

    def test_unreferenced_variables_absent(self):
        """Names never looked up do not appear in the store."""
        store = VariableStore()
        store.lookup_or_create("X")
        assert "X" in store
        assert "x" in store
        assert "Y" not in store
        assert store.find("Y") is None

    def test_distinct_names_distinct_variables(self):
        store = VariableStore()
        assert store.lookup_or_create("X") is not store.lookup_or_create("Y")


class TestPolicy:
    """Test creation policies."""

    def test_eager_zero_is_default(self):
        store = VariableStore()
        assert store.policy is InitPolicy.EAGER_ZERO
        assert store.get(store.lookup_or_create("X")) == (0, True)

    def test_require_explicit_init(self):
        """New variables start uninitialized."""
        store = VariableStore(InitPolicy.REQUIRE_EXPLICIT_INIT)
        var = store.lookup_or_create("X")
        assert var.initialized is False

    def test_policy_values(self):
        assert InitPolicy("eager_zero") is InitPolicy.EAGER_ZERO
        assert InitPolicy("require_explicit_init") is InitPolicy.REQUIRE_EXPLICIT_INIT


class TestSetGet:
    """Test set and get."""

    def test_set_marks_initialized(self):
        store = VariableStore(InitPolicy.REQUIRE_EXPLICIT_INIT)
        var = store.lookup_or_create("X")
        store.set(var, 37)
        assert store.get(var) == (37, True)

    def test_set_rejects_negative(self):
        store = VariableStore()
        with pytest.raises(ValueError):
            store.set(store.lookup_or_create("X"), -1)

    def test_set_rejects_too_large(self):
        store = VariableStore()
        with pytest.raises(ValueError):
            store.set(store.lookup_or_create("X"), MAX_VALUE + 1)

    def test_set_accepts_max(self):
        store = VariableStore()
        var = store.lookup_or_create("X")
        store.set(var, MAX_VALUE)
        assert var.value == MAX_VALUE


class TestIteration:
    """Test iteration order and snapshots."""

    def test_most_recent_first(self):
        store = VariableStore()
        for name in ("A", "B", "C"):
            store.lookup_or_create(name)
        assert [v.name for v in store] == ["C", "B", "A"]

    def test_snapshot(self):
        store = VariableStore(InitPolicy.REQUIRE_EXPLICIT_INIT)
        store.lookup_or_create("A")
        store.set(store.lookup_or_create("B"), 4)
        assert store.snapshot() == [("B", 4, True), ("A", 0, False)]


class TestParseInitializer:
    """Test VAR=VALUE parsing."""

    def test_decimal(self):
        assert parse_initializer("X=37") == ("X", 37)

    def test_hex(self):
        assert parse_initializer("X=0x10") == ("X", 16)

    def test_leading_zero_decimal(self):
        assert parse_initializer("X=010") == ("X", 10)

    def test_negative_rejected(self):
        with pytest.raises(InitializerError, match="negative"):
            parse_initializer("X=-3")

    def test_not_an_integer(self):
        with pytest.raises(InitializerError, match="can't interpret"):
            parse_initializer("X=abc")

    def test_empty_value(self):
        with pytest.raises(InitializerError):
            parse_initializer("X=")

    def test_missing_name(self):
        with pytest.raises(InitializerError):
            parse_initializer("=5")

    def test_octal_and_binary(self):
        assert parse_initializer("X=0o17") == ("X", 15)
        assert parse_initializer("X=0b101") == ("X", 5)

    @pytest.mark.parametrize("text", ["X=+5", "X=1_000", "X=0x", "X=1.5", "X= 0x_1"])
    def test_non_literal_values_rejected(self, text):
        with pytest.raises(InitializerError, match="can't interpret"):
            parse_initializer(text)

    @pytest.mark.parametrize("text", ["1 X=3", "X Y=3", "1X=3", "X-1=3"])
    def test_invalid_names_rejected(self, text):
        with pytest.raises(InitializerError, match="not a valid variable name"):
            parse_initializer(text)

    def test_too_large(self):
        with pytest.raises(InitializerError):
            parse_initializer(f"X={MAX_VALUE + 1}")
