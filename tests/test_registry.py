"""Tests for pmtrack.core.registry module."""

import pytest

from pmtrack.core import (
    AllocationFailure,
    DuplicateIdentifier,
    IdentifierRegistry,
    InvalidInput,
    RecoverableError,
    check_identifier,
)


class TestCheckIdentifier:
    """Tests for check_identifier()."""

    def test_accepts_zero_and_positive(self):
        assert check_identifier(0) == 0
        assert check_identifier(65535) == 65535

    def test_accepts_values_beyond_legacy_range(self):
        """The 16-bit limit is not part of the contract."""
        assert check_identifier(70000) == 70000

    @pytest.mark.parametrize("bad", [-1, 1.5, "10", None, True])
    def test_rejects_invalid(self, bad):
        with pytest.raises(InvalidInput) as exc:
            check_identifier(bad)
        assert exc.value.field == "identifier"


class TestRegister:
    """Tests for IdentifierRegistry.register()."""

    def test_new_registry_is_empty(self):
        registry = IdentifierRegistry()
        assert len(registry) == 0
        assert not registry.contains(1)

    def test_register_then_contains(self):
        registry = IdentifierRegistry()
        assert registry.register(7) == 7
        assert registry.contains(7)
        assert 7 in registry
        assert not registry.contains(8)

    def test_second_register_of_same_id_fails(self):
        """An id is accepted at most once."""
        registry = IdentifierRegistry()
        registry.register(42)
        with pytest.raises(DuplicateIdentifier) as exc:
            registry.register(42)
        assert exc.value.identifier == 42
        assert "42" in str(exc.value)

    def test_failed_register_leaves_registry_unchanged(self):
        registry = IdentifierRegistry()
        registry.register(1)
        with pytest.raises(DuplicateIdentifier):
            registry.register(1)
        assert len(registry) == 1

    def test_rejects_invalid_identifier_without_registering(self):
        registry = IdentifierRegistry()
        with pytest.raises(InvalidInput):
            registry.register(-3)
        assert len(registry) == 0

    def test_grows_without_capacity_limit(self):
        registry = IdentifierRegistry()
        for i in range(500):
            registry.register(i)
        assert len(registry) == 500
        assert registry.issued() == list(range(500))

    def test_no_sequence_accepts_an_id_twice(self):
        registry = IdentifierRegistry()
        accepted = []
        for candidate in [5, 3, 5, 9, 3, 0, 9, 0, 12]:
            try:
                accepted.append(registry.register(candidate))
            except DuplicateIdentifier:
                pass
        assert accepted == [5, 3, 9, 0, 12]
        assert len(set(accepted)) == len(accepted)

    def test_duplicate_is_recoverable(self):
        assert issubclass(DuplicateIdentifier, RecoverableError)


class TestIssued:
    """Tests for IdentifierRegistry.issued()."""

    def test_sorted_ascending(self):
        registry = IdentifierRegistry()
        for i in (30, 10, 20):
            registry.register(i)
        assert registry.issued() == [10, 20, 30]


class _FullSet(set):
    def add(self, item):
        raise MemoryError


class TestRegistryAllocation:
    """Tests for register() when the backing set cannot grow."""

    def test_memory_error_becomes_allocation_failure(self):
        registry = IdentifierRegistry()
        registry._issued = _FullSet()
        with pytest.raises(AllocationFailure) as exc:
            registry.register(7)
        assert isinstance(exc.value.__cause__, MemoryError)
        assert "registering identifier 7" in str(exc.value)

    def test_allocation_failure_is_not_recoverable(self):
        registry = IdentifierRegistry()
        registry._issued = _FullSet()
        with pytest.raises(AllocationFailure) as exc:
            registry.register(7)
        assert not isinstance(exc.value, RecoverableError)
