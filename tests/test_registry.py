"""Tests for the weighted service registry."""

import pytest

from verifier.bootstrap import register_builtin_services
from verifier.errors import ServiceNotFoundError
from verifier.services import DEFAULT_IMPLEMENTATION_WEIGHT, ServiceRegistry, service
from verifier.verification import Reporter


class Greeter:
    """Capability used only by these tests."""

    weight = DEFAULT_IMPLEMENTATION_WEIGHT

    def greet(self):
        return None


class NamedGreeter(Greeter):
    def __init__(self, weight, label):
        self.weight = weight
        self.label = label

    def greet(self):
        return self.label


# =============================================================================
# Ordering
# =============================================================================


class TestGetAll:
    def test_orders_by_ascending_weight(self):
        for weight in [100, 25, 0, 75, 50]:
            ServiceRegistry.register(Greeter, NamedGreeter(weight, f"w{weight}"), name=f"w{weight}")

        weights = [greeter.weight for greeter in ServiceRegistry.get_all(Greeter)]

        assert weights == [0, 25, 50, 75, 100]

    def test_ties_keep_registration_order(self):
        ServiceRegistry.register(Greeter, NamedGreeter(10, "first"), name="first")
        ServiceRegistry.register(Greeter, NamedGreeter(5, "low"), name="low")
        ServiceRegistry.register(Greeter, NamedGreeter(10, "second"), name="second")

        labels = [greeter.label for greeter in ServiceRegistry.get_all(Greeter)]

        assert labels == ["low", "first", "second"]

    def test_empty_capability_returns_empty_list(self):
        assert ServiceRegistry.get_all(Greeter) == []

    def test_returns_a_copy(self):
        ServiceRegistry.register(Greeter, NamedGreeter(1, "a"), name="a")

        ServiceRegistry.get_all(Greeter).clear()

        assert len(ServiceRegistry.get_all(Greeter)) == 1

    def test_registration_after_lookup_is_visible(self):
        ServiceRegistry.register(Greeter, NamedGreeter(50, "a"), name="a")
        assert len(ServiceRegistry.get_all(Greeter)) == 1

        ServiceRegistry.register(Greeter, NamedGreeter(10, "b"), name="b")

        assert [g.label for g in ServiceRegistry.get_all(Greeter)] == ["b", "a"]


# =============================================================================
# Single lookups
# =============================================================================


class TestGetFirst:
    def test_returns_lowest_weight(self):
        ServiceRegistry.register(Greeter, NamedGreeter(DEFAULT_IMPLEMENTATION_WEIGHT, "default"), name="default")
        ServiceRegistry.register(Greeter, NamedGreeter(10, "custom"), name="custom")

        assert ServiceRegistry.get_first(Greeter).label == "custom"

    def test_raises_when_nothing_registered(self):
        with pytest.raises(ServiceNotFoundError) as exc_info:
            ServiceRegistry.get_first(Greeter)

        assert exc_info.value.capability is Greeter
        assert "Greeter" in str(exc_info.value)


class TestGetFirstMatching:
    def test_returns_first_non_none_result(self):
        ServiceRegistry.register(Greeter, NamedGreeter(0, None), name="silent")
        ServiceRegistry.register(Greeter, NamedGreeter(5, "hello"), name="hello")
        ServiceRegistry.register(Greeter, NamedGreeter(9, "later"), name="later")

        assert ServiceRegistry.get_first_matching(Greeter, lambda g: g.greet()) == "hello"

    def test_returns_none_when_nothing_matches(self):
        ServiceRegistry.register(Greeter, NamedGreeter(0, None), name="silent")

        assert ServiceRegistry.get_first_matching(Greeter, lambda g: g.greet()) is None

    def test_returns_none_for_empty_capability(self):
        assert ServiceRegistry.get_first_matching(Greeter, lambda g: g.greet()) is None


# =============================================================================
# Registration
# =============================================================================


class TestRegister:
    def test_reregistering_same_name_is_noop(self):
        ServiceRegistry.register(Greeter, NamedGreeter(1, "original"), name="g")
        ServiceRegistry.register(Greeter, NamedGreeter(0, "replacement"), name="g")

        greeters = ServiceRegistry.get_all(Greeter)
        assert [g.label for g in greeters] == ["original"]

    def test_default_name_is_qualified_class_name(self):
        ServiceRegistry.register(Greeter, Greeter())

        assert ServiceRegistry.is_registered(Greeter, f"{__name__}.Greeter")
        assert ServiceRegistry.list_registered(Greeter) == [f"{__name__}.Greeter"]

    def test_unnamed_instances_of_one_class_are_all_kept(self):
        ServiceRegistry.register(Greeter, NamedGreeter(2, "second"))
        ServiceRegistry.register(Greeter, NamedGreeter(1, "first"))

        assert [g.label for g in ServiceRegistry.get_all(Greeter)] == ["first", "second"]
        assert ServiceRegistry.list_registered(Greeter) == [
            f"{__name__}.NamedGreeter",
            f"{__name__}.NamedGreeter#2",
        ]

    def test_reregistering_same_unnamed_instance_is_noop(self):
        greeter = NamedGreeter(1, "only")

        ServiceRegistry.register(Greeter, greeter)
        ServiceRegistry.register(Greeter, greeter)

        assert ServiceRegistry.get_all(Greeter) == [greeter]

    def test_builtin_registration_is_idempotent(self):
        register_builtin_services()

        assert len(ServiceRegistry.get_all(Reporter)) == 1

    def test_rejects_instance_without_weight(self):
        with pytest.raises(TypeError):
            ServiceRegistry.register(Greeter, object())

    def test_rejects_non_integer_weight(self):
        greeter = NamedGreeter(1.5, "float")

        with pytest.raises(TypeError):
            ServiceRegistry.register(Greeter, greeter)

    def test_service_decorator_registers_instance(self):
        @service(Greeter)
        class DecoratedGreeter(Greeter):
            weight = 3

            def greet(self):
                return "decorated"

        assert isinstance(ServiceRegistry.get_first(Greeter), DecoratedGreeter)

    def test_clear_removes_everything(self):
        ServiceRegistry.register(Greeter, Greeter())

        ServiceRegistry.clear()

        assert ServiceRegistry.get_all(Greeter) == []
        assert ServiceRegistry.list_registered(Greeter) == []
