"""Tests for unchecked (double) and checked (instance_double) substitutes."""

import pytest

from baby_rattle.baby import Baby
from baby_rattle.capabilities import (
    CapabilityError,
    MissingCapabilityError,
    ReservedCapabilityError,
    UndeclaredCapabilityError,
)
from baby_rattle.doubles import double, instance_double
from baby_rattle.rattle import Rattle


class TestUncheckedDouble:
    """double() accepts any stub names."""

    def test_collect_opaque_double(self) -> None:
        rattle = double("I am a fake rattle aka unverified double")
        baby = Baby(rattle)
        assert baby.collect_rattle() == [rattle]
        assert baby.collect_rattle()[1] is rattle

    def test_shake_unconfigured_double_fails(self) -> None:
        rattle = double("I'm a fake rattle")
        baby = Baby(rattle)
        with pytest.raises(MissingCapabilityError, match="shake"):
            baby.shake_rattle()

    def test_direct_access_to_unconfigured_capability_fails(self) -> None:
        rattle = double("I'm a fake rattle")
        with pytest.raises(MissingCapabilityError) as excinfo:
            rattle.shake()
        assert excinfo.value.capability == "shake"
        assert excinfo.value.collaborator is rattle

    def test_shake_configured_double(self) -> None:
        rattle = double("I'm a fake rattle", shake="I'm a rattle being shaken")
        baby = Baby(rattle)
        assert baby.shake_rattle() == "I'm a rattle being shaken"
        rattle.shake.assert_called_once_with()

    def test_throw_is_accepted_even_though_rattle_lacks_it(self) -> None:
        """Unchecked doubles can claim capabilities the real type does not have."""
        rattle = double("Rattle", throw="it flies across the room")
        baby = Baby(rattle)
        assert baby.throw_rattle() == "it flies across the room"

    def test_each_call_is_independent(self) -> None:
        first = double(shake="one")
        second = double(shake="two")
        first.shake()
        assert first.shake() == "one"
        assert second.shake() == "two"
        assert second.shake.call_count == 1

    def test_unchecked_double_is_not_a_rattle(self) -> None:
        assert not isinstance(double(shake="x"), Rattle)


class TestCheckedDouble:
    """instance_double() is verified against the real class."""

    def test_shake_checked_double(self) -> None:
        rattle = instance_double(Rattle, shake="I'm a rattle being shaken")
        baby = Baby(rattle)
        assert baby.shake_rattle() == "I'm a rattle being shaken"

    def test_throw_rejected_at_configuration(self) -> None:
        with pytest.raises(UndeclaredCapabilityError, match="Rattle does not implement: throw") as excinfo:
            instance_double(Rattle, throw="it flies across the room")
        assert excinfo.value.spec_class is Rattle
        assert excinfo.value.capabilities == ["throw"]

    def test_undeclared_error_is_distinguishable(self) -> None:
        with pytest.raises(CapabilityError) as excinfo:
            instance_double(Rattle, throw="x")
        assert not isinstance(excinfo.value, AttributeError)
        assert not isinstance(excinfo.value, MissingCapabilityError)

    def test_mixed_stubs_still_rejected(self) -> None:
        with pytest.raises(UndeclaredCapabilityError) as excinfo:
            instance_double(Rattle, shake="ok", throw="x", juggle="y")
        assert excinfo.value.capabilities == ["juggle", "throw"]

    def test_unstubbed_declared_capability_fails_on_call(self) -> None:
        rattle = instance_double(Rattle)
        baby = Baby(rattle)
        with pytest.raises(MissingCapabilityError, match="shake"):
            baby.shake_rattle()

    def test_throw_on_checked_double_fails_on_access(self) -> None:
        rattle = instance_double(Rattle, shake="ok")
        with pytest.raises(MissingCapabilityError, match="throw"):
            Baby(rattle).throw_rattle()

    def test_checked_double_passes_isinstance(self) -> None:
        assert isinstance(instance_double(Rattle), Rattle)

    def test_collect_checked_double(self) -> None:
        rattle = instance_double(Rattle)
        assert Baby(rattle).collect_rattle() == [rattle]

    def test_requires_a_class(self) -> None:
        with pytest.raises(TypeError, match="expects a class"):
            instance_double(Rattle(), shake="x")  # type: ignore[arg-type]


class TestStubNames:
    """Which names a substitute can be configured with."""

    def test_name_can_be_stubbed_on_unchecked_double(self) -> None:
        rattle = double("labelled", name="Rattle", shake="ok")
        assert rattle.name() == "Rattle"
        assert rattle.shake() == "ok"

    def test_name_can_be_stubbed_without_a_label(self) -> None:
        assert double(name="Rattle").name() == "Rattle"

    def test_checked_double_label_is_positional(self) -> None:
        rattle = instance_double(Rattle, "my rattle", shake="ok")
        assert "my rattle" in repr(rattle)
        assert rattle.shake() == "ok"

    @pytest.mark.parametrize("reserved", ["called", "call_count", "reset_mock", "side_effect", "_hidden"])
    def test_mock_owned_names_rejected(self, reserved: str) -> None:
        with pytest.raises(ReservedCapabilityError, match=reserved) as excinfo:
            double("x", **{reserved: "yes"})
        assert excinfo.value.capabilities == [reserved]
        assert not isinstance(excinfo.value, AttributeError)

    def test_checked_double_of_class_with_mock_owned_method_rejected(self) -> None:
        class Counter:
            def call_count(self) -> int:
                return 3

        with pytest.raises(ReservedCapabilityError, match="call_count"):
            instance_double(Counter)

    def test_undeclared_reported_before_reserved(self) -> None:
        with pytest.raises(UndeclaredCapabilityError):
            instance_double(Rattle, called="x")
