from __future__ import annotations

from dataclasses import dataclass

import pytest

from tests.helpers.resources import Gadget, Widget
from zappy.domain.errors import ClassResolutionError
from zappy.domain.model import DirectType, NamedRegistration, ResourceRegistry


def test_resolves_registered_class_to_named_registration(registry: ResourceRegistry) -> None:
    assert registry.resolve(Widget) == NamedRegistration("widget")


def test_resolves_unregistered_class_to_direct_type(registry: ResourceRegistry) -> None:
    assert registry.resolve(Gadget) == DirectType(Gadget)


def test_resolves_symbolic_name(registry: ResourceRegistry) -> None:
    assert registry.resolve("widget") == NamedRegistration("widget")


def test_accepts_double_colon_separators() -> None:
    registry = ResourceRegistry()
    registry.add(Widget, "acme.widget")

    assert registry.resolve("acme::widget") == NamedRegistration("acme.widget")


def test_unknown_name_raises_class_resolution_error(registry: ResourceRegistry) -> None:
    with pytest.raises(ClassResolutionError, match="Nonexistent::Thing") as excinfo:
        registry.resolve("Nonexistent::Thing")

    assert excinfo.value.token == "Nonexistent::Thing"


def test_non_resource_spec_raises(registry: ResourceRegistry) -> None:
    with pytest.raises(ClassResolutionError):
        registry.resolve(int)


def test_resolve_all_keeps_order_and_rejects_empty(registry: ResourceRegistry) -> None:
    assert registry.resolve_all(["widget", Gadget]) == (
        NamedRegistration("widget"),
        DirectType(Gadget),
    )
    assert registry.resolve_all(Widget) == (NamedRegistration("widget"),)

    with pytest.raises(ClassResolutionError):
        registry.resolve_all(())


def test_class_for_looks_up_latest_registration(registry: ResourceRegistry) -> None:
    ref = registry.resolve("widget")

    @dataclass(eq=False, kw_only=True)
    class LateWidget(Widget):
        pass

    registry.add(LateWidget, "widget")

    assert registry.class_for(ref) is LateWidget
    assert registry.class_for(DirectType(Gadget)) is Gadget


def test_build_uses_registration_or_direct_type(registry: ResourceRegistry) -> None:
    named = registry.build(NamedRegistration("widget"), "a", action="delete")
    direct = registry.build(DirectType(Gadget), "b", action="remove")

    assert type(named) is Widget
    assert (named.name, named.action) == ("a", "delete")
    assert type(direct) is Gadget
    assert (direct.name, direct.action) == ("b", "remove")


def test_register_decorator_requires_a_name() -> None:
    registry = ResourceRegistry()

    with pytest.raises(ValueError, match="RESOURCE_NAME"):
        registry.register()(Gadget)

    registry.register("gadget")(Gadget)
    assert "gadget" in registry
