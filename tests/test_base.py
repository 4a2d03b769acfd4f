from dataclasses import dataclass

import pytest

from npcbehavior.components.base import Component, ComponentError, Registry, Tickable, load_json


@dataclass
class StubComponent(Component):
    val: str

    def name(self):
        return "stub"


def stub_factory(raw):
    data = load_json(raw)
    return StubComponent(val=data.get("val", ""))


def failing_factory(raw):
    raise ComponentError("stub: broken")


class Counter(Tickable):
    def __init__(self, step=0.0):
        self.step = step

    def name(self):
        return "counter"

    def tick(self, board, dt):
        board["elapsed"] = board.get("elapsed", 0) + dt + self.step


def counter_factory(raw):
    data = load_json(raw)
    return Counter(step=float(data.get("step", 0.0)))


def test_register_and_create():
    reg = Registry()
    reg.register("stub", stub_factory)
    comp = reg.create("stub", '{"val":"hello"}')
    assert comp.name() == "stub"
    assert isinstance(comp, StubComponent)
    assert comp.val == "hello"


def test_create_unknown():
    reg = Registry()
    with pytest.raises(ComponentError, match="unknown type"):
        reg.create("nonexistent", "{}")


def test_duplicate_register_raises():
    reg = Registry()
    reg.register("stub", stub_factory)
    with pytest.raises(ValueError, match="duplicate"):
        reg.register("stub", stub_factory)


def test_contains():
    reg = Registry()
    assert "stub" not in reg
    reg.register("stub", stub_factory)
    assert "stub" in reg


def test_factory_error_is_wrapped():
    reg = Registry()
    reg.register("stub", failing_factory)
    with pytest.raises(ComponentError, match="create 'stub'"):
        reg.create("stub", "{}")


def test_create_with_invalid_json():
    reg = Registry()
    reg.register("stub", stub_factory)
    with pytest.raises(ComponentError):
        reg.create("stub", "{not json")


def test_load_json_variants():
    assert load_json('{"a": 1}') == {"a": 1}
    assert load_json(b'{"a": 2}') == {"a": 2}
    assert load_json({"a": 3}) == {"a": 3}
    assert load_json("null") == {}
    assert load_json(None) == {}


def test_load_json_rejects_array():
    with pytest.raises(ComponentError):
        load_json("[1, 2, 3]")


def test_tickable_created_through_registry():
    reg = Registry()
    reg.register("counter", counter_factory)
    counter = reg.create("counter", '{"step": 0.125}')
    assert isinstance(counter, Component)
    assert counter.name() == "counter"
    board = {}
    counter.tick(board, 0.5)
    counter.tick(board, 0.25)
    assert board["elapsed"] == 1.0


def test_component_is_abstract():
    with pytest.raises(TypeError):
        Component()