import pytest

from jsonfable.core.decoder import decode
from jsonfable.core.encoder import encode
from tests.fables import REGISTRY
from tests.fables import Fable
from tests.fables import Fancy
from tests.fables import Gauge
from tests.fables import H
from tests.fables import Simple
from tests.fables import Slotted

PLAIN_VALUES = [
    None,
    0,
    -1.5,
    "text",
    True,
    [],
    {},
    [
        {"name": "clx.js", "isFile": True, "isDirectory": False, "isSymlink": False},
        {"name": "clx.ts", "isFile": True, "isDirectory": False, "isSymlink": False},
    ],
    {"name": "clx.js", "isFile": True, "nested": {"list": [1, None, "x"]}},
]


@pytest.mark.parametrize("value", PLAIN_VALUES, ids=repr)
def test_plain_data(value):
    assert decode(encode(value), {}) == value


@pytest.mark.parametrize("cls", [Fable, Fancy, Simple, Slotted, Gauge], ids=lambda c: c.__name__)
def test_type_reference(cls):
    assert decode(encode(cls), REGISTRY) is cls


@pytest.mark.parametrize(
    "value",
    [
        Fable({"data": Fable}),
        Fancy({"some": [True, "bar"]}),
        Simple({"data": Simple}),
        Simple({"data": [Fable("nested"), {"deep": Slotted({"left": Simple, "right": 1})}]}),
        Slotted({"left": None, "right": "x"}),
    ],
    ids=["fable", "fancy", "simple", "simple-nested", "slotted"],
)
def test_instance(value):
    assert decode(encode(value), REGISTRY) == value


def test_unbound_static_reference():
    first = decode(encode(Fancy.fun), REGISTRY)
    second = decode(encode(Fancy.fun), REGISTRY)
    assert first == second == Fancy.fun
    assert first is Fancy.fun
    assert first("z") == Fancy.fun("z") == "z"


def test_unbound_instance_reference():
    fancy = Fancy({"some": [True, "bar"]})
    decoded = decode(encode(fancy.foo), REGISTRY)
    assert decoded() == fancy.foo() == {"some": [True, "bar"]}
    assert decoded != fancy.foo


def test_bound_instance_reference():
    fancy = Fancy({"some": [False, "foo"]})
    decoded = decode(encode(fancy.bar), REGISTRY)
    assert decoded() == fancy.bar() == {"some": [False, "foo"]}
    assert decoded is not fancy.bar
    assert decoded != fancy.bar


def test_property_reference():
    decoded = decode(encode(Gauge({"level": 3}).doubled), REGISTRY)
    assert decoded == 6


def test_factory_call():
    decoded = decode(encode(H.extend("x")), REGISTRY)
    assert decoded.k == "x"
    assert issubclass(decoded, H)


def test_double_round_trip_of_static_reference():
    once = decode(encode(Fancy.fun), REGISTRY)
    twice = decode(encode(once), REGISTRY)
    assert twice == once == Fancy.fun


def test_double_round_trip_of_instance_reference():
    fancy = Fancy({"not": "nil"})
    once = decode(encode(fancy.foo), REGISTRY)
    assert encode(once) == encode(fancy.foo)
    twice = decode(encode(once), REGISTRY)
    assert twice() == once() == fancy.foo()


def test_double_round_trip_of_nested_references():
    value = {"refs": [Fancy.fun, Fancy({"a": 1}).bar, Fable], "obj": Simple({"data": Fable})}
    once = decode(encode(value), REGISTRY)
    twice = decode(encode(once), REGISTRY)
    assert encode(twice) == encode(once) == encode(value)
    assert twice["refs"][1]() == {"a": 1}
