import pytest

from jsonfable.core.tag import describe_tag
from jsonfable.core.tag import get_tag_key
from jsonfable.core.tag import is_tag_dict
from jsonfable.core.tag import make_tag


def test_make_tag_leaves_out_missing_fields():
    assert make_tag("Fancy") == {"cls": "Fancy"}
    assert make_tag("Fancy", "fun") == {"cls": "Fancy", "key": "fun"}
    assert make_tag("Fancy", args=("x",)) == {"cls": "Fancy", "args": ["x"]}


def test_make_tag_keeps_falsy_payload():
    assert make_tag("Fancy", ths=None) == {"cls": "Fancy", "ths": None}
    assert make_tag("Fancy", ths=0) == {"cls": "Fancy", "ths": 0}


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ({"$MAGIC$": {"cls": "Fancy"}}, True),
        ({"$MAGIC$": {"cls": "Fancy", "ths": None, "key": "foo"}}, True),
        ({"$MAGIC$": {"cls": "Fancy"}, "other": 1}, False),
        ({"$MAGIC$": {"key": "foo"}}, False),
        ({"$MAGIC$": {"cls": 1}}, False),
        ({"$MAGIC$": "Fancy"}, False),
        ({"cls": "Fancy"}, False),
        ({}, False),
    ],
    ids=[
        "bare",
        "full",
        "extra-keys",
        "no-cls",
        "non-string-cls",
        "not-a-record",
        "untagged",
        "empty",
    ],
)
def test_is_tag_dict(value, expected):
    assert is_tag_dict(value) is expected


def test_tag_key_is_configurable(monkeypatch: pytest.MonkeyPatch):
    assert get_tag_key() == "$MAGIC$"
    monkeypatch.setenv("JSONFABLE_TAG_KEY", "__ref__")
    assert get_tag_key() == "__ref__"
    assert is_tag_dict({"__ref__": {"cls": "Fancy"}})
    assert not is_tag_dict({"$MAGIC$": {"cls": "Fancy"}})


def test_describe_tag():
    assert describe_tag(make_tag("Fancy")) == "Fancy"
    assert describe_tag(make_tag("Fancy", "foo", ths={})) == "Fancy(...).foo"
    assert describe_tag(make_tag("H", "extend", args=["x"])) == "H.extend(*1 args)"
