"""Tests for rendered text formatting and JSON value helpers."""

from datetime import datetime

import pytest

from fluent_elastic.core.format import beautify_json, fragment_to_dict
from fluent_elastic.core.utilities import drop_none, json_key, json_member, json_value


def test_beautify_json_indents_document():
    assert beautify_json('{ "a": 1,"b": [1,2] }') == (
        '{\n  "a": 1,\n  "b": [\n    1,\n    2\n  ]\n}'
    )


def test_beautify_json_rejects_fragment():
    with pytest.raises(ValueError):
        beautify_json('"aggregations": {  }')


@pytest.mark.parametrize(
    "fragment,expected",
    [
        ('"aggregations": {  }', {"aggregations": {}}),
        ('"a": 1,"b": { "c": [1] }', {"a": 1, "b": {"c": [1]}}),
    ],
    ids=["empty_envelope", "several_members"],
)
def test_fragment_to_dict(fragment, expected):
    assert fragment_to_dict(fragment) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("category", '"category"'),
        ("it's \"quoted\"", '"it\'s \\"quoted\\""'),
        (10, "10"),
        (True, "true"),
        (None, "null"),
        ({"min": 0, "max": 5}, '{"min":0,"max":5}'),
        (datetime(2024, 1, 2, 3, 4, 5), '"2024-01-02T03:04:05"'),
    ],
    ids=["string", "quotes", "int", "bool", "none", "dict", "datetime"],
)
def test_json_value(value, expected):
    assert json_value(value) == expected


def test_json_key_stringifies_name():
    assert json_key(5) == '"5"'


def test_json_member():
    assert json_member("field", "price") == '"field": "price"'


def test_drop_none_keeps_call_order():
    assert list(drop_none(b=1, a=None, c=0, d=False)) == ["b", "c", "d"]
