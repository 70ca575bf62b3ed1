"""
Tests for serialization and deserialization of Bare Bones objects.

These tests ensure statement trees and variable state survive a
JSON/YAML round trip using the functions in `barebones.serialization`.
"""

import json

import pytest
import yaml

from barebones.examples import MULTIPLY_SOURCE
from barebones.model import AddClear, While
from barebones.optimizer import optimize_program
from barebones.parser import parse_string
from barebones.serialization import (
    program_to_dict,
    program_from_dict,
    program_to_json,
    program_from_json,
    program_to_yaml,
    program_from_yaml,
    statement_from_dict,
    store_to_dict,
    store_from_dict,
    store_to_json,
    store_to_yaml,
)
from barebones.store import InitPolicy, VariableStore


def build_sample_program():
    program = parse_string(MULTIPLY_SOURCE + "copy Z to Result;\n", name="multiply")
    optimize_program(program)
    return program


def test_json_roundtrip():
    program = build_sample_program()
    before = program_to_dict(program)
    restored = program_from_json(program_to_json(program))
    assert program_to_dict(restored) == before


def test_yaml_roundtrip():
    program = build_sample_program()
    before = program_to_dict(program)
    restored = program_from_yaml(program_to_yaml(program))
    assert program_to_dict(restored) == before


def test_roundtrip_preserves_variable_identity():
    restored = program_from_yaml(program_to_yaml(build_sample_program()))
    outer = restored.statements[1]
    assert isinstance(outer, While)
    add_clear = outer.body[2]
    assert isinstance(add_clear, AddClear)
    assert add_clear.src is outer.body[0].var
    assert restored.store.find("W") is add_clear.src


def test_dict_layout():
    d = program_to_dict(parse_string("while X not 0 do; decr X; end;", name="p"))
    assert d == {
        "name": "p",
        "statements": [{
            "type": "while",
            "var": "X",
            "line": 1,
            "body": [{"type": "decr", "var": "X", "line": 1}],
        }],
    }


def test_unknown_statement_type():
    with pytest.raises(TypeError):
        statement_from_dict({"type": "goto"}, VariableStore())


def test_store_snapshot():
    store = VariableStore(InitPolicy.REQUIRE_EXPLICIT_INIT)
    store.lookup_or_create("A")
    store.set(store.lookup_or_create("B"), 12)

    d = store_to_dict(store)
    assert d == {
        "policy": "require_explicit_init",
        "variables": [
            {"name": "B", "value": 12, "initialized": True},
            {"name": "A", "value": None, "initialized": False},
        ],
    }
    assert yaml.safe_load(store_to_yaml(store)) == d
    assert json.loads(store_to_json(store)) == d


def test_store_roundtrip():
    store = VariableStore(InitPolicy.REQUIRE_EXPLICIT_INIT)
    store.lookup_or_create("A")
    store.set(store.lookup_or_create("B"), 12)
    restored = store_from_dict(store_to_dict(store))
    assert restored.policy is InitPolicy.REQUIRE_EXPLICIT_INIT
    assert restored.snapshot() == store.snapshot()
