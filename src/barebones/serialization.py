"""
Serialization helpers for Bare Bones objects (statement trees, variable state).

Provides JSON/YAML round-trip via an intermediate dict representation.
Variables are written by name; reading a tree back resolves the names
through a VariableStore, so the usual case-insensitive identity holds.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import yaml

from barebones.model import (
    Statement,
    Clear,
    Incr,
    Decr,
    While,
    Copy,
    AddClear,
    Program,
)
from barebones.store import InitPolicy, VariableStore


_SINGLE_VAR_TYPES = {"clear": Clear, "incr": Incr, "decr": Decr}


def statement_to_dict(stmt: Statement) -> Dict[str, Any]:
    if isinstance(stmt, Clear):
        return {"type": "clear", "var": stmt.var.name, "line": stmt.line}
    if isinstance(stmt, Incr):
        return {"type": "incr", "var": stmt.var.name, "line": stmt.line}
    if isinstance(stmt, Decr):
        return {"type": "decr", "var": stmt.var.name, "line": stmt.line}
    if isinstance(stmt, While):
        return {
            "type": "while",
            "var": stmt.var.name,
            "line": stmt.line,
            "body": [statement_to_dict(s) for s in stmt.body],
        }
    if isinstance(stmt, Copy):
        return {"type": "copy", "src": stmt.src.name, "dest": stmt.dest.name, "line": stmt.line}
    if isinstance(stmt, AddClear):
        return {"type": "add_clear", "src": stmt.src.name, "dest": stmt.dest.name, "line": stmt.line}
    raise TypeError(f"Unsupported Statement type: {type(stmt)}")


def statement_from_dict(d: Dict[str, Any], store: VariableStore) -> Statement:
    t = d.get("type")
    line = d.get("line", 0)
    if t in _SINGLE_VAR_TYPES:
        return _SINGLE_VAR_TYPES[t](var=store.lookup_or_create(d["var"]), line=line)
    if t == "while":
        return While(
            var=store.lookup_or_create(d["var"]),
            body=[statement_from_dict(s, store) for s in d.get("body", [])],
            line=line,
        )
    if t == "copy":
        return Copy(src=store.lookup_or_create(d["src"]), dest=store.lookup_or_create(d["dest"]), line=line)
    if t == "add_clear":
        return AddClear(src=store.lookup_or_create(d["src"]), dest=store.lookup_or_create(d["dest"]), line=line)
    raise TypeError(f"Unsupported statement dict type: {t}")


def program_to_dict(p: Program) -> Dict[str, Any]:
    return {
        "name": p.name,
        "statements": [statement_to_dict(s) for s in p.statements],
    }


def program_from_dict(d: Dict[str, Any], store: Optional[VariableStore] = None) -> Program:
    if store is None:
        store = VariableStore()
    p = Program(store=store, name=d.get("name", ""))
    p.statements = [statement_from_dict(s, store) for s in d.get("statements", [])]
    return p


def store_to_dict(store: VariableStore) -> Dict[str, Any]:
    variables: List[Dict[str, Any]] = []
    for name, value, initialized in store.snapshot():
        variables.append({
            "name": name,
            "value": value if initialized else None,
            "initialized": initialized,
        })
    return {"policy": store.policy.value, "variables": variables}


def store_from_dict(d: Dict[str, Any]) -> VariableStore:
    store = VariableStore(InitPolicy(d.get("policy", InitPolicy.EAGER_ZERO.value)))
    # snapshot order is newest first; recreate oldest first to keep it
    for entry in reversed(d.get("variables", [])):
        var = store.lookup_or_create(entry["name"])
        if entry.get("initialized"):
            store.set(var, entry.get("value") or 0)
        else:
            var.value = 0
            var.initialized = False
    return store


def program_to_json(p: Program) -> str:
    return json.dumps(program_to_dict(p), sort_keys=True)


def program_from_json(s: str, store: Optional[VariableStore] = None) -> Program:
    d = json.loads(s)
    return program_from_dict(d, store)


def program_to_yaml(p: Program) -> str:
    return yaml.safe_dump(program_to_dict(p), sort_keys=False)


def program_from_yaml(s: str, store: Optional[VariableStore] = None) -> Program:
    d = yaml.safe_load(s)
    return program_from_dict(d, store)


def store_to_json(store: VariableStore) -> str:
    return json.dumps(store_to_dict(store), sort_keys=True)


def store_to_yaml(store: VariableStore) -> str:
    return yaml.safe_dump(store_to_dict(store), sort_keys=False)
