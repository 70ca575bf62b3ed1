"""
Variable Store

Maps case-insensitive names to variable records. A record is created the
first time a name is looked up and lives for the rest of the run.

The store is expected to hold a handful of variables, so lookup is a
linear scan over a list rather than a hash table.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from barebones.errors import InitializerError


MAX_VALUE = 2 ** 64 - 1

IDENTIFIER_PATTERN = r"[A-Za-z_][A-Za-z0-9_]*"

_NAME_RE = re.compile(IDENTIFIER_PATTERN)
_DECIMAL_RE = re.compile(r"[0-9]+")
_PREFIXED_RE = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


class InitPolicy(Enum):
    """
    What a brand-new variable looks like.

    EAGER_ZERO:
        New variables start initialized with value 0.
    REQUIRE_EXPLICIT_INIT:
        New variables start uninitialized; reading one before a clear,
        copy or pre-seed is a runtime error.
    """

    EAGER_ZERO = "eager_zero"
    REQUIRE_EXPLICIT_INIT = "require_explicit_init"


@dataclass(eq=False)
class Variable:
    """
    A single named variable.

    Records compare by identity: the store hands out exactly one record
    per name, so two statements refer to the same variable iff they
    hold the same object.

    Properties:
        name: spelling of the first reference (display only)
        value: current unsigned value
        initialized: whether the variable has ever been assigned
    """

    name: str
    value: int = 0
    initialized: bool = False

    def matches(self, name: str) -> bool:
        return self.name.casefold() == name.casefold()


class VariableStore:
    """
    Case-insensitive variable store.

    Iteration yields the most recently created variable first.
    """

    def __init__(self, policy: InitPolicy = InitPolicy.EAGER_ZERO):
        self.policy = policy
        self._variables: List[Variable] = []

    def find(self, name: str) -> Optional[Variable]:
        """
        Retrieve a variable by name without creating it.

        Returns:
            Variable object or None if not found
        """
        for var in self._variables:
            if var.matches(name):
                return var
        return None

    def lookup_or_create(self, name: str) -> Variable:
        """
        Return the variable called `name` (any case), creating it if needed.

        A new variable is initialized to zero only under EAGER_ZERO.
        """
        var = self.find(name)
        if var is not None:
            return var
        if self.policy is InitPolicy.EAGER_ZERO:
            var = Variable(name=name, value=0, initialized=True)
        else:
            var = Variable(name=name)
        self._variables.insert(0, var)
        return var

    def set(self, var: Variable, value: int) -> None:
        if value < 0 or value > MAX_VALUE:
            raise ValueError(f"value {value} out of range for variable {var.name}")
        var.value = value
        var.initialized = True

    def get(self, var: Variable) -> Tuple[int, bool]:
        return var.value, var.initialized

    def snapshot(self) -> List[Tuple[str, int, bool]]:
        """(name, value, initialized) for every variable, in iteration order."""
        return [(v.name, v.value, v.initialized) for v in self._variables]

    def __iter__(self) -> Iterator[Variable]:
        return iter(list(self._variables))

    def __len__(self) -> int:
        return len(self._variables)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None


def parse_initializer(text: str) -> Tuple[str, int]:
    """
    Parse a VAR=VALUE initializer from the command line.

    The value accepts decimal and 0x/0o/0b prefixed literals.

    Raises:
        InitializerError: if the name is missing, the value is not an
            integer, or the value is negative or too large
    """
    if "=" not in text:
        raise InitializerError(f"initializer '{text}' must look like VAR=VALUE")
    name, _, raw = text.partition("=")
    name = name.strip()
    raw = raw.strip()
    if not name:
        raise InitializerError(f"initializer '{text}' has no variable name")
    if not _NAME_RE.fullmatch(name):
        raise InitializerError(f"'{name}' is not a valid variable name")

    if raw.startswith("-") and (_DECIMAL_RE.fullmatch(raw[1:]) or _PREFIXED_RE.fullmatch(raw[1:])):
        raise InitializerError("negative values are not permitted")
    if _DECIMAL_RE.fullmatch(raw):
        value = int(raw, 10)
    elif _PREFIXED_RE.fullmatch(raw):
        value = int(raw, 0)
    else:
        raise InitializerError(f"can't interpret '{raw}' as an integer")

    if value > MAX_VALUE:
        raise InitializerError(f"value {value} exceeds the maximum of {MAX_VALUE}")
    return name, value
