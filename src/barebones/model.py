"""
Statement Tree

Defines the statement nodes of a Bare Bones program.

    - Clear, Incr, Decr (single variable)
    - While (control variable + owned body)
    - Copy (source -> destination)
    - AddClear (produced only by the optimizer)
    - Program (root container)

ARCHITECTURAL RULE:
    These objects are structure only.
    Execution lives in barebones.executor,
    rewriting lives in barebones.optimizer.

Variable references are Variable records from the store, already
resolved by the parser, so identity comparison (`is`) tells whether
two statements touch the same variable.
"""

from abc import ABC
from dataclasses import dataclass, field
from typing import Iterator, List

from barebones.store import Variable, VariableStore


class Statement(ABC):
    """
    Base class for all statement nodes.

    Every concrete statement has a `line` field holding the 1-based
    source line, used for error reporting.
    """
    pass


@dataclass
class Clear(Statement):
    """clear X;  -> X = 0, marks X initialized."""

    var: Variable
    line: int = 0


@dataclass
class Incr(Statement):
    """incr X;"""

    var: Variable
    line: int = 0


@dataclass
class Decr(Statement):
    """decr X;  (saturates at zero)"""

    var: Variable
    line: int = 0


@dataclass
class While(Statement):
    """
    while X not 0 do; ... end;

    Properties:
        var: control variable, tested before each iteration
        body: statements executed in order on each iteration
    """

    var: Variable
    body: List[Statement] = field(default_factory=list)
    line: int = 0


@dataclass
class Copy(Statement):
    """copy X to Y;"""

    src: Variable
    dest: Variable
    line: int = 0


@dataclass
class AddClear(Statement):
    """
    dest += src; src = 0

    Never written by hand. The optimizer substitutes it for
    `while src not 0 do; incr dest; decr src; end;`.

    Errors carry the line of the replaced while statement, so an
    overflow is reported there rather than on the incr inside the loop.
    """

    src: Variable
    dest: Variable
    line: int = 0


def walk(statements: List[Statement]) -> Iterator[Statement]:
    """Yield every statement in a sequence, depth-first, in source order."""
    stack = [iter(statements)]
    while stack:
        for stmt in stack[-1]:
            yield stmt
            if isinstance(stmt, While):
                stack.append(iter(stmt.body))
                break
        else:
            stack.pop()


@dataclass
class Program:
    """
    Root container for a parsed program.

    Properties:
        statements: top-level sequence, executed in order
        store: the store the parser resolved variable names against
        name: program identifier (usually the source file name)
    """

    statements: List[Statement] = field(default_factory=list)
    store: VariableStore = field(default_factory=VariableStore)
    name: str = ""

    def count_statements(self) -> int:
        return sum(1 for _ in walk(self.statements))
