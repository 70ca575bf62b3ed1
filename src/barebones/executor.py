"""
Executor - tree-walking interpreter for Bare Bones statement trees.

The Interpreter owns the variable store and the "current line" marker
used in error messages. Execution only has side effects on the store.

Failures (uninitialized reads, overflow) raise RuntimeFailure
subclasses and abort immediately; no statement is rolled back.
"""

from __future__ import annotations

import logging
from typing import List

from barebones.errors import (
    NestingTooDeepError,
    UninitializedVariableError,
    VariableOverflowError,
)
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
from barebones.store import MAX_VALUE, Variable, VariableStore


logger = logging.getLogger(__name__)


class Interpreter:
    """
    Executes statements against a VariableStore.

    Properties:
        store: the variables being mutated
        current_line: line of the statement currently executing
        steps: number of statements executed so far
    """

    def __init__(self, store: VariableStore):
        self.store = store
        self.current_line = 0
        self.steps = 0

    def check_initialized(self, var: Variable) -> None:
        if not var.initialized:
            raise UninitializedVariableError(var.name, self.current_line)

    def execute(self, stmt: Statement) -> None:
        """Perform the effect of one statement."""
        self.current_line = stmt.line
        self.steps += 1

        if isinstance(stmt, Clear):
            self.store.set(stmt.var, 0)

        elif isinstance(stmt, Incr):
            self.check_initialized(stmt.var)
            if stmt.var.value >= MAX_VALUE:
                raise VariableOverflowError(stmt.var.name, self.current_line)
            stmt.var.value += 1

        elif isinstance(stmt, Decr):
            self.check_initialized(stmt.var)
            if stmt.var.value:
                stmt.var.value -= 1

        elif isinstance(stmt, While):
            self.check_initialized(stmt.var)
            while stmt.var.value:
                self.execute_sequence(stmt.body)

        elif isinstance(stmt, Copy):
            self.check_initialized(stmt.src)
            self.store.set(stmt.dest, stmt.src.value)

        elif isinstance(stmt, AddClear):
            # overflow is reported on the line of the replaced while
            self.check_initialized(stmt.src)
            self.check_initialized(stmt.dest)
            total = stmt.dest.value + stmt.src.value
            if total > MAX_VALUE:
                raise VariableOverflowError(stmt.dest.name, self.current_line)
            stmt.dest.value = total
            stmt.src.value = 0

        else:
            raise TypeError(f"Unsupported Statement type: {type(stmt)}")

    def execute_sequence(self, statements: List[Statement]) -> None:
        """Execute statements strictly left to right."""
        for stmt in statements:
            self.execute(stmt)

    def run(self, program: Program) -> None:
        logger.debug("executing %s (%d statements)", program.name or "<program>",
                     program.count_statements())
        try:
            self.execute_sequence(program.statements)
        except RecursionError:
            raise NestingTooDeepError(self.current_line)
        logger.debug("finished after %d statement executions", self.steps)


def run_program(program: Program) -> Interpreter:
    """Execute a program against its own store and return the interpreter."""
    interpreter = Interpreter(program.store)
    interpreter.run(program)
    return interpreter
