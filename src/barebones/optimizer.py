"""
Peephole optimizer for Bare Bones statement trees.

Recognizes the transfer loop

    while B not 0 do;
        incr A;
        decr B;
    end;

(either order inside the body, A distinct from B) and replaces it in
place with AddClear(src=B, dest=A). Loops that do not match are left
alone and their bodies are optimized recursively.

One pass, top to bottom. Running it a second time finds nothing new.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from barebones.model import Statement, Incr, Decr, While, AddClear, Program


logger = logging.getLogger(__name__)


def _match_transfer_loop(loop: While) -> Optional[AddClear]:
    """Return the AddClear equivalent of `loop`, or None if it does not match."""
    if len(loop.body) != 2:
        return None

    first, second = loop.body
    control = loop.var

    if isinstance(first, Incr) and isinstance(second, Decr):
        incr, decr = first, second
    elif isinstance(first, Decr) and isinstance(second, Incr):
        decr, incr = first, second
    else:
        return None

    if decr.var is not control or incr.var is control:
        return None

    return AddClear(src=decr.var, dest=incr.var, line=loop.line)


def optimize(statements: List[Statement]) -> int:
    """
    Optimize a statement sequence in place.

    Returns:
        number of loops rewritten, including nested ones
    """
    rewrites = 0
    for index, stmt in enumerate(statements):
        if not isinstance(stmt, While):
            continue
        replacement = _match_transfer_loop(stmt)
        if replacement is not None:
            logger.debug(
                "line %d: while %s -> add_clear %s into %s",
                stmt.line, stmt.var.name, replacement.src.name, replacement.dest.name,
            )
            statements[index] = replacement
            rewrites += 1
        else:
            rewrites += optimize(stmt.body)
    return rewrites


def optimize_program(program: Program) -> int:
    rewrites = optimize(program.statements)
    logger.info("optimizer rewrote %d loop(s)", rewrites)
    return rewrites
