"""
Bare Bones Interpreter Package

An interpreter for the Bare Bones language: six statement forms
operating on non-negative integer variables.

LAYERS:
-------
    store       - case-insensitive variable store with init tracking
    model       - statement tree (Clear, Incr, Decr, While, Copy, AddClear)
    executor    - tree-walking interpreter
    optimizer   - peephole rewrite of transfer loops into AddClear
    parser      - source text -> statement tree
    serialization, config, cli - the outer surface

The core (store, model, executor, optimizer) never touches the process:
failures are raised as exceptions and handled by the CLI.
"""

__version__ = "0.1.0"
