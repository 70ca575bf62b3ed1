"""
Example Bare Bones programs.

Sources for the classic addition and multiplication programs, plus a
programmatic builder for multiplication that constructs the statement
tree directly (no parser involved).
"""
from barebones.model import Program, Clear, Incr, Decr, While, Copy
from barebones.store import VariableStore


# Z = X + Y; X and Y are consumed.
ADDITION_SOURCE = """\
clear Z;
while X not 0 do;
    incr Z;
    decr X;
end;
while Y not 0 do;
    decr Y;
    incr Z;
end;
"""

# Z = X * Y; X is consumed, Y is preserved.
MULTIPLY_SOURCE = """\
clear Z;
while X not 0 do;
    clear W;
    while Y not 0 do;
        incr Z;
        incr W;
        decr Y;
    end;
    while W not 0 do;
        incr Y;
        decr W;
    end;
    decr X;
end;
"""


def build_example_multiply(store: VariableStore) -> Program:
    """Build the MULTIPLY_SOURCE tree by hand, with matching line numbers."""
    x = store.lookup_or_create("X")
    y = store.lookup_or_create("Y")
    z = store.lookup_or_create("Z")
    w = store.lookup_or_create("W")

    inner = While(var=y, line=4, body=[
        Incr(var=z, line=5),
        Incr(var=w, line=6),
        Decr(var=y, line=7),
    ])
    restore = While(var=w, line=9, body=[
        Incr(var=y, line=10),
        Decr(var=w, line=11),
    ])
    outer = While(var=x, line=2, body=[
        Clear(var=w, line=3),
        inner,
        restore,
        Decr(var=x, line=13),
    ])

    return Program(
        statements=[Clear(var=z, line=1), outer],
        store=store,
        name="multiply",
    )


def build_example_backup(store: VariableStore) -> Program:
    """copy X to B; then move X into Z, leaving the original value in B."""
    x = store.lookup_or_create("X")
    b = store.lookup_or_create("B")
    z = store.lookup_or_create("Z")
    return Program(
        statements=[
            Copy(src=x, dest=b, line=1),
            Clear(var=z, line=2),
            While(var=x, line=3, body=[Decr(var=x, line=4), Incr(var=z, line=5)]),
        ],
        store=store,
        name="backup",
    )
