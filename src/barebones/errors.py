"""
Exception hierarchy for the Bare Bones interpreter.

Every failure is fatal to a run. The core raises these exceptions and
the CLI is the only place that turns them into exit statuses.
"""

from typing import Optional


class BareBonesError(Exception):
    """Base class for all interpreter errors."""
    pass


class RuntimeFailure(BareBonesError):
    """
    Raised while executing a statement.

    Properties:
        variable: name of the offending variable (empty if none)
        line: source line of the statement being executed
    """

    def __init__(self, message: str, variable: str, line: int = 0):
        self.message = message
        self.variable = variable
        self.line = line
        super().__init__(f"error on line {line}: {message}")


class UninitializedVariableError(RuntimeFailure):
    """Raised when a statement reads a variable that was never set."""

    def __init__(self, variable: str, line: int = 0):
        super().__init__(f"uninitialized variable {variable}", variable, line)


class VariableOverflowError(RuntimeFailure):
    """Raised when a variable would exceed the maximum representable value."""

    def __init__(self, variable: str, line: int = 0):
        super().__init__(f"overflow on variable {variable}", variable, line)


class NestingTooDeepError(RuntimeFailure):
    """Raised when loops nest deeper than the interpreter stack allows."""

    def __init__(self, line: int = 0):
        super().__init__("program nested too deeply", "", line)


class ParseError(BareBonesError):
    """Raised when source text cannot be turned into a statement tree."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.message = message
        self.line = line
        if line is None:
            super().__init__(message)
        else:
            super().__init__(f"line {line}: {message}")


class SourceReadError(BareBonesError):
    """Raised when a program file cannot be opened or read."""
    pass


class InitializerError(BareBonesError):
    """Raised when a VAR=VALUE initializer is malformed."""
    pass


class ConfigError(BareBonesError):
    """Raised when a run configuration cannot be loaded."""
    pass
