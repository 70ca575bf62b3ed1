"""
Command-line front end for the Bare Bones interpreter.

    barebones [-u] [-O] [--config FILE] [--format text|yaml|json]
              [--dump-tree] [-v] [VAR=VALUE ...] SRC

This is the only module that talks to the process: it turns the
exceptions raised by the core into messages on stderr and exit statuses.

Exit statuses:
    0  success
    1  usage, configuration or initializer error (nothing was executed)
    2  runtime error (uninitialized variable, overflow)
    3  parse failure
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence, Tuple

from barebones import __version__
from barebones.config import OUTPUT_FORMATS, RunConfig, load_config
from barebones.errors import (
    ConfigError,
    InitializerError,
    ParseError,
    RuntimeFailure,
    SourceReadError,
)
from barebones.executor import Interpreter
from barebones.optimizer import optimize_program
from barebones.parser import parse_file
from barebones.serialization import program_to_yaml, store_to_json, store_to_yaml
from barebones.store import InitPolicy, VariableStore, parse_initializer


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_RUNTIME = 2
EXIT_PARSE = 3


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with EXIT_USAGE."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"fatal error: {message}\n")


def build_arg_parser() -> argparse.ArgumentParser:
    argp = _ArgumentParser(
        prog="barebones",
        description="Run a Bare Bones program.",
        epilog="initializers: VAR=VALUE, e.g. X=37",
    )
    argp.add_argument("-u", "--uninitialized", action="store_true",
                      help="report uninitialized variables (variables start uninitialized)")
    argp.add_argument("-O", "--optimize", action="store_true",
                      help="optimize transfer loops before running")
    argp.add_argument("--config", metavar="FILE", help="YAML run configuration")
    argp.add_argument("--format", choices=OUTPUT_FORMATS, default=None,
                      help="output format for variable values (default: text)")
    argp.add_argument("--dump-tree", action="store_true",
                      help="print the statement tree as YAML and exit without running")
    argp.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    argp.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    argp.add_argument("args", nargs="+", metavar="VAR=VALUE | SRC",
                      help="initializers followed by the program source file")
    return argp


def split_arguments(args: Sequence[str]) -> Tuple[List[str], str]:
    """Separate VAR=VALUE initializers from the single source file."""
    initializers = []
    source = None
    for arg in args:
        if "=" in arg:
            initializers.append(arg)
        elif source is not None:
            raise InitializerError("only one program may be specified")
        else:
            source = arg
    if source is None:
        raise InitializerError("no program found")
    return initializers, source


def resolve_config(ns: argparse.Namespace, initializers: Sequence[str]) -> RunConfig:
    """Config file first, then command-line flags and initializers on top."""
    config = load_config(ns.config) if ns.config else RunConfig()
    if ns.uninitialized:
        config.policy = InitPolicy.REQUIRE_EXPLICIT_INIT
    if ns.optimize:
        config.optimize = True
    if ns.format:
        config.output_format = ns.format
    for text in initializers:
        name, value = parse_initializer(text)
        config.initial_values[name] = value
    return config


def format_variables(store: VariableStore, show_uninitialized: bool) -> str:
    lines = []
    for name, value, initialized in store.snapshot():
        if not initialized:
            if show_uninitialized:
                lines.append(f"{name}: uninitialized")
            continue
        lines.append(f"{name}: {value}")
    return "\n".join(lines)


def _print_block(text: str) -> None:
    if text:
        print(text)


def main(argv: Optional[Sequence[str]] = None) -> int:
    argp = build_arg_parser()
    ns = argp.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )

    try:
        initializers, source = split_arguments(ns.args)
        config = resolve_config(ns, initializers)
    except (InitializerError, ConfigError) as e:
        print(f"fatal error: {e}", file=sys.stderr)
        argp.print_usage(sys.stderr)
        return EXIT_USAGE

    logger.debug("policy=%s optimize=%s initial=%s",
                 config.policy.value, config.optimize, config.initial_values)
    store = VariableStore(config.policy)
    for name, value in config.initial_values.items():
        store.set(store.lookup_or_create(name), value)

    try:
        program = parse_file(source, store)
    except SourceReadError as e:
        print(f"fatal error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except ParseError as e:
        print(f"fatal error: parse failed: {e}", file=sys.stderr)
        return EXIT_PARSE

    if config.optimize:
        optimize_program(program)

    if ns.dump_tree:
        print(program_to_yaml(program), end="")
        return EXIT_OK

    if config.output_format == "text":
        print("initial values of variables:")
        _print_block(format_variables(store, show_uninitialized=False))

    interpreter = Interpreter(store)
    try:
        interpreter.run(program)
    except RuntimeFailure as e:
        print(str(e), file=sys.stderr)
        return EXIT_RUNTIME

    if config.output_format == "yaml":
        print(store_to_yaml(store), end="")
    elif config.output_format == "json":
        print(store_to_json(store))
    else:
        print("final values of variables:")
        _print_block(format_variables(store, show_uninitialized=True))

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
