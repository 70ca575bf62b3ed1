"""
Bare Bones source parser (Raw Input -> Statement Tree).

Grammar (keywords are case-insensitive, `#` comments run to end of line):

    program   := stmt*
    stmt      := "clear" ID ";"
               | "incr" ID ";"
               | "decr" ID ";"
               | "copy" ID "to" ID ";"
               | "while" ID "not" "0" "do" ";" stmt* "end" ";"

Every variable name is resolved through VariableStore.lookup_or_create,
so `x` and `X` end up as the same Variable record.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import List, Optional

from barebones.errors import ParseError, SourceReadError
from barebones.model import Statement, Clear, Incr, Decr, While, Copy, Program
from barebones.store import IDENTIFIER_PATTERN, VariableStore


logger = logging.getLogger(__name__)


KEYWORDS = {"clear", "incr", "decr", "while", "not", "do", "end", "copy", "to"}

# Maximum while nesting; deeper trees exhaust the Python stack when run.
MAX_NESTING_DEPTH = 100

_TOKEN_RE = re.compile(r"\s*(?:(#.*)|(" + IDENTIFIER_PATTERN + r")|(\d+)|(;)|(\S))")


@dataclass
class Token:
    """A lexical token with its 1-based source line."""
    kind: str  # "keyword", "ident", "number", ";"
    text: str
    line: int


def tokenize(source: str) -> List[Token]:
    """Split source text into tokens, dropping whitespace and comments."""
    tokens: List[Token] = []
    for line_no, line in enumerate(source.splitlines(), start=1):
        pos = 0
        while pos < len(line):
            m = _TOKEN_RE.match(line, pos)
            if m is None:
                # Only trailing whitespace is left
                break
            pos = m.end()
            comment, word, number, semi, other = m.groups()
            if comment is not None:
                break
            if word is not None:
                if word.lower() in KEYWORDS:
                    tokens.append(Token("keyword", word.lower(), line_no))
                else:
                    tokens.append(Token("ident", word, line_no))
            elif number is not None:
                tokens.append(Token("number", number, line_no))
            elif semi is not None:
                tokens.append(Token(";", semi, line_no))
            elif other is not None:
                raise ParseError(f"unexpected character '{other}'", line_no)
    return tokens


class Parser:
    """Recursive descent parser producing a Program."""

    def __init__(self, tokens: List[Token], store: VariableStore):
        self.tokens = tokens
        self.store = store
        self.pos = 0
        self.depth = 0

    def _peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _last_line(self) -> int:
        return self.tokens[-1].line if self.tokens else 1

    def _advance(self) -> Token:
        token = self._peek()
        if token is None:
            raise ParseError("unexpected end of program", self._last_line())
        self.pos += 1
        return token

    def _expect(self, kind: str, text: Optional[str] = None) -> Token:
        token = self._advance()
        if token.kind != kind or (text is not None and token.text != text):
            wanted = text if text is not None else kind
            raise ParseError(f"expected '{wanted}', got '{token.text}'", token.line)
        return token

    def _variable(self):
        token = self._advance()
        if token.kind != "ident":
            raise ParseError(f"expected variable name, got '{token.text}'", token.line)
        return self.store.lookup_or_create(token.text)

    def parse_program(self, name: str = "") -> Program:
        program = Program(store=self.store, name=name)
        program.statements = self._parse_block(terminator=None)
        return program

    def _parse_block(self, terminator: Optional[str]) -> List[Statement]:
        statements: List[Statement] = []
        while True:
            token = self._peek()
            if token is None:
                if terminator is not None:
                    raise ParseError(f"missing '{terminator}'", self._last_line())
                return statements
            if terminator is not None and token.kind == "keyword" and token.text == terminator:
                return statements
            statements.append(self._parse_statement())

    def _parse_statement(self) -> Statement:
        token = self._advance()
        if token.kind != "keyword":
            raise ParseError(f"expected statement, got '{token.text}'", token.line)

        if token.text in ("clear", "incr", "decr"):
            var = self._variable()
            self._expect(";")
            node = {"clear": Clear, "incr": Incr, "decr": Decr}[token.text]
            return node(var=var, line=token.line)

        if token.text == "copy":
            src = self._variable()
            self._expect("keyword", "to")
            dest = self._variable()
            self._expect(";")
            return Copy(src=src, dest=dest, line=token.line)

        if token.text == "while":
            var = self._variable()
            self._expect("keyword", "not")
            zero = self._expect("number")
            if int(zero.text) != 0:
                raise ParseError(f"while condition must be 'not 0', got 'not {zero.text}'", zero.line)
            self._expect("keyword", "do")
            self._expect(";")
            if self.depth >= MAX_NESTING_DEPTH:
                raise ParseError("program nested too deeply", token.line)
            self.depth += 1
            body = self._parse_block(terminator="end")
            self.depth -= 1
            self._expect("keyword", "end")
            self._expect(";")
            return While(var=var, body=body, line=token.line)

        raise ParseError(f"unexpected keyword '{token.text}'", token.line)


def parse_string(source: str, store: Optional[VariableStore] = None, name: str = "") -> Program:
    """
    Parse Bare Bones source text into a Program.

    Args:
        source: program text
        store: store to resolve names against (a fresh eager-zero store if None)
        name: program name

    Returns:
        Program whose statements reference variables in `store`

    Raises:
        ParseError: if the text is not a valid program
    """
    if store is None:
        store = VariableStore()
    tokens = tokenize(source)
    program = Parser(tokens, store).parse_program(name=name)
    logger.debug("parsed %d statement(s), %d variable(s)",
                 program.count_statements(), len(store))
    return program


def parse_file(filepath: str, store: Optional[VariableStore] = None) -> Program:
    """
    Parse a Bare Bones source file.

    Raises:
        SourceReadError: If the file can't be opened or read
        ParseError: If the file is not UTF-8 text or parsing fails
    """
    try:
        with open(filepath, 'rb') as f:
            raw = f.read()
    except OSError as e:
        raise SourceReadError(f"can't read program {filepath}: {e.strerror}")

    try:
        content = raw.decode('utf-8')
    except UnicodeDecodeError as e:
        line = raw.count(b"\n", 0, e.start) + 1
        raise ParseError(f"invalid UTF-8 byte 0x{raw[e.start]:02x}", line)

    name = os.path.splitext(os.path.basename(filepath))[0]
    return parse_string(content, store=store, name=name)


__all__ = [
    "Token",
    "tokenize",
    "Parser",
    "parse_string",
    "parse_file",
]
