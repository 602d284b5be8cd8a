#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Evaluator for the cfg predicates the emitter writes.

Supports the subset rustc accepts in `#[cfg(...)]`:

    pred := name
          | name '=' "string"
          | ('any' | 'all' | 'not') '(' [pred (',' pred)* [',']] ')'

Used to check which of several generated variants a given feature set
compiles, e.g. that a guard and its complement never both hold.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import AbstractSet, List, Optional, Tuple


class CfgSyntaxError(ValueError):
    def __init__(self, message: str, pos: int):
        super().__init__(f"{message} at offset {pos}")
        self.message = message
        self.pos = pos


class CfgTokenKind(Enum):
    IDENT = auto()
    STRING = auto()
    EQ = auto()
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()
    EOF = auto()


@dataclass(frozen=True)
class CfgToken:
    kind: CfgTokenKind
    text: str
    pos: int


_PUNCT = {
    "=": CfgTokenKind.EQ,
    "(": CfgTokenKind.LPAREN,
    ")": CfgTokenKind.RPAREN,
    ",": CfgTokenKind.COMMA,
}


def tokenize(text: str) -> List[CfgToken]:
    tokens: List[CfgToken] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch.isspace():
            i += 1
            continue
        if ch in _PUNCT:
            tokens.append(CfgToken(_PUNCT[ch], ch, i))
            i += 1
            continue
        if ch == '"':
            start = i
            i += 1
            chars = []
            while i < len(text) and text[i] != '"':
                if text[i] == "\\" and i + 1 < len(text):
                    i += 1
                chars.append(text[i])
                i += 1
            if i >= len(text):
                raise CfgSyntaxError("[CFG-0010] unterminated string", start)
            i += 1
            tokens.append(CfgToken(CfgTokenKind.STRING, "".join(chars), start))
            continue
        if ch.isalnum() or ch == "_":
            start = i
            while i < len(text) and (text[i].isalnum() or text[i] == "_"):
                i += 1
            tokens.append(CfgToken(CfgTokenKind.IDENT, text[start:i], start))
            continue
        raise CfgSyntaxError(f"[CFG-0020] unexpected character {ch!r}", i)
    tokens.append(CfgToken(CfgTokenKind.EOF, "", len(text)))
    return tokens


class CfgPred:
    """Base class for parsed predicates."""
    pass


@dataclass(frozen=True)
class CfgName(CfgPred):
    name: str


@dataclass(frozen=True)
class CfgKeyValue(CfgPred):
    key: str
    value: str


@dataclass(frozen=True)
class CfgCall(CfgPred):
    op: str  # "any" | "all" | "not"
    args: Tuple[CfgPred, ...]


class _Parser:
    def __init__(self, tokens: List[CfgToken]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> CfgToken:
        return self.tokens[self.pos]

    def advance(self) -> CfgToken:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def expect(self, kind: CfgTokenKind) -> CfgToken:
        tok = self.advance()
        if tok.kind is not kind:
            raise CfgSyntaxError(f"[CFG-0030] expected {kind.name}, got {tok.kind.name}", tok.pos)
        return tok

    def parse_pred(self) -> CfgPred:
        name = self.expect(CfgTokenKind.IDENT)
        nxt = self.peek()
        if nxt.kind is CfgTokenKind.EQ:
            self.advance()
            value = self.expect(CfgTokenKind.STRING)
            return CfgKeyValue(name.text, value.text)
        if nxt.kind is CfgTokenKind.LPAREN:
            if name.text not in ("any", "all", "not"):
                raise CfgSyntaxError(f"[CFG-0040] unknown cfg operator '{name.text}'", name.pos)
            self.advance()
            args: List[CfgPred] = []
            while self.peek().kind is not CfgTokenKind.RPAREN:
                args.append(self.parse_pred())
                if self.peek().kind is CfgTokenKind.COMMA:
                    self.advance()
                else:
                    break
            self.expect(CfgTokenKind.RPAREN)
            if name.text == "not" and len(args) != 1:
                raise CfgSyntaxError("[CFG-0050] not() takes exactly one predicate", name.pos)
            return CfgCall(name.text, tuple(args))
        return CfgName(name.text)


def parse_cfg(text: str) -> CfgPred:
    parser = _Parser(tokenize(text))
    pred = parser.parse_pred()
    parser.expect(CfgTokenKind.EOF)
    return pred


def evaluate(pred: CfgPred, features: AbstractSet[str], flags: AbstractSet[str] = frozenset()) -> bool:
    """
    Evaluate a predicate with the given cargo features and bare cfg flags enabled.
    """
    if isinstance(pred, CfgName):
        return pred.name in flags
    if isinstance(pred, CfgKeyValue):
        return pred.key == "feature" and pred.value in features
    if isinstance(pred, CfgCall):
        if pred.op == "any":
            return any(evaluate(a, features, flags) for a in pred.args)
        if pred.op == "all":
            return all(evaluate(a, features, flags) for a in pred.args)
        return not evaluate(pred.args[0], features, flags)
    raise TypeError(f"unknown cfg predicate node {type(pred).__name__}")


def cfg_attr_predicate(line: str) -> Optional[str]:
    """
    Extract the predicate from a `#[cfg(...)]` attribute line.

    Returns None for other lines, including commented-out attributes.
    """
    s = line.strip()
    if not (s.startswith("#[cfg(") and s.endswith(")]")):
        return None
    return s[len("#[cfg("):-len(")]")]


def is_active(text: str, features: AbstractSet[str], flags: AbstractSet[str] = frozenset()) -> bool:
    return evaluate(parse_cfg(text), features, flags)
