from __future__ import annotations
from enum import Enum, auto
from typing import List
import re

class TokenId(Enum):
    IDENTIFIER = auto()
    RULE_REF = auto()
    STRING = auto()
    CHAR = auto()
    REGEX = auto()
    COLON = auto()
    SEMICOLON = auto()
    PIPE = auto()
    OP_PLUS = auto()
    OP_MUL = auto()
    OP_OPTIONAL = auto()
    RBRACE_LEFT = auto()
    RBRACE_RIGHT = auto()

class Token:
    def __init__(self, token_id: TokenId, value=None) -> None:
        self.token_id = token_id
        self.value = value

    def __repr__(self) -> str:
        return f'Token({self.token_id}, {self.value})'

    def __str__(self) -> str:
        return f'({self.token_id}, {self.value})'

class AstNode:
    def __init__(self, tag: str, contents: str = '', children: List[AstNode]|None = None, position: int = 0):
        self.tag = tag
        self.contents = contents
        self.children = children if children is not None else []
        self.position = position
        if not isinstance(self.children, list):
            raise TypeError(f"children of {tag} must be a list")

    def __repr__(self) -> str:
        return f'AstNode({self.tag!r}, {self.contents!r}, {self.children!r})'

    def __str__(self, level=0) -> str:
        if not self.children:
            return "  " * level + f"{self.tag}: '{self.contents}'\n"

        ret = "  " * level + f"{self.tag}\n"
        for child in self.children:
            ret += child.__str__(level + 1)
        return ret

    def has_tag(self, name: str) -> bool:
        return name in self.tag.split('|')

class ParserError(Exception):
    pass

class GrammarError(ParserError):
    pass

class MatchError(ParserError):
    pass

class ParseError(ParserError):
    def __init__(self, filename: str, src: str, index: int, message: str) -> None:
        self.filename = filename
        self.index = index
        self.line = src.count('\n', 0, index) + 1
        self.column = index - (src.rfind('\n', 0, index) + 1) + 1
        self.found = repr(src[index]) if index < len(src) else 'end of input'
        self.message = message
        super().__init__(f'{filename}:{self.line}:{self.column}: error: {message} at {self.found}')

def describe_expected(labels: List[str]) -> str:
    if not labels:
        return 'unexpected input'
    if len(labels) == 1:
        return f'expected {labels[0]}'
    return f"expected {', '.join(labels[:-1])} or {labels[-1]}"

_token_map = {
    r'\s+': None,
    r'#[^\n]*': None,
    r'<[a-zA-Z_][a-zA-Z0-9_]*>': TokenId.RULE_REF,
    r'[a-zA-Z_][a-zA-Z0-9_]*': TokenId.IDENTIFIER,
    r'"(?:\\.|[^"\\])*"': TokenId.STRING,
    r"'(?:\\.|[^'\\])'": TokenId.CHAR,
    r'/(?:\\.|[^/\\])*/': TokenId.REGEX,
    r':': TokenId.COLON,
    r';': TokenId.SEMICOLON,
    r'\|': TokenId.PIPE,
    r'\+': TokenId.OP_PLUS,
    r'\*': TokenId.OP_MUL,
    r'\?': TokenId.OP_OPTIONAL,
    r'\(': TokenId.RBRACE_LEFT,
    r'\)': TokenId.RBRACE_RIGHT,
}

def tokenize(src: str, token_map=_token_map) -> List[Token]:
    parts = []
    while src:
        for pattern in token_map:
            if (m := re.match(pattern, src)):
                if token_map[pattern]:
                    parts.append(Token(token_map[pattern], m[0]))
                src = src[len(m[0]):]
                break
        else:
            raise GrammarError(f"Error, unexpected character {src[0]!r} in grammar")
    return parts

def match(tokens: List[Token], token_id: TokenId|List[TokenId]) -> Token:
    tok = look(tokens)
    token_id = token_id if isinstance(token_id, list) else [token_id]
    if not tok:
        raise GrammarError(f"Error, expected {token_id}, got nothing")
    if not (tok in token_id):
        raise GrammarError(f"Error, expected {token_id}, got {tok}: {tokens[0]}")
    return tokens.pop(0)

def look(tokens: List[Token], offset=0) -> TokenId|None:
    return tokens[offset].token_id if len(tokens) > offset else None
