from __future__ import annotations
from typing import List, Tuple
import re

from lsp.frontend.utils import AstNode, GrammarError, MatchError

Matched = Tuple[List[AstNode], int]

whitespace_pattern = re.compile(r'\s*')

def skip_whitespace(buf: str, index: int) -> int:
    return whitespace_pattern.match(buf, index).end()

class MatchContext:
    """
    State of one parse: the input, and the furthest offset at which a
    terminal failed along with every label that was tried there.
    """
    def __init__(self, buf: str) -> None:
        self.buf = buf
        self.furthest = 0
        self.expected: List[str] = []

    def expect(self, index: int, label: str) -> None:
        if index > self.furthest:
            self.furthest = index
            self.expected = [label]
        elif index == self.furthest and label not in self.expected:
            self.expected.append(label)

    def fail(self, index: int, label: str):
        self.expect(index, label)
        raise MatchError(label)

class Definition:
    def match(self, ctx: MatchContext, index: int) -> Matched:
        raise NotImplementedError()

class StringDef(Definition):
    def __init__(self, value: str) -> None:
        if not isinstance(value, str) or not value:
            raise ValueError("Value must be a non-empty str")
        self.value = value
        self.tag = 'char' if len(value) == 1 else 'string'

    def match(self, ctx: MatchContext, index: int) -> Matched:
        if not ctx.buf.startswith(self.value, index):
            ctx.fail(index, repr(self.value))
        node = AstNode(self.tag, self.value, position=index)
        return [node], skip_whitespace(ctx.buf, index + len(self.value))

    def __str__(self):
        return repr(self.value)

class RegexDef(Definition):
    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self.regex = re.compile(pattern)

    def label(self) -> str:
        if self.pattern == '^':
            return 'start of input'
        if self.pattern == '$':
            return 'end of input'
        return f'/{self.pattern}/'

    def match(self, ctx: MatchContext, index: int) -> Matched:
        m = self.regex.match(ctx.buf, index)
        if not m:
            ctx.fail(index, self.label())
        node = AstNode('regex', m[0], position=index)
        return [node], skip_whitespace(ctx.buf, m.end())

    def __str__(self):
        return f'/{self.pattern}/'

class ConcatenationDef(Definition):
    def __init__(self, inners: List[Definition]) -> None:
        if not all(isinstance(e, Definition) for e in inners):
            raise ValueError("All inner values must be instances of Definition")
        self.inners = inners

    def match(self, ctx: MatchContext, index: int) -> Matched:
        nodes = []
        for inner in self.inners:
            inner_nodes, index = inner.match(ctx, index)
            nodes += inner_nodes
        return nodes, index

    def __str__(self):
        return "(" + " ".join(map(str, self.inners)) + ")"

class DisjunctionDef(Definition):
    """Ordered choice: the first alternative that matches wins."""
    def __init__(self, inners: List[Definition]) -> None:
        if not all(isinstance(e, Definition) for e in inners):
            raise ValueError("All inner values must be instances of Definition")
        self.inners = inners

    def match(self, ctx: MatchContext, index: int) -> Matched:
        for inner in self.inners:
            try:
                return inner.match(ctx, index)
            except MatchError:
                continue
        raise MatchError(str(self))

    def __str__(self):
        return "(" + " | ".join(map(str, self.inners)) + ")"

class RepetitionDef(Definition):
    def __init__(self, inner: Definition, minimum: int, maximum: int|None = None) -> None:
        if not isinstance(inner, Definition):
            raise ValueError("Inner value must be an instance of Definition")
        if minimum < 0 or (maximum is not None and maximum < minimum):
            raise ValueError(f"Invalid repetition range ({minimum}, {maximum})")
        self.inner = inner
        self.minimum = minimum
        self.maximum = maximum

    def match(self, ctx: MatchContext, index: int) -> Matched:
        nodes = []
        count = 0
        while self.maximum is None or count < self.maximum:
            try:
                inner_nodes, next_index = self.inner.match(ctx, index)
            except MatchError:
                if count < self.minimum:
                    raise
                break
            nodes += inner_nodes
            count += 1
            if next_index == index: # Zero-width match, repeating it won't progress
                break
            index = next_index
        return nodes, index

    def __str__(self):
        suffix = {(1, None): '+', (0, None): '*', (0, 1): '?'}.get((self.minimum, self.maximum))
        return f"{self.inner}{suffix or (self.minimum, self.maximum)}"

class ElementDef(Definition):
    """
    A named rule. Its matches are labelled with the rule name: a body that
    produced a single node gets the name prepended to that node's tag,
    several nodes are gathered under a new `name|>` node.
    """
    def __init__(self, name: str) -> None:
        self.name = name
        self.definition = None

    def define(self, definition: Definition) -> None:
        if not isinstance(definition, Definition):
            raise ValueError("Definition must be an instance of Definition")
        self.definition = definition

    def is_defined(self) -> bool:
        return self.definition is not None

    def match(self, ctx: MatchContext, index: int) -> Matched:
        if not self.is_defined():
            raise GrammarError(f"Rule <{self.name}> is used but never defined")
        nodes, end = self.definition.match(ctx, index)
        if len(nodes) == 1:
            node = nodes[0]
            node.tag = f'{self.name}|{node.tag}'
            return [node], end
        return [AstNode(f'{self.name}|>', children=nodes, position=index)], end

    def expand(self) -> str:
        return f"{self.name} : {self.definition} ;"

    def __str__(self):
        return f"<{self.name}>"
