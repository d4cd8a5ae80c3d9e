from __future__ import annotations
from lsp.frontend.utils import AstNode
from lsp.frontend.parser import parse
from lsp.interpreter.value import *

def saturate(num: int) -> int:
    return max(LONG_MIN, min(LONG_MAX, num))

def truncating_div(x: int, y: int) -> int:
    q = abs(x) // abs(y)
    return q if (x < 0) == (y < 0) else -q

op_map = {
    '+': lambda x, y: x + y,
    '-': lambda x, y: x - y,
    '*': lambda x, y: x * y,
    '/': truncating_div
}

def combine(x: Value, op: str, y: Value) -> Value:
    # An error on either side is passed through as is
    if isinstance(x, Error):
        return x
    if isinstance(y, Error):
        return y

    if op not in op_map:
        return Error(ErrorKind.INVALID_OPERATOR)
    if op == '/' and y.num == 0:
        return Error(ErrorKind.DIVISION_BY_ZERO)
    return Number(saturate(op_map[op](x.num, y.num)))

def evaluate_number(text: str) -> Value:
    try:
        num = int(text, 10)
    except ValueError:
        return Error(ErrorKind.INVALID_NUMBER)
    if not LONG_MIN <= num <= LONG_MAX:
        return Error(ErrorKind.INVALID_NUMBER)
    return Number(num)

def evaluate(tree: AstNode) -> Value:
    if tree.has_tag('number'):
        return evaluate_number(tree.contents)

    # Children are: opening '(' or start anchor, operator, operands..., closing ')' or end anchor
    op = tree.children[1].contents
    x = evaluate(tree.children[2])
    for child in tree.children[3:]:
        if not child.has_tag('expr'):
            break
        x = combine(x, op, evaluate(child))
    return x

def interpret(src: str, filename: str = '<stdin>') -> Value:
    return evaluate(parse(src, filename=filename))
