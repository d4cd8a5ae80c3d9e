from __future__ import annotations
from typing import Dict, List

from lsp.frontend.utils import *
from lsp.frontend.combinators import *

# Grammar of grammar descriptions:
# grammar     = { rule } ;
# rule        = identifier, ":", alternation, ";" ;
# alternation = sequence, { "|", sequence } ;
# sequence    = repeat, { repeat } ;
# repeat      = atom, [ "+" | "*" | "?" ] ;
# atom        = string | char | regex | rule_ref | "(", alternation, ")" ;

atom_tokens = [TokenId.STRING, TokenId.CHAR, TokenId.REGEX, TokenId.RULE_REF, TokenId.RBRACE_LEFT]

repeat_ranges = {
    TokenId.OP_PLUS: (1, None),
    TokenId.OP_MUL: (0, None),
    TokenId.OP_OPTIONAL: (0, 1)
}

class Grammar:
    def __init__(self, rules: Dict[str, ElementDef]) -> None:
        self.rules = rules

    def __getitem__(self, name: str) -> ElementDef:
        if name not in self.rules:
            raise GrammarError(f"Error, no rule named {name}")
        return self.rules[name]

    def __str__(self) -> str:
        return "\n".join(rule.expand() for rule in self.rules.values())

    def parse(self, src: str, rule: str, filename: str = '<stdin>') -> AstNode:
        """
        Matches the whole of `src` against `rule` and returns the tree.

        Raises ParseError pointing at the furthest offset reached, listing
        what was expected there.
        """
        ctx = MatchContext(src)
        try:
            nodes, index = self[rule].match(ctx, 0)
        except MatchError:
            raise ParseError(filename, src, ctx.furthest, describe_expected(ctx.expected)) from None
        except RecursionError:
            raise ParseError(filename, src, ctx.furthest, 'expression nested too deeply') from None

        if index != len(src):
            ctx.expect(index, 'end of input')
            raise ParseError(filename, src, ctx.furthest, describe_expected(ctx.expected))
        return nodes[0]

def unquote(raw: str) -> str:
    return bytes(raw[1:-1], "utf-8").decode("unicode_escape")

def alternation(tokens: List[Token], rules: Dict[str, ElementDef]) -> Definition:
    alternatives = [sequence(tokens, rules)]
    while look(tokens) == TokenId.PIPE:
        match(tokens, TokenId.PIPE)
        alternatives.append(sequence(tokens, rules))
    if len(alternatives) == 1:
        return alternatives[0]
    return DisjunctionDef(alternatives)

def sequence(tokens: List[Token], rules: Dict[str, ElementDef]) -> Definition:
    items = [repeat(tokens, rules)]
    while look(tokens) in atom_tokens:
        items.append(repeat(tokens, rules))
    if len(items) == 1:
        return items[0]
    return ConcatenationDef(items)

def repeat(tokens: List[Token], rules: Dict[str, ElementDef]) -> Definition:
    definition = atom(tokens, rules)
    if look(tokens) in repeat_ranges:
        op = match(tokens, list(repeat_ranges))
        definition = RepetitionDef(definition, *repeat_ranges[op.token_id])
    return definition

def atom(tokens: List[Token], rules: Dict[str, ElementDef]) -> Definition:
    tok = match(tokens, atom_tokens)
    if tok.token_id in (TokenId.STRING, TokenId.CHAR):
        return StringDef(unquote(tok.value))
    elif tok.token_id == TokenId.REGEX:
        return RegexDef(tok.value[1:-1].replace('\\/', '/'))
    elif tok.token_id == TokenId.RULE_REF:
        name = tok.value[1:-1]
        if name not in rules:
            raise GrammarError(f"Error, reference to undefined rule <{name}>")
        return rules[name]

    definition = alternation(tokens, rules)
    match(tokens, TokenId.RBRACE_RIGHT)
    return definition

def rule(tokens: List[Token], rules: Dict[str, ElementDef]) -> None:
    name = match(tokens, TokenId.IDENTIFIER).value
    match(tokens, TokenId.COLON)
    if rules[name].is_defined():
        raise GrammarError(f"Error, rule {name} is defined twice")
    rules[name].define(alternation(tokens, rules))
    match(tokens, TokenId.SEMICOLON)

def load_grammar(src: str) -> Grammar:
    tokens = tokenize(src)

    # Declare every rule up front so that rules may refer to later ones
    rules = {}
    for i, tok in enumerate(tokens):
        if tok.token_id == TokenId.IDENTIFIER and look(tokens, i + 1) == TokenId.COLON:
            rules.setdefault(tok.value, ElementDef(tok.value))

    while tokens:
        rule(tokens, rules)
    return Grammar(rules)
