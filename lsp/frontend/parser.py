from lsp.frontend.utils import AstNode
from lsp.frontend.grammar import load_grammar

# The top level takes a bare operator, nested expressions need parentheses:
# "+ 1 (* 2 3)" parses, "(+ 1 (* 2 3))" does not.
LSP_GRAMMAR = r"""
number   : /-?[0-9]+/ ;
operator : '+' | '-' | '*' | '/' ;
expr     : <number> | '(' <operator> <expr>+ ')' ;
lsp      : /^/ <operator> <expr>+ /$/ ;
"""

lsp_grammar = load_grammar(LSP_GRAMMAR)

def parse(src: str, rule: str = 'lsp', filename: str = '<stdin>') -> AstNode:
    return lsp_grammar.parse(src, rule, filename)
