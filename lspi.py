#!/usr/bin/env python3

import argparse as arg
from pathlib import Path
from lsp.frontend.parser import parse
from lsp.frontend.utils import ParseError
from lsp.interpreter.evaluator import evaluate

version = 'Lsp version 0.0.0.0.3'
prompt = 'lsp> '

def run_line(src: str, show_tree=False, filename='<stdin>') -> str:
    try:
        tree = parse(src, filename=filename)
    except ParseError as e:
        return str(e)

    if show_tree:
        print(tree, end='')
    return str(evaluate(tree))

def run_file(source: Path, args):
    with open(source, 'r', errors='surrogateescape') as src:
        for line in src:
            line = line.rstrip('\n')
            if not line.strip():
                continue
            print(run_line(line, args.tree, filename=str(source)))

def repl(args):
    try:
        import readline # Line editing and history, where the platform has it
    except ImportError:
        pass

    if not args.quiet:
        print(version)
        print('Ctrl+C to exit\n')

    try:
        while True:
            print(run_line(input(prompt), args.tree))
    except (EOFError, KeyboardInterrupt):
        print()

def main(argv=None):
    parser = arg.ArgumentParser(
        prog='lspi',
        description='Evaluates prefix arithmetic expressions such as "+ 1 (* 2 3)"',
        epilog=version)

    parser.add_argument('source', type=Path, nargs='?',
                        help='file with one expression per line')
    parser.add_argument('-e', '--expr', dest='expr', default=None,
                        help='evaluate a single expression and exit')
    parser.add_argument('-t', '--tree', dest='tree', action='store_true', default=False,
                        help='print the parse tree before each result')
    parser.add_argument('-q', '--quiet', dest='quiet', action='store_true', default=False,
                        help='do not print the startup banner')
    args = parser.parse_args(argv)

    if args.expr is not None:
        print(run_line(args.expr, args.tree))
    elif args.source:
        run_file(args.source, args)
    else:
        repl(args)

if __name__ == '__main__':
    main()
