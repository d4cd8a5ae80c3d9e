import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock
import lspi

parse_error = "<stdin>:1:1: error: expected '+', '-', '*' or '/' at '('"

class TestRunLine(unittest.TestCase):
    def test_results(self):
        self.assertEqual(lspi.run_line('+ 1 2'), '3')
        self.assertEqual(lspi.run_line('- 1 2'), '-1')
        self.assertEqual(lspi.run_line('/ 1 0'), 'Error: Division by zero')
        self.assertEqual(lspi.run_line('+ 1 99999999999999999999'), 'Error: Invalid number')

    def test_syntax_error(self):
        self.assertEqual(lspi.run_line('(+ 1'), parse_error)

    def test_show_tree(self):
        out = io.StringIO()
        with redirect_stdout(out):
            result = lspi.run_line('+ 1 2', show_tree=True)
        self.assertEqual(result, '3')
        self.assertEqual(out.getvalue(),
            "lsp|>\n"
            "  regex: ''\n"
            "  operator|char: '+'\n"
            "  expr|number|regex: '1'\n"
            "  expr|number|regex: '2'\n"
            "  regex: ''\n")

class TestMain(unittest.TestCase):
    def run_main(self, argv, inputs=None):
        out = io.StringIO()
        with redirect_stdout(out), mock.patch('builtins.input', side_effect=inputs or []):
            lspi.main(argv)
        return out.getvalue()

    def test_expr(self):
        self.assertEqual(self.run_main(['-e', '* 2 3']), '6\n')
        self.assertEqual(self.run_main(['--expr', '(+ 1']), parse_error + '\n')

    def test_repl(self):
        out = self.run_main(['-q'], ['+ 1 2', '(+ 1', '/ 4 0', '- 10 1 2 3', EOFError()])
        self.assertEqual(out, '3\n' + parse_error + '\nError: Division by zero\n4\n\n')

    def test_repl_banner(self):
        out = self.run_main([], [KeyboardInterrupt()])
        self.assertEqual(out, 'Lsp version 0.0.0.0.3\nCtrl+C to exit\n\n\n')

    def test_repl_is_stateless(self):
        out = self.run_main(['-q'], ['+ 1 (* 2 3)', '+ 1 (* 2 3)', EOFError()])
        self.assertEqual(out, '7\n7\n\n')

    def test_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'exprs.lsp')
            with open(path, 'w') as fd:
                fd.write('+ 1 2\n\n* 2 (- 5 1)\n+ 1 x\n')
            out = self.run_main([path])
        self.assertEqual(out,
            "3\n"
            "8\n"
            f"{path}:1:5: error: expected /-?[0-9]+/, '(' or end of input at 'x'\n")

    def test_file_with_undecodable_byte(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'bad.lsp')
            with open(path, 'wb') as fd:
                fd.write(b'+ 1 2\n+ \xff 1\n+ 3 4\n')
            out = self.run_main([path])
        self.assertEqual(out,
            "3\n"
            f"{path}:1:3: error: expected /-?[0-9]+/ or '(' at '\\udcff'\n"
            "7\n")
