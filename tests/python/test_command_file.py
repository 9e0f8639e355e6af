"""Unit tests for command file loading and export."""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr

from shelltoken.command_file import CommandFile, ParseError, ValidationFailed
from shelltoken.shlex_parser import ShellTokenException


SAMPLE = """# build steps
CC=gcc make -j4

ls -l 'my dir'
"""


class TestCommandFile(unittest.TestCase):
    """Test command file functionality."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def write_file(self, name: str, content: str) -> str:
        """Write a file into the temporary directory."""
        path = os.path.join(self.tmp.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_load(self):
        """Test loading commands while skipping comments and blank lines."""
        cf = CommandFile()
        cf.load(self.write_file("cmds.txt", SAMPLE))

        self.assertEqual(2, len(cf.commands))
        line_num, cmd = cf.commands[0]
        self.assertEqual(2, line_num)
        self.assertEqual(["CC=gcc"], cmd.env)
        self.assertEqual(["make", "-j4"], cmd.argv)

        line_num, cmd = cf.commands[1]
        self.assertEqual(4, line_num)
        self.assertEqual(["ls", "-l", "my dir"], cmd.argv)

    def test_stats(self):
        """Test statistics after loading."""
        cf = CommandFile()
        cf.load(self.write_file("cmds.txt", SAMPLE))

        stats = cf.stats()
        self.assertEqual(4, stats.line_count)
        self.assertEqual(2, stats.command_count)
        self.assertEqual(1, stats.env_count)
        self.assertEqual(3, stats.arg_count)

    def test_empty_file(self):
        """Test that an empty file has no commands."""
        cf = CommandFile()
        cf.load(self.write_file("empty.txt", ""))
        self.assertEqual(0, cf.stats().line_count)
        self.assertEqual([], cf.commands)

    def test_crlf_lines(self):
        """Test that carriage returns are treated as whitespace."""
        cf = CommandFile()
        cf.load(self.write_file("crlf.txt", "echo a\r\necho b\r\n"))
        self.assertEqual(["echo", "a"], cf.commands[0][1].argv)
        self.assertEqual(["echo", "b"], cf.commands[1][1].argv)

    def test_unbalanced_lines_are_reported(self):
        """Test that every bad line is reported before failing."""
        path = self.write_file("bad.txt", "echo 'oops\nls\necho \"x\n")
        cf = CommandFile()

        stderr = io.StringIO()
        with redirect_stderr(stderr):
            with self.assertRaises(ValidationFailed):
                cf.load(path)

        self.assertEqual(
            [
                ParseError(message="UnbalancedQuotes", line_num=1, path=path),
                ParseError(message="UnbalancedQuotes", line_num=3, path=path),
            ],
            cf.errors,
        )
        self.assertIn(f"{path}:1: error.UnbalancedQuotes", stderr.getvalue())
        self.assertIn(f"{path}:3: error.UnbalancedQuotes", stderr.getvalue())

    def test_missing_file(self):
        """Test that an unreadable file raises the base exception."""
        cf = CommandFile()
        with self.assertRaises(ShellTokenException) as ctx:
            cf.load(os.path.join(self.tmp.name, "missing.txt"))
        self.assertNotIsInstance(ctx.exception, ValidationFailed)

    def test_export_json(self):
        """Test JSON Lines export."""
        cf = CommandFile()
        cf.load(self.write_file("cmds.txt", SAMPLE))

        output = os.path.join(self.tmp.name, "out.jsonl")
        cf.export_json(output)

        with open(output, "r", encoding="utf-8") as f:
            rows = [json.loads(line) for line in f]

        self.assertEqual(
            [
                {"line": 2, "env": ["CC=gcc"], "argv": ["make", "-j4"]},
                {"line": 4, "env": [], "argv": ["ls", "-l", "my dir"]},
            ],
            rows,
        )


if __name__ == "__main__":
    unittest.main()
