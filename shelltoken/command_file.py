"""Loading and exporting files of command lines."""

import json
import sys
from dataclasses import dataclass

from .command_line import ParsedCommand, parse_command
from .shlex_parser import ShellTokenException


class ValidationFailed(ShellTokenException):
    """Raised when validation fails."""

    pass


@dataclass
class ParseError:
    """Represents an error while parsing one line of a command file."""

    message: str
    line_num: int
    path: str


@dataclass
class CommandFileStats:
    """Statistics about a loaded command file."""

    line_count: int
    command_count: int
    env_count: int
    arg_count: int


class CommandFile:
    """Command lines loaded from a file, one per line."""

    def __init__(self):
        """Initialize an empty command file."""
        self.line_count: int = 0
        self.commands: list[tuple[int, ParsedCommand]] = []

        # Error tracking
        self.errors: list[ParseError] = []

    def stats(self) -> CommandFileStats:
        """
        Return statistics about the loaded commands.

        Returns:
            CommandFileStats with counts of lines, commands, env assignments and arguments
        """
        return CommandFileStats(
            line_count=self.line_count,
            command_count=len(self.commands),
            env_count=sum(len(cmd.env) for _, cmd in self.commands),
            arg_count=sum(len(cmd.args) for _, cmd in self.commands),
        )

    def _is_comment(self, line: str) -> bool:
        """Check if a line is a comment."""
        stripped = line.lstrip()
        return len(stripped) == 0 or stripped[0] == "#"

    def load(self, path: str) -> None:
        """
        Load and parse every command line in path.

        Args:
            path: File containing one command line per line

        Raises:
            ShellTokenException: If the file cannot be read
            ValidationFailed: If errors were encountered during parsing
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise ShellTokenException(f"Cannot read file '{path}': {e}")

        lines = content.split("\n")
        if lines[-1] == "":
            # Trailing newline
            lines.pop()

        for line_num, line in enumerate(lines, start=1):
            self.line_count += 1

            # Skip comments and blank lines
            if self._is_comment(line):
                continue

            try:
                self.commands.append((line_num, parse_command(line)))
            except ShellTokenException as e:
                error_name = type(e).__name__
                self.errors.append(
                    ParseError(message=error_name, line_num=line_num, path=path)
                )

        # Check for errors
        if self.errors:
            self._print_errors()
            raise ValidationFailed("Validation failed with errors")

    def _print_errors(self) -> None:
        """Print all errors to stderr."""
        for error in self.errors:
            print(
                f"{error.path}:{error.line_num}: error.{error.message}", file=sys.stderr
            )

    def export_json(self, output_file: str) -> None:
        """
        Export parsed commands to JSON Lines format.

        Args:
            output_file: Path to output file
        """
        with open(output_file, "w", encoding="utf-8") as f:
            for line_num, cmd in self.commands:
                row = {"line": line_num, **cmd.to_dict()}
                f.write(json.dumps(row, separators=(",", ":")) + "\n")
