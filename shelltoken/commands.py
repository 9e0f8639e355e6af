"""Command-line interface handler for shelltoken."""

import argparse
import json
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__, command_file
from .command_line import parse_command
from .shlex_parser import ShellTokenException, UnbalancedQuotes

console = Console()


def print_usage() -> None:
    """Print usage information."""
    print("""Usage: shelltoken [-h | --help] <command> [<args>]

Commands:
  parse                    Split a command line into env assignments and argv
      --json               Print the result as a JSON object
      <command_line>...    The command line (words are joined with a space,
                           put -- before it if a word starts with -)

  validate                 Check that every line of a command file parses
      <file>               File with one command line per line

  export                   Export the parsed lines of a command file to a json file
      <file>               File with one command line per line
      <output>             The output file

  help                     Show this help message
  version                  Show program version
""")


def print_version() -> None:
    """Print version information."""
    print(__version__)


def cmd_parse(args: argparse.Namespace) -> None:
    """Execute the parse command."""
    line = " ".join(args.command_line)

    try:
        cmd = parse_command(line)
    except UnbalancedQuotes as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(cmd.to_dict()))
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Kind", style="cyan")
    table.add_column("#", style="yellow", justify="right")
    table.add_column("Value", style="green")

    for i, assignment in enumerate(cmd.env):
        table.add_row("env", str(i), escape(repr(assignment)))
    for i, arg in enumerate(cmd.argv):
        table.add_row("argv", str(i), escape(repr(arg)))

    console.print(table)


def load_command_file(path: str) -> command_file.CommandFile:
    """Load a command file, exiting on any error."""
    cf = command_file.CommandFile()
    try:
        cf.load(path)
    except command_file.ValidationFailed:
        sys.exit(1)
    except ShellTokenException as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    return cf


def cmd_validate(args: argparse.Namespace) -> None:
    """Execute the validate command."""
    if not args.file:
        print("Please specify a command file to validate\n", file=sys.stderr)
        print_usage()
        sys.exit(1)

    stats = load_command_file(args.file).stats()

    console.print(f"[magenta]┃[/magenta] {stats.line_count:<6} Lines")
    console.print(f"[magenta]┃[/magenta] {stats.command_count:<6} Commands")
    console.print(f"[magenta]┃[/magenta] {stats.env_count:<6} Env assignments")
    console.print(f"[magenta]┃[/magenta] {stats.arg_count:<6} Arguments")


def cmd_export(args: argparse.Namespace) -> None:
    """Execute the export command."""
    if not args.file or not args.output:
        print(
            "Please specify a command file and an output path for export\n",
            file=sys.stderr,
        )
        print_usage()
        sys.exit(1)

    cf = load_command_file(args.file)
    cf.export_json(args.output)


def main() -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Shell-like command line tokenizer", add_help=False
    )

    # Add global help
    parser.add_argument("-h", "--help", action="store_true", help="Show help message")

    # Add subparsers for commands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser("parse", add_help=False)
    parse_parser.add_argument(
        "-h", "--help", action="store_true", help="Show help for parse"
    )
    parse_parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    parse_parser.add_argument("command_line", nargs="*", help="Command line to parse")

    # Validate command
    validate_parser = subparsers.add_parser("validate", add_help=False)
    validate_parser.add_argument(
        "-h", "--help", action="store_true", help="Show help for validate"
    )
    validate_parser.add_argument("file", nargs="?", help="Command file")

    # Export command
    export_parser = subparsers.add_parser("export", add_help=False)
    export_parser.add_argument(
        "-h", "--help", action="store_true", help="Show help for export"
    )
    export_parser.add_argument("file", nargs="?", help="Command file")
    export_parser.add_argument("output", nargs="?", help="Output file path")

    # Help command
    subparsers.add_parser("help", add_help=False)

    # Version command
    subparsers.add_parser("version", add_help=False)

    # Parse arguments
    if len(sys.argv) < 2:
        print_usage()
        return

    args = parser.parse_args()

    # Handle global help
    if args.help or args.command == "help":
        print_usage()
        return

    # Handle version
    if args.command == "version":
        print_version()
        return

    # Execute commands
    if args.command == "parse":
        cmd_parse(args)
    elif args.command == "validate":
        cmd_validate(args)
    elif args.command == "export":
        cmd_export(args)
    else:
        print_usage()
