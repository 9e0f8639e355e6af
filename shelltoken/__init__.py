"""Shell-like command line tokenizer with env assignment splitting."""

__version__ = "0.1.0"

from .command_line import ParsedCommand, parse, parse_command, split_env
from .shlex_parser import ShellTokenException, UnbalancedQuotes, tokenize

__all__ = [
    "ParsedCommand",
    "ShellTokenException",
    "UnbalancedQuotes",
    "parse",
    "parse_command",
    "split_env",
    "tokenize",
]
