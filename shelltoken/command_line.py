"""Split parsed tokens into environment assignments and argv."""

from dataclasses import dataclass, field

from .shlex_parser import tokenize

# A token containing this character counts as an env assignment
ASSIGNMENT = "="


def split_env(tokens: list[str]) -> tuple[list[str], list[str]]:
    """
    Split tokens at the first one that is not an env assignment.

    Args:
        tokens: Tokens as returned by tokenize()

    Returns:
        Tuple of (env, argv). argv always has at least one element: when every
        token is an assignment it is [""].
    """
    for i, token in enumerate(tokens):
        if ASSIGNMENT not in token:
            return tokens[:i], tokens[i:]

    # Assignments only, there is no command
    return list(tokens), [""]


def parse(command_line: str) -> tuple[list[str], list[str]]:
    """
    Parse a command line into env assignments and argv.

    argv[0] is the command and the following elements are its arguments.

    Args:
        command_line: The command line to parse

    Returns:
        Tuple of (env, argv)

    Raises:
        UnbalancedQuotes: If quotes are unterminated
    """
    return split_env(tokenize(command_line))


@dataclass
class ParsedCommand:
    """A command line split into its env prefix and argv."""

    env: list[str] = field(default_factory=list)
    argv: list[str] = field(default_factory=lambda: [""])

    @property
    def command(self) -> str:
        """The command name, "" when the line held only assignments."""
        return self.argv[0]

    @property
    def args(self) -> list[str]:
        """Arguments following the command."""
        return self.argv[1:]

    def environ(self) -> dict[str, str]:
        """Map env assignments to name/value pairs, later names win."""
        result: dict[str, str] = {}
        for assignment in self.env:
            name, _, value = assignment.partition(ASSIGNMENT)
            result[name] = value
        return result

    def to_dict(self) -> dict:
        """Return env and argv as a JSON-ready dict."""
        return {"env": list(self.env), "argv": list(self.argv)}


def parse_command(command_line: str) -> ParsedCommand:
    """Parse a command line into a ParsedCommand."""
    env, argv = parse(command_line)
    return ParsedCommand(env=env, argv=argv)
