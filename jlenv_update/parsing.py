import argparse
from collections.abc import Sequence
from typing import NoReturn

from jlenv_update.errors import InvalidArgumentsError
from jlenv_update.models import CliArgs, VerbosityMode

USAGE = (
    'Usage: jlenv update [--noop|-n] [--verbose|-v] [--quiet|-q|--silent]\n'
    '                   [--version] [--help|help] [--complete]'
)

COMPLETIONS = ('--help', '--noop', '--quiet', '--verbose', '--version')


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing and exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise InvalidArgumentsError(message)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Every verbosity flag writes the same ``mode`` destination, so the last
    one given wins.
    """
    parser = _ArgumentParser(
        prog='jlenv update',
        usage=USAGE,
        description='Update jlenv and its plugins with git pull',
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        '-n',
        '--noop',
        dest='mode',
        action='store_const',
        const=VerbosityMode.NOOP,
        help='Show the git commands without running them',
    )
    parser.add_argument(
        '-v',
        '--verbose',
        dest='mode',
        action='store_const',
        const=VerbosityMode.VERBOSE,
        help='Show all git output, including network traces',
    )
    parser.add_argument(
        '-q',
        '--quiet',
        '--silent',
        dest='mode',
        action='store_const',
        const=VerbosityMode.QUIET,
        help='Suppress all output',
    )
    parser.add_argument(
        '--version',
        dest='show_version',
        action='store_true',
        help='Print the version and exit',
    )
    parser.add_argument(
        '--help',
        dest='show_help',
        action='store_true',
        help='Show help for jlenv update',
    )
    parser.add_argument(
        '--complete',
        action='store_true',
        help='List the supported flags for shell completion',
    )
    parser.add_argument(
        'command',
        nargs='*',
        help=argparse.SUPPRESS,
    )
    parser.set_defaults(mode=VerbosityMode.NORMAL)
    return parser


def parse_args_to_model(argv: Sequence[str]) -> CliArgs:
    """Parse ``jlenv update`` arguments into a typed Pydantic model.

    ``--complete`` wins over anything else on the line, including
    arguments that would otherwise be rejected.

    Raises:
        InvalidArgumentsError: On an unknown flag (a bare ``--`` included), an
            empty argument or any positional other than ``help``.
    """
    argv = list(argv)
    if '--complete' in argv:
        return CliArgs(complete=True)

    if any(not arg.strip() for arg in argv):
        msg = 'empty argument'
        raise InvalidArgumentsError(msg)
    if '--' in argv:
        msg = 'unrecognized argument: --'
        raise InvalidArgumentsError(msg)

    raw_args = create_parser().parse_args(argv)
    show_help = raw_args.show_help
    for positional in raw_args.command:
        if positional != 'help':
            msg = f'unrecognized argument: {positional}'
            raise InvalidArgumentsError(msg)
        show_help = True

    return CliArgs(
        mode=raw_args.mode,
        show_help=show_help,
        show_version=raw_args.show_version,
    )
