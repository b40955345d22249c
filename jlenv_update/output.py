"""Console output for pull results.

Subprocess output is shown as ``|  <line>``. The bar is colored only when the
stream is a terminal; rich drops styles on its own otherwise.
"""

from enum import Enum
from typing import Literal

from rich.console import Console
from rich.markup import escape

from jlenv_update.models import CommandResult, VerbosityMode

BAR_STYLE = 'cyan'
INDENT = '  '

Stream = Literal['stdout', 'stderr']


class Disposition(str, Enum):
    """What to do with one stream of a pull invocation."""

    SHOW = 'show'
    SUPPRESS = 'suppress'
    ECHO = 'echo'  # print the command line instead of running it


_ROUTES: dict[VerbosityMode, dict[str, Disposition]] = {
    VerbosityMode.NORMAL: {'stdout': Disposition.SHOW, 'stderr': Disposition.SHOW},
    VerbosityMode.VERBOSE: {'stdout': Disposition.SHOW, 'stderr': Disposition.SHOW},
    VerbosityMode.QUIET: {'stdout': Disposition.SUPPRESS, 'stderr': Disposition.SUPPRESS},
    VerbosityMode.NOOP: {'stdout': Disposition.ECHO, 'stderr': Disposition.ECHO},
}


def route(mode: VerbosityMode, stream: Stream) -> Disposition:
    """Decide how ``stream`` of a pull is handled in ``mode``."""
    try:
        return _ROUTES[mode][stream]
    except KeyError:
        msg = f'Unknown stream: {stream}'
        raise ValueError(msg) from None


def indent_lines(text: str) -> list[str]:
    """Split ``text`` into non-empty lines (trailing whitespace removed)."""
    return [line.rstrip() for line in text.splitlines() if line.strip()]


class OutputWriter:
    """Writes notices and subprocess output for a single verbosity mode."""

    def __init__(
        self,
        mode: VerbosityMode,
        *,
        out: Console | None = None,
        err: Console | None = None,
    ) -> None:
        self.mode = mode
        if out is None:
            out = Console(highlight=False, emoji=False, soft_wrap=True)
        if err is None:
            err = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)
        self.out = out
        self.err = err

    @property
    def quiet(self) -> bool:
        return self.mode is VerbosityMode.QUIET

    def notice(self, message: str) -> None:
        """Print a top-level notice such as ``Updating jlenv...``."""
        if self.quiet:
            return
        self.out.print(escape(message))

    def indented(self, line: str, *, stderr: bool = False) -> None:
        """Print one line behind the colored bar."""
        console = self.err if stderr else self.out
        console.print(f'[{BAR_STYLE}]|[/{BAR_STYLE}]{INDENT}{escape(line)}')

    def skip(self, name: str, reason: str) -> None:
        if self.quiet:
            return
        self.indented(f'Skipping {name}; {reason}')

    def echo_command(self, args: list[str]) -> None:
        """Show the command a dry run would have executed."""
        if route(self.mode, 'stdout') is Disposition.ECHO:
            self.indented(' '.join(args))

    def command_output(self, result: CommandResult) -> None:
        """Show the captured streams of ``result`` according to the mode."""
        if route(self.mode, 'stdout') is Disposition.SHOW:
            for line in indent_lines(result.stdout):
                self.indented(line)
        if route(self.mode, 'stderr') is Disposition.SHOW:
            for line in indent_lines(result.stderr):
                self.indented(line, stderr=True)

    def failures(self, names: list[str]) -> None:
        """Report targets that failed to update; shown in every mode."""
        if names:
            self.err.print(escape(f'Failed to update: {", ".join(names)}'))
