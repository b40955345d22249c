"""Main CLI entry point for jlenv-update."""

import subprocess
import sys
from collections.abc import Sequence

from jlenv_update import __version__
from jlenv_update.config import Settings
from jlenv_update.errors import InstallRootNotFoundError, InvalidArgumentsError
from jlenv_update.logging import configure_logging, get_logger
from jlenv_update.output import OutputWriter
from jlenv_update.parsing import COMPLETIONS, USAGE, parse_args_to_model
from jlenv_update.updater import run_update

logger = get_logger(__name__)

# Exit status of a shell when a command cannot be found.
COMMAND_NOT_FOUND = 127


def print_completions() -> int:
    sys.stdout.write(''.join(f'{flag}\n' for flag in COMPLETIONS))
    return 0


def print_version() -> int:
    sys.stdout.write(f'jlenv-update {__version__}\n')
    return 0


def delegate_help(settings: Settings) -> int:
    """Run ``jlenv help update`` and return its exit status."""
    cmd = [settings.executable, 'help', 'update']
    logger.debug('delegating_help', command=' '.join(cmd))
    try:
        return subprocess.run(cmd, check=False).returncode  # noqa: S603
    except OSError as exc:
        sys.stderr.write(f'{settings.executable}: {exc.strerror or exc}\n')
        return COMMAND_NOT_FOUND


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the jlenv update CLI."""
    argv = sys.argv[1:] if argv is None else argv
    settings = Settings.from_env()
    configure_logging(verbose=settings.debug)

    try:
        args = parse_args_to_model(argv)
    except InvalidArgumentsError as exc:
        logger.debug('invalid_arguments', error=str(exc), argv=list(argv))
        sys.stderr.write(f'{USAGE}\n')
        return 1

    if args.complete:
        return print_completions()
    if args.show_help:
        return delegate_help(settings)
    if args.show_version:
        return print_version()

    logger.debug('starting_update', mode=args.mode.value, root=str(settings.root))
    try:
        summary = run_update(settings, args.mode, writer=OutputWriter(args.mode))
    except KeyboardInterrupt:
        return 1
    except InstallRootNotFoundError as exc:
        logger.debug('install_root_not_found', error=str(exc))
        sys.stderr.write(f'jlenv-update: {exc}\n')
        return 1
    except Exception as exc:  # noqa: BLE001 - top-level CLI guard
        logger.exception('update_failed', error=str(exc))
        return 1

    logger.debug(
        'update_finished',
        updated=sum(1 for r in summary.results if r.status == 'updated'),
        skipped=sum(1 for r in summary.results if r.status == 'skipped'),
        failed=[r.target.name for r in summary.failed],
    )
    return summary.exit_code


def run() -> None:
    """Console script wrapper: exit with ``main``'s status."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(1)


if __name__ == '__main__':
    run()
