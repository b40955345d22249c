"""git invocations used to update a working copy."""

import os
import subprocess
from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path

from jlenv_update.logging import get_logger
from jlenv_update.models import CommandResult, VerbosityMode

logger = get_logger(__name__)

MERGE_POLICY = ('--no-rebase', '--ff-only')

_PULL_FLAGS = {
    VerbosityMode.NORMAL: (),
    VerbosityMode.VERBOSE: ('--verbose',),
    VerbosityMode.QUIET: ('--quiet',),
    VerbosityMode.NOOP: ('--dry-run',),
}

# Turned on for verbose pulls only.
NETWORK_TRACE_ENV = {
    'GIT_CURL_VERBOSE': '1',
    'GIT_TRACE_PACKET': '1',
}


Runner = Callable[..., CommandResult]


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> CommandResult:
    """Run ``args`` to completion and capture both streams.

    ``env`` is merged over the current environment for this call only. A
    non-zero exit status is returned, not raised; ``OSError`` (e.g. git not
    installed) propagates.
    """
    cmd = list(args)
    logger.debug('running_command', command=' '.join(cmd), cwd=str(cwd or Path.cwd()))
    call_env = {**os.environ, **env} if env else None
    result = subprocess.run(  # noqa: S603 - arguments are never shell-interpreted
        cmd,
        cwd=cwd,
        env=call_env,
        capture_output=True,
        text=True,
        check=False,
    )
    logger.debug('command_finished', command=cmd[0], returncode=result.returncode)
    return CommandResult(
        args=cmd,
        returncode=result.returncode,
        stdout=result.stdout or '',
        stderr=result.stderr or '',
    )


def parse_remote_urls(output: str) -> list[str]:
    """Extract URLs from ``git remote --verbose`` output.

    Each line looks like ``origin\thttps://host/repo.git (fetch)``.
    """
    urls = []
    for line in output.splitlines():
        parts = line.split()
        if len(parts) >= 2 and parts[1] not in urls:
            urls.append(parts[1])
    return urls


def list_remote_urls(
    path: Path,
    *,
    git: str = 'git',
    runner: Runner = run_command,
) -> list[str]:
    """Return the remote URLs configured for the working copy at ``path``.

    Anything that is not a git working copy, or where git cannot be run,
    yields an empty list.
    """
    try:
        result = runner([git, 'remote', '--verbose'], cwd=path)
    except OSError as exc:
        logger.debug('git_unavailable', git=git, error=str(exc))
        return []
    if not result.ok:
        logger.debug('remote_listing_failed', path=str(path), stderr=result.stderr.strip())
        return []
    return parse_remote_urls(result.stdout)


def is_recognized_remote(urls: Iterable[str], markers: Iterable[str]) -> bool:
    """True when any URL contains any of ``markers`` as a plain substring."""
    markers = tuple(markers)
    return any(marker in url for url in urls for marker in markers)


def build_pull_command(mode: VerbosityMode, *, git: str = 'git') -> list[str]:
    """The ``git pull`` command line for ``mode``."""
    return [git, 'pull', *_PULL_FLAGS[mode], *MERGE_POLICY]


def pull_env(mode: VerbosityMode) -> dict[str, str]:
    """Extra environment for the pull in ``mode``."""
    if mode is VerbosityMode.VERBOSE:
        return dict(NETWORK_TRACE_ENV)
    return {}


def failure_reason(result: CommandResult) -> str:
    """Short description of a failed pull for the final summary."""
    for line in reversed(result.stderr.splitlines()):
        if line.strip():
            return line.strip()
    return f'git pull exited with status {result.returncode}'
