"""Update jlenv and every plugin working copy, one after the other."""

import contextlib
import os
import shutil
from collections.abc import Iterator
from pathlib import Path

from jlenv_update.config import Settings
from jlenv_update.errors import InstallRootNotFoundError
from jlenv_update.git import (
    Runner,
    build_pull_command,
    failure_reason,
    is_recognized_remote,
    list_remote_urls,
    pull_env,
    run_command,
)
from jlenv_update.logging import get_logger
from jlenv_update.models import UpdateResult, UpdateSummary, UpdateTarget, VerbosityMode
from jlenv_update.output import OutputWriter

logger = get_logger(__name__)

NOT_A_REPO = 'not a recognized git repo'
PLUGINS_DIRNAME = 'plugins'


@contextlib.contextmanager
def working_directory(path: Path) -> Iterator[Path]:
    """Change into ``path`` for the duration of the block.

    The previous working directory is restored on every exit path.
    """
    previous = Path.cwd()
    os.chdir(path)
    try:
        yield path
    finally:
        os.chdir(previous)


def resolve_install_root(executable: str = 'jlenv') -> Path:
    """Locate the jlenv installation from the executable on PATH.

    ``<root>/bin/jlenv`` is usually a symlink into ``<root>/libexec``; either
    way the install root is the parent of the directory holding the resolved
    executable.
    """
    found = shutil.which(executable)
    if found is None:
        msg = f'{executable}: command not found'
        raise InstallRootNotFoundError(msg)
    root = Path(found).resolve().parent.parent
    logger.debug('install_root_resolved', executable=found, root=str(root))
    return root


def enumerate_plugins(base: Path) -> list[UpdateTarget]:
    """List plugin directories under ``<base>/plugins``.

    A missing or empty plugins directory is not an error.
    """
    plugins_dir = base / PLUGINS_DIRNAME
    if not plugins_dir.is_dir():
        logger.debug('plugins_directory_missing', path=str(plugins_dir))
        return []
    targets = [
        UpdateTarget(name=entry.name, path=entry)
        for entry in sorted(plugins_dir.iterdir())
        if entry.is_dir()
    ]
    logger.debug('plugins_enumerated', count=len(targets), plugins=[t.name for t in targets])
    return targets


def update_one(
    target: UpdateTarget,
    mode: VerbosityMode,
    *,
    settings: Settings,
    writer: OutputWriter,
    runner: Runner | None = None,
) -> UpdateResult:
    """Pull ``target`` if it is a recognized jlenv working copy.

    Expects the current directory to already be ``target.path``.
    """
    runner = runner or run_command
    urls = list_remote_urls(target.path, git=settings.git, runner=runner)
    if not is_recognized_remote(urls, settings.markers):
        logger.debug('skipping_target', target=target.name, remotes=urls)
        writer.skip(target.name, NOT_A_REPO)
        return UpdateResult.skipped(target, NOT_A_REPO)

    writer.notice(f'Updating {target.name}...')
    command = build_pull_command(mode, git=settings.git)

    if mode is VerbosityMode.NOOP:
        writer.echo_command(command)
        return UpdateResult.updated(target)

    try:
        result = runner(command, cwd=target.path, env=pull_env(mode))
    except OSError as exc:
        logger.debug('pull_failed', target=target.name, error=str(exc))
        return UpdateResult.failed(target, str(exc))

    writer.command_output(result)
    if not result.ok:
        reason = failure_reason(result)
        logger.debug(
            'pull_failed',
            target=target.name,
            returncode=result.returncode,
            reason=reason,
        )
        return UpdateResult.failed(target, reason, result.returncode)
    return UpdateResult.updated(target)


def run_update(
    settings: Settings,
    mode: VerbosityMode,
    *,
    writer: OutputWriter | None = None,
    runner: Runner | None = None,
) -> UpdateSummary:
    """Update the main tool, then every plugin, and collect the results.

    Failures never stop the run; they are reported once at the end.
    """
    writer = writer or OutputWriter(mode)
    runner = runner or run_command
    install_root = resolve_install_root(settings.executable)
    summary = UpdateSummary()

    main_target = UpdateTarget(name=settings.executable, path=install_root)
    with working_directory(install_root):
        summary.results.append(
            update_one(main_target, mode, settings=settings, writer=writer, runner=runner),
        )

    for plugin in enumerate_plugins(settings.root or install_root):
        with working_directory(plugin.path):
            summary.results.append(
                update_one(plugin, mode, settings=settings, writer=writer, runner=runner),
            )

    writer.failures([result.target.name for result in summary.failed])
    return summary
