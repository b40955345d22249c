import re
import stat
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from jlenv_update.logging import configure_logging
from jlenv_update.models import CommandResult


def remote_output(url: str, name: str = 'origin') -> str:
    """Build ``git remote --verbose`` output for a single remote."""
    return f'{name}\t{url} (fetch)\n{name}\t{url} (push)\n'


JLENV_REMOTE = remote_output('https://github.com/jlenv/jlenv.git')
JULIA_BUILD_REMOTE = remote_output('https://github.com/jlenv/julia-build.git')
FOREIGN_REMOTE = remote_output('https://github.com/someone/dotfiles.git')


def strip_ansi(text: str) -> str:
    """Remove ANSI color codes from text."""
    return re.sub(r'\x1b\[[0-9;]*m', '', text)


class FakeRunner:
    """Stands in for ``run_command`` and records every invocation.

    ``remotes`` maps a working directory to its ``git remote --verbose``
    output; directories without an entry behave like non-repositories.
    ``pull_results`` overrides the result of a pull in a given directory.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], Path | None, dict[str, str] | None]] = []
        self.remotes: dict[Path, str] = {}
        self.pull_results: dict[Path, CommandResult] = {}

    def __call__(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        args = list(args)
        self.calls.append((args, cwd, env))
        if args[1:] == ['remote', '--verbose']:
            output = self.remotes.get(Path(cwd))
            if output is None:
                return CommandResult(
                    args=args,
                    returncode=128,
                    stderr='fatal: not a git repository (or any of the parent directories): .git\n',
                )
            return CommandResult(args=args, returncode=0, stdout=output)
        if args[1] == 'pull':
            default = CommandResult(args=args, returncode=0, stdout='Already up to date.\n')
            return self.pull_results.get(Path(cwd), default)
        msg = f'unexpected command: {args}'
        raise AssertionError(msg)

    @property
    def pulls(self) -> list[tuple[list[str], Path | None, dict[str, str] | None]]:
        return [call for call in self.calls if call[0][1] == 'pull']

    def pulled_dirs(self) -> list[Path]:
        return [Path(cwd) for _, cwd, _ in self.pulls]


@pytest.fixture(autouse=True)
def _quiet_logging() -> None:
    configure_logging(verbose=False)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def jlenv_root(tmp_path: Path, mocker: MockerFixture) -> Path:
    """A fake jlenv install whose executable is what PATH lookup finds."""
    root = tmp_path.resolve() / 'jlenv'
    bin_dir = root / 'bin'
    bin_dir.mkdir(parents=True)
    executable = bin_dir / 'jlenv'
    executable.write_text('#!/bin/sh\n')
    executable.chmod(executable.stat().st_mode | stat.S_IEXEC)
    mocker.patch('jlenv_update.updater.shutil.which', return_value=str(executable))
    return root


AddPlugin = Callable[..., Path]


@pytest.fixture
def add_plugin(jlenv_root: Path, fake_runner: FakeRunner) -> AddPlugin:
    """Create ``plugins/<name>`` and register its remote with the fake runner."""

    def _add(name: str, remote: str | None = JULIA_BUILD_REMOTE) -> Path:
        plugin = jlenv_root / 'plugins' / name
        plugin.mkdir(parents=True)
        if remote is not None:
            fake_runner.remotes[plugin] = remote
        return plugin

    return _add
