"""Environment-driven settings for jlenv-update."""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_EXECUTABLE = 'jlenv'
DEFAULT_GIT = 'git'
REPO_MARKERS = ('jlenv', 'julia-build')


class Settings(BaseModel):
    """Values read once from the environment at startup.

    Attributes:
        root: Plugin installation base (``JLENV_ROOT``); the install root is used when unset.
        debug: Trace every command that is run (``JLENV_DEBUG``).
        executable: Name of the main jlenv executable to look up on PATH.
        git: The git executable.
        markers: Substrings a remote URL must contain for the directory to be updated.
    """

    model_config = ConfigDict(frozen=True)

    root: Path | None = None
    debug: bool = False
    executable: str = DEFAULT_EXECUTABLE
    git: str = DEFAULT_GIT
    markers: tuple[str, ...] = REPO_MARKERS

    @field_validator('executable', 'git')
    @classmethod
    def validate_command(cls, v: str) -> str:
        """Validate that command names are not empty."""
        if not v.strip():
            msg = 'Command name cannot be empty'
            raise ValueError(msg)
        return v.strip()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> 'Settings':
        """Build settings from ``environ`` (defaults to ``os.environ``)."""
        env = os.environ if environ is None else environ
        root = (env.get('JLENV_ROOT') or '').strip()
        return cls(
            root=Path(root).expanduser() if root else None,
            debug=bool(env.get('JLENV_DEBUG')),
            executable=(env.get('JLENV_EXECUTABLE') or '').strip() or DEFAULT_EXECUTABLE,
            git=(env.get('JLENV_GIT') or '').strip() or DEFAULT_GIT,
        )
