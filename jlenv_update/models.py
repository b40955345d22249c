"""Pydantic models for jlenv-update."""

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class VerbosityMode(str, Enum):
    """How much of each pull is shown, and whether it runs at all."""

    NORMAL = 'normal'
    NOOP = 'noop'
    VERBOSE = 'verbose'
    QUIET = 'quiet'


class CliArgs(BaseModel):
    """Parsed `jlenv update` arguments."""

    mode: VerbosityMode = VerbosityMode.NORMAL
    show_help: bool = False
    show_version: bool = False
    complete: bool = False


class UpdateTarget(BaseModel):
    """A directory expected to be a git working copy."""

    name: str
    path: Path

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that name is not empty."""
        if not v.strip():
            msg = 'Target name cannot be empty'
            raise ValueError(msg)
        return v


class CommandResult(BaseModel):
    """Outcome of one subprocess invocation."""

    args: list[str]
    returncode: int
    stdout: str = ''
    stderr: str = ''

    @property
    def ok(self) -> bool:
        """True when the command exited with status 0."""
        return self.returncode == 0


class UpdateResult(BaseModel):
    """Outcome of updating a single target."""

    target: UpdateTarget
    status: Literal['updated', 'skipped', 'failed']
    reason: str | None = None
    returncode: int | None = None

    @classmethod
    def updated(cls, target: UpdateTarget) -> 'UpdateResult':
        """Result for a target that was pulled, or would have been in a dry run."""
        return cls(target=target, status='updated', returncode=0)

    @classmethod
    def skipped(cls, target: UpdateTarget, reason: str) -> 'UpdateResult':
        """Result for a target that was not pulled."""
        return cls(target=target, status='skipped', reason=reason)

    @classmethod
    def failed(
        cls,
        target: UpdateTarget,
        reason: str,
        returncode: int | None = None,
    ) -> 'UpdateResult':
        """Result for a target whose pull could not complete."""
        return cls(
            target=target,
            status='failed',
            reason=reason,
            returncode=returncode,
        )


class UpdateSummary(BaseModel):
    """Results of a whole run, main tool first."""

    results: list[UpdateResult] = Field(default_factory=list)

    @property
    def failed(self) -> list[UpdateResult]:
        """Results whose pull did not succeed."""
        return [result for result in self.results if result.status == 'failed']

    @property
    def exit_code(self) -> int:
        """Process exit status: 1 if any target failed, 0 otherwise."""
        return 1 if self.failed else 0
