"""Exceptions raised by jlenv-update."""


class UpdaterError(RuntimeError):
    """Base class for jlenv-update failures."""


class InvalidArgumentsError(UpdaterError):
    """Raised when the command line contains an unknown or empty argument."""


class InstallRootNotFoundError(UpdaterError):
    """Raised when the jlenv executable cannot be located on PATH."""
