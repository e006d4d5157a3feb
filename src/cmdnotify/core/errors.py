"""Exceptions raised by cmdnotify components."""


class CmdNotifyError(Exception):
    """Base class for errors that abort a cmdnotify run with status 1."""


class UsageError(CmdNotifyError):
    """Raised when no target command was given."""


class ConfigError(CmdNotifyError):
    """Raised when an environment setting has an invalid value."""


class PreconditionError(CmdNotifyError):
    """Raised when a required condition does not hold before execution."""


class PrivilegeError(PreconditionError):
    """Raised when running with root-equivalent privileges."""


class MissingProgramError(PreconditionError):
    """Raised when a required executable is absent."""

    def __init__(self, name: str, path: str) -> None:
        super().__init__(f"{name} not found at {path}")
        self.name = name
        self.path = path


class ChildCreationError(CmdNotifyError):
    """Raised when a child process could not be created at all."""
