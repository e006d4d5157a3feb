"""Target command execution and exit status capture."""

import errno
import logging
import shlex
from dataclasses import dataclass

from cmdnotify.core.errors import ChildCreationError
from cmdnotify.core.locator import ProgramLocator
from cmdnotify.core.process import ProcessSpawner

logger = logging.getLogger(__name__)

# Shell conventions for images that could not be executed
STATUS_NOT_EXECUTABLE = 126
STATUS_NOT_FOUND = 127
SIGNAL_STATUS_BASE = 128


@dataclass(frozen=True)
class CommandSpec:
    """Program name followed by its arguments."""

    program: str
    args: tuple[str, ...] = ()

    @classmethod
    def from_argv(cls, argv: list[str]) -> "CommandSpec":
        """Create from a non-empty argument list."""
        if not argv:
            raise ValueError("argv must name a program")
        return cls(program=argv[0], args=tuple(argv[1:]))

    @property
    def argv(self) -> tuple[str, ...]:
        return (self.program, *self.args)

    @property
    def text(self) -> str:
        """Shell-quoted command line, for display."""
        return shlex.join(self.argv)


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of one target run."""

    exit_status: int
    command: CommandSpec
    term_signal: int | None = None  # set when the child was killed by a signal


def normalize_status(returncode: int) -> int:
    """Map a raw return code to a 0-255 exit status.

    Signal deaths (negative return codes) become 128 + signal number.
    """
    if returncode < 0:
        return (SIGNAL_STATUS_BASE - returncode) & 0xFF
    return returncode & 0xFF


def _exec_failure_status(error: OSError) -> int | None:
    """Exit status for an image that could not be executed, else None."""
    if isinstance(error, FileNotFoundError) or error.errno == errno.ENOENT:
        return STATUS_NOT_FOUND
    if isinstance(error, PermissionError) or error.errno in (errno.EACCES, errno.ENOEXEC):
        return STATUS_NOT_EXECUTABLE
    return None


class CommandRunner:
    """Runs target programs found by a locator and waits for them."""

    def __init__(self, locator: ProgramLocator, spawner: ProcessSpawner) -> None:
        self.locator = locator
        self.spawner = spawner

    def run(self, command: CommandSpec) -> ExecutionResult:
        """Run the command to completion.

        Raises:
            ChildCreationError: If no child process could be created.
        """
        path = self.locator.resolve(command.program)
        try:
            child = self.spawner.spawn(path, command.argv)
        except OSError as e:
            status = _exec_failure_status(e)
            if status is None:
                raise ChildCreationError(f"Failed to start {command.program}: {e}") from e
            logger.debug("Could not execute %s: %s", path, e)
            return ExecutionResult(exit_status=status, command=command)

        returncode = child.wait()
        status = normalize_status(returncode)
        logger.debug("%s exited with return code %d (status %d)", path, returncode, status)
        return ExecutionResult(
            exit_status=status,
            command=command,
            term_signal=-returncode if returncode < 0 else None,
        )
