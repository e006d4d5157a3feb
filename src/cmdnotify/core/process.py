"""Child process creation and waiting.

The runner and the notifier dispatcher only talk to ``ProcessSpawner``, so
tests can substitute an in-memory fake for real process creation.
"""

import contextlib
import logging
import signal
import subprocess
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence

logger = logging.getLogger(__name__)


class ChildProcess(ABC):
    """Handle on a spawned child."""

    @abstractmethod
    def wait(self) -> int:
        """Block until the child terminates.

        Returns:
            The raw return code: the exit status for a normal exit, or the
            negated signal number when the child was killed by a signal.
        """
        ...


class ProcessSpawner(ABC):
    """Creates child processes."""

    @abstractmethod
    def spawn(self, path: str, argv: Sequence[str]) -> ChildProcess:
        """Start ``path`` with ``argv`` (argv[0] included).

        Standard streams are inherited from the caller.

        Raises:
            OSError: If the process could not be created or the image could
                not be executed.
        """
        ...


@contextlib.contextmanager
def _interrupts_ignored() -> Iterator[None]:
    """Ignore SIGINT/SIGQUIT in this process while a foreground child runs.

    The terminal delivers these to the whole process group, so the child
    still receives them and its exit status is reported normally.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = {sig: signal.signal(sig, signal.SIG_IGN) for sig in (signal.SIGINT, signal.SIGQUIT)}
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


class _SubprocessChild(ChildProcess):
    def __init__(self, popen: subprocess.Popen, foreground: bool) -> None:
        self._popen = popen
        self._foreground = foreground

    def wait(self) -> int:
        if not self._foreground:
            return self._popen.wait()
        with _interrupts_ignored():
            return self._popen.wait()


class SubprocessSpawner(ProcessSpawner):
    """Real process creation via subprocess.Popen.

    Args:
        foreground: Ignore terminal interrupts in this process while
            waiting, so the child alone reacts to Ctrl-C.
    """

    def __init__(self, foreground: bool = True) -> None:
        self.foreground = foreground

    def spawn(self, path: str, argv: Sequence[str]) -> ChildProcess:
        logger.debug("Spawning %s with argv %r", path, list(argv))
        popen = subprocess.Popen(list(argv), executable=path)
        return _SubprocessChild(popen, self.foreground)
