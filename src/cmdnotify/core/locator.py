"""Program lookup strategies."""

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Sequence

logger = logging.getLogger(__name__)


def is_executable(path: str) -> bool:
    """Check if path names an executable regular file. Never raises."""
    try:
        return os.path.isfile(path) and os.access(path, os.X_OK)
    except (OSError, ValueError):
        return False


class ProgramLocator(ABC):
    """Maps bare program names to executable paths."""

    @abstractmethod
    def resolve(self, program: str) -> str:
        """Return the path the program would be executed from."""
        ...

    def exists(self, program: str) -> bool:
        """Check whether the resolved path holds an executable."""
        path = self.resolve(program)
        found = is_executable(path)
        logger.debug("Resolved %s -> %s (%s)", program, path, "found" if found else "missing")
        return found


class DirectoryLocator(ProgramLocator):
    """Looks programs up in one fixed directory.

    The prefix is concatenated with the name as given, so it should end with
    a path separator. Names are not validated and no search is performed.
    """

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def resolve(self, program: str) -> str:
        return self.prefix + program


class SearchPathLocator(ProgramLocator):
    """Looks programs up across an ordered list of directories.

    The first directory holding an executable wins. When none does, the
    name resolves against the first directory.
    """

    def __init__(self, directories: Sequence[str]) -> None:
        if not directories:
            raise ValueError("SearchPathLocator needs at least one directory")
        self.directories = tuple(directories)

    def resolve(self, program: str) -> str:
        for directory in self.directories:
            candidate = os.path.join(directory, program)
            if is_executable(candidate):
                return candidate
        return os.path.join(self.directories[0], program)
