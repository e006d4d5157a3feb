"""Environment-driven settings."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from cmdnotify.core.errors import ConfigError

DEFAULT_BINDIR = "/bin/"
NOTIFIER_NAME = "notify-send"
DEFAULT_TIMEOUT = 3500
URGENCIES = ("low", "normal", "critical")
ENV_FILE_PARTS = (".config", "cmdnotify", ".env")


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings for one invocation."""

    bindir: str = DEFAULT_BINDIR
    notifier: str = DEFAULT_BINDIR + NOTIFIER_NAME
    timeout: int = DEFAULT_TIMEOUT
    urgency: str | None = None
    log_level: int = logging.WARNING


def _parse_timeout(raw: str) -> int:
    try:
        timeout = int(raw)
    except ValueError:
        raise ConfigError(f"CMDNOTIFY_TIMEOUT must be an integer, got {raw!r}")
    if timeout < 0:
        raise ConfigError(f"CMDNOTIFY_TIMEOUT must not be negative, got {timeout}")
    return timeout


def _parse_urgency(raw: str) -> str | None:
    urgency = raw.strip().lower()
    if not urgency:
        return None
    if urgency not in URGENCIES:
        raise ConfigError(
            f"CMDNOTIFY_URGENCY must be one of {', '.join(URGENCIES)}, got {raw!r}"
        )
    return urgency


def _parse_log_level(raw: str) -> int:
    level = logging.getLevelName(raw.strip().upper())
    if not isinstance(level, int):
        raise ConfigError(f"Unknown CMDNOTIFY_LOG_LEVEL {raw!r}")
    return level


def from_env(env: Mapping[str, str]) -> Settings:
    """Build settings from an environment mapping.

    Unset variables keep their defaults. The bin directory always ends with
    a path separator so program names can be appended directly.
    """
    bindir = env.get("CMDNOTIFY_BINDIR") or DEFAULT_BINDIR
    if not bindir.endswith(os.sep):
        bindir += os.sep

    return Settings(
        bindir=bindir,
        notifier=env.get("CMDNOTIFY_NOTIFIER") or bindir + NOTIFIER_NAME,
        timeout=_parse_timeout(env.get("CMDNOTIFY_TIMEOUT", str(DEFAULT_TIMEOUT))),
        urgency=_parse_urgency(env.get("CMDNOTIFY_URGENCY", "")),
        log_level=_parse_log_level(env.get("CMDNOTIFY_LOG_LEVEL", "WARNING")),
    )


def default_env_file() -> Path | None:
    """Location of the optional dotenv file, or None without a home directory."""
    try:
        return Path.home().joinpath(*ENV_FILE_PARTS)
    except RuntimeError:
        return None


def load_settings(env_file: Path | None = None) -> Settings:
    """Read settings from os.environ, falling back to the optional dotenv file.

    The file is only read, never exported: the wrapped command and the
    notifier inherit the environment unchanged.
    """
    path = env_file or default_env_file()
    env: dict[str, str] = {}
    if path is not None and path.is_file():
        env.update((k, v) for k, v in dotenv_values(path).items() if v is not None)
    env.update(os.environ)
    return from_env(env)
