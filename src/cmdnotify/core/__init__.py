"""Core utilities and shared components."""

from cmdnotify.core.theme import console, THEME
from cmdnotify.core.notify import notify

__all__ = ["console", "THEME", "notify"]
