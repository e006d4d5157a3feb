"""Privilege detection."""

import os


def is_privileged() -> bool:
    """Check if the process runs with root-equivalent privileges."""
    return os.geteuid() == 0
