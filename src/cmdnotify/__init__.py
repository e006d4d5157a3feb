"""Run a command and report its outcome as a desktop notification."""

__version__ = "0.1.0"
