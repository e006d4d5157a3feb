"""Notification text for a finished command."""

import signal
from dataclasses import dataclass

from cmdnotify.core.config import DEFAULT_TIMEOUT

SUCCESS_SUMMARY = "Success"
FAILURE_SUMMARY = "Error"


@dataclass(frozen=True)
class Notification:
    """A desktop notification ready to be dispatched."""

    summary: str
    body: str
    timeout: int = DEFAULT_TIMEOUT  # milliseconds
    urgency: str | None = None  # omitted from the notifier call when None


def _signal_name(signum: int) -> str:
    try:
        return signal.Signals(signum).name
    except ValueError:
        return f"signal {signum}"


def format_notification(
    exit_status: int,
    command_text: str,
    timeout: int = DEFAULT_TIMEOUT,
    urgency: str | None = None,
    term_signal: int | None = None,
) -> Notification:
    """Build the summary and single-line body for a command's exit status.

    Args:
        exit_status: Status the command exited with (0-255)
        command_text: Command line as the user typed it
        timeout: Display time in milliseconds
        urgency: low, normal, critical, or None
        term_signal: Signal number when the command was killed by a signal
    """
    if exit_status == 0:
        return Notification(
            summary=SUCCESS_SUMMARY,
            body=f"'{command_text}' has finished and returned 0",
            timeout=timeout,
            urgency=urgency,
        )

    body = f"'{command_text}' has returned non-zero value {exit_status}"
    if term_signal is not None:
        body += f" (killed by {_signal_name(term_signal)})"
    return Notification(summary=FAILURE_SUMMARY, body=body, timeout=timeout, urgency=urgency)
