"""Desktop notification dispatch using notify-send."""

import logging

from cmdnotify.core.message import Notification
from cmdnotify.core.process import ProcessSpawner, SubprocessSpawner
from cmdnotify.core.theme import print_error, print_warning

logger = logging.getLogger(__name__)


def build_argv(notifier: str, notification: Notification) -> list[str]:
    """Build the notifier command line.

    Matches the notify-send CLI: ``-t <ms> [-u <urgency>] <summary> <body>``.
    """
    cmd = [notifier, "-t", str(notification.timeout)]

    if notification.urgency:
        cmd.extend(["-u", notification.urgency])

    cmd.extend([notification.summary, notification.body])
    return cmd


def notify(
    notification: Notification,
    notifier: str,
    spawner: ProcessSpawner | None = None,
) -> bool:
    """Send a desktop notification and wait for the notifier to exit.

    Failures are reported on stderr but never raised: the wrapped command's
    result has already been decided by the time this runs.

    Returns:
        True if the notifier ran and exited with status 0.
    """
    spawner = spawner or SubprocessSpawner(foreground=False)
    argv = build_argv(notifier, notification)
    logger.debug("Notifier argv: %r", argv)

    try:
        child = spawner.spawn(notifier, argv)
    except OSError as e:
        logger.debug("Could not start notifier %s: %s", notifier, e)
        print_error(f"Failed to send notification: {e}")
        return False

    try:
        returncode = child.wait()
    except KeyboardInterrupt:
        logger.debug("Interrupted while waiting for notifier %s", notifier)
        print_warning("Notification interrupted")
        return False

    if returncode != 0:
        logger.debug("Notifier %s exited with %d", notifier, returncode)
        print_warning(f"Notifier exited with status {returncode}")
        return False
    return True
