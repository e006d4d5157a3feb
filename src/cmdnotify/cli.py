"""CLI entry point for cmdnotify."""

import argparse
import logging
import os
import sys

from rich.logging import RichHandler

from cmdnotify.core.config import Settings, load_settings
from cmdnotify.core.errors import (
    CmdNotifyError,
    MissingProgramError,
    PrivilegeError,
    UsageError,
)
from cmdnotify.core.locator import DirectoryLocator, is_executable
from cmdnotify.core.message import format_notification
from cmdnotify.core.notify import notify
from cmdnotify.core.privilege import is_privileged
from cmdnotify.core.process import ProcessSpawner, SubprocessSpawner
from cmdnotify.core.runner import CommandRunner, CommandSpec
from cmdnotify.core.theme import console, print_error

PROG = "cmdnotify"

logger = logging.getLogger(__name__)


def _print_help() -> None:
    """Print modern styled help."""
    console.print(f"[title]{PROG}[/title] [muted]─[/muted] Run a command, then notify its result\n")
    console.print(f"[label]Usage:[/label]  {PROG} [value]<program>[/value] [muted][args...][/muted]\n")
    console.print("[label]Environment:[/label]")

    col_width = 22
    for name, description in (
        ("CMDNOTIFY_BINDIR", "Directory holding programs (default: /bin/)"),
        ("CMDNOTIFY_NOTIFIER", "Notifier path (default: <bindir>notify-send)"),
        ("CMDNOTIFY_TIMEOUT", "Notification timeout in ms (default: 3500)"),
        ("CMDNOTIFY_URGENCY", "low, normal or critical"),
        ("CMDNOTIFY_LOG_LEVEL", "Diagnostic log level (default: WARNING)"),
    ):
        padding = " " * max(1, col_width - len(name))
        console.print(f"  [value]{name}[/value]{padding}{description}")

    console.print("\n[label]Options:[/label]")
    console.print("  [value]-h[/value], [value]--help[/value]            Show this help message")


class _StyledParser(argparse.ArgumentParser):
    """ArgumentParser with styled output."""

    def error(self, message: str) -> None:
        print_error(message)
        console.print(f"Run [value]{PROG} --help[/value] for usage")
        sys.exit(1)

    def print_help(self, file=None) -> None:  # noqa: ARG002
        _print_help()


def _build_parser() -> _StyledParser:
    parser = _StyledParser(prog=PROG, add_help=False)
    parser.add_argument("-h", "--help", action="store_true")
    return parser


def _split_argv(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split argv into cmdnotify's own options and the target command.

    Options end at the first non-option token or at a leading ``--``, which
    is dropped. Everything from the program name on is left untouched.
    """
    for index, arg in enumerate(argv):
        if arg == "--":
            return argv[:index], argv[index + 1 :]
        if arg == "-" or not arg.startswith("-"):
            return argv[:index], argv[index:]
    return argv, []


def _configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def run_command(
    command: CommandSpec,
    settings: Settings,
    spawner: ProcessSpawner | None = None,
) -> int:
    """Check preconditions, run the command, notify, and return its status.

    Raises:
        PreconditionError: If running privileged or an executable is missing.
        ChildCreationError: If the target's process could not be created.
    """
    if is_privileged():
        raise PrivilegeError(f"Refusing to run as root (uid {os.geteuid()})")

    if not is_executable(settings.notifier):
        raise MissingProgramError(os.path.basename(settings.notifier), settings.notifier)

    locator = DirectoryLocator(settings.bindir)
    if not locator.exists(command.program):
        raise MissingProgramError(command.program, locator.resolve(command.program))

    runner = CommandRunner(locator, spawner or SubprocessSpawner())
    result = runner.run(command)

    notification = format_notification(
        result.exit_status,
        command.text,
        timeout=settings.timeout,
        urgency=settings.urgency,
        term_signal=result.term_signal,
    )
    notify(notification, settings.notifier, spawner=spawner)

    return result.exit_status


def main(argv: list[str] | None = None, spawner: ProcessSpawner | None = None) -> int:
    """Main entry point."""
    options, command_argv = _split_argv(sys.argv[1:] if argv is None else list(argv))
    parser = _build_parser()
    args = parser.parse_args(options)

    if args.help:
        parser.print_help()
        return 0

    try:
        if not command_argv or not command_argv[0]:
            raise UsageError("Too few arguments!")

        settings = load_settings()
        _configure_logging(settings.log_level)

        command = CommandSpec.from_argv(command_argv)
        logger.debug("Running %s", command.text)
        return run_command(command, settings, spawner)
    except UsageError as e:
        print_error(str(e))
        console.print(f"Run [value]{PROG} --help[/value] for usage")
        return 1
    except CmdNotifyError as e:
        print_error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
