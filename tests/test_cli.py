"""Tests for cmdnotify.cli module."""

import os
import shutil
import tempfile
import time
import unittest
from pathlib import Path
from unittest import mock, skipIf

from cmdnotify.cli import main
from cmdnotify.core.config import Settings
from fakes import FakeSpawner, make_executable

RECORDING_NOTIFIER = """#!/bin/sh
printf '%s\\n' "$@" > "$(dirname "$0")/notified"
"""


def _real(*names: str) -> bool:
    return all(shutil.which(name) for name in names)


class _CliTestCase(unittest.TestCase):
    """Runs main() against a temporary bin directory."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.bindir = Path(self._tmp.name)
        self.settings = Settings(
            bindir=str(self.bindir) + "/",
            notifier=str(self.bindir / "notify-send"),
        )

        patches = [
            mock.patch("cmdnotify.cli.is_privileged", return_value=False),
            mock.patch("cmdnotify.cli.load_settings", side_effect=lambda: self.settings),
            mock.patch("cmdnotify.cli._configure_logging"),
        ]
        self.privileged = patches[0].start()
        for patch in patches[1:]:
            patch.start()
        for patch in patches:
            self.addCleanup(patch.stop)

    def tearDown(self):
        self._tmp.cleanup()


class TestMainWithFakes(_CliTestCase):
    """Entry point sequencing with a fake spawner."""

    def setUp(self):
        super().setUp()
        make_executable(self.bindir / "notify-send")
        make_executable(self.bindir / "true")
        make_executable(self.bindir / "false")
        self.spawner = FakeSpawner(returncodes={"false": 1})

    def test_success(self):
        """Exit 0 gives a Success notification and exit code 0."""
        self.assertEqual(main(["true"], spawner=self.spawner), 0)
        (target_path, target_argv), (notifier_path, notifier_argv) = self.spawner.calls
        self.assertEqual(target_path, str(self.bindir / "true"))
        self.assertEqual(target_argv, ["true"])
        self.assertEqual(notifier_path, self.settings.notifier)
        self.assertEqual(notifier_argv[-2], "Success")
        self.assertIn("true", notifier_argv[-1])
        self.assertIn("returned 0", notifier_argv[-1])

    def test_failure_propagates_status(self):
        """The tool exits with the target's status and notifies Error."""
        self.assertEqual(main(["false"], spawner=self.spawner), 1)
        self.assertEqual(self.spawner.calls[1][1][-2], "Error")

    def test_arbitrary_status(self):
        """Any target status is propagated unchanged."""
        self.spawner.returncodes["true"] = 42
        self.assertEqual(main(["true"], spawner=self.spawner), 42)
        self.assertIn("42", self.spawner.calls[1][1][-1])

    def test_arguments_passed_verbatim(self):
        """Options after the program belong to the program."""
        main(["true", "-h", "--verbose", "x y"], spawner=self.spawner)
        self.assertEqual(self.spawner.calls[0][1], ["true", "-h", "--verbose", "x y"])

    def test_double_dash_after_program_kept(self):
        """A -- right after the program name reaches the program."""
        make_executable(self.bindir / "grep")
        main(["grep", "--", "-v", "file"], spawner=self.spawner)
        self.assertEqual(self.spawner.calls[0][1], ["grep", "--", "-v", "file"])

    def test_leading_double_dash_dropped(self):
        """A -- before the program only ends cmdnotify's own options."""
        main(["--", "true", "--", "x"], spawner=self.spawner)
        self.assertEqual(self.spawner.calls[0][1], ["true", "--", "x"])

    def test_help_after_program_goes_to_program(self):
        """--help after the program name is not cmdnotify's."""
        self.assertEqual(main(["true", "--help"], spawner=self.spawner), 0)
        self.assertEqual(self.spawner.calls[0][1], ["true", "--help"])
        self.assertEqual(len(self.spawner.calls), 2)

    def test_only_double_dash_is_usage_error(self):
        """A lone -- names no program."""
        self.assertEqual(main(["--"], spawner=self.spawner), 1)
        self.assertEqual(self.spawner.calls, [])

    def test_interrupted_notifier_keeps_target_status(self):
        """Ctrl-C while notifying never changes the exit status."""
        self.spawner.interrupts.add("notify-send")
        self.assertEqual(main(["false"], spawner=self.spawner), 1)
        self.assertEqual(len(self.spawner.calls), 2)

    def test_target_runs_before_notifier(self):
        """The target finishes before the notifier is spawned."""
        main(["true"], spawner=self.spawner)
        self.assertEqual(
            [os.path.basename(path) for path, _ in self.spawner.calls],
            ["true", "notify-send"],
        )
        self.assertTrue(self.spawner.children[0].waited)

    def test_no_program_is_usage_error(self):
        """Missing target exits 1 and launches nothing."""
        self.assertEqual(main([], spawner=self.spawner), 1)
        self.assertEqual(self.spawner.calls, [])

    def test_help(self):
        """--help prints help and exits 0 without running anything."""
        self.assertEqual(main(["--help"], spawner=self.spawner), 0)
        self.assertEqual(self.spawner.calls, [])

    def test_unknown_option(self):
        """Unknown options before the program are usage errors."""
        with self.assertRaises(SystemExit) as ctx:
            main(["--bogus", "true"], spawner=self.spawner)
        self.assertEqual(ctx.exception.code, 1)
        self.assertEqual(self.spawner.calls, [])

    def test_privileged_refused(self):
        """Running as root exits 1 before anything is launched."""
        self.privileged.return_value = True
        self.assertEqual(main(["true"], spawner=self.spawner), 1)
        self.assertEqual(self.spawner.calls, [])

    def test_missing_notifier(self):
        """A missing notifier exits 1 before the target is launched."""
        (self.bindir / "notify-send").unlink()
        self.assertEqual(main(["true"], spawner=self.spawner), 1)
        self.assertEqual(self.spawner.calls, [])

    def test_missing_target(self):
        """A missing target exits 1 and the notifier is never launched."""
        self.assertEqual(main(["no-such-program"], spawner=self.spawner), 1)
        self.assertEqual(self.spawner.calls, [])

    def test_notifier_failure_keeps_target_status(self):
        """A broken notifier never changes the exit status."""
        self.spawner.returncodes["notify-send"] = 3
        self.assertEqual(main(["true"], spawner=self.spawner), 0)
        self.assertEqual(main(["false"], spawner=self.spawner), 1)

    def test_target_creation_failure(self):
        """Failing to create the target process exits 1 without notifying."""
        self.spawner.errors["true"] = BlockingIOError(11, "Resource temporarily unavailable")
        self.assertEqual(main(["true"], spawner=self.spawner), 1)
        self.assertEqual(len(self.spawner.calls), 1)

    def test_urgency_and_timeout_from_settings(self):
        """Configured urgency and timeout reach the notifier."""
        self.settings = Settings(
            bindir=self.settings.bindir,
            notifier=self.settings.notifier,
            timeout=1200,
            urgency="critical",
        )
        main(["true"], spawner=self.spawner)
        notifier_argv = self.spawner.calls[1][1]
        self.assertEqual(notifier_argv[1:5], ["-t", "1200", "-u", "critical"])


@skipIf(not _real("true", "false", "sleep"), "coreutils not available")
class TestMainEndToEnd(_CliTestCase):
    """Real processes with a notifier that records its arguments."""

    def setUp(self):
        super().setUp()
        make_executable(self.bindir / "notify-send", RECORDING_NOTIFIER)
        for name in ("true", "false", "sleep"):
            os.symlink(shutil.which(name), self.bindir / name)

    def _notified(self) -> list[str]:
        return (self.bindir / "notified").read_text().splitlines()

    def test_true(self):
        """true exits 0 and the notification reports success."""
        self.assertEqual(main(["true"]), 0)
        self.assertEqual(
            self._notified(),
            ["-t", "3500", "Success", "'true' has finished and returned 0"],
        )

    def test_false(self):
        """false exits 1 and the notification reports an error."""
        self.assertEqual(main(["false"]), 1)
        notified = self._notified()
        self.assertEqual(notified[2], "Error")
        self.assertIn("false", notified[3])

    def test_sleep_blocks_then_notifies(self):
        """sleep 1 blocks about a second before notifying."""
        start = time.perf_counter()
        self.assertEqual(main(["sleep", "1"]), 0)
        self.assertGreaterEqual(time.perf_counter() - start, 0.9)
        self.assertEqual(self._notified()[2], "Success")


if __name__ == "__main__":
    unittest.main()
