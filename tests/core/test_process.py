import os
import subprocess
import sys
import tempfile
import unittest
from unittest.mock import patch

from unipm.core.errors import BinaryNotFound, SubprocessFailure
from unipm.core.model import ProcessOptions
from unipm.core.process import execute, locate


class TestLocate(unittest.TestCase):

    @patch("unipm.core.process.shutil.which", return_value="/usr/bin/pnpm")
    def test_locate(self, mock_which):
        self.assertEqual(locate("pnpm"), "/usr/bin/pnpm")
        mock_which.assert_called_once_with("pnpm")

    @patch("unipm.core.process.shutil.which", return_value=None)
    def test_locate_missing(self, mock_which):
        with self.assertRaises(BinaryNotFound) as ctx:
            locate("bun")

        self.assertEqual(ctx.exception.name, "bun")
        self.assertIn("bun", str(ctx.exception))


class TestExecute(unittest.TestCase):

    @patch("unipm.core.process.subprocess.run")
    def test_returns_stdout(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(["npm"], 0, stdout="up to date\n", stderr="")

        self.assertEqual(execute("/usr/bin/npm", ["install"]), "up to date\n")

        args, kwargs = mock_run.call_args
        self.assertEqual(args[0], ["/usr/bin/npm", "install"])
        self.assertTrue(kwargs["capture_output"])
        self.assertTrue(kwargs["text"])
        self.assertIsNone(kwargs["cwd"])
        self.assertIsNone(kwargs["env"])

    @patch("unipm.core.process.subprocess.run")
    def test_non_zero_exit_carries_stderr(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(["npm"], 1, stdout="", stderr="npm ERR! 404 Not Found")

        with self.assertRaises(SubprocessFailure) as ctx:
            execute("/usr/bin/npm", ["install", "no-such-pkg"])

        error = ctx.exception
        self.assertEqual(error.returncode, 1)
        self.assertEqual(error.stderr, "npm ERR! 404 Not Found")
        self.assertEqual(error.command, ["/usr/bin/npm", "install", "no-such-pkg"])
        self.assertIn("404", str(error))

    @patch.dict("os.environ", {"UNIPM_TEST_MARKER": "kept"})
    @patch("unipm.core.process.subprocess.run")
    def test_options(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(["bun"], 0, stdout=None, stderr=None)
        options = ProcessOptions(cwd="/srv/app", env={"CI": "1"}, timeout=5, capture=False)

        self.assertEqual(execute("/usr/bin/bun", ["install"], options), "")

        kwargs = mock_run.call_args.kwargs
        self.assertEqual(kwargs["cwd"], "/srv/app")
        self.assertEqual(kwargs["timeout"], 5)
        self.assertFalse(kwargs["capture_output"])
        self.assertEqual(kwargs["env"]["CI"], "1")
        self.assertEqual(kwargs["env"]["UNIPM_TEST_MARKER"], "kept")

    @patch("unipm.core.process.subprocess.run")
    def test_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(["deno"], 5, output=b"partial", stderr=b"slow")

        with self.assertRaises(SubprocessFailure) as ctx:
            execute("/usr/bin/deno", ["task", "build"], ProcessOptions(timeout=5))

        self.assertIsNone(ctx.exception.returncode)
        self.assertEqual(ctx.exception.stderr, "slow")
        self.assertIn("timed out", str(ctx.exception))

    @patch("unipm.core.process.os.path.exists", return_value=False)
    @patch("unipm.core.process.subprocess.run", side_effect=FileNotFoundError)
    def test_vanished_binary(self, mock_run, mock_exists):
        with self.assertRaises(BinaryNotFound):
            execute("/usr/bin/yarn", ["install"])

    def test_missing_cwd_is_not_a_missing_binary(self):
        missing = os.path.join(tempfile.gettempdir(), "unipm-no-such-dir", "app")

        with self.assertRaises(SubprocessFailure) as ctx:
            execute(sys.executable, ["-c", "print(1)"], ProcessOptions(cwd=missing))

        self.assertIsNone(ctx.exception.returncode)
        self.assertIn("could not be started", str(ctx.exception))
        self.assertTrue(ctx.exception.stderr)

    def test_cwd_pointing_at_a_file(self):
        with tempfile.NamedTemporaryFile() as f:
            with self.assertRaises(SubprocessFailure) as ctx:
                execute(sys.executable, ["-c", "print(1)"], ProcessOptions(cwd=f.name))

        self.assertIsNone(ctx.exception.returncode)

    @patch("unipm.core.process.subprocess.run", side_effect=PermissionError(13, "Permission denied"))
    def test_spawn_errors_become_failures(self, mock_run):
        with self.assertRaises(SubprocessFailure) as ctx:
            execute("/usr/bin/npm", ["install"])

        self.assertIn("Permission denied", ctx.exception.stderr)


if __name__ == "__main__":
    unittest.main()
