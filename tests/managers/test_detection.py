import json
import os
import tempfile
import unittest
from unittest.mock import patch

from unipm.managers import detect_manager
from unipm.managers.generic import GenericManager


class TestDetectManager(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = self.tmp.name

        env = patch.dict(os.environ, {}, clear=True)
        env.start()
        self.addCleanup(env.stop)

    def touch(self, *names):
        for name in names:
            with open(os.path.join(self.path, name), "w", encoding="utf-8") as f:
                f.write("")

    def write_package_json(self, data):
        with open(os.path.join(self.path, "package.json"), "w", encoding="utf-8") as f:
            json.dump(data, f)

    def test_fallback_is_npm(self):
        self.assertEqual(detect_manager(self.path).name, "npm")

    def test_lock_files(self):
        cases = {
            "yarn.lock": "yarn",
            "pnpm-lock.yaml": "pnpm",
            "bun.lockb": "bun",
            "bun.lock": "bun",
            "deno.json": "deno",
            "package-lock.json": "npm",
        }

        for lock_file, expected in cases.items():
            with self.subTest(lock_file=lock_file):
                with tempfile.TemporaryDirectory() as path:
                    open(os.path.join(path, lock_file), "w").close()
                    self.assertEqual(detect_manager(path).name, expected)

    def test_lock_file_priority(self):
        self.touch("package-lock.json", "yarn.lock", "pnpm-lock.yaml")

        self.assertEqual(detect_manager(self.path).name, "pnpm")

    @patch("unipm.managers.os.listdir")
    def test_listdir_is_used_for_lock_files(self, mock_listdir):
        mock_listdir.return_value = ["index.js", "deno.lock", "README.md"]

        self.assertEqual(detect_manager(self.path).name, "deno")
        mock_listdir.assert_called_once_with(self.path)

    def test_package_manager_field_beats_lock_files(self):
        self.touch("package-lock.json")
        self.write_package_json({"name": "demo", "packageManager": "yarn@4.1.0+sha256.abc"})

        self.assertEqual(detect_manager(self.path).name, "yarn")

    def test_broken_package_json_is_ignored(self):
        with open(os.path.join(self.path, "package.json"), "w", encoding="utf-8") as f:
            f.write("{ not json")
        self.touch("bun.lockb")

        self.assertEqual(detect_manager(self.path).name, "bun")

    def test_user_agent_beats_package_json(self):
        self.write_package_json({"packageManager": "yarn@4.1.0"})
        os.environ["npm_config_user_agent"] = "pnpm/8.6.0 npm/? node/v18.16.0 linux x64"

        self.assertEqual(detect_manager(self.path).name, "pnpm")

    def test_override_beats_everything(self):
        self.touch("yarn.lock")
        os.environ["npm_config_user_agent"] = "pnpm/8.6.0 npm/? node/v18.16.0 linux x64"
        os.environ["UNIPM_PACKAGE_MANAGER"] = "cnpm"

        self.assertEqual(detect_manager(self.path).name, "cnpm")

    def test_unrecognized_signal_falls_back_to_generic(self):
        os.environ["npm_config_user_agent"] = "volta/1.1.0 node/v20.0.0"

        manager = detect_manager(self.path)

        self.assertIsInstance(manager, GenericManager)
        self.assertEqual(manager.run_args("build"), ["run", "build"])
        self.assertEqual(manager.dlx_args("tsc"), ["x", "tsc"])


if __name__ == "__main__":
    unittest.main()
