"""
Script: tests/test_settings.py
What: Tests loading plugin settings from the environment.
Doing: Checks defaults, typed parsing, the `.tags` fallback, env files, and the auth decision.
Why: Pipelines pass every option as a string; parsing mistakes change what gets pushed.
Goal: Keep option handling compatible with existing pipeline definitions.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from kaniko_plugin.common import ConfigError
from kaniko_plugin.registry import V1_REGISTRY_URL
from kaniko_plugin.settings import PluginSettings, load_env_file, read_tags


class PluginSettingsTests(unittest.TestCase):
    def setUp(self) -> None:
        self._temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self._temp_dir.name)
        self.tags_file = self.root / ".tags"

    def tearDown(self) -> None:
        self._temp_dir.cleanup()

    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = PluginSettings.from_env(tags_file=self.tags_file)

        self.assertEqual(settings.dockerfile, "Dockerfile")
        self.assertEqual(settings.context, ".")
        self.assertEqual(settings.tags, ["latest"])
        self.assertEqual(settings.registry, V1_REGISTRY_URL)
        self.assertFalse(settings.expand_repo)
        self.assertEqual(settings.cache_ttl, 0)

    def test_reads_plugin_variables(self) -> None:
        env = {
            "PLUGIN_REPO": "myorg/app",
            "PLUGIN_REGISTRY": "https://myreg.example.com",
            "PLUGIN_TAGS": "1.0,latest",
            "PLUGIN_EXPAND_REPO": "true",
            "PLUGIN_BUILD_ARGS": "A=1,B=2",
            "PLUGIN_ENABLE_CACHE": "1",
            "PLUGIN_CACHE_REPO": "myorg/cache",
            "PLUGIN_CACHE_TTL": "12",
            "PLUGIN_NO_PUSH": "false",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = PluginSettings.from_env(tags_file=self.tags_file)

        self.assertEqual(settings.repo, "myorg/app")
        self.assertEqual(settings.tags, ["1.0", "latest"])
        self.assertTrue(settings.expand_repo)
        self.assertEqual(settings.args, ["A=1", "B=2"])
        self.assertTrue(settings.enable_cache)
        self.assertEqual(settings.cache_repo, "myorg/cache")
        self.assertEqual(settings.cache_ttl, 12)

    def test_invalid_boolean_is_an_error(self) -> None:
        with mock.patch.dict(os.environ, {"PLUGIN_NO_PUSH": "maybe"}, clear=True):
            with self.assertRaises(ConfigError):
                PluginSettings.from_env(tags_file=self.tags_file)

    def test_tags_file_is_used_when_env_is_unset(self) -> None:
        self.tags_file.write_text("1.2.3,1.2\nlatest\n", encoding="utf-8")
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(read_tags(self.tags_file), ["1.2.3", "1.2", "latest"])
        with mock.patch.dict(os.environ, {"PLUGIN_TAGS": "dev"}, clear=True):
            self.assertEqual(read_tags(self.tags_file), ["dev"])

    def test_empty_tags_fall_back(self) -> None:
        with mock.patch.dict(os.environ, {"PLUGIN_TAGS": ""}, clear=True):
            self.assertEqual(read_tags(self.tags_file), ["latest"])
        self.tags_file.write_text("1.0\n", encoding="utf-8")
        with mock.patch.dict(os.environ, {"PLUGIN_TAGS": " , "}, clear=True):
            self.assertEqual(read_tags(self.tags_file), ["1.0"])

    def test_needs_auth(self) -> None:
        self.assertTrue(PluginSettings().needs_auth)
        self.assertFalse(PluginSettings(no_push=True).needs_auth)
        self.assertTrue(PluginSettings(no_push=True, username="user").needs_auth)
        self.assertFalse(PluginSettings(dockerconfig_override=True).needs_auth)


class LoadEnvFileTests(unittest.TestCase):
    def test_loads_without_overriding(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            env_file = Path(temp_dir) / "plugin.env"
            env_file.write_text("PLUGIN_REPO=from-file\nPLUGIN_TARGET=release\n", encoding="utf-8")
            env = {"PLUGIN_ENV_FILE": str(env_file), "PLUGIN_REPO": "from-env"}
            with mock.patch.dict(os.environ, env, clear=True):
                self.assertEqual(load_env_file(), env_file)
                self.assertEqual(os.environ["PLUGIN_REPO"], "from-env")
                self.assertEqual(os.environ["PLUGIN_TARGET"], "release")

    def test_no_env_file_configured(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(load_env_file())

    def test_missing_env_file(self) -> None:
        with mock.patch.dict(os.environ, {"PLUGIN_ENV_FILE": "/nonexistent/plugin.env"}, clear=True):
            with self.assertRaises(ConfigError):
                load_env_file()


if __name__ == "__main__":
    unittest.main()
