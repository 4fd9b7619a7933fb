"""
Tests for the OnlyConfig command-line interface.
"""

import json
import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path

import yaml
from click.testing import CliRunner
from pydantic import BaseModel, ConfigDict, Field

from OnlyConfig.cli import cli


class Api(BaseModel):
    model_config = ConfigDict(extra="forbid")

    host: str = "localhost"
    port: int = 8080


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    api: Api = Field(default_factory=Api)
    debug: bool = False


SCHEMA_REF = f"{__name__}:Settings"


class TestCli(unittest.TestCase):
    """Test cases for the show, merge and validate commands."""

    def setUp(self):
        """Create a runner and a temporary directory with config files."""
        self.runner = CliRunner()
        self.temp_dir = tempfile.mkdtemp()
        self.base = self._write("base.yml", {"api": {"host": "0.0.0.0", "port": 8000}, "debug": False})
        self.local = self._write("local.yml", {"api": {"port": 9000}, "debug": True})

    def tearDown(self):
        """Clean up after tests."""
        shutil.rmtree(self.temp_dir)

    def _write(self, name, data):
        path = Path(self.temp_dir) / name
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return str(path)

    def test_show_whole_file_as_json(self):
        """show prints the whole configuration."""
        result = self.runner.invoke(cli, ["show", self.base, "--format", "json"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output), {"api": {"host": "0.0.0.0", "port": 8000}, "debug": False})

    def test_show_key_as_yaml(self):
        """show --key prints one section."""
        result = self.runner.invoke(cli, ["show", self.base, "--key", "api"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(yaml.safe_load(result.output), {"host": "0.0.0.0", "port": 8000})

    def test_show_missing_key(self):
        """show fails for a key that does not exist."""
        result = self.runner.invoke(cli, ["show", self.base, "--key", "api.user"])
        self.assertEqual(result.exit_code, 1)

    def test_show_key_with_null_value(self):
        """show prints a key that is present with a null value."""
        nullable = self._write("nullable.yml", {"api": {"token": None}})
        result = self.runner.invoke(cli, ["show", nullable, "--key", "api.token", "--format", "json"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIsNone(json.loads(result.output))

    def test_show_missing_file(self):
        """show fails cleanly for a missing file."""
        result = self.runner.invoke(cli, ["show", str(Path(self.temp_dir) / "nope.yml")])
        self.assertEqual(result.exit_code, 1)

    def test_merge_files_in_order(self):
        """Later files override earlier ones."""
        result = self.runner.invoke(cli, ["merge", self.base, self.local, "--format", "json"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output), {"api": {"host": "0.0.0.0", "port": 9000}, "debug": True})

    def test_merge_with_schema_applies_defaults(self):
        """Merging through a schema fills in defaults."""
        partial = self._write("partial.yml", {"debug": True})
        result = self.runner.invoke(cli, ["merge", partial, "--schema", SCHEMA_REF, "--format", "json"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.output), {"api": {"host": "localhost", "port": 8080}, "debug": True})

    def test_validate_valid_file(self):
        """validate succeeds for a conforming file."""
        result = self.runner.invoke(cli, ["validate", self.base, "--schema", SCHEMA_REF])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Configuration file is valid", result.output)

    def test_validate_reports_every_issue(self):
        """validate lists each issue and exits non-zero."""
        bad = self._write("bad.yml", {"api": {"port": "http"}, "debug": "maybe", "colour": "blue"})
        result = self.runner.invoke(cli, ["validate", bad, "--schema", SCHEMA_REF])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("api.port", result.output)
        self.assertIn("debug", result.output)
        self.assertIn("colour", result.output)

    def test_validate_allow_unknown(self):
        """--allow-unknown accepts undeclared keys."""
        extra = self._write("extra.yml", {"colour": "blue"})
        result = self.runner.invoke(cli, ["validate", extra, "--schema", SCHEMA_REF, "--allow-unknown"])

        self.assertEqual(result.exit_code, 0, result.output)

    def test_bad_schema_reference(self):
        """Malformed or unimportable schema references are usage errors."""
        for reference in ("no_colon", "missing_module_xyz:Settings", f"{__name__}:Nope", f"{__name__}:SCHEMA_REF"):
            result = self.runner.invoke(cli, ["validate", self.base, "--schema", reference])
            self.assertEqual(result.exit_code, 2, reference)

    def test_schema_from_current_directory(self):
        """Schema modules are importable from the working directory."""
        module_name = "local_settings_schema"
        (Path(self.temp_dir) / f"{module_name}.py").write_text(
            "from pydantic import BaseModel, ConfigDict\n"
            "\n"
            "\n"
            "class LocalSettings(BaseModel):\n"
            "    model_config = ConfigDict(extra='forbid')\n"
            "\n"
            "    debug: bool = False\n",
            encoding="utf-8",
        )
        debug_only = self._write("debug.yml", {"debug": True})
        previous_cwd = os.getcwd()
        previous_path = list(sys.path)
        os.chdir(self.temp_dir)
        try:
            result = self.runner.invoke(cli, ["validate", debug_only, "--schema", f"{module_name}:LocalSettings"])
        finally:
            os.chdir(previous_cwd)
            sys.path[:] = previous_path
            sys.modules.pop(module_name, None)

        self.assertEqual(result.exit_code, 0, result.output)

    def test_log_level_option(self):
        """Every command accepts --log-level."""
        result = self.runner.invoke(cli, ["show", self.base, "--log-level", "error"])
        self.assertEqual(result.exit_code, 0, result.output)


if __name__ == "__main__":
    unittest.main()
