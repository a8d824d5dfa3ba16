"""Tests for run configuration loading."""

import tempfile
import unittest
from pathlib import Path

from shared.run_config import ConfigValidationError, RunConfig, load_run_config


class TestRunConfig(unittest.TestCase):
    def _write_config(self, content: str) -> str:
        handle = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
        handle.write(content)
        handle.flush()
        handle.close()
        self.addCleanup(Path(handle.name).unlink, missing_ok=True)
        return handle.name

    def test_load_values(self) -> None:
        path = self._write_config(
            "source: ./model\nfilename_pattern: '^[a-z]'\ndebug_dump: true\nlog_level: debug\n"
        )
        config = load_run_config(path, strict=True)

        self.assertEqual(config.source, "./model")
        self.assertEqual(config.filename_pattern, "^[a-z]")
        self.assertTrue(config.debug_dump)
        self.assertEqual(config.log_level, "DEBUG")

    def test_non_strict_missing_returns_defaults(self) -> None:
        self.assertEqual(load_run_config("/definitely/missing.yaml"), RunConfig())

    def test_strict_missing_raises(self) -> None:
        with self.assertRaises(ConfigValidationError):
            load_run_config("/definitely/missing.yaml", strict=True)

    def test_strict_unknown_key_raises(self) -> None:
        path = self._write_config("source: x\nrepo_name: y\n")
        with self.assertRaises(ConfigValidationError):
            load_run_config(path, strict=True)

    def test_non_strict_bad_type_uses_default(self) -> None:
        path = self._write_config("debug_dump: 'yes'\nsource: x\n")
        config = load_run_config(path)
        self.assertFalse(config.debug_dump)
        self.assertEqual(config.source, "x")

    def test_invalid_yaml(self) -> None:
        path = self._write_config("source: [unclosed\n")
        self.assertEqual(load_run_config(path), RunConfig())
        with self.assertRaises(ConfigValidationError):
            load_run_config(path, strict=True)

    def test_with_overrides_skips_none(self) -> None:
        config = RunConfig(source="a").with_overrides(source=None, output_file="b.json")
        self.assertEqual(config.source, "a")
        self.assertEqual(config.output_file, "b.json")


if __name__ == "__main__":
    unittest.main()
