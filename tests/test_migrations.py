"""Alembic configuration: the ini must carry the logging sections env.py loads."""

import configparser
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


class TestAlembicIni(unittest.TestCase):
    def setUp(self) -> None:
        self.ini = configparser.ConfigParser()
        self.assertTrue(self.ini.read(ROOT / "alembic.ini"))

    def test_script_location(self) -> None:
        self.assertEqual(self.ini["alembic"]["script_location"], "alembic")

    def test_logging_sections_for_file_config(self) -> None:
        for section in ("loggers", "handlers", "formatters"):
            with self.subTest(section=section):
                self.assertIn(section, self.ini)
        for logger in self.ini["loggers"]["keys"].split(","):
            self.assertIn(f"logger_{logger.strip()}", self.ini)
        for handler in self.ini["handlers"]["keys"].split(","):
            self.assertIn(f"handler_{handler.strip()}", self.ini)
        for formatter in self.ini["formatters"]["keys"].split(","):
            self.assertIn(f"formatter_{formatter.strip()}", self.ini)

    def test_env_loads_logging_unguarded(self) -> None:
        env = (ROOT / "alembic" / "env.py").read_text(encoding="utf-8")
        self.assertIn("fileConfig(config.config_file_name)", env)
        self.assertNotIn("except KeyError", env)


if __name__ == "__main__":
    unittest.main()
