import os
import sys
import tempfile
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from config import YamlConfig, load_settings
from models import Provider
from settings_schema import validate_settings


class YamlConfigTest(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "settings.yaml")

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_missing_file_gives_defaults(self) -> None:
        self.assertEqual(YamlConfig(self.path).load(), {})
        settings = load_settings(self.path)
        self.assertEqual(settings.provider, Provider.OFFLINE)
        self.assertEqual(settings.request_timeout, 90.0)
        self.assertEqual(settings.plan_timeout, 180.0)

    def test_round_trip(self) -> None:
        cfg = YamlConfig(self.path)
        cfg.save({"provider": "claude", "request_timeout": 120})
        self.assertEqual(cfg.load(), {"provider": "claude", "request_timeout": 120})
        settings = load_settings(self.path)
        self.assertEqual(settings.provider, Provider.CLAUDE)
        self.assertEqual(settings.request_timeout, 120.0)

    def test_save_rejects_invalid(self) -> None:
        with self.assertRaises(ValueError):
            YamlConfig(self.path).save({"request_timeout": 5})
        self.assertFalse(os.path.exists(self.path))

    def test_non_mapping_file(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("- one\n- two\n")
        with self.assertRaises(ValueError):
            YamlConfig(self.path).load()


class ValidateSettingsTest(unittest.TestCase):
    def test_timeout_floor(self) -> None:
        with self.assertRaises(ValueError):
            validate_settings({"request_timeout": 30})
        with self.assertRaises(ValueError):
            validate_settings({"plan_timeout": 59})

    def test_unknown_key(self) -> None:
        with self.assertRaises(ValueError):
            validate_settings({"api_key": "secret"})

    def test_unknown_provider(self) -> None:
        with self.assertRaises(ValueError):
            validate_settings({"provider": "gemini"})

    def test_valid(self) -> None:
        settings = validate_settings({"provider": "openai", "minutes_per_set": 4})
        self.assertEqual(settings.provider, Provider.OPENAI)
        self.assertEqual(settings.minutes_per_set, 4)


if __name__ == "__main__":
    unittest.main()
