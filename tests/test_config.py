import json
import os
import tempfile
import unittest

from cosmiczoom.config import DEFAULTS, load_config, normalise_config
from cosmiczoom.errors import ConfigError


class TestConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = normalise_config(load_config(None))
        self.assertEqual(cfg["max_zoom"], 12.0)
        self.assertEqual(cfg["zoom_speed"], 0.005)
        self.assertEqual((cfg["low_freq"], cfg["high_freq"]), (100.0, 800.0))
        self.assertIsNone(cfg["seed"])

    def test_load_json_and_coerce(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "cfg.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump({"width": "320", "fps": 30, "seed": "9"}, f)
            cfg = normalise_config(load_config(path))
        self.assertEqual(cfg["width"], 320)
        self.assertEqual(cfg["seed"], 9)
        self.assertEqual(cfg["height"], DEFAULTS["height"])

    def test_load_errors(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            bad = os.path.join(d, "bad.json")
            with open(bad, "w", encoding="utf-8") as f:
                f.write("[1, 2]")
            with self.assertRaises(ConfigError):
                load_config(bad)
            with open(bad, "w", encoding="utf-8") as f:
                f.write("{not json")
            with self.assertRaises(ConfigError):
                load_config(bad)
            with open(bad, "w", encoding="utf-8") as f:
                json.dump({"colour": "red"}, f)
            with self.assertRaises(ConfigError):
                load_config(bad)
            with self.assertRaises(ConfigError):
                load_config(os.path.join(d, "missing.json"))

    def test_validation(self) -> None:
        bad = [
            {"width": 0},
            {"zoom_speed": 0},
            {"max_zoom": 1.0},
            {"start_zoom": 0.5},
            {"low_freq": 900},
            {"amplitude": 1.5},
            {"time_step": -0.01},
            {"fps": "fast"},
        ]
        for override in bad:
            with self.subTest(override=override):
                with self.assertRaises(ConfigError):
                    normalise_config(override)

    def test_non_finite_values_rejected(self) -> None:
        cases = [
            '{"zoom_speed": NaN}',
            '{"max_zoom": Infinity}',
            '{"start_zoom": NaN}',
            '{"time_step": Infinity}',
            '{"high_freq": Infinity}',
            '{"amplitude": NaN}',
            '{"width": Infinity}',
        ]
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "cfg.json")
            for text in cases:
                with self.subTest(config=text):
                    with open(path, "w", encoding="utf-8") as f:
                        f.write(text)
                    with self.assertRaises(ConfigError):
                        normalise_config(load_config(path))

    def test_config_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(ConfigError, ValueError))


if __name__ == "__main__":
    unittest.main()
