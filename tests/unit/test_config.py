import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from avatar_core.config import AvatarConfig, config_path, load_config, save_config
from avatar_core.errors import ConfigError


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = load_config(Path(tmp) / "missing.json")
            self.assertEqual(cfg, AvatarConfig())
            self.assertEqual((cfg.width, cfg.height, cfg.spacer, cfg.text_y), (500, 500, 20, 320))
            self.assertEqual(cfg.font_size, 210.0)

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "config.json"
            cfg = AvatarConfig().configure_size(128, 96).configure_color("FFFFFF", "#123456")
            save_config(cfg, path)
            self.assertEqual(json.loads(path.read_text(encoding="utf-8"))["config_version"], 2)
            self.assertEqual(load_config(path), cfg)

    def test_migrate_v1_shape(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            old = {"FontPath": "Other.ttf", "FontSize": 100, "Width": 250, "TextY": 160, "BackColor": "000000"}
            path.write_text(json.dumps(old), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.font_path, "Other.ttf")
            self.assertEqual(cfg.font_size, 100.0)
            self.assertEqual(cfg.width, 250)
            self.assertEqual(cfg.height, 500)
            self.assertEqual(cfg.text_y, 160)
            self.assertEqual(cfg.back_color, "000000")

    def test_out_of_range_values_are_normalized(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {"config_version": 2, "width": 0, "height": -5, "spacer": -3, "font_size": 0, "unknown": 1}
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual((cfg.width, cfg.height, cfg.spacer), (1, 1, 0))
            self.assertEqual(cfg.font_size, 210.0)
            for size in (float("inf"), float("nan")):
                path.write_text(json.dumps({"font_size": size}), encoding="utf-8")
                self.assertEqual(load_config(path).font_size, 210.0)

    def test_garbage_file_yields_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), AvatarConfig())
            path.write_text(json.dumps({"width": "wide"}), encoding="utf-8")
            self.assertEqual(load_config(path), AvatarConfig())
            for version in ("two", None, [2]):
                path.write_text(json.dumps({"config_version": version, "width": 64}), encoding="utf-8")
                self.assertEqual(load_config(path), AvatarConfig(), version)

    def test_invariants(self):
        with self.assertRaises(ConfigError):
            AvatarConfig(width=0)
        with self.assertRaises(ConfigError):
            AvatarConfig(font_size=-1)
        with self.assertRaises(ConfigError):
            AvatarConfig(spacer=-1)
        for size in (float("inf"), float("-inf"), float("nan")):
            with self.assertRaises(ConfigError):
                AvatarConfig(font_size=size)
        with self.assertRaises(ConfigError):
            AvatarConfig().configure_size(10, 0)

    def test_builder_returns_new_values(self):
        base = AvatarConfig()
        changed = base.configure_font("X.ttf", 12).configure_position(5, 6).configure_spacer(0)
        self.assertEqual(base, AvatarConfig())
        self.assertEqual((changed.font_path, changed.font_size), ("X.ttf", 12))
        self.assertEqual((changed.text_x, changed.text_y, changed.spacer), (5, 6, 0))


def test_env_override(monkeypatch, tmp_path):
    target = tmp_path / "custom.json"
    monkeypatch.setenv("AVATAR_CONFIG", str(target))
    assert config_path() == target
    save_config(AvatarConfig(width=64, height=64))
    assert load_config().width == 64


if __name__ == "__main__":
    unittest.main()
