import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from avatar_core.config import AvatarConfig
from avatar_core.errors import FontLoadError
from avatar_renderer.cache import AvatarCache
from avatar_renderer.composer import AvatarComposer
from avatar_renderer.engine import PillowTextEngine

_FONT_CANDIDATES = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    "/Library/Fonts/Arial.ttf",
    "C:/Windows/Fonts/arialbd.ttf",
)


def _system_font() -> str | None:
    for candidate in _FONT_CANDIDATES:
        if Path(candidate).exists():
            return candidate
    return None


class PillowEngineTests(unittest.TestCase):
    def test_missing_font_file(self):
        with self.assertRaises(FontLoadError):
            PillowTextEngine().load_font("/nonexistent/font.ttf", 12, 72)

    def test_non_finite_size_is_a_font_error(self):
        for size in (float("inf"), float("nan")):
            with self.assertRaises(FontLoadError):
                PillowTextEngine().load_font("/nonexistent/font.ttf", size, 72)

    def test_unparsable_font_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.ttf"
            path.write_bytes(b"definitely not a font")
            with self.assertRaises(FontLoadError):
                PillowTextEngine().load_font(path, 12, 72)

    def test_canvas_snapshot(self):
        engine = PillowTextEngine()
        canvas = engine.new_canvas(3, 2, (1, 2, 3, 255))
        buf = engine.snapshot(canvas)
        self.assertEqual((buf.width, buf.height), (3, 2))
        self.assertEqual(buf.pixel(2, 1), (1, 2, 3, 255))


class PillowRenderTests(unittest.TestCase):
    def setUp(self):
        self.font_path = _system_font()
        if self.font_path is None:
            self.skipTest("no TrueType font available")

    def test_dpi_scales_advance(self):
        engine = PillowTextEngine()
        small = engine.load_font(self.font_path, 40, 72)
        large = engine.load_font(self.font_path, 40, 144)
        self.assertGreater(engine.glyph_advance(large, "W"), engine.glyph_advance(small, "W"))

    def test_renders_foreground_pixels(self):
        cfg = AvatarConfig(font_path=self.font_path, font_size=60, width=128, height=128, spacer=4, text_y=96)
        composer = AvatarComposer(cache=AvatarCache())
        buf = composer.compose("Ada Lovelace", font_color="#FFFFFF", back_color="#000000", config=cfg)
        self.assertEqual(buf.pixel(0, 0), (0, 0, 0, 255))
        white = sum(1 for i in range(0, len(buf.bytes), 4) if buf.bytes[i] == 255)
        self.assertGreater(white, 50)


if __name__ == "__main__":
    unittest.main()
