import sys
import unittest
from io import BytesIO
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from avatar_core.errors import EncodingError
from avatar_renderer.encoder import encode_png, to_image
from avatar_renderer.models import PixelBuffer


class EncoderTests(unittest.TestCase):
    def test_png_signature_and_pixels(self):
        buf = PixelBuffer(width=2, height=1, pixel_format="RGBA", bytes=bytes([255, 0, 0, 255, 0, 0, 255, 255]))
        data = encode_png(buf)
        self.assertTrue(data.startswith(b"\x89PNG\r\n\x1a\n"))
        with Image.open(BytesIO(data)) as img:
            self.assertEqual(img.size, (2, 1))
            self.assertEqual(img.convert("RGBA").getpixel((1, 0)), (0, 0, 255, 255))

    def test_truncated_buffer(self):
        buf = PixelBuffer(width=4, height=4, pixel_format="RGBA", bytes=b"\x00" * 7)
        with self.assertRaises(EncodingError):
            encode_png(buf)

    def test_to_image_mode(self):
        buf = PixelBuffer(width=1, height=1, pixel_format="RGBA", bytes=b"\x01\x02\x03\x04")
        self.assertEqual(to_image(buf).mode, "RGBA")

    def test_pixel_bounds(self):
        buf = PixelBuffer(width=1, height=1, pixel_format="RGBA", bytes=b"\x01\x02\x03\x04")
        with self.assertRaises(IndexError):
            buf.pixel(1, 0)


if __name__ == "__main__":
    unittest.main()
