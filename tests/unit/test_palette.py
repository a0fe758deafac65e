import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "protocol"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from ripdraw_renderer.palette import EGA_PALETTE, list_palette, palette_hex, palette_rgb, palette_rgba


class PaletteTests(unittest.TestCase):
    def test_sixteen_colors(self):
        self.assertEqual(len(EGA_PALETTE), 16)
        self.assertEqual(palette_rgb(0), (0, 0, 0))
        self.assertEqual(palette_rgb(6), (0xAA, 0x55, 0x00))
        self.assertEqual(palette_hex(15), "#FFFFFF")

    def test_out_of_range_falls_back_to_white(self):
        self.assertEqual(palette_rgb(16), (255, 255, 255))
        self.assertEqual(palette_rgb(35), (255, 255, 255))
        self.assertEqual(palette_rgba(-1), (255, 255, 255, 255))

    def test_listing(self):
        rows = list_palette()
        self.assertEqual(rows[14]["name"], "Yellow")
        self.assertEqual(rows[14]["hex"], "#FFFF55")


if __name__ == "__main__":
    unittest.main()
