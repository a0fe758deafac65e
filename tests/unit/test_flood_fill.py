import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "protocol"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from ripdraw_protocol import FloodFill, Rect
from ripdraw_renderer import FloodFillLimits, RasterSurface, execute_command, flood_fill

RED = (170, 0, 0)


class FloodFillTests(unittest.TestCase):
    def setUp(self):
        self.surface = RasterSurface(10, 10)
        execute_command(self.surface, Rect(2, 2, 7, 7, 15))

    def test_fills_enclosed_region(self):
        written = flood_fill(self.surface, 4, 4, RED)
        self.assertEqual(written, 16)
        self.assertEqual(self.surface.get_pixel(4, 4), RED + (255,))
        self.assertEqual(self.surface.get_pixel(6, 6), RED + (255,))
        self.assertEqual(self.surface.get_pixel(2, 2), (255, 255, 255, 255))
        self.assertEqual(self.surface.get_pixel(1, 1), (0, 0, 0, 255))

    def test_fills_outside_region(self):
        written = flood_fill(self.surface, 0, 0, RED)
        self.assertEqual(written, 64)
        self.assertEqual(self.surface.get_pixel(4, 4), (0, 0, 0, 255))

    def test_same_color_is_noop(self):
        before = self.surface.to_bytes()
        self.assertEqual(flood_fill(self.surface, 0, 0, (0, 0, 0)), 0)
        self.assertEqual(self.surface.to_bytes(), before)

    def test_seed_outside_surface(self):
        before = self.surface.to_bytes()
        self.assertEqual(flood_fill(self.surface, -1, 0, RED), 0)
        self.assertEqual(flood_fill(self.surface, 10, 10, RED), 0)
        self.assertEqual(flood_fill(self.surface, 3, 400, RED), 0)
        self.assertEqual(self.surface.to_bytes(), before)

    def test_tolerance_of_one_per_channel(self):
        surface = RasterSurface(10, 10)
        pixels = surface.pixels()
        pixels[5, 5] = (1, 1, 1, 255)
        pixels[6, 6] = (2, 0, 0, 255)
        surface.commit(pixels)

        self.assertEqual(flood_fill(surface, 0, 0, RED), 99)
        self.assertEqual(surface.get_pixel(5, 5), RED + (255,))
        self.assertEqual(surface.get_pixel(6, 6), (2, 0, 0, 255))

    def test_zero_tolerance(self):
        surface = RasterSurface(10, 10)
        pixels = surface.pixels()
        pixels[5, 5] = (1, 1, 1, 255)
        surface.commit(pixels)
        self.assertEqual(flood_fill(surface, 0, 0, RED, FloodFillLimits(tolerance=0)), 99)

    def test_pending_cap_stops_growth(self):
        surface = RasterSurface(50, 50)
        self.assertEqual(flood_fill(surface, 25, 25, RED, FloodFillLimits(max_pending=0)), 1)

    def test_large_region_fills_completely_under_default_cap(self):
        surface = RasterSurface(50, 50)
        self.assertEqual(flood_fill(surface, 25, 25, RED), 2500)

    def test_single_pixel_region_on_large_surface(self):
        surface = RasterSurface(2048, 2048)
        surface.draw.point((1000, 1000), fill=(0, 0, 170, 255))
        before = surface.get_pixel(999, 1000)

        self.assertEqual(flood_fill(surface, 1000, 1000, RED), 1)
        self.assertEqual(surface.get_pixel(1000, 1000), RED + (255,))
        self.assertEqual(surface.get_pixel(999, 1000), before)
        self.assertEqual(surface.get_pixel(0, 0), (0, 0, 0, 255))

    def test_command_uses_palette_fill_color(self):
        execute_command(self.surface, FloodFill(4, 4, border=15, fill_color=12))
        self.assertEqual(self.surface.get_pixel(4, 4), (255, 85, 85, 255))


if __name__ == "__main__":
    unittest.main()
