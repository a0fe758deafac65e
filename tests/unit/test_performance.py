import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from ripdraw_core.performance import PerformanceController, PerformanceTargets


class PerformanceTests(unittest.TestCase):
    def test_budget_sample_shape(self):
        ctl = PerformanceController(PerformanceTargets(cpu_percent_max=10_000.0, rss_mb_max=4096.0, commands_per_s_min=10.0))
        status = ctl.sample(commands_per_s=50.0)
        self.assertFalse(status.overloaded)
        self.assertIsNone(status.warning)
        self.assertGreater(status.rss_mb, 0.0)

    def test_low_throughput_warning(self):
        ctl = PerformanceController(PerformanceTargets(cpu_percent_max=10_000.0, rss_mb_max=4096.0, commands_per_s_min=10.0))
        status = ctl.sample(commands_per_s=1.0)
        self.assertEqual(status.warning, "below_throughput_target")


if __name__ == "__main__":
    unittest.main()
