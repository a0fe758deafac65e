import json
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "protocol"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from ripdraw_core.controller import RenderController
from ripdraw_core.logging_setup import JsonFormatter, get_logger


class LoggingSetupTests(unittest.TestCase):
    def test_get_logger_area(self):
        self.assertEqual(get_logger("playback").name, "ripdraw.playback")

    def test_render_records_carry_session_generation(self):
        controller = RenderController(width=8, height=8, animate=False)
        with self.assertLogs("ripdraw.controller", level="INFO") as cm:
            session = controller.render("|X0101")

        done = [r for r in cm.records if getattr(r, "event", None) == "render_complete"]
        self.assertEqual(len(done), 1)
        self.assertEqual(done[0].session, session.generation)

        payload = json.loads(JsonFormatter().format(done[0]))
        self.assertEqual(payload["event"], "render_complete")
        self.assertEqual(payload["session"], session.generation)
        self.assertEqual(payload["logger"], "ripdraw.controller")

    def test_playback_records_carry_session_generation(self):
        controller = RenderController(width=8, height=8, animate=False)
        with self.assertLogs("ripdraw.playback", level="DEBUG") as cm:
            session = controller.render("|X0101")
        self.assertTrue(cm.records)
        self.assertTrue(all(r.session == session.generation for r in cm.records))


if __name__ == "__main__":
    unittest.main()
