import sys
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "protocol"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from ripdraw_core.controller import RenderController


class FakeHandle:
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualTimer:
    def __init__(self):
        self.handles = []

    def __call__(self, delay_s, callback):
        handle = FakeHandle(callback)
        self.handles.append(handle)
        return handle

    def run_pending(self):
        while True:
            live = [h for h in self.handles if not h.cancelled and not getattr(h, "done", False)]
            if not live:
                return
            live[0].done = True
            live[0].callback()


SOURCE = "|*|cE0|X0101|X0202|L00000909"


class RenderControllerTests(unittest.TestCase):
    def setUp(self):
        self.timer = ManualTimer()
        self.controller = RenderController(width=16, height=12, animate=True, timer=self.timer)

    def test_render_plays_to_completion(self):
        session = self.controller.render(SOURCE)
        self.assertTrue(self.controller.status.rendering)
        self.timer.run_pending()

        status = self.controller.status
        self.assertTrue(session.completed)
        self.assertFalse(status.rendering)
        self.assertEqual(status.progress, 100.0)
        self.assertEqual(status.commands_total, 5)
        self.assertEqual(status.commands_executed, 5)
        self.assertEqual(self.controller.surface.get_pixel(2, 2), (255, 255, 85, 255))

    def test_second_render_gets_fresh_surface_and_cancels_first(self):
        first = self.controller.render(SOURCE)
        first_surface = self.controller.surface
        snapshot = first_surface.to_bytes()

        second = self.controller.render("|*|X0505")
        self.assertTrue(first.cancelled)
        self.assertIsNot(self.controller.surface, first_surface)

        for handle in list(self.timer.handles):
            handle.callback()
        self.timer.run_pending()

        self.assertEqual(first_surface.to_bytes(), snapshot)
        self.assertTrue(second.completed)
        events = [e["event"] for e in self.controller.recent_events()]
        self.assertIn("render_cancel", events)

    def test_drawing_state_not_shared_between_renders(self):
        self.controller.animate = False
        self.controller.render("|c40|m0808")
        self.controller.render("|X0101|l0303")
        commands = self.controller.commands
        self.assertEqual(commands[0].color, 15)
        self.assertEqual((commands[1].x0, commands[1].y0), (0, 0))

    def test_resize_restarts_on_new_surface(self):
        self.controller.render(SOURCE)
        old_surface = self.controller.surface
        session = self.controller.resize(32, 24)
        self.assertIsNotNone(session)
        self.timer.run_pending()

        self.assertEqual(self.controller.surface.size, (32, 24))
        self.assertIsNot(self.controller.surface, old_surface)
        self.assertEqual(self.controller.status.sessions_started, 2)
        self.assertTrue(session.completed)

    def test_resize_without_source(self):
        self.assertIsNone(self.controller.resize(8, 8))
        self.assertEqual((self.controller.width, self.controller.height), (8, 8))

    def test_resize_rejects_empty_size(self):
        with self.assertRaises(ValueError):
            self.controller.resize(0, 8)

    def test_immediate_render_and_decode_stats(self):
        controller = RenderController(width=8, height=8, animate=False)
        session = controller.render("|*|Q|X0101|L00")
        self.assertTrue(session.completed)
        self.assertEqual(controller.status.unknown_opcodes, 1)
        self.assertEqual(controller.status.dropped_commands, 1)
        self.assertEqual(controller.status.progress, 100.0)
        self.assertTrue(controller.wait(0))

    def test_immediate_render_failure_is_not_reported_complete(self):
        controller = RenderController(width=8, height=8, animate=False)
        with patch("ripdraw_core.playback.execute_command", side_effect=RuntimeError("boom")):
            session = controller.render("|X0101|X0202")

        self.assertFalse(session.completed)
        self.assertEqual(controller.status.last_error, "boom")
        self.assertFalse(controller.status.rendering)
        events = [row["event"] for row in controller.recent_events()]
        self.assertIn("render_error", events)
        self.assertNotIn("render_complete", events)


if __name__ == "__main__":
    unittest.main()
