import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "protocol"))

from ripdraw_protocol import OPCODES, DrawingState, LineTo, MoveTo, Rect, Reset, SetColor
from ripdraw_protocol.decoder import apply_result


class OpcodeTableTests(unittest.TestCase):
    def test_required_lengths(self):
        expected = {
            "c": 2, "L": 8, "R": 8, "B": 8, "C": 6, "O": 10, "X": 4,
            "m": 4, "l": 4, "P": 1, "S": 2, "F": 5, "*": 0, "w": 8,
        }
        self.assertEqual({k: v.required for k, v in OPCODES.items()}, expected)

    def test_handlers_do_not_mutate_state(self):
        state = DrawingState()
        result = OPCODES["c"].handler("4E", state)
        self.assertEqual(result.command, SetColor(fg=4, bg=14))
        self.assertEqual(result.state_delta, {"fg_color": 4, "bg_color": 14})
        self.assertEqual(state.fg_color, 15)

    def test_rect_uses_state_foreground(self):
        state = DrawingState(fg_color=9)
        result = OPCODES["R"].handler("00000A0A", state)
        self.assertEqual(result.command, Rect(0, 0, 10, 10, 9))
        self.assertEqual(result.consumed, 8)

    def test_move_and_line_to_deltas(self):
        state = DrawingState()
        moved = OPCODES["m"].handler("0A0B", state)
        self.assertEqual(moved.command, MoveTo(10, 11))
        apply_result(state, moved)
        drawn = OPCODES["l"].handler("0C0D", state)
        self.assertEqual(drawn.command, LineTo(10, 11, 12, 13, 15))
        self.assertEqual(drawn.state_delta, {"cursor_x": 12, "cursor_y": 13})

    def test_reset_result(self):
        state = DrawingState(fg_color=3, cursor_x=9)
        result = OPCODES["*"].handler("", state)
        self.assertEqual(result.command, Reset())
        self.assertEqual(result.consumed, 0)
        apply_result(state, result)
        self.assertEqual(state, DrawingState())


if __name__ == "__main__":
    unittest.main()
