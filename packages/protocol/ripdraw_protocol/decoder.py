"""Single-pass decoder from protocol text to an ordered command list."""

from __future__ import annotations

import logging
from dataclasses import replace

from .models import Command, DecodeStats, DrawingState
from .opcodes import COMMAND_INTRODUCERS, OpcodeResult, get_opcode


COMMENT_PREFIXES = ("#", "//")

logger = logging.getLogger("ripdraw.protocol")


def apply_result(state: DrawingState, result: OpcodeResult) -> None:
    if result.reset_state:
        state.reset()
    for name, value in result.state_delta.items():
        setattr(state, name, value)


class Decoder:
    """Decodes protocol text against one exclusively owned drawing state."""

    def __init__(self, state: DrawingState | None = None) -> None:
        self.state = state if state is not None else DrawingState()
        self.stats = DecodeStats()

    def decode(self, text: str) -> list[Command]:
        commands: list[Command] = []
        for line_no, raw in enumerate(text.split("\n"), start=1):
            self.stats.lines += 1
            line = raw.strip()
            if not line or line.startswith(COMMENT_PREFIXES):
                self.stats.skipped_lines += 1
                continue
            commands.extend(self.decode_line(line, line_no=line_no))
        return commands

    def decode_line(self, line: str, line_no: int = 0) -> list[Command]:
        commands: list[Command] = []
        i = 0
        n = len(line)
        while i < n:
            if line[i] not in COMMAND_INTRODUCERS:
                i += 1
                continue
            i += 1
            if i >= n:
                break
            opcode = line[i]
            i += 1

            spec = get_opcode(opcode)
            if spec is None:
                self.stats.unknown_opcodes += 1
                logger.debug("unknown opcode %r at line %d col %d", opcode, line_no, i - 1)
                continue

            params = line[i:]
            if len(params) < spec.required:
                self.stats.dropped += 1
                logger.debug(
                    "dropped %s at line %d: needs %d parameter chars, got %d",
                    spec.name,
                    line_no,
                    spec.required,
                    len(params),
                )
                continue

            result = spec.handler(params, replace(self.state))
            apply_result(self.state, result)
            commands.append(result.command)
            i += result.consumed

            kind = result.command.kind.value
            self.stats.commands += 1
            self.stats.command_counts[kind] = self.stats.command_counts.get(kind, 0) + 1
        return commands


def decode(text: str, state: DrawingState | None = None) -> list[Command]:
    """Decode ``text`` with a fresh drawing state unless one is passed in."""
    return Decoder(state).decode(text)
