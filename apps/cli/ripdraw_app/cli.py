"""CLI entrypoints for rendering, decoding, diagnostics, and benchmarks."""

from __future__ import annotations

import argparse
import json
import sys
import time
from dataclasses import asdict
from pathlib import Path

from ripdraw_core import (
    DiagnosticsExporter,
    PerformanceController,
    PerformanceTargets,
    RenderController,
    build_doctor_payload,
    load_config,
    prepare_source,
    read_source,
)
from ripdraw_core.logging_setup import configure_logging, get_logger, install_crash_hooks
from ripdraw_core.diagnostics import installed_version
from ripdraw_protocol import Decoder, command_to_dict, encode_token
from ripdraw_renderer import list_palette


logger = get_logger("cli")


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _load_source(path: str, prepare: bool = True) -> str:
    raw = sys.stdin.read() if path == "-" else read_source(Path(path))
    return prepare_source(raw) if prepare else raw


def _fail(error: str) -> int:
    _print_json({"success": False, "error": error})
    return 1


def cmd_render(args: argparse.Namespace) -> int:
    cfg = load_config()
    try:
        source = _load_source(args.source, prepare=not args.raw)
    except OSError as exc:
        logger.error("cannot read source %s: %s", args.source, exc)
        return _fail(f"cannot read source: {exc}")

    animate = bool(args.animate)
    if animate:
        install_crash_hooks()
    controller = RenderController(
        width=args.width or cfg.canvas.width,
        height=args.height or cfg.canvas.height,
        animate=animate,
        pixel_delay_ms=cfg.playback.pixel_delay_ms,
        stroke_delay_ms=cfg.playback.stroke_delay_ms,
        fill_limits=cfg.fill.limits(),
    )

    start = time.perf_counter()
    try:
        controller.render(source)
    except ValueError as exc:
        logger.error("cannot render %s: %s", args.source, exc)
        return _fail(str(exc))
    controller.wait()
    elapsed = time.perf_counter() - start

    status = controller.status
    if status.last_error:
        return _fail(status.last_error)

    out = Path(args.out).expanduser().resolve()
    controller.surface.save_png(out)
    _print_json(
        {
            "success": True,
            "output": str(out),
            "width": status.width,
            "height": status.height,
            "commands": status.commands_total,
            "executed": status.commands_executed,
            "dropped": status.dropped_commands,
            "unknown_opcodes": status.unknown_opcodes,
            "duration_s": elapsed,
        }
    )
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    try:
        source = _load_source(args.source, prepare=not args.raw)
    except OSError as exc:
        return _fail(f"cannot read source: {exc}")

    decoder = Decoder()
    commands = decoder.decode(source)
    _print_json(
        {
            "success": True,
            "commands": [command_to_dict(c) for c in commands],
            "stats": asdict(decoder.stats),
        }
    )
    return 0


def cmd_encode(args: argparse.Namespace) -> int:
    try:
        tokens = [encode_token(v, width=args.width) for v in args.values]
    except ValueError as exc:
        return _fail(str(exc))
    _print_json({"success": True, "tokens": tokens, "joined": "".join(tokens)})
    return 0


def cmd_palette(_args: argparse.Namespace) -> int:
    _print_json(list_palette())
    return 0


def cmd_doctor(args: argparse.Namespace) -> int:
    cfg = load_config()
    payload = build_doctor_payload(cfg)

    if args.export:
        exporter = DiagnosticsExporter()
        out_dir = Path(args.out_dir).expanduser().resolve() if args.out_dir else None
        bundle = exporter.bundle(cfg=cfg, doctor_payload=payload, recent_render_events=[], output_dir=out_dir)
        payload["diagnostics_bundle"] = str(bundle)

    _print_json(payload)
    return 0


def cmd_benchmark(args: argparse.Namespace) -> int:
    cfg = load_config()
    try:
        source = _load_source(args.source)
    except OSError as exc:
        return _fail(f"cannot read source: {exc}")

    controller = RenderController(
        width=cfg.canvas.width,
        height=cfg.canvas.height,
        animate=False,
        fill_limits=cfg.fill.limits(),
    )
    perf = PerformanceController(
        PerformanceTargets(
            cpu_percent_max=cfg.performance.cpu_percent_max,
            rss_mb_max=cfg.performance.rss_mb_max,
            commands_per_s_min=cfg.performance.commands_per_s_min,
        )
    )

    renders = 0
    commands = 0
    samples = []
    start = time.perf_counter()
    deadline = start + args.seconds
    while True:
        t0 = time.perf_counter()
        session = controller.render(source)
        dt = max(time.perf_counter() - t0, 1e-9)
        renders += 1
        commands += session.executed
        samples.append(asdict(perf.sample(session.executed / dt)))
        if time.perf_counter() >= deadline:
            break

    elapsed = max(time.perf_counter() - start, 1e-9)
    cpu_max = max((s["cpu_percent"] for s in samples), default=0.0)
    rss_max = max((s["rss_mb"] for s in samples), default=0.0)
    throughput = commands / elapsed

    pass_cpu = cpu_max <= cfg.performance.cpu_percent_max
    pass_mem = rss_max <= cfg.performance.rss_mb_max
    pass_rate = throughput >= cfg.performance.commands_per_s_min

    _print_json(
        {
            "seconds": args.seconds,
            "renders": renders,
            "commands_executed": commands,
            "commands_per_s": throughput,
            "budget": {
                "max_observed": {"cpu_percent": cpu_max, "rss_mb": rss_max},
                "pass": bool(pass_cpu and pass_mem and pass_rate),
                "checks": {"cpu": pass_cpu, "memory": pass_mem, "throughput": pass_rate},
            },
        }
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ripdraw", description="RIPscrip vector stream renderer and tools")
    parser.add_argument("--version", action="version", version=f"%(prog)s {installed_version()}")
    sub = parser.add_subparsers(dest="command")

    render_cmd = sub.add_parser("render", help="Decode and play a command stream, then save a PNG")
    render_cmd.add_argument("source", help="Path to a .rip file, or - for stdin")
    render_cmd.add_argument("--out", required=True, help="Output PNG path")
    render_cmd.add_argument("--width", type=int, default=None)
    render_cmd.add_argument("--height", type=int, default=None)
    render_cmd.add_argument("--animate", action="store_true", help="Play with per-command pacing")
    render_cmd.add_argument("--raw", action="store_true", help="Skip code fence stripping and reset prefix")
    render_cmd.set_defaults(func=cmd_render)

    decode_cmd = sub.add_parser("decode", help="Print decoded commands as JSON")
    decode_cmd.add_argument("source", help="Path to a .rip file, or - for stdin")
    decode_cmd.add_argument("--raw", action="store_true", help="Skip code fence stripping and reset prefix")
    decode_cmd.set_defaults(func=cmd_decode)

    encode_cmd = sub.add_parser("encode", help="Encode integers as base-36 tokens")
    encode_cmd.add_argument("values", nargs="+", type=int)
    encode_cmd.add_argument("--width", type=int, default=2)
    encode_cmd.set_defaults(func=cmd_encode)

    palette_cmd = sub.add_parser("palette", help="Print the EGA palette")
    palette_cmd.set_defaults(func=cmd_palette)

    doctor_cmd = sub.add_parser("doctor", help="Print diagnostics")
    doctor_cmd.add_argument("--export", action="store_true", help="Export offline diagnostics bundle")
    doctor_cmd.add_argument("--out-dir", default=None, help="Optional output directory for diagnostics bundle")
    doctor_cmd.set_defaults(func=cmd_doctor)

    bench_cmd = sub.add_parser("benchmark", help="Render a stream repeatedly and check the resource budget")
    bench_cmd.add_argument("source", help="Path to a .rip file, or - for stdin")
    bench_cmd.add_argument("--seconds", type=int, default=10)
    bench_cmd.set_defaults(func=cmd_benchmark)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging(console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        parser.print_help()
        return 2
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
