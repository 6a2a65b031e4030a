"""Console entrypoint for the ``sr`` command."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Tuple

from Struct_Replay.config import Config
from Struct_Replay.events.protocol import pack_event_log
from Struct_Replay.script import OPERATIONS, build_session, event_logs, load_script, play_script

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _positive(value: str) -> float:
    speed = float(value)
    if speed <= 0:
        raise argparse.ArgumentTypeError("speed must be positive")
    return speed


def _play(args: argparse.Namespace) -> int:
    script = load_script(args.script)
    delay = Config.delay_for(script.family.value) / args.speed

    surface = None
    recorder = None
    if args.frames:
        from Struct_Replay.render.export import FigureSurface, FrameRecorder

        surface = FigureSurface()
    session = build_session(script, surface, step_delay=delay)
    if surface is not None:
        recorder = FrameRecorder(surface, args.frames)
        session.scheduler.add_listener(recorder)

    def print_step(index: int, rec: Any) -> None:
        print(session.engine.status)

    def after(name: str, op_args: Tuple[Any, ...], started: bool) -> None:
        if not started:
            print(f"{name} {' '.join(map(str, op_args))}: skipped")
        elif OPERATIONS[script.family][name]:
            print(session.engine.status)
        if recorder is not None:
            recorder.capture()

    session.scheduler.add_listener(print_step)
    try:
        asyncio.run(play_script(session, script, after))
    finally:
        if recorder is not None:
            recorder.close()
            surface.close()
    return 0


def _dump(args: argparse.Namespace) -> int:
    script = load_script(args.script)
    count = 0
    with Path(args.output).open("wb") as fh:
        for log in event_logs(script):
            fh.write(pack_event_log(log, script.family.value))
            count += 1
    logger.info("wrote %d event logs to %s", count, args.output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse ``sr`` CLI arguments and dispatch to the command."""

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="JSON or YAML configuration file")
    common.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    parser = argparse.ArgumentParser(prog="sr")
    sub = parser.add_subparsers(dest="command", required=True)

    play_p = sub.add_parser("play", parents=[common], help="Replay a script headless")
    play_p.add_argument("script", help="YAML operation script")
    play_p.add_argument(
        "--frames", help="Write one frame per step to a video file or directory"
    )
    play_p.add_argument(
        "--speed", type=_positive, default=1.0, help="Playback speed multiplier"
    )

    dump_p = sub.add_parser("dump", parents=[common], help="Write the script's event logs as msgpack")
    dump_p.add_argument("script", help="YAML operation script")
    dump_p.add_argument("output", help="Output .msgpack file")

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    if args.config:
        Config.load_from_file(args.config)
    if args.command == "play":
        return _play(args)
    return _dump(args)


if __name__ == "__main__":
    sys.exit(main())
