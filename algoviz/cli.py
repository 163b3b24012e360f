"""Command-line interface: list problems, dump traces, step or autoplay in the terminal."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from .api import dump_trace, list_problems
from .playback_types import PlaybackConfig, PlaybackState
from .render import TextRenderer
from .scheduler import AsyncioScheduler
from .session import VisualizerSession
from . import constants

logger = logging.getLogger(__name__)


def _parse_inputs(parser: argparse.ArgumentParser, items: list[str]) -> dict:
    inputs = {}
    for item in items:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            parser.error(f"--input expects key=JSON, got {item!r}")
        try:
            inputs[key] = json.loads(raw)
        except json.JSONDecodeError as exc:
            parser.error(f"--input {key}: invalid JSON value {raw!r} ({exc})")
    return inputs


def _print_catalog():
    print("═══ Problems ═══")
    for category in list_problems():
        print(f"  {category['title']} [{category['id']}]")
        for problem in category["problems"]:
            print(f"    - {problem['id']}: {problem['title']}")


async def _autoplay(session: VisualizerSession, renderer: TextRenderer):
    engine = session.playback
    finished = asyncio.Event()
    last_cursor = engine.cursor

    def on_change(state: PlaybackState):
        nonlocal last_cursor
        if state.cursor != last_cursor:
            last_cursor = state.cursor
            print(renderer.render(engine.current_entry, session.descriptor, len(state.trace)))
        if not state.playing:
            finished.set()

    print(renderer.render(engine.current_entry, session.descriptor, len(engine.trace)))
    unsubscribe = engine.subscribe(on_change)
    try:
        engine.play()
        if not engine.is_playing:
            finished.set()
        await finished.wait()
    finally:
        unsubscribe()
        engine.pause()


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="algoviz", description="Step-by-step algorithm trace viewer"
    )
    parser.add_argument("problem", nargs="?", default=None,
                        help="Problem id (default: first problem of the catalog)")
    parser.add_argument("--list", action="store_true",
                        help="List categories and problems")
    parser.add_argument("--input", "-i", action="append", default=[], metavar="KEY=JSON",
                        help="Override one input, e.g. -i 'nums=[3,2,4]' (repeatable)")
    parser.add_argument("--json", action="store_true",
                        help="Print the whole trace as JSON")
    parser.add_argument("--step", "-s", type=int, default=None,
                        help="Render the entry at this step")
    parser.add_argument("--play", action="store_true",
                        help="Autoplay the trace in the terminal")
    parser.add_argument("--speed", type=int, default=constants.DEFAULT_SPEED_MS,
                        help=f"Autoplay interval in ms (default: {constants.DEFAULT_SPEED_MS})")
    parser.add_argument("--no-code", action="store_true",
                        help="Do not print the code listing")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    if args.list:
        _print_catalog()
        return
    if args.speed <= 0:
        parser.error("--speed must be positive")

    session = VisualizerSession(AsyncioScheduler(), config=PlaybackConfig(speed_ms=args.speed))
    try:
        if args.problem:
            session.select_problem(args.problem)
    except KeyError as exc:
        parser.error(str(exc.args[0]))

    inputs = _parse_inputs(parser, args.input)
    if inputs:
        session.set_inputs(inputs)

    if args.json:
        print(dump_trace(session.descriptor.id, session.inputs))
        return

    if session.trace.is_empty:
        print(
            f"No trace for '{session.descriptor.id}' with inputs {session.inputs}",
            file=sys.stderr,
        )
        sys.exit(1)

    renderer = TextRenderer(show_code=not args.no_code)

    if args.play:
        asyncio.run(_autoplay(session, renderer))
        return

    if args.step is not None:
        if not 0 <= args.step < len(session.trace):
            parser.error(f"--step must be within 0..{len(session.trace) - 1}")
        for _ in range(args.step):
            session.playback.step_forward()
        print(renderer.render(session.current_entry, session.descriptor, len(session.trace)))
        return

    print(renderer.render(session.trace.final_entry, session.descriptor, len(session.trace)))


if __name__ == "__main__":
    main()
