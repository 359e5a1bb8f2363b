#!/usr/bin/env python3
"""
Headless session driver.

Runs a grid session for a number of ticks and reports the note events it
produced. With --realtime the ticks follow the wall clock at the configured
tick rate; otherwise they run back to back.
"""

import sys
import time
import logging

import numpy as np

from gridnotes.core.cell import Rect
from gridnotes.notes.events import NoteOn
from gridnotes.notes.policy import NotePolicy
from gridnotes.notes.sink import JsonlSink, LoggingSink
from gridnotes.render import render_text
from gridnotes.session.clock import TickClock
from gridnotes.session.config import SessionConfig
from gridnotes.session.controller import Session
from gridnotes.simulations import SimulationKind

logger = logging.getLogger(__name__)


def run_session(session, ticks, realtime=False):
    """Advance ``session`` for ``ticks`` ticks and return summary metrics."""
    notes_on = 0
    notes_off = 0
    alive_counts = []

    def on_tick(tick):
        nonlocal notes_on, notes_off
        result = session.advance(tick)
        alive_counts.append(result.grid.count_alive())
        for event in result.events:
            if isinstance(event, NoteOn):
                notes_on += 1
            else:
                notes_off += 1
        if tick % 20 == 0:
            logger.info(f"Tick {tick}: alive={alive_counts[-1]}, active={result.grid.count_active()}")

    if realtime:
        clock = TickClock(session.config.tick_rate)
        done = 0
        while done < ticks:
            for tick in clock.poll():
                if done >= ticks:
                    break
                on_tick(tick)
                done += 1
            time.sleep(clock.seconds_until_next())
    else:
        for tick in range(ticks):
            on_tick(tick)

    return {
        "ticks": ticks,
        "notes_on": notes_on,
        "notes_off": notes_off,
        "final_alive": alive_counts[-1] if alive_counts else 0,
        "max_alive": max(alive_counts) if alive_counts else 0,
    }


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Run a grid note session without a window")
    parser.add_argument("--ticks", type=int, default=200, help="Number of ticks to run")
    parser.add_argument("--side", type=int, default=32, help="Cells per grid edge")
    parser.add_argument("--simulation", choices=SimulationKind.names(), default="mover",
                        help="Simulation rule")
    parser.add_argument("--policy", choices=NotePolicy.names(), default="min",
                        help="Collision selection policy")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--realtime", action="store_true", help="Pace ticks by the wall clock")
    parser.add_argument("--event-log", default=None, help="Append events as JSON lines to this file")
    parser.add_argument("--show-grid", action="store_true", help="Print the final grid")
    parser.add_argument("--log-level", default="INFO", help="Logging level")

    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        config = SessionConfig(side=args.side)
        with (JsonlSink(args.event_log) if args.event_log else LoggingSink()) as sink:
            session = Session(
                config=config,
                simulation=SimulationKind.from_name(args.simulation),
                note_policy=NotePolicy.from_name(args.policy),
                sink=sink,
                bounds=Rect(0, 0, 640, 640),
                rng=np.random.default_rng(args.seed),
            )

            results = run_session(session, args.ticks, realtime=args.realtime)

        if args.event_log:
            logger.info(f"Event log written to: {args.event_log}")

        if args.show_grid:
            print(render_text(session.grid))

        print(f"\nSession complete: {results['ticks']} ticks, "
              f"{results['notes_on']} note-on, {results['notes_off']} note-off, "
              f"{results['final_alive']} alive at end")

    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception as e:
        logger.error(f"Session failed: {e}")
        sys.exit(1)
