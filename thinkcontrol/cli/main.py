"""
Main CLI entry point for ThinkControl

This module provides the command-line interface and the console status
printer that stands in for a rendering front end.
"""

import argparse
import json
import logging
import signal
import sys
import time
from threading import Event
from typing import List

from ..core.config import LoopConfig, TICK_INTERVAL_MS
from ..core.data_types import HitEvent, Snapshot
from ..core.errors import InvalidArgument
from ..control.loop import ControlLoop
from ..utils.timer import ManualClock, ManualTimer


class ConsoleStatus:
    """
    Print loop status lines at most every ``interval`` seconds

    Hit events are printed as they arrive. This is formatting only; nothing
    here feeds back into the loop.
    """

    def __init__(self, interval: float = 1.0, clock=time.monotonic):
        self.interval = interval
        self.clock = clock
        self.last_status_time = float("-inf")

    @staticmethod
    def format_status(snapshot: Snapshot) -> str:
        return (f"Pred: {snapshot.current_label.display_name:>10} | "
                f"Conf: {snapshot.confidence:4.0%} | "
                f"L/R: {snapshot.prob_left:4.0%}/{snapshot.prob_right:4.0%} | "
                f"Cursor: {snapshot.cursor_position:5.1f} ({snapshot.cursor_zone.value}) | "
                f"Hits L/R: {snapshot.hits_left}/{snapshot.hits_right} | "
                f"Latency: {snapshot.latency_ms:3.0f} ms")

    def __call__(self, snapshot: Snapshot, events: List[HitEvent]):
        for event in events:
            print(f"*** {event.side.value} ***")

        now = self.clock()
        if now - self.last_status_time >= self.interval:
            print(self.format_status(snapshot))
            self.last_status_time = now


def run_realtime(loop: ControlLoop, duration: float, status_interval: float,
                 force_every: float) -> None:
    """
    Run the loop on its real-time timer until duration elapses or a signal arrives

    Args:
        loop: Control loop to drive
        duration: Seconds to run (0 = until interrupted)
        status_interval: Seconds between status lines
        force_every: Seconds between forced classifications (0 = never)
    """
    loop.subscribe(ConsoleStatus(status_interval))

    # Graceful shutdown handler
    shutdown_event = Event()
    def signal_handler(signum, frame):
        logging.info("Shutdown signal received")
        shutdown_event.set()

    previous_handlers = {sig: signal.signal(sig, signal_handler)
                         for sig in (signal.SIGINT, signal.SIGTERM)}

    start_time = time.monotonic()
    last_force_time = start_time

    try:
        loop.start()
        logging.info("Simulation running. Press Ctrl+C to stop.")

        while not shutdown_event.is_set():
            now = time.monotonic()
            if duration > 0 and now - start_time >= duration:
                break
            if force_every > 0 and now - last_force_time >= force_every:
                loop.force_classify()
                last_force_time = now
            shutdown_event.wait(0.05)
    finally:
        loop.close()
        for sig, handler in previous_handlers.items():
            signal.signal(sig, handler)
        snapshot = loop.get_snapshot()
        print(f"Final: {snapshot.tick_count} ticks | "
              f"Hits L/R: {snapshot.hits_left}/{snapshot.hits_right} | "
              f"History: {len(snapshot.history)} entries")


def run_offline(config: LoopConfig, seed: int, n_ticks: int) -> Snapshot:
    """
    Replay n_ticks synchronously on virtual time

    The same seed always produces the same final snapshot.
    """
    clock = ManualClock(start=time.time())
    timer = ManualTimer(clock)
    with ControlLoop(config, rng=seed, clock=clock, timer=timer) as loop:
        loop.start()
        for _ in range(n_ticks):
            timer.advance(config.tick_interval_sec)
        loop.stop()
        return loop.get_snapshot()


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        description="ThinkControl - simulated closed-loop BCI cursor decoder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run in real time for 30 seconds
  python -m thinkcontrol --run --duration 30

  # Reproducible run with a forced classification every 2 seconds
  python -m thinkcontrol --run --seed 7 --force-every 2

  # Replay 500 ticks instantly and print the final snapshot as JSON
  python -m thinkcontrol --once 500 --seed 7
        """
    )

    # Mode selection (mutually exclusive)
    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument("--run", action="store_true",
                            help="Run the loop in real time")
    mode_group.add_argument("--once", type=int, metavar="N",
                            help="Run N ticks on virtual time and print the final snapshot")

    # Loop parameters
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducible sessions")
    parser.add_argument("--interval-ms", type=float, default=TICK_INTERVAL_MS,
                        help=f"Tick cadence in ms (default: {TICK_INTERVAL_MS})")
    parser.add_argument("--duration", type=float, default=0.0,
                        help="Seconds to run with --run (default: until Ctrl+C)")
    parser.add_argument("--status-interval", type=float, default=1.0,
                        help="Seconds between status lines (default: 1.0)")
    parser.add_argument("--force-every", type=float, default=0.0,
                        help="Seconds between forced classifications (default: never)")

    # Logging
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose logging")

    return parser


def main(argv=None):
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Setup logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    config = LoopConfig(tick_interval_ms=args.interval_ms)

    try:
        if args.once is not None:
            if args.once < 0:
                raise InvalidArgument(f"Tick count must be >= 0, got {args.once}")
            snapshot = run_offline(config, args.seed, args.once)
            print(json.dumps(snapshot.to_dict(), indent=2))
            return 0

        print("=" * 60)
        print("ThinkControl - Simulated BCI Cursor Control")
        print("=" * 60)

        loop = ControlLoop(config, rng=args.seed)
        run_realtime(loop, args.duration, args.status_interval, args.force_every)
        return 0

    except InvalidArgument as e:
        logging.error(f"Invalid configuration: {e}")
        return 1
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        return 0


if __name__ == "__main__":
    sys.exit(main())
