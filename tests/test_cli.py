"""
Tests for the Command Line Interface
====================================
"""

import json

import pytest

from thinkcontrol.cli.main import ConsoleStatus, create_parser, main, run_offline
from thinkcontrol.core.config import LoopConfig
from thinkcontrol.core.data_types import HitEvent, HitSide


def test_parser_requires_mode():
    with pytest.raises(SystemExit):
        create_parser().parse_args([])


def test_parser_defaults():
    args = create_parser().parse_args(["--run"])

    assert args.run
    assert args.interval_ms == 100
    assert args.duration == 0.0
    assert args.seed is None


def test_run_offline_is_reproducible():
    a = run_offline(LoopConfig(), seed=9, n_ticks=150)
    b = run_offline(LoopConfig(), seed=9, n_ticks=150)

    assert a.tick_count == 150
    assert a.cursor_position == b.cursor_position
    assert a.hits_left == b.hits_left
    assert a.hits_right == b.hits_right


def test_once_prints_snapshot_json(capsys):
    assert main(["--once", "50", "--seed", "4"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["tick_count"] == 50
    assert data["run_state"] == "idle"
    assert 0.0 <= data["cursor_position"] <= 100.0
    assert len(data["history"]) <= 10


def test_invalid_interval_exit_code():
    assert main(["--once", "5", "--interval-ms", "-10"]) == 1


def test_short_realtime_run(capsys):
    assert main(["--run", "--duration", "0.3", "--seed", "1", "--status-interval", "0.1",
                 "--force-every", "0.1"]) == 0

    out = capsys.readouterr().out
    assert "Final:" in out


def test_console_status_throttles(capsys):
    now = [0.0]
    status = ConsoleStatus(interval=1.0, clock=lambda: now[0])
    snapshot = run_offline(LoopConfig(), seed=2, n_ticks=3)

    status(snapshot, [])
    now[0] = 0.5
    status(snapshot, [HitEvent(HitSide.RIGHT)])
    now[0] = 1.2
    status(snapshot, [])

    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[1] == "*** HitRight ***"
    assert sum(line.startswith("Pred:") for line in lines) == 2
