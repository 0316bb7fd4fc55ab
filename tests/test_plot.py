#!/usr/bin/env python3
import os
import uuid

from monty_hall.common.aggregate import AggregateResult
from monty_hall.plot_win_rates import plot_win_rates
from monty_hall.simulate import main, make_parser


def test_plot():
    result = AggregateResult(stick_win_rate=0.34, switch_win_rate=0.66, n_trials=100)
    name = f"/tmp/{uuid.uuid4()}.png"
    try:
        plot_win_rates(result, name)
        assert os.path.getsize(name) > 0
    finally:
        if os.path.exists(name):
            os.remove(name)


def test_main(tmp_path, capsys):
    args = make_parser().parse_args(
        ["--n-trials", "5000", "--batch-size", "1000", "--output-dir", str(tmp_path)]
    )
    main(args)

    (run_dir,) = tmp_path.iterdir()
    assert (run_dir / "args.yaml").exists()
    assert (run_dir / "win_rates.png").exists()
    out = capsys.readouterr().out
    assert "Switch" in out
    assert "Host opens" in out
