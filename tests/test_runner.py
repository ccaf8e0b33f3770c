"""CLI smoke tests."""
import pytest

from hedge_gym.simulation.runner import build_parser, config_from_args, run


def test_parser_maps_to_config():
    parsed = build_parser().parse_args([
        "--volatility", "30", "--days", "100", "--hedge", "--hedge-ratio", "0.5",
        "--hedge-cost", "3", "--hedge-effectiveness", "0.9", "--rebalance-days", "5",
        "--seed", "7",
    ])
    cfg = config_from_args(parsed)
    assert cfg.market_volatility_pct == 30.0
    assert cfg.total_days == 100
    assert cfg.hedge_enabled is True
    assert cfg.hedge_ratio == 0.5
    assert cfg.hedge_cost_annual_pct == 3.0
    assert cfg.hedge_effectiveness == 0.9
    assert cfg.rebalancing_frequency_days == 5
    assert cfg.seed == 7
    assert cfg.tick_interval_ms == 0


def test_single_run(capsys):
    summary = run(["--days", "60", "--seed", "1"])
    out = capsys.readouterr().out
    assert "PORTFOLIO SIMULATION" in out
    assert summary["final_value"] > 0
    assert summary["hedge_pnl"] == 0.0


def test_hedged_run_with_exports(tmp_path, capsys):
    csv_path = tmp_path / "history.csv"
    png_path = tmp_path / "run.png"
    run(["--days", "60", "--seed", "2", "--hedge",
         "--csv", str(csv_path), "--plot", str(png_path)])
    out = capsys.readouterr().out
    assert "Hedge P&L" in out
    assert csv_path.exists()
    assert png_path.exists()


def test_batch_mode(tmp_path, capsys):
    csv_path = tmp_path / "batch.csv"
    stats = run(["--days", "50", "--runs", "5", "--seed", "3", "--hedge",
                 "--csv", str(csv_path)])
    out = capsys.readouterr().out
    assert "MONTE CARLO BATCH" in out
    assert stats["n_runs"] == 5
    assert csv_path.exists()


def test_batch_csv_creates_parent_dir(tmp_path, capsys):
    csv_path = tmp_path / "nested" / "out" / "batch.csv"
    run(["--days", "50", "--runs", "3", "--seed", "4", "--csv", str(csv_path)])
    assert csv_path.exists()


def test_plot_rejected_in_batch_mode(tmp_path):
    with pytest.raises(SystemExit):
        run(["--days", "50", "--runs", "3", "--plot", str(tmp_path / "x.png")])
    assert not (tmp_path / "x.png").exists()


def test_invalid_config_exits():
    with pytest.raises(SystemExit):
        run(["--days", "10"])
