import numpy as np
import pytest

from rank_aggregation_fdr.cli import main
from rank_aggregation_fdr.config import RRAConfig, save_config
from rank_aggregation_fdr.data.loader import OUTPUT_COLUMNS, read_group_table


def test_cli_writes_results(ab_input_file, tmp_path, capsys):
    output = tmp_path / "result.txt"

    assert main(["-i", str(ab_input_file), "-o", str(output), "-p", "0.25"]) == 0

    lines = output.read_text().splitlines()
    assert lines[0] == "\t".join(OUTPUT_COLUMNS)
    assert [line.split("\t")[0] for line in lines[1:]] == ["A", "C", "D", "B"]

    out = capsys.readouterr().out
    assert "reading input file...done." in out
    assert "8 items" in out
    assert "finished." in out


def test_cli_quiet(ab_input_file, tmp_path, capsys):
    assert main(["-i", str(ab_input_file), "-o", str(tmp_path / "r.txt"), "--quiet"]) == 0
    assert capsys.readouterr().out == ""


def test_cli_config_and_overrides(ab_input_file, tmp_path):
    config_path = tmp_path / "rra.yaml"
    save_config(RRAConfig(rand_pass_num=10), config_path)
    output = tmp_path / "r.txt"

    code = main(["-i", str(ab_input_file), "-o", str(output), "--config", str(config_path),
                 "--seed", "7", "--n-jobs", "2", "--quiet"])

    assert code == 0
    assert len(read_group_table(output)) == 4


def test_cli_plots(ab_input_file, tmp_path):
    plot_dir = tmp_path / "plots"
    code = main(["-i", str(ab_input_file), "-o", str(tmp_path / "r.txt"),
                 "--plot-dir", str(plot_dir), "--quiet"])
    assert code == 0
    assert (plot_dir / "lo_value_distribution.png").exists()
    assert (plot_dir / "fdr_curve.png").exists()


@pytest.mark.parametrize("argv", [
    ["-i", "in.txt"],
    ["-o", "out.txt"],
    ["-i", "in.txt", "-o", "out.txt", "-p", "1.5"],
    ["-i", "in.txt", "-o", "out.txt", "-p", "-0.1"],
    ["-i", "in.txt", "-o", "out.txt", "--n-jobs", "0"],
])
def test_cli_usage_errors(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2


def test_cli_bad_input(tmp_path, capsys):
    bad = tmp_path / "bad.txt"
    bad.write_text("item group list value\na G L notanumber\n")
    output = tmp_path / "r.txt"

    assert main(["-i", str(bad), "-o", str(output)]) == 1
    assert not output.exists()
    assert "error:" in capsys.readouterr().err


def test_cli_missing_input(tmp_path):
    assert main(["-i", str(tmp_path / "nope.txt"), "-o", str(tmp_path / "r.txt"), "--quiet"]) == 1


@pytest.mark.parametrize("text", ["max_percentil: 0.1\n", "max_percentile: [0.1\n"])
def test_cli_bad_config(ab_input_file, tmp_path, capsys, text):
    config_path = tmp_path / "rra.yaml"
    config_path.write_text(text)
    output = tmp_path / "r.txt"

    code = main(["-i", str(ab_input_file), "-o", str(output), "--config", str(config_path)])

    assert code == 1
    assert not output.exists()
    assert "error:" in capsys.readouterr().err


def test_cli_beta_cdf_failure(ab_input_file, tmp_path, capsys, monkeypatch):
    monkeypatch.setattr(
        "rank_aggregation_fdr.methods.lo_value.betainc",
        lambda a, b, x: np.full(np.broadcast(a, b, x).shape, np.nan)
    )
    output = tmp_path / "r.txt"

    assert main(["-i", str(ab_input_file), "-o", str(output)]) == 1
    assert not output.exists()
    assert "Beta CDF" in capsys.readouterr().err
