# tests/test_cli.py
import json

import main


def test_cli_amounts_and_dates(capsys):
    rc = main.main(["--amounts=-1000,1100", "--dates", "2024-01-01,2024-12-31"])
    out = capsys.readouterr().out
    assert rc == main.EXIT_OK
    assert "XIRR: 10.000000%" in out


def test_cli_json_output(capsys):
    rc = main.main(["--amounts=-1000,1100", "--dates", "2024-01-01,2024-12-31", "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert rc == 0
    assert abs(payload["rate"] - 0.1) < 1e-9
    assert payload["state"] == "converged"
    assert payload["flows"] == 2


def test_cli_no_solution(capsys):
    rc = main.main(["--amounts=100,100", "--dates", "2024-01-01,2024-12-31", "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert rc == main.EXIT_NO_SOLUTION
    assert payload["rate"] is None
    assert payload["state"] == "failed"


def test_cli_mismatched_arrays(capsys):
    rc = main.main(["--amounts=-1000,1100,5", "--dates", "2024-01-01,2024-12-31"])
    assert rc == main.EXIT_BAD_INPUT
    assert "Invalid input" in capsys.readouterr().err


def test_cli_bad_date(capsys):
    rc = main.main(["--amounts=-1000,1100", "--dates", "2024-01-01,someday"])
    assert rc == main.EXIT_BAD_INPUT


def test_cli_config_file(tmp_path, capsys):
    p = tmp_path / "flows.json"
    p.write_text(json.dumps({"amounts": [-1000, 1210], "day_offsets": [0, 730], "guess": 0.3}), encoding="utf-8")
    rc = main.main(["--config", str(p), "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert rc == 0
    assert abs(payload["rate"] - 0.1) < 1e-9
    assert payload["initial_guess"] == 0.3


def test_cli_guess_override(tmp_path, capsys):
    p = tmp_path / "flows.json"
    p.write_text(json.dumps({"amounts": [-1000, 1210], "day_offsets": [0, 730]}), encoding="utf-8")
    main.main(["--config", str(p), "--guess", "0.07", "--json"])
    assert json.loads(capsys.readouterr().out)["initial_guess"] == 0.07


def test_cli_missing_config(tmp_path):
    assert main.main(["--config", str(tmp_path / "missing.json")]) == main.EXIT_BAD_INPUT


def test_cli_bad_precision(capsys):
    rc = main.main(["--amounts=-1000,1100", "--dates", "2024-01-01,2024-12-31", "--precision", "5"])
    assert rc == main.EXIT_BAD_INPUT


def test_cli_sample_run(capsys):
    rc = main.main([])
    out = capsys.readouterr().out
    assert rc == 0
    assert out.startswith("XIRR: ")
