import importlib
import json
import os
import sys

import pytest

from maze_test_utils import TINY_ROWS, make_record, write_record

# Import run.py as a module and exercise parse_args + main with a patched
# start_server so we do not actually start networking.


@pytest.fixture()
def run_module():
    # Ensure a clean import each time (run.py reads VERSION once)
    if "run" in sys.modules:
        del sys.modules["run"]
    return importlib.import_module("run")


@pytest.fixture()
def server_calls(monkeypatch):
    calls = {}

    def fake_start_server(host, port, debug):  # signature match
        calls["called"] = True
        calls["host"] = host
        calls["port"] = port
        calls["debug"] = debug

    import labyrinth.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)
    return calls


def test_version_flag_outputs_version(run_module, capsys):
    ver = run_module.__version__
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    captured = capsys.readouterr().out
    assert ver in captured
    assert "Labyrinth Maze Server" in captured


def test_default_command_is_server(run_module):
    ns = run_module.parse_args([])
    assert ns.command == "server"


def test_server_main_invokes_start_server(monkeypatch, run_module, server_calls):
    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setenv("HOST", "127.0.0.1")
    exit_code = run_module.main(["server"])
    assert exit_code == 0
    assert server_calls == {"called": True, "host": "127.0.0.1", "port": 5555, "debug": False}


def test_server_flags_override_env(monkeypatch, run_module, server_calls, tmp_path):
    monkeypatch.setenv("PORT", "5555")
    # register for restore, then clear
    monkeypatch.setenv("LABYRINTH_MAZE_DIR", "unset")
    monkeypatch.delenv("LABYRINTH_MAZE_DIR")
    run_module.main(["server", "--port", "6123", "--host", "localhost", "--debug", "--maze-dir", str(tmp_path)])
    assert server_calls["port"] == 6123
    assert server_calls["host"] == "localhost"
    assert server_calls["debug"] is True
    assert os.environ["LABYRINTH_MAZE_DIR"] == str(tmp_path)


def test_env_file_argument(monkeypatch, tmp_path, run_module, server_calls):
    env_file = tmp_path / ".env"
    env_file.write_text("LABYRINTH_TEST_PORT_HINT=1\n")
    monkeypatch.setenv("LABYRINTH_TEST_PORT_HINT", "unset")
    monkeypatch.delenv("LABYRINTH_TEST_PORT_HINT")
    run_module.main(["--env-file", str(env_file), "server"])
    assert os.environ.get("LABYRINTH_TEST_PORT_HINT") == "1"
    assert server_calls.get("called") is True


def test_validate_command_exit_codes(run_module, tmp_path, capsys):
    write_record(tmp_path, "tiny.json", make_record(TINY_ROWS))
    assert run_module.main(["validate", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "tiny.json" in out and "1 valid, 0 invalid" in out

    bad = make_record(TINY_ROWS)
    bad["layout"][4][4] = " "
    write_record(tmp_path, "bad.json", bad)
    assert run_module.main(["validate", str(tmp_path)]) == 1
    out = capsys.readouterr().out
    assert "Bottom boundary is not all walls (#)" in out
    assert "1 valid, 1 invalid" in out


def test_validate_command_solvability_flag(run_module, tmp_path):
    write_record(tmp_path, "walled.json", make_record(["#####", "#   #", "#####", "#  E#", "#####"]))
    assert run_module.main(["validate", str(tmp_path)]) == 0
    assert run_module.main(["validate", str(tmp_path), "--check-solvable"]) == 1


def test_validate_command_missing_directory(run_module, tmp_path, capsys):
    assert run_module.main(["validate", str(tmp_path / "nope")]) == 1
    assert "[ERROR]" in capsys.readouterr().out


def test_validate_packaged_mazes(run_module, monkeypatch):
    monkeypatch.delenv("LABYRINTH_MAZE_DIR", raising=False)
    assert run_module.main(["validate", "--check-solvable", "--generate-procedural"]) == 0


def test_generate_command_writes_file(run_module, tmp_path):
    out = tmp_path / "gen.json"
    code = run_module.main(["generate", "--width", "13", "--height", "9", "--seed", "8", "--name", "CLI", "--output", str(out)])
    assert code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert (data["width"], data["height"], data["name"]) == (13, 9, "CLI")
    assert data["exit"] == {"x": 11, "y": 7}
    assert run_module.main(["check", str(out)]) == 0


def test_generate_command_stdout_and_bad_size(run_module, capsys):
    assert run_module.main(["generate", "--width", "5", "--height", "5", "--seed", "1"]) == 0
    assert '"width": 5' in capsys.readouterr().out
    assert run_module.main(["generate", "--width", "3", "--height", "3"]) == 1


def test_fill_command(run_module, tmp_path):
    data = make_record(TINY_ROWS)
    data.update(width=15, height=15, exit={"x": 13, "y": 13}, layout="PROCEDURAL")
    path = write_record(tmp_path, "proc.json", data)
    assert run_module.main(["check", str(path)]) == 1
    assert run_module.main(["fill", str(path), "--seed", "2"]) == 0
    assert json.loads(path.read_text(encoding="utf-8"))["layout"] != "PROCEDURAL"
    assert run_module.main(["check", str(path)]) == 0
    assert run_module.main(["fill", str(tmp_path / "missing.json")]) == 1


def test_generate_command_render(run_module, capsys):
    assert run_module.main(["generate", "--width", "5", "--height", "5", "--seed", "1", "--render"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[:2] == ["#####", "#   #"]
    assert lines[3].endswith("E#")


def test_check_command_empty_positions(run_module, tmp_path, capsys):
    rec = make_record(TINY_ROWS)
    rec["exit"] = {}
    path = write_record(tmp_path, "noexit.json", rec)
    assert run_module.main(["check", str(path)]) == 1
    assert "Missing required exit property: x" in capsys.readouterr().out
