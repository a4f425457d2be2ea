"""Tests for command-line parsing and the headless entry point."""

import socket

import hook_dump.cli
import hook_dump.server


def test_parser_defaults():
    args = hook_dump.cli.build_parser().parse_args([])
    assert args.host == "127.0.0.1"
    assert args.port == 53821
    assert args.data_dir is None
    assert args.session == "hook-dump"
    assert args.theme is None
    assert args.headless is False


def test_parser_overrides():
    args = hook_dump.cli.build_parser().parse_args(
        ["--host", "0.0.0.0", "--port", "0", "--data-dir", "/tmp/x", "--theme", "nord", "--headless"]
    )
    assert (args.host, args.port, args.data_dir, args.theme, args.headless) == (
        "0.0.0.0",
        0,
        "/tmp/x",
        "nord",
        True,
    )


def test_main_returns_1_when_port_busy(tmp_path):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        sock.listen(1)
        busy = sock.getsockname()[1]
        rc = hook_dump.cli.main(
            ["--headless", "--port", str(busy), "--data-dir", str(tmp_path / "d")]
        )
    assert rc == 1


def test_main_headless_runs_until_stopped(tmp_path, monkeypatch, capsys):
    calls = []
    monkeypatch.setattr(hook_dump.cli, "_run_headless", lambda: calls.append("ran"))
    rc = hook_dump.cli.main(["--headless", "--port", "0", "--data-dir", str(tmp_path / "d")])
    assert rc == 0
    assert calls == ["ran"]
    out = capsys.readouterr().out
    assert "Endpoint: http://127.0.0.1:" in out
    assert str(tmp_path / "d" / "data.json") in out
