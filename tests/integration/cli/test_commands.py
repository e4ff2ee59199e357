"""Integration tests for the file, text and check commands"""

import logging

from typer.testing import CliRunner

from shadigest.cli.cli import app


HELLO = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
HELLO_WORLD = "b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9"

runner = CliRunner()


def test_file_cmd_prints_digest_and_path(tmp_path):
    """file prints sha256sum-style lines, one per path."""
    a = tmp_path / "a.txt"
    b = tmp_path / "b.txt"
    a.write_bytes(b"hello")
    b.write_bytes(b"hello world")

    result = runner.invoke(app, ["file", str(a), str(b), "--chunk-size", "3"])

    assert result.exit_code == 0, result.output
    assert f"{HELLO}  {a}" in result.output
    assert f"{HELLO_WORLD}  {b}" in result.output


def test_file_cmd_missing_file_exits_nonzero(tmp_path):
    """An unreadable path is reported and the exit code is 1; other files still hash."""
    good = tmp_path / "good.txt"
    good.write_bytes(b"hello")

    result = runner.invoke(app, ["file", str(tmp_path / "missing.txt"), str(good)])

    assert result.exit_code == 1
    assert "missing.txt" in result.output
    assert f"{HELLO}  {good}" in result.output


def test_file_cmd_rejects_bad_chunk_size(tmp_path):
    p = tmp_path / "a.txt"
    p.write_bytes(b"hello")
    result = runner.invoke(app, ["file", str(p), "--chunk-size", "0"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_text_cmd():
    result = runner.invoke(app, ["text", "hello"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == HELLO


def test_text_cmd_unknown_encoding():
    result = runner.invoke(app, ["text", "hello", "--encoding", "no-such-codec"])
    assert result.exit_code == 1
    assert "Unknown encoding" in result.output


def test_check_cmd_ok_and_failed(tmp_path):
    p = tmp_path / "a.txt"
    p.write_bytes(b"hello")

    ok = runner.invoke(app, ["check", str(p), HELLO.upper()])
    assert ok.exit_code == 0, ok.output
    assert "OK" in ok.output

    bad = runner.invoke(app, ["check", str(p), HELLO_WORLD])
    assert bad.exit_code == 1
    assert "FAILED" in bad.output


def test_check_cmd_malformed_digest(tmp_path):
    p = tmp_path / "a.txt"
    p.write_bytes(b"hello")
    result = runner.invoke(app, ["check", str(p), "not-a-digest"])
    assert result.exit_code == 2


def test_check_cmd_missing_file(tmp_path):
    result = runner.invoke(app, ["check", str(tmp_path / "missing.txt"), HELLO])
    assert result.exit_code == 1
    assert "missing.txt" in result.output


def test_file_cmd_reports_unreadable_file_once(tmp_path):
    """At the default log level only the Error line is printed for a missing file."""
    result = runner.invoke(app, ["file", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1
    assert "WARNING" not in result.output
    assert sum("missing.txt" in line for line in result.output.splitlines()) == 1


def test_file_cmd_uses_env_chunk_size_and_log_level(tmp_path, monkeypatch):
    """SHADIGEST_CHUNK_SIZE reaches digest_file; DEBUG logging shows it."""
    monkeypatch.setenv("SHADIGEST_CHUNK_SIZE", "5")
    monkeypatch.setenv("SHADIGEST_LOG_LEVEL", "DEBUG")
    p = tmp_path / "hello.txt"
    p.write_bytes(b"hello world")

    result = runner.invoke(app, ["file", str(p)])

    assert result.exit_code == 0, result.output
    assert f"{HELLO_WORLD}  {p}" in result.output
    assert "chunk_size=5" in result.output


def test_logging_after_cli_run_uses_live_stderr(capsys):
    """Log records emitted after an invocation are not written to the runner's closed stream."""
    runner.invoke(app, ["text", "hello"])
    logging.getLogger("shadigest.util.fs").error("after the run")

    err = capsys.readouterr().err
    assert "after the run" in err
    assert "Logging error" not in err


def test_text_cmd_unencodable_text():
    result = runner.invoke(app, ["text", "café", "--encoding", "ascii"])
    assert result.exit_code == 1
    assert "Cannot encode text as ascii" in result.output
