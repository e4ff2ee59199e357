"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from shadigest.config import Settings, load_config
from shadigest.core.digest import digest, digest_file, normalize_hex
from shadigest.core.errors import DigestIOError


def _fail(msg: str, cause: Exception = None, code: int = 1) -> None:
    """Print a user-friendly error to stderr and exit with code."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(code)


class _EchoHandler(logging.Handler):
    """Emit records through typer.echo so they go to whatever stderr is current."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            typer.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def _configure_logging(level: str) -> None:
    """Set the shadigest logger level, attaching the echo handler once per process."""
    logger = logging.getLogger("shadigest")
    logger.setLevel(level)
    if not any(isinstance(h, _EchoHandler) for h in logger.handlers):
        handler = _EchoHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    _configure_logging(settings.log_level)
    return settings


def file_cmd(
    paths: Annotated[list[Path], typer.Argument(help="Files to hash")],
    chunk_size: Annotated[Optional[int], typer.Option("--chunk-size", help="Bytes read per chunk")] = None,
    ):
    """Print '<digest>  <path>' for each file; exit 1 if any file cannot be read."""
    settings = _settings(overrides={"chunk_size": chunk_size})
    failed = 0
    for path in paths:
        try:
            result = digest_file(path, settings.chunk_size)
        except DigestIOError as e:
            typer.echo(f"Error: {e}", err=True)
            failed += 1
            continue
        typer.echo(f"{result}  {path}")
    if failed:
        raise typer.Exit(1)


def text_cmd(
    text: Annotated[str, typer.Argument(help="Text to hash")],
    encoding: Annotated[Optional[str], typer.Option("--encoding", help="Codec used to encode TEXT")] = None,
    ):
    """Print the digest of TEXT."""
    settings = _settings(overrides={"encoding": encoding})
    try:
        typer.echo(digest(text, settings.encoding))
    except UnicodeEncodeError as e:
        _fail(f"Cannot encode text as {settings.encoding}", e)


def check_cmd(
    path: Annotated[Path, typer.Argument(help="File to verify")],
    expected: Annotated[str, typer.Argument(help="Expected SHA-256 hex digest")],
    chunk_size: Annotated[Optional[int], typer.Option("--chunk-size", help="Bytes read per chunk")] = None,
    ):
    """Compare a file's digest with EXPECTED; exit 0 on match, 1 on mismatch."""
    settings = _settings(overrides={"chunk_size": chunk_size})
    try:
        expected = normalize_hex(expected)
    except ValueError as e:
        _fail(str(e), code=2)
    try:
        actual = digest_file(path, settings.chunk_size)
    except DigestIOError as e:
        _fail(str(e))
    if actual != expected:
        typer.echo(f"{path}: FAILED")
        raise typer.Exit(1)
    typer.echo(f"{path}: OK")
