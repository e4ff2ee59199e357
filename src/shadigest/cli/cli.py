"""CLI entrypoint: Typer app definition and command registration"""

import typer

from shadigest.cli.commands import check_cmd, file_cmd, text_cmd


app = typer.Typer(name="shadigest", no_args_is_help=True, help="Pure-Python SHA-256 digests for files and text")

app.command(name="file")(file_cmd)
app.command(name="text")(text_cmd)
app.command(name="check")(check_cmd)
