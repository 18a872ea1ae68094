"""CLI entrypoint: Typer app definition and command registration"""

import typer

from sitemanifest.cli.commands import build_cmd, check_cmd, emit_cmd


app = typer.Typer(name="sitemanifest", no_args_is_help=True, help="Markdown site content manifest builder")

app.command(name="build")(build_cmd)
app.command(name="check")(check_cmd)
app.command(name="emit")(emit_cmd)
