"""CLI entrypoint: Typer app definition and command registration"""

import typer

from blogcorpus.cli.commands import build_cmd, list_cmd


app = typer.Typer(name="blogcorpus", no_args_is_help=True, help="Assemble a directory of posts into a blog corpus and feeds")

app.command(name="build")(build_cmd)
app.command(name="list")(list_cmd)
