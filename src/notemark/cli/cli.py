"""CLI entrypoint: Typer app definition and command registration"""

import typer

from notemark.cli.commands import config_cmd, parse_cmd, tasks_cmd, toggle_cmd


app = typer.Typer(name="notemark", no_args_is_help=True, help="Parse note Markdown and toggle task items")

app.command(name="parse")(parse_cmd)
app.command(name="tasks")(tasks_cmd)
app.command(name="toggle")(toggle_cmd)
app.command(name="config")(config_cmd)
