"""CLI entrypoint: Typer app definition and command registration"""

import typer

from slidemark.cli.commands import (
    describe_cmd,
    main_callback,
    map_cmd,
    parse_cmd,
    samples_cmd,
    show_cmd,
    stats_cmd,
)


app = typer.Typer(name="slidemark", no_args_is_help=True, help="Markdown to presentation slide mapping")

app.callback()(main_callback)
app.command(name="parse")(parse_cmd)
app.command(name="show")(show_cmd)
app.command(name="map")(map_cmd)
app.command(name="stats")(stats_cmd)
app.command(name="samples")(samples_cmd)
app.command(name="describe")(describe_cmd)
