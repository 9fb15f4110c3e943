"""HTTP server command."""

import click
import uvicorn

from messledger.api.app import create_app


@click.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to listen on")
@click.pass_context
def serve(ctx, host: str, port: int):
    """Serve the HTTP API on the current database."""
    app = create_app(database=ctx.obj["db"], settings=ctx.obj["settings"])
    click.echo(f"Serving messledger API on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_config=None)


def register_commands(cli):
    """Register the serve command with main CLI."""
    cli.add_command(serve)
