"""Serve command implementation."""

import click

from ..server import create_server
from .notes import build_report, selection_options


@click.command()
@selection_options
@click.option('--host', default='0.0.0.0', help='Address to listen on')
@click.option('--port', default=8080, type=int, help='Port to listen on')
@click.pass_context
def serve(ctx, host, port, **selection):
    """Generate release notes once and serve them as JSON on /release."""

    logger = ctx.obj['logger']
    report = build_report(ctx, **selection)

    server = create_server(report, host, port, logger)
    click.echo(f"Serving {report.entry_count} notes on http://{host}:{port}/release")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()
