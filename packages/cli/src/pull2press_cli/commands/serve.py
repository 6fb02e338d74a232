"""serve command — run the HTTP generation proxy."""

from __future__ import annotations

import click

from pull2press_cli.common import console


@click.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.pass_context
def serve_cmd(ctx, host: str, port: int):
    """Serve /generate-content, /generate-content/stream and /find-helpful-links.

    The model credential stays on this server; clients configure
    'provider: proxy' and PULL2PRESS_PROXY_URL to use it.
    """
    import uvicorn

    from pull2press_server.app import create_app

    app = create_app(ctx.obj["config"])
    console.print(f"[cyan]Serving pull2press on http://{host}:{port}[/cyan]")
    uvicorn.run(app, host=host, port=port)
