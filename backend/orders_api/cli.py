"""Command line tools for operating the orders store."""

from pathlib import Path

import anyio
import click

from orders_api.config import Settings, settings as default_settings
from orders_api.services.exceptions import ServiceError
from orders_api.services.external.github import GitHubContentsService
from orders_api.services.orders.order_service import OrderService


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Store orders API tools."""
    ctx.ensure_object(dict)
    ctx.obj.setdefault("settings", default_settings)


@cli.command("check-config")
@click.pass_context
def check_config(ctx: click.Context) -> None:
    """Report whether the document store is configured."""
    settings: Settings = ctx.obj["settings"]
    missing = settings.missing_store_settings
    if missing:
        click.secho(f"Missing: {', '.join(missing)}", fg="red", err=True)
        ctx.exit(1)

    click.echo(f"Repository: {settings.github_owner}/{settings.github_repo}")
    click.echo(f"Branch:     {settings.github_branch}")
    click.echo(f"Document:   {settings.store_data_path}")


@cli.command("submit")
@click.argument("order_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def submit(ctx: click.Context, order_file: Path) -> None:
    """Record the order in ORDER_FILE (JSON) as if it came from the storefront."""
    settings: Settings = ctx.obj["settings"]
    store_factory = ctx.obj.get("store_factory", GitHubContentsService)

    try:
        config = settings.store_config()
        service = OrderService(store_factory(config))
        order_id = anyio.run(service.submit, order_file.read_bytes())
    except ServiceError as e:
        raise click.ClickException(str(e)) from e

    click.secho(f"Saved order {order_id}", fg="green")


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to listen on")
@click.option("--reload", is_flag=True, help="Restart on code changes (development)")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("orders_api.main:app", host=host, port=port, reload=reload)


def main() -> None:
    cli(obj={})
