"""
fusioncache CLI
Read, write and inspect a two-tier cache from the command line.
"""

import asyncio
import json
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from fusioncache.config import LOG_LEVELS, settings
from fusioncache.errors import FusionCacheError
from fusioncache.factory import create_fusion_cache
from fusioncache.fusion import FusionCache


console = Console()


async def _run(url: Optional[str], operation):
    cache: FusionCache[str, str] = create_fusion_cache(url)
    try:
        return await operation(cache)
    finally:
        await cache.close()


def _execute(ctx: click.Context, operation):
    try:
        return asyncio.run(_run(ctx.obj["url"], operation))
    except FusionCacheError as e:
        console.print(f"❌ [red]Error: {e}[/red]")
        sys.exit(1)


@click.group()
@click.option(
    "--url",
    "-u",
    envvar="FUSIONCACHE_REDIS_URL",
    default=None,
    help="Redis URL for the remote tier",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (default from settings)",
)
@click.pass_context
def cli(ctx, url: Optional[str], log_level: Optional[str]):
    """fusioncache - in-process cache in front of Redis."""
    logging.basicConfig(
        level=getattr(logging, (log_level or settings.log_level).upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["url"] = url


@cli.command(name="get")
@click.argument("key")
@click.option("--fallback", "-f", default=None, help="Value to store and return on a full miss")
@click.pass_context
def get_value(ctx, key: str, fallback: Optional[str]):
    """Read KEY through the local and remote tiers."""
    generators = [lambda _key: fallback] if fallback is not None else []
    value = _execute(ctx, lambda cache: cache.get(key, *generators))

    if value is None:
        console.print(f"⚠️ [yellow]{key}: not found[/yellow]")
        sys.exit(1)
    console.print(value, markup=False, highlight=False)


@cli.command(name="set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def set_value(ctx, key: str, value: str):
    """Write VALUE for KEY to both tiers."""
    _execute(ctx, lambda cache: cache.set(key, value))
    console.print(f"✅ [green]Stored {key}[/green]")


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def health(ctx, as_json: bool):
    """Check both cache tiers."""
    status = _execute(ctx, lambda cache: cache.health_check())

    if as_json:
        console.print(json.dumps(status, indent=2, default=str))
        return

    table = Table(title="Cache Tiers")
    table.add_column("Tier", style="cyan")
    table.add_column("Backend")
    table.add_column("Status")
    table.add_column("Details", style="dim")

    for tier, info in status.items():
        connected = info.get("connected", False)
        details = {k: v for k, v in info.items() if k not in ("backend", "connected")}
        table.add_row(
            tier,
            str(info.get("backend", "-")),
            "[green]up[/green]" if connected else "[red]down[/red]",
            ", ".join(f"{k}={v}" for k, v in details.items()) or "-",
        )

    console.print(table)


def main():
    """CLI entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
