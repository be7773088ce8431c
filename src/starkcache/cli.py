"""Click CLI for starkcache: warm and query the Pedersen hash cache."""

from __future__ import annotations

import asyncio
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from starkcache.config.hierarchy import load_config_hierarchy
from starkcache.errors.exceptions import StarkCacheError

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, default_level: str = "WARNING") -> None:
    """Configure logging based on verbosity level."""
    level = logging.getLevelName(str(default_level).upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
    )


@click.group()
@click.version_option(package_name="starkcache")
def cli() -> None:
    """starkcache: memoized Pedersen hashing for exchange signing."""


@cli.command()
@click.option("--catalog", "catalog_path", type=click.Path(exists=True), help="Asset catalog YAML.")
@click.option(
    "--hash-function", type=str, default=None, help="Hash function as 'package.module:function'."
)
@click.option("--max-concurrency", type=int, default=None, help="Bound on concurrent hash calls.")
@click.option(
    "--no-collapse", is_flag=True, default=False, help="Disable in-flight request collapsing."
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def warmup(
    catalog_path: str | None,
    hash_function: str | None,
    max_concurrency: int | None,
    no_collapse: bool,
    verbose: int,
) -> None:
    """Precompute order and conditional-transfer hashes for the catalog."""
    from starkcache.core import StarkCache

    try:
        config = load_config_hierarchy(
            catalog_path=catalog_path,
            hash_function=hash_function,
            max_concurrency=max_concurrency,
            collapse_disabled=no_collapse or None,
        )
        _setup_logging(verbose, config["log_level"])
        service = StarkCache.from_config(config)
        report = asyncio.run(service.warm_up())
    except (StarkCacheError, FileNotFoundError, ValueError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    table = Table(title="Warm-up Summary", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Synthetic assets", ", ".join(report.assets) or "-")
    table.add_row("Entries added", str(report.entries_added))
    table.add_row("Primitive calls", str(report.primitive_calls))
    table.add_row("Elapsed", f"{report.elapsed_seconds:.2f}s")

    stats = service.stats()
    if verbose >= 1:
        table.add_row("Collapsed waits", str(stats.collapsed))

    console.print(table)


@cli.command("hash")
@click.argument("left")
@click.argument("right")
@click.option(
    "--hash-function", type=str, default=None, help="Hash function as 'package.module:function'."
)
@click.option("--padded", is_flag=True, default=False, help="Print as 64-char hex, no prefix.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def hash_pair(left: str, right: str, hash_function: str | None, padded: bool, verbose: int) -> None:
    """Hash LEFT and RIGHT (0x-hex or decimal) through the cache."""
    from starkcache.cache.memory import HashCache
    from starkcache.primitive import resolve_primitive
    from starkcache.utils.numbers import parse_operand, to_padded_hex

    try:
        config = load_config_hierarchy(hash_function=hash_function)
        _setup_logging(verbose, config["log_level"])
        cache = HashCache(resolve_primitive(config.get("hash_function")))
        digest = asyncio.run(cache.get_or_compute(parse_operand(left), parse_operand(right)))
    except StarkCacheError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    console.print(to_padded_hex(digest) if padded else hex(digest))


@cli.group()
def catalog() -> None:
    """Asset catalog commands."""


@catalog.command("show")
@click.argument("catalog_yaml", type=click.Path(exists=True))
def catalog_show(catalog_yaml: str) -> None:
    """Validate and display an asset catalog YAML file."""
    from starkcache.config.loader import load_catalog_yaml
    from starkcache.precompute.chains import expected_key_count
    from starkcache.utils.numbers import to_padded_hex

    try:
        cat = load_catalog_yaml(catalog_yaml)
    except (FileNotFoundError, ValueError, StarkCacheError) as e:
        error_console.print(f"[red]Invalid catalog:[/red] {e}")
        sys.exit(1)

    table = Table(title="Asset Catalog", show_header=True)
    table.add_column("Symbol", style="cyan")
    table.add_column("Asset ID")
    table.add_column("Role")

    table.add_row("(collateral)", to_padded_hex(cat.collateral_asset_id), "collateral")
    table.add_row(
        "(fee)", to_padded_hex(cat.conditional_transfer_fee_asset_id), "conditional transfer fee"
    )
    for symbol, asset_id in cat.assets.items():
        role = "synthetic" if symbol in cat.synthetic_assets else "-"
        table.add_row(symbol, to_padded_hex(asset_id), role)

    console.print(table)
    console.print(f"Warm-up computes at most {expected_key_count(cat)} hashes.")


def main() -> None:
    """Entry point for the CLI."""
    cli()
