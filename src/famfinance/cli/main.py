#!/usr/bin/env python3
"""
Main CLI Entry Point for famfinance

Provides the command-line interface over a local family data directory.
"""

import logging
import os

import click

from ..core.config import get_config, reload_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    famfinance - Family Finance Aggregation & Budget Engine

    Income statements, balance sheets, monthly budgets and reports for the
    families stored under the configured data directory.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["FAMFINANCE_ENV"] = config_env
        config = reload_config()
    else:
        config = get_config()

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("famfinance").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}")
        click.echo(f"Data directory: {config.data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from famfinance import __author__, __version__

    click.echo(f"famfinance v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Currency: {config_obj.currency}")
    click.echo(f"  Top Outflows Limit: {config_obj.reports.top_outflows_limit}")
    click.echo(f"  Max Outflows: {config_obj.reports.max_outflows}")
    click.echo(f"  Net Worth Months: {config_obj.reports.net_worth_months}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


from .budget import budget  # noqa: E402
from .reports import report  # noqa: E402

main.add_command(budget)
main.add_command(report)


if __name__ == "__main__":
    main()
