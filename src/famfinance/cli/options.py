#!/usr/bin/env python3
"""
Shared CLI helpers: family data access, date options and output writing.
"""

from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path
from typing import Any

import click
import pandas as pd

from ..analysis.frames import write_csv
from ..core.config import Config, get_config
from ..core.json_utils import format_json, write_json
from ..core.period import Period
from ..ledger.datastore import FamilyDataStore

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])

family_option = click.option("--family", "-f", required=True, help="Family id (directory name under the data dir)")


def to_date(value: datetime | None) -> date | None:
    return value.date() if value is not None else None


def get_cli_config(ctx: click.Context) -> Config:
    if ctx.obj and "config" in ctx.obj:
        config: Config = ctx.obj["config"]
        return config
    return get_config()


def open_datastore(ctx: click.Context, family_id: str) -> FamilyDataStore:
    """
    File-backed store for the configured data dir.

    Raises:
        click.ClickException: If the family has no data directory
    """
    config = get_cli_config(ctx)
    store = FamilyDataStore(config.data_dir, config.currency)
    if not store.exists(family_id):
        raise click.ClickException(f"No data for family {family_id!r} in {config.data_dir}")
    return store


def resolve_period(start: datetime | None, end: datetime | None) -> Period:
    """
    Build a period from optional --start/--end options.

    Without --start the period begins on the first of the end month; without
    --end it ends today.
    """
    end_date = to_date(end) or date.today()
    start_date = to_date(start) or end_date.replace(day=1)
    return Period.custom(start_date, end_date)


def emit(
    data: Any,
    output_format: str,
    output: str | None,
    to_frame: Callable[[Any], pd.DataFrame] | None = None,
) -> None:
    """
    Print or write a report as JSON or CSV.

    Args:
        data: Report value (dataclasses, lists, Money are all accepted)
        output_format: "json" or "csv"
        output: File path to write; prints to stdout when None
        to_frame: DataFrame adapter used for CSV output
    """
    if output_format == "csv":
        if to_frame is None:
            raise click.UsageError("CSV output is only available for series reports")
        df = to_frame(data)
        if output:
            write_csv(df, output)
            click.echo(f"Wrote {len(df)} rows to {output}")
        else:
            click.echo(df.to_csv(index=False, date_format="%Y-%m-%d"), nl=False)
        return

    if output:
        write_json(Path(output), data)
        click.echo(f"Wrote report to {output}")
    else:
        click.echo(format_json(data))
