"""Command-line interface for s3-report.

Commands:
    - report: Analyze every bucket and print one usage report per bucket
    - buckets: List the buckets a report would cover

Reports go to standard output as each bucket finishes; logs go to standard
error.
"""

import sys
from typing import Annotated, Optional

import typer

from . import __version__
from .cli_params import (
    aws_access_key_option,
    aws_endpoint_url_option,
    aws_profile_option,
    aws_region_option,
    aws_secret_key_option,
    aws_session_token_option,
    count_option,
    exclude_option,
    include_option,
    json_option,
    workers_option,
)
from .core import settings
from .objectstorage import S3BucketLister, S3ClientConfig
from .reporting import rfc3339, run_report
from .schemas import ReportOptions

app = typer.Typer(
    name="s3-report",
    help="Per-bucket usage reports for S3 accounts.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"s3-report {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    S3-Report: object counts, sizes per owner and oldest/newest objects
    for every bucket in an account.
    """
    pass


def _create_lister(
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    session_token: Optional[str] = None,
    region_name: str = "us-east-1",
    endpoint_url: Optional[str] = None,
    aws_profile: Optional[str] = None,
) -> S3BucketLister:
    """Create a bucket lister from the S3 command-line options."""
    config = S3ClientConfig(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        region_name=region_name,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
    )
    return S3BucketLister(config)


@app.command("report")
def report_cmd(
    include: Annotated[str, include_option()] = "",
    exclude: Annotated[str, exclude_option()] = "",
    count: Annotated[int, count_option()] = -5,
    json_output: Annotated[bool, json_option()] = False,
    workers: Annotated[Optional[int], workers_option()] = None,
    # S3 options
    access_key_id: Annotated[Optional[str], aws_access_key_option()] = None,
    secret_access_key: Annotated[Optional[str], aws_secret_key_option()] = None,
    session_token: Annotated[Optional[str], aws_session_token_option()] = None,
    region_name: Annotated[str, aws_region_option()] = "us-east-1",
    endpoint_url: Annotated[Optional[str], aws_endpoint_url_option()] = None,
    aws_profile: Annotated[Optional[str], aws_profile_option()] = None,
) -> None:
    """
    Report object count, total size, size per owner and the oldest or
    newest objects of every bucket.

    Examples:
        s3-report report --include logs --count 10
        s3-report report --exclude tmp --json --aws-profile myprofile
    """
    try:
        options = ReportOptions(
            include=include,
            exclude=exclude,
            count=count,
            json_output=json_output,
            max_workers=workers if workers is not None else settings.max_workers,
        )
        lister = _create_lister(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )
        buckets = lister.get_buckets(options.include, options.exclude)

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not buckets:
        typer.echo("Error: No buckets found", err=True)
        raise typer.Exit(1)

    # Per-bucket failures are part of each report, not of the exit status
    run_report(
        lister,
        buckets,
        display_count=options.count,
        json_output=options.json_output,
        max_workers=options.max_workers,
        stream=sys.stdout,
    )


@app.command("buckets")
def buckets_cmd(
    include: Annotated[str, include_option()] = "",
    exclude: Annotated[str, exclude_option()] = "",
    # S3 options
    access_key_id: Annotated[Optional[str], aws_access_key_option()] = None,
    secret_access_key: Annotated[Optional[str], aws_secret_key_option()] = None,
    session_token: Annotated[Optional[str], aws_session_token_option()] = None,
    region_name: Annotated[str, aws_region_option()] = "us-east-1",
    endpoint_url: Annotated[Optional[str], aws_endpoint_url_option()] = None,
    aws_profile: Annotated[Optional[str], aws_profile_option()] = None,
) -> None:
    """
    List the buckets a report would cover, with their creation dates.

    Examples:
        s3-report buckets --include logs
    """
    try:
        lister = _create_lister(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            region_name=region_name,
            endpoint_url=endpoint_url,
            aws_profile=aws_profile,
        )
        buckets = lister.get_buckets(include, exclude)

        if buckets:
            for bucket in buckets:
                typer.echo(f"{rfc3339(bucket.creation_date)} {bucket.name}")
        else:
            typer.echo("No buckets found.")

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
