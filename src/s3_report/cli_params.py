"""Shared CLI parameter definitions.

The parameter functions return Typer options that are used as ``Annotated``
metadata in command signatures, so every command spells an option the same
way with the same help text:

    @app.command()
    def my_command(
        include: Annotated[str, include_option()] = "",
        region_name: Annotated[str, aws_region_option()] = "us-east-1",
    ):
        pass
"""

import typer


def include_option():
    """Bucket include filter option."""
    return typer.Option(
        "--include",
        "-i",
        help="Only include buckets whose name contains this substring. "
        "Default: all buckets",
    )


def exclude_option():
    """Bucket exclude filter option."""
    return typer.Option(
        "--exclude",
        "-e",
        help="Exclude buckets whose name contains this substring. "
        "Default: no buckets",
    )


def count_option():
    """Display object count option."""
    return typer.Option(
        "--count",
        "-c",
        help="Number of objects to show for each bucket. "
        "5 = five newest, -5 = five oldest",
    )


def json_option():
    """JSON output option."""
    return typer.Option("--json", "-j", help="Write one JSON object per bucket")


def workers_option():
    """Worker pool size option."""
    return typer.Option(
        "--workers", help="Number of buckets analyzed concurrently"
    )


def aws_access_key_option():
    """AWS access key ID option."""
    return typer.Option("--access-key-id", help="AWS access key ID")


def aws_secret_key_option():
    """AWS secret access key option."""
    return typer.Option("--secret-access-key", help="AWS secret access key")


def aws_session_token_option():
    """AWS session token option."""
    return typer.Option("--session-token", help="AWS session token")


def aws_region_option():
    """AWS region option."""
    return typer.Option(
        "--region", help="Default AWS region, used until a bucket's own is known"
    )


def aws_endpoint_url_option():
    """AWS endpoint URL option."""
    return typer.Option("--endpoint-url", help="Custom S3 endpoint URL")


def aws_profile_option():
    """AWS profile option."""
    return typer.Option("--aws-profile", help="AWS CLI profile name")
