#!/usr/bin/env python3
"""S3 signing CLI using the s3-signature library."""

import dataclasses
import json
import logging
import os
import sys

import click

from .auth import Method, S3Signature
from .config import SigningIdentity
from .exceptions import S3SignatureError
from .upload import FileUpload


def _echo_json(data):
    if dataclasses.is_dataclass(data):
        data = dataclasses.asdict(data)
    click.echo(json.dumps(data, indent=2))


def _parse_header(value: str) -> tuple[str, str]:
    name, sep, header_value = value.partition(":")
    if not sep or not name.strip():
        raise click.BadParameter(f"Expected 'Name: value', got '{value}'")
    return name.strip(), header_value.strip()


@click.group()
@click.option("--bucket", required=True, help="Bucket the signatures are for")
@click.option("--config-file", help="Path to AWS config file")
@click.option("--credentials-file", help="Path to AWS credentials file")
@click.option("--profile", default="default", help="AWS profile name")
@click.option(
    "--protocol",
    type=click.Choice(["https://", "http://"]),
    default="https://",
    help="Protocol of the bucket URL",
)
@click.option("-v", "--verbose", is_flag=True, help="Log signing steps to stderr")
@click.pass_context
def cli(ctx, bucket, config_file, credentials_file, profile, protocol, verbose):
    """S3 Signature - sign S3 requests and browser upload policies."""
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if config_file or credentials_file:
            identity = SigningIdentity.from_aws_config(
                bucket=bucket,
                profile_name=profile,
                config_path=config_file,
                credentials_path=credentials_file,
                protocol=protocol,
            )
        else:
            identity = SigningIdentity(
                access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
                access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
                bucket=bucket,
                region=os.getenv("AWS_DEFAULT_REGION"),
                protocol=protocol,
            )
    except S3SignatureError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    ctx.obj["signer"] = S3Signature(identity)


@cli.command()
@click.argument(
    "method", type=click.Choice([m.value for m in Method], case_sensitive=False)
)
@click.argument("key")
@click.option(
    "-H", "--header", "headers", multiple=True, help="Extra header 'Name: value'"
)
@click.pass_context
def sign(ctx, method, key, headers):
    """Sign a request for an object."""
    signer = ctx.obj["signer"]
    extra_headers = dict(_parse_header(h) for h in headers)

    try:
        result = signer.sign_request(method, key, extra_headers)
    except S3SignatureError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _echo_json(result)


@cli.command()
@click.argument("key")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--content-type", help="Content type of the object")
@click.pass_context
def upload(ctx, key, file_path, content_type):
    """Sign a PUT uploading a local file."""
    signer = ctx.obj["signer"]
    _echo_json(signer.sign_upload(key, FileUpload(file_path, content_type)))


@cli.command()
@click.argument("source")
@click.argument("dest")
@click.pass_context
def copy(ctx, source, dest):
    """Sign a server-side copy of an object within the bucket."""
    signer = ctx.obj["signer"]
    _echo_json(signer.sign_copy(source, dest))


@cli.command()
@click.argument("filename")
@click.argument("filetype")
@click.argument("max_filesize", type=click.IntRange(min=0))
@click.pass_context
def policy(ctx, filename, filetype, max_filesize):
    """Create the form fields for a direct browser upload."""
    signer = ctx.obj["signer"]

    try:
        result = signer.browser_policy(filename, filetype, max_filesize)
    except S3SignatureError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _echo_json(result.fields)


@cli.command()
@click.pass_context
def bucket_url(ctx):
    """Print the bucket URL."""
    click.echo(str(ctx.obj["signer"].bucket_url))


if __name__ == "__main__":
    cli()
