#!/usr/bin/env python3
"""storekit CLI - inspect and move data through any configured store."""

import sys
from collections.abc import Iterator
from contextlib import contextmanager

import click

from storekit.exceptions import StoreError
from storekit.observability import LoggingConfig, configure_logging
from storekit.storage import Store, get_store, parse_location, storage_type


def open_location(path: str) -> tuple[Store, str]:
    """Return the store for ``path`` and the key within it."""
    return get_store(path), parse_location(path).key


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn store and filesystem errors into a one-line CLI error."""
    try:
        yield
    except (StoreError, OSError) as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (default: STOREKIT_LOG_LEVEL or WARNING)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """storekit - one interface for local paths, s3:// and gs:// URIs."""
    ctx.ensure_object(dict)
    config = LoggingConfig.from_env()
    if log_level:
        config.level = log_level
    configure_logging(config)


@cli.command(name="type")
@click.argument("path")
def type_(path: str) -> None:
    """Show which backend a path or URI selects."""
    click.echo(storage_type(path).name)


@cli.command()
@click.argument("path")
def stat(path: str) -> None:
    """Show metadata for a file or object."""
    with reported_errors():
        store, key = open_location(path)
        info = store.stat(key)
    for name, value in info.to_dict().items():
        click.echo(f"{name}: {value}")


@cli.command()
@click.argument("path")
def cat(path: str) -> None:
    """Write the contents of a file or object to stdout."""
    with reported_errors():
        store, key = open_location(path)
        data = store.read(key)
    click.get_binary_stream("stdout").write(data)


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.argument("dest")
def put(source: str, dest: str) -> None:
    """Copy a local file to a path or URI."""
    with reported_errors():
        store, key = open_location(dest)
        with open(source, "rb") as fp:
            store.create(key, fp)
    click.echo(f"Stored {source} at {dest}")


@cli.command()
@click.argument("path", default=".")
@click.option("--long", "-l", "long_format", is_flag=True, help="Show size and modification time")
def ls(path: str, long_format: bool) -> None:
    """List the entries under a directory or key prefix."""
    with reported_errors():
        store, key = open_location(path)
        entries = store.read_dir(key)
    for entry in sorted(entries, key=lambda e: e.name):
        name = entry.name + ("/" if entry.is_dir else "")
        if long_format:
            click.echo(f"{entry.size:>12} {entry.mod_time:%Y-%m-%d %H:%M} {name}")
        else:
            click.echo(name)


@cli.command()
@click.argument("path")
@click.option("--recursive", "-r", is_flag=True, help="Remove everything beneath the path")
def rm(path: str, recursive: bool) -> None:
    """Remove a file or object."""
    with reported_errors():
        store, key = open_location(path)
        if recursive:
            store.remove_all(key)
        else:
            store.remove(key)


@cli.command()
def version() -> None:
    """Show storekit version."""
    from storekit import __version__

    click.echo(f"storekit v{__version__}")


def main() -> int:
    """Main entry point."""
    try:
        cli()
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
